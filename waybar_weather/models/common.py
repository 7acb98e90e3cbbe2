"""Common types and time helpers shared across models."""

from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo

from tzlocal import get_localzone

# Zero value for timestamps that were never populated.
ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lon: float


def local_zone() -> tzinfo:
    """Return the local reference timezone of the system."""
    return get_localzone()


def local_now(zone: tzinfo | None = None) -> datetime:
    return datetime.now(zone or local_zone())


def as_aware(t: datetime, zone: tzinfo | None = None) -> datetime:
    """Attach the reference zone to a naive timestamp."""
    if t.tzinfo is None:
        return t.replace(tzinfo=zone or local_zone())
    return t


def truncate_hour(t: datetime) -> datetime:
    """Floor a timestamp to the start of its hour, in its own zone."""
    return t.replace(minute=0, second=0, microsecond=0)
