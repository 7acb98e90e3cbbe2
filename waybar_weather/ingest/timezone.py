"""Resolve the `timezone` query parameter from the local reference zone."""

from datetime import timedelta, timezone, tzinfo

from waybar_weather.models.common import local_zone

# Open-Meteo's zero-offset designator.
UTC_DESIGNATOR = "GMT"
AUTO = "auto"

_ZERO_OFFSET_KEYS = frozenset({
    "UTC", "Etc/UTC", "Etc/UCT", "UCT", "Universal", "Etc/Universal",
    "Zulu", "Etc/Zulu", "GMT", "Etc/GMT", "Etc/GMT0", "Etc/GMT+0",
    "Etc/GMT-0", "GMT0", "Greenwich", "Etc/Greenwich",
})


def zone_name(zone: tzinfo) -> str | None:
    """IANA key of a zone, or None for unnamed/fixed-offset zones."""
    key = getattr(zone, "key", None)
    if key:
        return key
    zone_attr = getattr(zone, "zone", None)  # pytz-style zones
    if isinstance(zone_attr, str) and zone_attr:
        return zone_attr
    return None


def timezone_param(zone: tzinfo | None = None) -> str:
    """Map a zone to the value Open-Meteo expects.

    Zero-offset zones become "GMT", unnamed zones become "auto", everything
    else is passed as its IANA name.
    """
    zone = zone or local_zone()
    if isinstance(zone, timezone) and zone.utcoffset(None) == timedelta(0):
        return UTC_DESIGNATOR
    name = zone_name(zone)
    if name is None:
        return AUTO
    if name in _ZERO_OFFSET_KEYS:
        return UTC_DESIGNATOR
    return name
