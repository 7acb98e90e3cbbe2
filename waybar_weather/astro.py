"""Moon phase names derived from astral's lunar phase."""

from datetime import UTC, datetime

from astral import moon

# astral reports the phase on a 0..28 scale: 0 new, 7 first quarter, 14 full, 21 last quarter
LUNAR_SCALE = 28.0

PHASE_NAMES = (
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Third Quarter",
    "Waning Crescent",
)


def phase_name(phase: float) -> str:
    """Bucket an astral phase value into one of the eight PHASE_NAMES."""
    step = LUNAR_SCALE / len(PHASE_NAMES)
    return PHASE_NAMES[int(phase / step + 0.5) % len(PHASE_NAMES)]


def moon_phase(t: datetime | None = None) -> str:
    """Name of the moon phase on the UTC day of t."""
    t = t or datetime.now(UTC)
    if t.tzinfo is None:
        t = t.replace(tzinfo=UTC)
    return phase_name(moon.phase(t.astimezone(UTC).date()))
