"""Coordinate lookup from a user-maintained geolocation file."""

from pathlib import Path

from waybar_weather.models.common import Coordinate


class NoCoordinatesError(Exception):
    """Raised when a geolocation file holds no usable `lat,lon` line."""


def read_geolocation_file(path: str | Path) -> Coordinate:
    """Return the first valid `lat,lon` line of the file.

    Blank lines, `#` comments and unparsable lines are skipped.
    """
    path = Path(path).expanduser()
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split(",")
        if len(parts) != 2:
            continue
        try:
            return Coordinate(lat=float(parts[0].strip()), lon=float(parts[1].strip()))
        except ValueError:
            continue
    raise NoCoordinatesError(f"no coordinates found in {path}")
