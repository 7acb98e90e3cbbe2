"""Unit-agnostic weather data models."""

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Protocol

from waybar_weather.models.common import (
    ZERO_TIME,
    Coordinate,
    as_aware,
    local_zone,
    truncate_hour,
)
from waybar_weather.models.vartype import VarBool, VarFloat, VarInt, Variable


@dataclass(frozen=True)
class Units:
    """Display unit strings as echoed by the provider."""

    temperature: str = ""
    wind_speed: str = ""
    humidity: str = ""
    pressure: str = ""
    wind_direction: str = ""


@dataclass(frozen=True)
class Instant:
    """One weather reading, either current or for a forecast hour."""

    instant_time: datetime = ZERO_TIME
    temperature: VarFloat = Variable()
    apparent_temperature: VarFloat = Variable()
    weather_code: VarInt = Variable()
    wind_speed: VarFloat = Variable()
    wind_gusts: VarFloat = Variable()
    wind_direction: VarFloat = Variable()  # degrees, 0-360
    relative_humidity: VarFloat = Variable()
    precipitation_probability: VarInt = Variable()  # forecast only
    pressure_msl: VarFloat = Variable()
    is_day: VarBool = Variable()
    units: Units = Units()


@dataclass(frozen=True)
class DailyInstant:
    date: datetime = ZERO_TIME
    sunrise: datetime = ZERO_TIME
    sunset: datetime = ZERO_TIME


@dataclass(frozen=True, order=True)
class DayHour:
    """Hour-granularity forecast key: epoch second of the hour floor."""

    epoch: int

    @classmethod
    def from_time(cls, t: datetime, zone: tzinfo | None = None) -> "DayHour":
        """Key for the clock hour containing t in the reference zone.

        Naive timestamps are taken as reference-zone wall time.
        """
        zone = zone or local_zone()
        local = as_aware(t, zone).astimezone(zone)
        return cls(int(truncate_hour(local).timestamp()))

    def to_time(self, zone: tzinfo | None = None) -> datetime:
        return datetime.fromtimestamp(self.epoch, tz=zone or local_zone())


@dataclass(frozen=True, order=True)
class Day:
    """Day-granularity key: epoch second of local midnight."""

    epoch: int

    @classmethod
    def from_time(cls, t: datetime, zone: tzinfo | None = None) -> "Day":
        zone = zone or local_zone()
        local = as_aware(t, zone).astimezone(zone)
        midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
        return cls(int(midnight.timestamp()))

    def to_time(self, zone: tzinfo | None = None) -> datetime:
        return datetime.fromtimestamp(self.epoch, tz=zone or local_zone())


@dataclass
class Data:
    """Snapshot produced by a single fetch.

    Forecast keys are unique but unordered; sort by instant_time before
    display.
    """

    generated_at: datetime = ZERO_TIME
    coordinates: Coordinate = Coordinate(0.0, 0.0)
    current: Instant = Instant()
    forecast: dict[DayHour, Instant] = field(default_factory=dict)
    daily: dict[Day, DailyInstant] = field(default_factory=dict)

    def daily_for(self, t: datetime, zone: tzinfo | None = None) -> DailyInstant | None:
        return self.daily.get(Day.from_time(t, zone))


class WeatherProvider(Protocol):
    """Capability implemented by every weather API backend."""

    def name(self) -> str: ...

    async def get_weather(self, coords: Coordinate) -> Data: ...
