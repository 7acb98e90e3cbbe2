"""Open-Meteo wire format: custom scalar decoders and response models.

The API sends naive `YYYY-MM-DDTHH:MM` timestamps, `YYYY-MM-DD` dates and
0/1 numerals instead of JSON booleans. The decoders below turn those into
aware datetimes (in the reference zone passed through the pydantic
validation context) and real booleans.
"""

import re
from datetime import datetime, tzinfo
from typing import Annotated, Any

from pydantic import BaseModel, PlainValidator, ValidationError, ValidationInfo

from waybar_weather.errors import DecodeError
from waybar_weather.models.common import local_zone
from waybar_weather.models.weather import Units

HOUR_TIME_FORMAT = "%Y-%m-%dT%H:%M"
DAY_DATE_FORMAT = "%Y-%m-%d"

_HOUR_TIME_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}")
_DAY_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _parse_naive(value: Any, pattern: re.Pattern, fmt: str, what: str) -> datetime:
    if not isinstance(value, str):
        raise DecodeError(f"invalid {what} value: {value!r}")
    if not pattern.fullmatch(value):
        raise DecodeError(f"invalid {what} format: {value!r}")
    try:
        return datetime.strptime(value, fmt)
    except ValueError as e:
        raise DecodeError(f"failed to parse {what}: {e}") from e


def parse_hour_time(value: Any, zone: tzinfo | None = None) -> datetime:
    """Decode an hour-precision timestamp as reference-zone wall time."""
    naive = _parse_naive(value, _HOUR_TIME_RE, HOUR_TIME_FORMAT, "time")
    return naive.replace(tzinfo=zone or local_zone())


def parse_day_date(value: Any, zone: tzinfo | None = None) -> datetime:
    """Decode a day-precision date as local midnight."""
    naive = _parse_naive(value, _DAY_DATE_RE, DAY_DATE_FORMAT, "date")
    return naive.replace(tzinfo=zone or local_zone())


def parse_provider_bool(value: Any) -> bool:
    """Decode a 0/1 numeral: 0 is false, any other numeral is true."""
    if value is None or value == "":
        raise DecodeError("empty bool")
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return value != 0
    if isinstance(value, str):
        try:
            return float(value) != 0
        except ValueError as e:
            raise DecodeError(f"invalid bool value: {value!r}") from e
    raise DecodeError(f"invalid bool value: {value!r}")


def _context_zone(info: ValidationInfo) -> tzinfo | None:
    if info.context:
        return info.context.get("zone")
    return None


def _hour_time_validator(value: Any, info: ValidationInfo) -> datetime:
    return parse_hour_time(value, _context_zone(info))


def _day_date_validator(value: Any, info: ValidationInfo) -> datetime:
    return parse_day_date(value, _context_zone(info))


HourTime = Annotated[datetime, PlainValidator(_hour_time_validator)]
DayDate = Annotated[datetime, PlainValidator(_day_date_validator)]
ProviderBool = Annotated[bool, PlainValidator(parse_provider_bool)]


class SeriesUnits(BaseModel):
    """The `current_units` / `hourly_units` objects."""

    time: str = ""
    temperature_2m: str = ""
    apparent_temperature: str = ""
    weather_code: str = ""
    wind_speed_10m: str = ""
    wind_gusts_10m: str = ""
    wind_direction_10m: str = ""
    relative_humidity_2m: str = ""
    precipitation_probability: str = ""
    pressure_msl: str = ""
    is_day: str = ""

    def to_units(self) -> Units:
        return Units(
            temperature=self.temperature_2m,
            wind_speed=self.wind_speed_10m,
            humidity=self.relative_humidity_2m,
            pressure=self.pressure_msl,
            wind_direction=self.wind_direction_10m,
        )


class CurrentBlock(BaseModel):
    time: HourTime
    interval: int = 0
    temperature_2m: float | None = None
    apparent_temperature: float | None = None
    weather_code: int | None = None
    wind_speed_10m: float | None = None
    wind_gusts_10m: float | None = None
    wind_direction_10m: float | None = None
    relative_humidity_2m: float | None = None
    pressure_msl: float | None = None
    is_day: ProviderBool


class HourlyBlock(BaseModel):
    """Parallel hourly arrays, index-aligned with `time`."""

    time: list[HourTime]
    temperature_2m: list[float | None] | None = None
    apparent_temperature: list[float | None] | None = None
    weather_code: list[int | None] | None = None
    wind_speed_10m: list[float | None] | None = None
    wind_gusts_10m: list[float | None] | None = None
    wind_direction_10m: list[float | None] | None = None
    relative_humidity_2m: list[float | None] | None = None
    precipitation_probability: list[int | None] | None = None
    pressure_msl: list[float | None] | None = None
    is_day: list[ProviderBool] | None = None


class DailyBlock(BaseModel):
    time: list[DayDate]
    sunrise: list[HourTime] | None = None
    sunset: list[HourTime] | None = None


class OpenMeteoResponse(BaseModel):
    latitude: float = 0.0
    longitude: float = 0.0
    generationtime_ms: float = 0.0
    utc_offset_seconds: int = 0
    timezone: str = ""
    timezone_abbreviation: str = ""
    elevation: float = 0.0
    current_units: SeriesUnits = SeriesUnits()
    current: CurrentBlock
    hourly_units: SeriesUnits = SeriesUnits()
    hourly: HourlyBlock | None = None
    daily: DailyBlock | None = None


def decode_response(body: bytes | str, zone: tzinfo | None = None) -> OpenMeteoResponse:
    """Validate a raw JSON body, raising DecodeError on any failure."""
    try:
        return OpenMeteoResponse.model_validate_json(
            body, context={"zone": zone or local_zone()}
        )
    except ValidationError as e:
        raise DecodeError(f"failed to decode Open-Meteo response: {e}") from e
