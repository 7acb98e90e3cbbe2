"""Open-Meteo forecast API client."""

import logging
from datetime import tzinfo

import httpx

from waybar_weather.errors import (
    RequestFailedError,
    ShapeMismatchError,
    UpstreamStatusError,
)
from waybar_weather.ingest.timezone import timezone_param
from waybar_weather.ingest.wire import (
    CurrentBlock,
    DailyBlock,
    HourlyBlock,
    SeriesUnits,
    decode_response,
)
from waybar_weather.models.common import (
    ZERO_TIME,
    Coordinate,
    local_now,
    local_zone,
)
from waybar_weather.models.vartype import Variable
from waybar_weather.models.weather import (
    DailyInstant,
    Data,
    Day,
    DayHour,
    Instant,
)

logger = logging.getLogger(__name__)

PROVIDER_NAME = "open-meteo"
OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_TIMEOUT = 10.0

CURRENT_FIELDS = [
    "temperature_2m", "apparent_temperature", "weather_code", "wind_speed_10m",
    "wind_gusts_10m", "wind_direction_10m", "relative_humidity_2m",
    "pressure_msl", "is_day",
]
HOURLY_FIELDS = CURRENT_FIELDS + ["precipitation_probability"]
DAILY_FIELDS = ["sunrise", "sunset"]

_UNIT_PARAMS = {
    "metric": {
        "temperature_unit": "celsius",
        "wind_speed_unit": "kmh",
        "precipitation_unit": "mm",
    },
    "imperial": {
        "temperature_unit": "fahrenheit",
        "wind_speed_unit": "mph",
        "precipitation_unit": "inch",
    },
}


class OpenMeteoClient:
    """Fetches current and hourly weather and maps it into `Data`.

    One call issues exactly one GET. Retries are left to the caller.
    """

    def __init__(
        self,
        units: str = "metric",
        base_url: str = OPEN_METEO_URL,
        timeout: float = DEFAULT_TIMEOUT,
        zone: tzinfo | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.units = units
        self.base_url = base_url
        self.timeout = timeout
        self.zone = zone or local_zone()
        self._client = client

    def name(self) -> str:
        return PROVIDER_NAME

    def build_params(self, coords: Coordinate) -> dict[str, str]:
        params = {
            "latitude": f"{coords.lat:f}",
            "longitude": f"{coords.lon:f}",
            "current": ",".join(CURRENT_FIELDS),
            "hourly": ",".join(HOURLY_FIELDS),
            "daily": ",".join(DAILY_FIELDS),
            "timezone": timezone_param(self.zone),
            "past_days": "1",
        }
        params.update(_UNIT_PARAMS.get(self.units.lower(), {}))
        return params

    async def get_weather(self, coords: Coordinate) -> Data:
        """Fetch and decode one snapshot for the given coordinates.

        Raises UpstreamStatusError on a non-200 answer, DecodeError or
        ShapeMismatchError on a malformed body and RequestFailedError on
        transport failures. Cancellation propagates as-is.
        """
        params = self.build_params(coords)
        try:
            if self._client is not None:
                resp = await self._client.get(
                    self.base_url, params=params, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(self.base_url, params=params)
        except httpx.RequestError as e:
            logger.error("Open-Meteo request failed: %s", e)
            raise RequestFailedError(
                f"failed to retrieve weather data from Open-Meteo API: {e}"
            ) from e

        if resp.status_code != 200:
            raise UpstreamStatusError(
                f"Open-Meteo API returned non-positive response code: {resp.status_code}",
                resp.status_code,
            )

        res = decode_response(resp.content, self.zone)

        data = Data(generated_at=local_now(self.zone), coordinates=coords)
        data.current = _current_instant(res.current, res.current_units)
        if res.hourly is not None:
            data.forecast = _forecast_instants(res.hourly, res.hourly_units, self.zone)
        if res.daily is not None:
            data.daily = _daily_instants(res.daily, self.zone)
        logger.debug(
            "Decoded Open-Meteo response: %d forecast hours, %d days",
            len(data.forecast), len(data.daily),
        )
        return data


def _current_instant(cur: CurrentBlock, units: SeriesUnits) -> Instant:
    return Instant(
        instant_time=cur.time,
        temperature=Variable.maybe(cur.temperature_2m),
        apparent_temperature=Variable.maybe(cur.apparent_temperature),
        weather_code=Variable.maybe(cur.weather_code),
        wind_speed=Variable.maybe(cur.wind_speed_10m),
        wind_gusts=Variable.maybe(cur.wind_gusts_10m),
        wind_direction=Variable.maybe(cur.wind_direction_10m),
        relative_humidity=Variable.maybe(cur.relative_humidity_2m),
        pressure_msl=Variable.maybe(cur.pressure_msl),
        is_day=Variable.of(cur.is_day),
        units=units.to_units(),
    )


def check_series_lengths(block: str, expected: int, series: dict[str, list | None]) -> None:
    """Ensure every present parallel array matches the time axis length."""
    lengths = {name: len(values) for name, values in series.items() if values is not None}
    if any(n != expected for n in lengths.values()):
        raise ShapeMismatchError(
            f"{block} arrays differ in length from time ({expected}): {lengths}",
            {"time": expected, **lengths},
        )


def _at(values: list | None, i: int) -> Variable:
    if values is None:
        return Variable()
    return Variable.maybe(values[i])


def _forecast_instants(
    hourly: HourlyBlock, units: SeriesUnits, zone: tzinfo
) -> dict[DayHour, Instant]:
    series = hourly.model_dump(exclude={"time"})
    check_series_lengths("hourly", len(hourly.time), series)

    unit_strings = units.to_units()
    forecast: dict[DayHour, Instant] = {}
    for i, t in enumerate(hourly.time):
        key = DayHour.from_time(t, zone)
        # Duplicate hour keys: last write wins.
        forecast[key] = Instant(
            instant_time=key.to_time(zone),
            temperature=_at(hourly.temperature_2m, i),
            apparent_temperature=_at(hourly.apparent_temperature, i),
            weather_code=_at(hourly.weather_code, i),
            wind_speed=_at(hourly.wind_speed_10m, i),
            wind_gusts=_at(hourly.wind_gusts_10m, i),
            wind_direction=_at(hourly.wind_direction_10m, i),
            relative_humidity=_at(hourly.relative_humidity_2m, i),
            precipitation_probability=_at(hourly.precipitation_probability, i),
            pressure_msl=_at(hourly.pressure_msl, i),
            is_day=_at(hourly.is_day, i),
            units=unit_strings,
        )
    return forecast


def _daily_instants(daily: DailyBlock, zone: tzinfo) -> dict[Day, DailyInstant]:
    check_series_lengths(
        "daily", len(daily.time), {"sunrise": daily.sunrise, "sunset": daily.sunset}
    )
    days: dict[Day, DailyInstant] = {}
    for i, date in enumerate(daily.time):
        days[Day.from_time(date, zone)] = DailyInstant(
            date=date,
            sunrise=daily.sunrise[i] if daily.sunrise is not None else ZERO_TIME,
            sunset=daily.sunset[i] if daily.sunset is not None else ZERO_TIME,
        )
    return days
