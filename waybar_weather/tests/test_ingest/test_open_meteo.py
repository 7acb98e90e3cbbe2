"""Tests for the Open-Meteo client with mocked HTTP."""

import asyncio
import json
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo

import httpx
import pytest
import respx

from waybar_weather.errors import (
    DecodeError,
    RequestFailedError,
    ShapeMismatchError,
    UpstreamStatusError,
    WeatherError,
)
from waybar_weather.ingest.open_meteo import (
    OPEN_METEO_URL,
    OpenMeteoClient,
    check_series_lengths,
)
from waybar_weather.models.weather import Day, DayHour

BUCHAREST = ZoneInfo("Europe/Bucharest")


def _client(**kwargs) -> OpenMeteoClient:
    return OpenMeteoClient(zone=BUCHAREST, **kwargs)


def _hour(day: int, hour: int) -> DayHour:
    return DayHour.from_time(datetime(2026, 1, day, hour, 0, tzinfo=BUCHAREST), BUCHAREST)


class TestBuildParams:
    def test_metric(self, coords):
        params = _client().build_params(coords)
        assert params["latitude"] == "44.437500"
        assert params["longitude"] == "26.125000"
        assert params["timezone"] == "Europe/Bucharest"
        assert params["temperature_unit"] == "celsius"
        assert params["wind_speed_unit"] == "kmh"
        assert "precipitation_probability" in params["hourly"]
        assert "precipitation_probability" not in params["current"]
        assert params["daily"] == "sunrise,sunset"

    def test_imperial_case_insensitive(self, coords):
        params = _client(units="IMPERIAL").build_params(coords)
        assert params["temperature_unit"] == "fahrenheit"
        assert params["wind_speed_unit"] == "mph"
        assert params["precipitation_unit"] == "inch"

    def test_unknown_units_send_no_unit_params(self, coords):
        params = _client(units="kelvin").build_params(coords)
        assert "temperature_unit" not in params

    def test_utc_zone(self, coords):
        params = OpenMeteoClient(zone=ZoneInfo("UTC")).build_params(coords)
        assert params["timezone"] == "GMT"


class TestGetWeather:
    def test_name(self):
        assert _client().name() == "open-meteo"

    @pytest.mark.anyio
    @respx.mock
    async def test_current_values(self, coords, metric_body):
        respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, content=metric_body)
        )
        data = await _client().get_weather(coords)

        cur = data.current
        assert cur.instant_time == datetime(2026, 1, 16, 22, 0, tzinfo=BUCHAREST)
        assert cur.temperature.get(0) == -5.3
        assert cur.apparent_temperature.get(0) == -9.2
        assert cur.weather_code.get(-1) == 0
        assert cur.weather_code.is_set
        assert cur.wind_speed.get(0) == 4.7
        assert cur.wind_gusts.get(0) == 12.2
        assert cur.wind_direction.get(0) == 81
        assert cur.relative_humidity.get(0) == 72
        assert cur.pressure_msl.get(0) == 1034.7
        assert cur.is_day.get(True) is False
        assert not cur.precipitation_probability.is_set

        assert cur.units.temperature == "°C"
        assert cur.units.pressure == "hPa"
        assert cur.units.wind_speed == "km/h"
        assert cur.units.wind_direction == "°"
        assert data.coordinates == coords

    @pytest.mark.anyio
    @respx.mock
    async def test_request_params(self, coords, metric_body):
        route = respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, content=metric_body)
        )
        await _client(units="imperial").get_weather(coords)

        assert route.call_count == 1
        params = route.calls.last.request.url.params
        assert params["latitude"] == "44.437500"
        assert params["temperature_unit"] == "fahrenheit"
        assert params["timezone"] == "Europe/Bucharest"

    @pytest.mark.anyio
    @respx.mock
    async def test_forecast_keys(self, coords, metric_body):
        respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, content=metric_body)
        )
        data = await _client().get_weather(coords)

        assert len(data.forecast) == 6
        assert set(data.forecast) == {
            _hour(16, 20), _hour(16, 21), _hour(16, 22),
            _hour(16, 23), _hour(17, 0), _hour(17, 1),
        }
        for key, inst in data.forecast.items():
            assert DayHour.from_time(inst.instant_time, BUCHAREST) == key
            assert inst.instant_time.minute == 0

        midnight = data.forecast[_hour(17, 0)]
        assert midnight.temperature.get(0) == -6.4
        assert midnight.weather_code.get(-1) == 3
        assert midnight.precipitation_probability.get(-1) == 10
        assert midnight.units.temperature == "°C"

    @pytest.mark.anyio
    @respx.mock
    async def test_null_series_value_is_unset(self, coords, metric_body):
        respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, content=metric_body)
        )
        data = await _client().get_weather(coords)
        assert not data.forecast[_hour(17, 1)].precipitation_probability.is_set
        assert data.forecast[_hour(17, 1)].temperature.is_set

    @pytest.mark.anyio
    @respx.mock
    async def test_daily_sun_times(self, coords, metric_body):
        respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, content=metric_body)
        )
        data = await _client().get_weather(coords)

        day = data.daily[Day.from_time(datetime(2026, 1, 16, tzinfo=BUCHAREST), BUCHAREST)]
        assert day.sunrise == datetime(2026, 1, 16, 7, 49, tzinfo=BUCHAREST)
        assert day.sunset == datetime(2026, 1, 16, 17, 3, tzinfo=BUCHAREST)
        assert len(data.daily) == 2

    @pytest.mark.anyio
    @respx.mock
    async def test_duplicate_hour_last_wins(self, coords, metric_body):
        payload = json.loads(metric_body)
        payload["hourly"]["time"][3] = "2026-01-16T22:00"
        respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, json=payload)
        )
        data = await _client().get_weather(coords)

        assert len(data.forecast) == 5
        assert data.forecast[_hour(16, 22)].temperature.get(0) == -5.9

    @pytest.mark.anyio
    @respx.mock
    async def test_missing_series_is_unset(self, coords, metric_body):
        payload = json.loads(metric_body)
        del payload["hourly"]["wind_gusts_10m"]
        respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, json=payload)
        )
        data = await _client().get_weather(coords)

        assert not data.forecast[_hour(16, 22)].wind_gusts.is_set
        assert data.forecast[_hour(16, 22)].wind_speed.is_set

    @pytest.mark.anyio
    @respx.mock
    async def test_non_200_status(self, coords):
        respx.get(OPEN_METEO_URL).mock(return_value=httpx.Response(503))
        with pytest.raises(UpstreamStatusError) as exc_info:
            await _client().get_weather(coords)
        assert exc_info.value.status_code == 503
        assert "503" in str(exc_info.value)

    @pytest.mark.anyio
    @respx.mock
    async def test_invalid_json(self, coords):
        respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, content=b"<html>oops</html>")
        )
        with pytest.raises(DecodeError):
            await _client().get_weather(coords)

    @pytest.mark.anyio
    @respx.mock
    async def test_shape_mismatch(self, coords, metric_body):
        payload = json.loads(metric_body)
        payload["hourly"]["temperature_2m"].pop()
        respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, json=payload)
        )
        with pytest.raises(ShapeMismatchError) as exc_info:
            await _client().get_weather(coords)
        assert exc_info.value.lengths["time"] == 6
        assert exc_info.value.lengths["temperature_2m"] == 5

    @pytest.mark.anyio
    @respx.mock
    async def test_transport_failure(self, coords):
        respx.get(OPEN_METEO_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))
        with pytest.raises(RequestFailedError):
            await _client().get_weather(coords)

    @pytest.mark.anyio
    @respx.mock
    async def test_injected_client(self, coords, metric_body):
        route = respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, content=metric_body)
        )
        async with httpx.AsyncClient() as http:
            data = await _client(client=http).get_weather(coords)
        assert route.called
        assert data.current.temperature.get(0) == -5.3

    @pytest.mark.anyio
    async def test_cancellation_propagates(self, coords):
        http = MagicMock(spec=httpx.AsyncClient)
        http.get = AsyncMock(side_effect=asyncio.CancelledError())
        with pytest.raises(asyncio.CancelledError):
            await _client(client=http).get_weather(coords)

    @pytest.mark.anyio
    @respx.mock
    async def test_errors_share_base(self, coords):
        respx.get(OPEN_METEO_URL).mock(return_value=httpx.Response(500))
        with pytest.raises(WeatherError):
            await _client().get_weather(coords)


class TestCheckSeriesLengths:
    def test_matching(self):
        check_series_lengths("hourly", 2, {"a": [1, 2], "b": None})

    def test_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            check_series_lengths("hourly", 2, {"a": [1, 2], "b": [1]})
