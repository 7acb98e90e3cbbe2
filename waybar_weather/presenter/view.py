"""Presentation views and the template context built from a Data snapshot."""

from dataclasses import dataclass, fields
from datetime import UTC, datetime, timedelta
from typing import Any

from waybar_weather.i18n.localizer import Localizer
from waybar_weather.models.common import ZERO_TIME, local_now
from waybar_weather.models.geocode import Address
from waybar_weather.models.weather import Data, DayHour, Instant
from waybar_weather.presenter.maps import (
    MOON_PHASE_ICONS,
    WMO_WEATHER_CODES,
    WMO_WEATHER_ICONS,
)


@dataclass(frozen=True)
class WeatherView(Instant):
    """An Instant plus its condition text and icon."""

    condition: str = ""
    condition_icon: str = ""


@dataclass(frozen=True)
class TemplateContext:
    latitude: float = 0.0
    longitude: float = 0.0
    address: Address = Address()
    update_time: datetime = ZERO_TIME
    sunrise_time: datetime = ZERO_TIME
    sunset_time: datetime = ZERO_TIME
    moon_phase: str = ""
    moon_phase_icon: str = ""
    current: WeatherView = WeatherView()
    forecast: WeatherView = WeatherView()
    forecasts: tuple[WeatherView, ...] = ()

    def template_vars(self) -> dict[str, Any]:
        """Fields as top-level template variables, plus `context` itself."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["context"] = self
        return values


def view_from_instant(instant: Instant, localizer: Localizer | None = None) -> WeatherView:
    """Attach condition text and icon looked up by (weather code, is_day).

    Unknown codes yield empty strings.
    """
    condition = ""
    icon = ""
    if instant.weather_code.is_set:
        code = int(instant.weather_code)
        condition = WMO_WEATHER_CODES.get(code, "")
        icon = WMO_WEATHER_ICONS.get(code, {}).get(instant.is_day.get(False), "")
    if condition and localizer is not None:
        condition = localizer.get(condition)

    values = {f.name: getattr(instant, f.name) for f in fields(Instant)}
    return WeatherView(**values, condition=condition, condition_icon=icon)


def view_slice_from_map(
    mapping: dict[DayHour, Instant], localizer: Localizer | None = None
) -> list[WeatherView]:
    """Views of all forecast entries, ascending by timestamp."""
    views = [view_from_instant(inst, localizer) for inst in mapping.values()]
    views.sort(key=lambda v: v.instant_time)
    return views


def build_context(
    address: Address | None,
    data: Data | None,
    sunrise: datetime,
    sunset: datetime,
    moon_phase: str,
    moon_phase_icon: str | None = None,
    *,
    forecast_hours: int = 3,
    localizer: Localizer | None = None,
    now: datetime | None = None,
) -> TemplateContext:
    """Assemble the render payload; a missing snapshot yields an empty context."""
    if data is None:
        return TemplateContext()

    now = now or local_now()
    # Elapsed hours, not wall-clock hours
    target = now.astimezone(UTC) + timedelta(hours=forecast_hours)
    forecast_key = DayHour.from_time(target, now.tzinfo)
    forecast = data.forecast.get(forecast_key, Instant())
    if moon_phase_icon is None:
        moon_phase_icon = MOON_PHASE_ICONS.get(moon_phase, "")

    return TemplateContext(
        latitude=data.coordinates.lat,
        longitude=data.coordinates.lon,
        address=address or Address(),
        update_time=data.generated_at,
        sunrise_time=sunrise,
        sunset_time=sunset,
        moon_phase=moon_phase,
        moon_phase_icon=moon_phase_icon,
        current=view_from_instant(data.current, localizer),
        forecast=view_from_instant(forecast, localizer),
        forecasts=tuple(view_slice_from_map(data.forecast, localizer)),
    )
