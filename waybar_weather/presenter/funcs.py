"""Function library exposed to status bar templates."""

import math
from datetime import UTC, datetime, timedelta
from typing import Any

from babel import Locale
from babel.dates import format_time, format_timedelta
from babel.numbers import format_decimal
from jinja2 import pass_context
from jinja2.runtime import Context

from waybar_weather.i18n.localizer import Localizer, parse_locale
from waybar_weather.models.common import as_aware, truncate_hour
from waybar_weather.presenter.maps import I18N_VARS, WIND_DIR_ICONS
from waybar_weather.presenter.view import TemplateContext, WeatherView

# Upper bounds (exclusive) of the eight compass sectors, starting at 0 degrees.
_COMPASS_SECTORS = (
    (22.5, "N"),
    (67.5, "NE"),
    (112.5, "E"),
    (157.5, "SE"),
    (202.5, "S"),
    (247.5, "SW"),
    (292.5, "W"),
    (337.5, "NW"),
    (360.0, "N"),
)


def wind_direction(degrees: Any) -> str:
    """Bucket a bearing into one of eight compass labels.

    Negative, >= 360 and NaN bearings fall through to "N".
    """
    deg = float(degrees)
    if not 0.0 <= deg < 360.0:
        return "N"
    for upper, label in _COMPASS_SECTORS:
        if deg < upper:
            return label
    return "N"


def wind_direction_icon(label: str) -> str:
    return WIND_DIR_ICONS.get(str(label).upper(), "")


def float_format(value: Any, precision: int) -> str:
    """Fixed-point format after truncating (not rounding) to `precision` digits."""
    x = float(value)
    precision = int(precision)
    if not math.isfinite(x):
        return f"{x:.{precision}f}"
    scale = 10**precision
    return f"{math.trunc(x * scale) / scale:.{precision}f}"


def forecast_by_offset(ctx: TemplateContext, offset: int) -> WeatherView:
    """Forecast view for the current hour plus `offset` hours.

    Returns the zero view when the offset is out of range or no forecast
    entry falls exactly on the wanted hour.
    """
    offset = int(offset)
    if offset < 0 or offset >= len(ctx.forecasts):
        return WeatherView()

    current_hour = truncate_hour(ctx.current.instant_time)
    want = current_hour.astimezone(UTC) + timedelta(hours=offset)
    for fcast in ctx.forecasts:
        if fcast.instant_time == want:
            return fcast
    return WeatherView()


def lower(value: Any) -> str:
    return str(value).lower()


def upper(value: Any) -> str:
    return str(value).upper()


def time_format(value: datetime, fmt: str) -> str:
    return value.strftime(fmt)


@pass_context
def _fcast_hour_offset(context: Context, offset: int) -> WeatherView:
    return forecast_by_offset(context["context"], offset)


class TemplateFunctions:
    """Locale-bound template helpers."""

    def __init__(self, localizer: Localizer, locale: Locale | None = None):
        self.localizer = localizer
        self.locale = locale or parse_locale(localizer.language)

    def loc(self, key: str) -> str:
        key = str(key).lower()
        message_id = I18N_VARS.get(key)
        if message_id is None:
            return key
        return self.localizer.get(message_id)

    def hum(self, value: Any) -> str:
        return format_decimal(float(value), format="0.0", locale=self.locale)

    def localized_time(self, value: datetime, now: datetime | None = None) -> str:
        """Relative time such as "3 hours ago" or "in 2 hours"."""
        now = now or datetime.now(UTC)
        return format_timedelta(
            as_aware(value) - now, add_direction=True, locale=self.locale
        )

    def clock_time(self, value: datetime) -> str:
        return format_time(value, format="short", locale=self.locale)

    def as_globals(self) -> dict[str, Any]:
        return {
            "time_format": time_format,
            "localized_time": self.localized_time,
            "clock_time": self.clock_time,
            "float_format": float_format,
            "loc": self.loc,
            "hum": self.hum,
            "lc": lower,
            "uc": upper,
            "fcast_hour_offset": _fcast_hour_offset,
            "wind_dir": wind_direction,
            "wind_dir_icon": wind_direction_icon,
        }
