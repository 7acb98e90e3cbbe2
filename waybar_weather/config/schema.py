"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from waybar_weather.config.defaults import (
    DEFAULT_ALT_TEXT_TEMPLATE,
    DEFAULT_GEOLOCATION_FILE,
    DEFAULT_TEXT_TEMPLATE,
    DEFAULT_TOOLTIP_TEMPLATE,
)


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class UnitSystem(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class WeatherProviderName(StrEnum):
    OPEN_METEO = "open-meteo"


class GeocoderProviderName(StrEnum):
    NOMINATIM = "nominatim"


class WeatherConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: WeatherProviderName = WeatherProviderName.OPEN_METEO
    forecast_hours: int = Field(default=3, ge=1, le=24)


class IntervalConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weather_update_seconds: int = Field(default=900, ge=60)
    output_seconds: int = Field(default=30, ge=1)


class TemplateConfig(BaseModel):
    model_config = {"extra": "forbid"}

    text: str = ""
    alt_text: str = ""
    tooltip: str = ""
    use_css_icon: bool = False


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    geolocation_file: str = DEFAULT_GEOLOCATION_FILE


class GeocoderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    provider: GeocoderProviderName = GeocoderProviderName.NOMINATIM


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    units: UnitSystem = UnitSystem.METRIC
    locale: str = ""
    log_level: LogLevel = LogLevel.INFO
    weather: WeatherConfig = WeatherConfig()
    intervals: IntervalConfig = IntervalConfig()
    templates: TemplateConfig = TemplateConfig()
    location: LocationConfig = LocationConfig()
    geocoder: GeocoderConfig = GeocoderConfig()

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    def resolved_templates(self) -> TemplateConfig:
        """Templates with empty entries replaced by the defaults."""
        text = self.templates.text or DEFAULT_TEXT_TEMPLATE
        alt_text = self.templates.alt_text or DEFAULT_ALT_TEXT_TEMPLATE
        if self.templates.use_css_icon:
            # The bar styles the icon via CSS, so drop it from the default text.
            if text == DEFAULT_TEXT_TEMPLATE:
                text = text.removeprefix("{{ current.condition_icon }} ")
            if alt_text == DEFAULT_ALT_TEXT_TEMPLATE:
                alt_text = alt_text.removeprefix("{{ forecast.condition_icon }} ")
        return TemplateConfig(
            text=text,
            alt_text=alt_text,
            tooltip=self.templates.tooltip or DEFAULT_TOOLTIP_TEMPLATE,
            use_css_icon=self.templates.use_css_icon,
        )
