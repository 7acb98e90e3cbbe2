"""YAML config loader with environment overrides and dotted lookups."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from waybar_weather.config.schema import AppConfig

ENV_PREFIX = "WAYBARWEATHER_"


def load_config(
    path: str | Path | None = None, environ: Mapping[str, str] | None = None
) -> AppConfig:
    """Load and validate config from a YAML file.

    Without a path the defaults are used. Environment variables such as
    WAYBARWEATHER_UNITS or WAYBARWEATHER_WEATHER_FORECAST_HOURS override
    file values.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        with open(Path(path).expanduser()) as f:
            raw = yaml.safe_load(f) or {}

    apply_env_overrides(raw, os.environ if environ is None else environ)
    return AppConfig(**raw)


def apply_env_overrides(raw: dict[str, Any], environ: Mapping[str, str]) -> None:
    """Merge WAYBARWEATHER_* variables into the raw config mapping in place."""
    for field_name, field in AppConfig.model_fields.items():
        section = field.annotation
        if isinstance(section, type) and issubclass(section, BaseModel):
            for sub_name in section.model_fields:
                key = f"{ENV_PREFIX}{field_name}_{sub_name}".upper()
                if key in environ:
                    if not isinstance(raw.get(field_name), dict):
                        raw[field_name] = {}
                    raw[field_name][sub_name] = environ[key]
        else:
            key = f"{ENV_PREFIX}{field_name}".upper()
            if key in environ:
                raw[field_name] = environ[key]


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'weather.forecast_hours'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
