"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from waybar_weather.config.schema import AppConfig
from waybar_weather.models.common import Coordinate

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def coords() -> Coordinate:
    return Coordinate(lat=44.4375, lon=26.125)


@pytest.fixture
def metric_body(fixtures_dir: Path) -> bytes:
    return (fixtures_dir / "open_meteo_metric.json").read_bytes()


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "units": "imperial",
        "locale": "de_DE",
        "weather": {"forecast_hours": 6},
        "intervals": {"weather_update_seconds": 600},
        "location": {"latitude": 52.52, "longitude": 13.405},
    }
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
