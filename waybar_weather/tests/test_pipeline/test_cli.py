"""Tests for CLI commands."""

import json
from pathlib import Path

import httpx
import pytest
import respx
import yaml

from waybar_weather.cli import main
from waybar_weather.ingest.open_meteo import OPEN_METEO_URL


def _write_config(tmp_path: Path, **overrides) -> Path:
    data = {"locale": "en", "geocoder": {"enabled": False}}
    data.update(overrides)
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        result = main([])
        assert result == 1

    def test_config_show(self, tmp_path: Path, capsys):
        config_path = tmp_path / "test.yaml"
        config_path.write_text("")
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 0
        captured = capsys.readouterr()
        assert "open-meteo" in captured.out
        assert json.loads(captured.out)["weather"]["forecast_hours"] == 3

    def test_config_get(self, config_yaml_path: Path, capsys):
        result = main(["--config", str(config_yaml_path), "config", "get", "units"])
        assert result == 0
        assert capsys.readouterr().out.strip() == "imperial"

    def test_config_get_missing_key(self, config_yaml_path: Path, capsys):
        result = main(["--config", str(config_yaml_path), "config", "get", "nope.nope"])
        assert result == 1
        assert "not found" in capsys.readouterr().err

    def test_config_without_subcommand(self, config_yaml_path: Path, capsys):
        assert main(["--config", str(config_yaml_path), "config"]) == 1

    def test_invalid_config(self, tmp_path: Path, capsys):
        path = _write_config(tmp_path, bogus=True)
        assert main(["--config", str(path), "config", "show"]) == 1
        assert "failed to load config" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path: Path, capsys):
        result = main(["--config", str(tmp_path / "missing.yaml"), "config", "show"])
        assert result == 1

    @respx.mock
    def test_once(self, tmp_path: Path, metric_body: bytes, capsys):
        route = respx.get(OPEN_METEO_URL).mock(
            return_value=httpx.Response(200, content=metric_body)
        )
        path = _write_config(tmp_path)

        result = main(["--config", str(path), "once", "--lat", "44.4375", "--lon", "26.125"])

        assert result == 0
        assert route.calls.last.request.url.params["latitude"] == "44.437500"
        payload = json.loads(capsys.readouterr().out.strip())
        assert payload["class"] == "waybar-weather"
        assert payload["text"] == "🌙 -5.3°C"
        assert "Feels like: -9.2°C" in payload["tooltip"]

    @respx.mock
    def test_once_upstream_failure(self, tmp_path: Path, capsys):
        respx.get(OPEN_METEO_URL).mock(return_value=httpx.Response(500))
        path = _write_config(tmp_path)

        result = main(["--config", str(path), "once", "--lat", "1", "--lon", "2"])

        assert result == 1
        assert capsys.readouterr().out == ""

    def test_once_without_location(self, tmp_path: Path, capsys):
        path = _write_config(
            tmp_path, location={"geolocation_file": str(tmp_path / "missing")}
        )
        assert main(["--config", str(path), "once"]) == 1

    def test_invalid_template(self, tmp_path: Path, capsys):
        path = _write_config(tmp_path, templates={"text": "{{ current.nope }}"})
        assert main(["--config", str(path), "once", "--lat", "1", "--lon", "2"]) == 1

    def test_invalid_log_level_in_config(self, tmp_path: Path, capsys):
        path = _write_config(tmp_path, log_level="LOUD")
        assert main(["--config", str(path), "config", "show"]) == 1
        assert "failed to load config" in capsys.readouterr().err

    def test_invalid_log_level_flag(self, config_yaml_path: Path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_yaml_path), "--log-level", "LOUD", "config", "show"])
        assert exc_info.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_log_level_flag_case_insensitive(self, config_yaml_path: Path, capsys):
        args = ["--config", str(config_yaml_path), "--log-level", "debug", "config", "get", "units"]
        assert main(args) == 0
