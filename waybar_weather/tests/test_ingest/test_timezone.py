"""Tests for the Open-Meteo timezone parameter."""

from datetime import UTC, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from waybar_weather.ingest.timezone import timezone_param, zone_name


class TestTimezoneParam:
    @pytest.mark.parametrize("key", ["UTC", "Etc/UTC", "GMT", "Etc/GMT"])
    def test_zero_offset_names(self, key):
        assert timezone_param(ZoneInfo(key)) == "GMT"

    def test_datetime_utc(self):
        assert timezone_param(UTC) == "GMT"

    def test_named_zone(self):
        assert timezone_param(ZoneInfo("Europe/Berlin")) == "Europe/Berlin"

    def test_unnamed_fixed_offset(self):
        assert timezone_param(timezone(timedelta(hours=2))) == "auto"


class TestZoneName:
    def test_zoneinfo_key(self):
        assert zone_name(ZoneInfo("America/New_York")) == "America/New_York"

    def test_fixed_offset_has_no_name(self):
        assert zone_name(timezone(timedelta(hours=-5))) is None
