from __future__ import annotations

import re
from zoneinfo import ZoneInfoNotFoundError

import pytest

from toolhub.core.schema import validate
from toolhub.tools.base import fault_tolerant
from toolhub.tools.clock import (
    LOCATION_TIMEZONES,
    CurrentTimeConfig,
    CurrentTimeTool,
    now_in,
    resolve_timezone,
)


class TestResolveTimezone:
    @pytest.mark.parametrize("location, zone", [
        ("서울", "Asia/Seoul"),
        ("Seoul", "Asia/Seoul"),
        ("seoul", "Asia/Seoul"),
        ("  Tokyo  ", "Asia/Tokyo"),
        ("new york", "America/New_York"),
        ("LA", "America/Los_Angeles"),
        ("uk", "Europe/London"),
        ("한국", "Asia/Seoul"),
    ])
    def test_table_lookup(self, location, zone):
        assert resolve_timezone(location) == zone

    def test_unknown_name_passes_through(self):
        assert resolve_timezone("Europe/Lisbon") == "Europe/Lisbon"

    @pytest.mark.parametrize("zone", sorted(set(LOCATION_TIMEZONES.values())))
    def test_idempotent_on_zone_ids(self, zone):
        assert resolve_timezone(zone) == zone
        assert resolve_timezone(resolve_timezone(zone)) == zone


class TestCurrentTimeTool:
    async def test_output_format(self):
        config = validate(CurrentTimeConfig, {"location": "Seoul"}).value
        response = await CurrentTimeTool().execute(config)
        lines = response.first_text().split("\n")
        assert lines[0] == "Seoul (Asia/Seoul) current time:"
        assert re.fullmatch(r"\w+, \w+ \d{2}, \d{4} \d{2}:\d{2}:\d{2}", lines[1])
        assert re.fullmatch(r"\(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\)", lines[2])

    def test_unknown_zone_raises(self):
        with pytest.raises(ZoneInfoNotFoundError):
            now_in("Mars/Olympus_Mons")

    async def test_unknown_zone_is_guarded(self):
        tool = CurrentTimeTool()
        guarded = fault_tolerant(
            tool.execute,
            tool_name=tool.name,
            failure_message=tool.failure_message,
            hint=tool.failure_hint,
        )
        response = await guarded(CurrentTimeConfig(location="Atlantis"))
        assert response.is_error
        text = response.first_text()
        assert text.startswith("Failed to get the current time: ")
        assert "Asia/Seoul" in text
