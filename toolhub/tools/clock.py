from __future__ import annotations

from datetime import datetime
from typing import ClassVar
from zoneinfo import ZoneInfo

from pydantic import Field

from toolhub.models.tool import ToolConfig, ToolResponse
from toolhub.tools.base import BasePlatformTool

# City and country names (Korean and English) -> IANA zone
LOCATION_TIMEZONES: dict[str, str] = {
    # cities
    "서울": "Asia/Seoul",
    "Seoul": "Asia/Seoul",
    "도쿄": "Asia/Tokyo",
    "Tokyo": "Asia/Tokyo",
    "베이징": "Asia/Shanghai",
    "Beijing": "Asia/Shanghai",
    "상하이": "Asia/Shanghai",
    "Shanghai": "Asia/Shanghai",
    "뉴욕": "America/New_York",
    "New York": "America/New_York",
    "로스앤젤레스": "America/Los_Angeles",
    "Los Angeles": "America/Los_Angeles",
    "LA": "America/Los_Angeles",
    "런던": "Europe/London",
    "London": "Europe/London",
    "파리": "Europe/Paris",
    "Paris": "Europe/Paris",
    "베를린": "Europe/Berlin",
    "Berlin": "Europe/Berlin",
    "모스크바": "Europe/Moscow",
    "Moscow": "Europe/Moscow",
    "시드니": "Australia/Sydney",
    "Sydney": "Australia/Sydney",
    "뭄바이": "Asia/Kolkata",
    "Mumbai": "Asia/Kolkata",
    "델리": "Asia/Kolkata",
    "Delhi": "Asia/Kolkata",
    "싱가포르": "Asia/Singapore",
    "Singapore": "Asia/Singapore",
    "방콕": "Asia/Bangkok",
    "Bangkok": "Asia/Bangkok",
    "두바이": "Asia/Dubai",
    "Dubai": "Asia/Dubai",
    # countries
    "한국": "Asia/Seoul",
    "Korea": "Asia/Seoul",
    "South Korea": "Asia/Seoul",
    "일본": "Asia/Tokyo",
    "Japan": "Asia/Tokyo",
    "중국": "Asia/Shanghai",
    "China": "Asia/Shanghai",
    "미국": "America/New_York",
    "USA": "America/New_York",
    "United States": "America/New_York",
    "영국": "Europe/London",
    "UK": "Europe/London",
    "United Kingdom": "Europe/London",
    "프랑스": "Europe/Paris",
    "France": "Europe/Paris",
    "독일": "Europe/Berlin",
    "Germany": "Europe/Berlin",
    "러시아": "Europe/Moscow",
    "Russia": "Europe/Moscow",
    "호주": "Australia/Sydney",
    "Australia": "Australia/Sydney",
    "인도": "Asia/Kolkata",
    "India": "Asia/Kolkata",
    "태국": "Asia/Bangkok",
    "Thailand": "Asia/Bangkok",
    "UAE": "Asia/Dubai",
    "United Arab Emirates": "Asia/Dubai",
}

_FOLDED_TIMEZONES = {name.casefold(): zone for name, zone in LOCATION_TIMEZONES.items()}

LONG_FORMAT = "%A, %B %d, %Y %H:%M:%S"
ISO_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_timezone(location: str) -> str:
    """Map a place name to an IANA zone, or return the trimmed input as-is.

    Exact match first, then a case-insensitive match.
    """
    key = location.strip()
    if key in LOCATION_TIMEZONES:
        return LOCATION_TIMEZONES[key]
    return _FOLDED_TIMEZONES.get(key.casefold(), key)


def now_in(zone: str) -> datetime:
    """Current wall-clock time in *zone*. Raises ZoneInfoNotFoundError or ValueError."""
    return datetime.now(ZoneInfo(zone))


def format_long(moment: datetime) -> str:
    return moment.strftime(LONG_FORMAT)


def format_iso(moment: datetime) -> str:
    return moment.strftime(ISO_FORMAT)


class CurrentTimeConfig(ToolConfig):
    """Input for the current-time tool."""

    location: str = Field(
        description="Region or country name (e.g. 서울, Seoul, Asia/Seoul, 한국, Korea)"
    )


class CurrentTimeTool(BasePlatformTool):
    """Current wall-clock time for a place or IANA zone."""

    name: ClassVar[str] = "getCurrentTime"
    description: ClassVar[str] = "Return the current time for a region or country."
    config_model: ClassVar[type[ToolConfig]] = CurrentTimeConfig
    output_description: ClassVar[str | None] = "Current time"
    failure_message: ClassVar[str] = "Failed to get the current time"
    failure_hint: ClassVar[str | None] = (
        "Enter a known region name or an IANA time zone (e.g. Asia/Seoul)."
    )

    async def execute(self, config: CurrentTimeConfig) -> ToolResponse:
        zone = resolve_timezone(config.location)
        moment = now_in(zone)
        text = (
            f"{config.location} ({zone}) current time:\n"
            f"{format_long(moment)}\n"
            f"({format_iso(moment)})"
        )
        return ToolResponse.text(text)
