from __future__ import annotations

from typing import Any, ClassVar

import structlog
from pydantic import Field

from toolhub.core.errors import UpstreamError
from toolhub.models.platform import ServerConfig
from toolhub.models.tool import ToolConfig, ToolResponse
from toolhub.tools.base import BasePlatformTool
from toolhub.tools.http import fetch_json

logger = structlog.get_logger()

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"

# Address parts rendered in this order when present
_ADDRESS_PARTS = ("house_number", "road", "city", "state", "country")


class GeocodeConfig(ToolConfig):
    """Input for the geocoding tool."""

    query: str = Field(
        description="City name or address (e.g. Seoul, Paris, 1600 Amphitheatre Parkway)"
    )


def not_found_message(query: str) -> str:
    return f'No results found for "{query}". Try a different search term.'


def format_address(address: dict[str, Any] | None) -> str:
    """Join the known address parts with ", ", skipping absent ones."""
    if not address:
        return ""
    parts = [str(address[key]) for key in _ADDRESS_PARTS if address.get(key)]
    return ", ".join(parts)


def format_place(place: dict[str, Any], query: str) -> str:
    try:
        lat = float(place["lat"])
        lon = float(place["lon"])
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamError("Geocoding result has no usable coordinates") from exc

    lines = [f"Location: {place.get('display_name') or query}"]
    address = format_address(place.get("address"))
    if address:
        lines.append(f"Address: {address}")
    lines += [
        f"Latitude: {lat}",
        f"Longitude: {lon}",
        f"Coordinates: ({lat}, {lon})",
    ]
    return "\n".join(lines)


class GeocodeTool(BasePlatformTool):
    """Resolve a place name or address to coordinates via Nominatim."""

    name: ClassVar[str] = "geocode"
    description: ClassVar[str] = (
        "Return latitude and longitude for a city name or address. "
        "Uses the Nominatim OpenStreetMap API."
    )
    config_model: ClassVar[type[ToolConfig]] = GeocodeConfig
    output_description: ClassVar[str | None] = "Latitude and longitude"
    failure_message: ClassVar[str] = "Geocoding failed"
    failure_hint: ClassVar[str | None] = "Check your network connection or try again later."

    def __init__(
        self,
        url: str = NOMINATIM_URL,
        user_agent: str = "toolhub/1.0.0",
        timeout: float = 30.0,
    ):
        self.url = url
        self.user_agent = user_agent
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ServerConfig) -> GeocodeTool:
        return cls(url=config.geocode_url, user_agent=config.user_agent, timeout=config.http_timeout)

    async def execute(self, config: GeocodeConfig) -> ToolResponse:
        data = await fetch_json(
            self.url,
            params={"q": config.query, "format": "json", "limit": 1, "addressdetails": 1},
            # Nominatim rejects requests without a User-Agent
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        if not isinstance(data, list) or not data:
            logger.info("geocode.no_match", query=config.query)
            return ToolResponse.text(not_found_message(config.query))
        return ToolResponse.text(format_place(data[0], config.query))
