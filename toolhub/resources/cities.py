from __future__ import annotations

import functools
import json
from dataclasses import dataclass

import structlog

from toolhub.models.platform import ServerConfig
from toolhub.models.resource import ResourceResponse
from toolhub.resources.base import ResourceDescriptor
from toolhub.tools.clock import format_long, now_in
from toolhub.tools.weather import (
    HOURLY_BRIEF,
    OPEN_METEO_URL,
    fetch_forecast,
    render_city_report,
)

logger = structlog.get_logger()

CITY_FORECAST_DAYS = 7


@dataclass(frozen=True)
class City:
    key: str
    name: str
    latitude: float
    longitude: float
    timezone: str = "Asia/Seoul"

    @property
    def coordinates(self) -> str:
        return f"({self.latitude}, {self.longitude})"


CITIES: tuple[City, ...] = (
    City("seoul", "Seoul", 37.5666791, 126.9782914),
    City("busan", "Busan", 35.1799528, 129.0752365),
    City("daegu", "Daegu", 35.8713, 128.6018),
    City("incheon", "Incheon", 37.456, 126.7052),
    City("gwangju", "Gwangju", 35.1594647, 126.8515034),
    City("daejeon", "Daejeon", 36.3322464, 127.4346482),
)


async def city_weather(
    city: City, *, url: str = OPEN_METEO_URL, timeout: float = 30.0
) -> ResourceResponse:
    """Current weather and a 7-day forecast.

    Upstream failures and malformed payloads become a text reply.
    """
    uri = f"weather://{city.key}"
    try:
        data = await fetch_forecast(
            city.latitude,
            city.longitude,
            CITY_FORECAST_DAYS,
            hourly=HOURLY_BRIEF,
            url=url,
            timeout=timeout,
        )
        report = render_city_report(data, city.name, CITY_FORECAST_DAYS)
    except Exception as exc:
        logger.warning("resource.upstream_failed", uri=uri, error=str(exc))
        return ResourceResponse.text(uri, f"Failed to fetch the weather: {exc}")
    return ResourceResponse.text(uri, report)


async def city_location(city: City) -> ResourceResponse:
    payload = {
        "city": city.name,
        "latitude": city.latitude,
        "longitude": city.longitude,
        "coordinates": city.coordinates,
    }
    return ResourceResponse.text(
        f"location://{city.key}",
        json.dumps(payload, indent=2, ensure_ascii=False),
        mime_type="application/json",
    )


async def city_time(city: City) -> ResourceResponse:
    moment = now_in(city.timezone)
    return ResourceResponse.text(
        f"time://{city.key}",
        f"{city.name} ({city.timezone}) current time:\n{format_long(moment)}",
    )


def build_city_resources(config: ServerConfig | None = None) -> list[ResourceDescriptor]:
    """Three descriptors (weather, location, time) per city, grouped by city."""
    config = config or ServerConfig()
    descriptors: list[ResourceDescriptor] = []
    for city in CITIES:
        descriptors += [
            ResourceDescriptor(
                uri=f"weather://{city.key}",
                name=f"weather-{city.key}",
                description=f"Current weather and 7-day forecast for {city.name}",
                mime_type="text/plain",
                producer=functools.partial(
                    city_weather, city, url=config.forecast_url, timeout=config.http_timeout
                ),
            ),
            ResourceDescriptor(
                uri=f"location://{city.key}",
                name=f"location-{city.key}",
                description=f"Latitude/longitude of {city.name}",
                mime_type="application/json",
                producer=functools.partial(city_location, city),
            ),
            ResourceDescriptor(
                uri=f"time://{city.key}",
                name=f"time-{city.key}",
                description=f"Current time in {city.name}",
                mime_type="text/plain",
                producer=functools.partial(city_time, city),
            ),
        ]
    return descriptors
