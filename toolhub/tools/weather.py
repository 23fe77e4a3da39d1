from __future__ import annotations

from datetime import date, datetime
from typing import Any, ClassVar

from pydantic import Field

from toolhub.core.errors import UpstreamError
from toolhub.models.platform import ServerConfig
from toolhub.models.tool import IntegralInt, ToolConfig, ToolResponse
from toolhub.tools.base import BasePlatformTool
from toolhub.tools.http import fetch_json

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

HOURLY_DETAILED = "temperature_2m,relative_humidity_2m,precipitation,weather_code,wind_speed_10m"
HOURLY_BRIEF = "temperature_2m,weather_code,wind_speed_10m"
DAILY_SERIES = "temperature_2m_max,temperature_2m_min,precipitation_sum,weather_code"

MAX_FORECAST_DAYS = 16
MAX_HOURLY_ENTRIES = 24
RULE = "━" * 40

# WMO weather interpretation codes
WEATHER_CODES: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def describe_weather(code: Any) -> str:
    """Human-readable WMO code; unknown codes show the raw number."""
    return WEATHER_CODES.get(code, f"Weather code {code}")


async def fetch_forecast(
    latitude: float,
    longitude: float,
    forecast_days: int,
    *,
    hourly: str = HOURLY_DETAILED,
    url: str = OPEN_METEO_URL,
    timeout: float = 30.0,
) -> dict[str, Any]:
    """Fetch current, hourly and daily series from Open-Meteo."""
    data = await fetch_json(
        url,
        params={
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "hourly": hourly,
            "daily": DAILY_SERIES,
            "forecast_days": forecast_days,
            "timezone": "auto",
        },
        timeout=timeout,
    )
    if not isinstance(data, dict):
        raise UpstreamError("Unexpected forecast payload")
    if data.get("error"):
        raise UpstreamError(data.get("reason") or "Unknown error reported by the forecast API")
    return data


def _at(series: dict[str, Any], key: str, index: int) -> Any:
    """``series[key][index]`` or None when any level is missing."""
    values = series.get(key)
    if not isinstance(values, list) or index >= len(values):
        return None
    return values[index]


def _series_length(series: Any) -> int:
    if not isinstance(series, dict) or not isinstance(series.get("time"), list):
        return 0
    return len(series["time"])


def _format_day(raw: Any) -> str:
    try:
        day = date.fromisoformat(str(raw))
    except ValueError:
        return str(raw)
    return f"{day:%b} {day.day} ({day:%a})"


def _format_hour(raw: Any) -> str:
    try:
        moment = datetime.fromisoformat(str(raw))
    except ValueError:
        return str(raw)
    return f"{moment:%b} {moment.day} {moment:%H:%M}"


def render_current(current: dict[str, Any], *, detailed: bool = True) -> str:
    # The current_weather block spells the code "weathercode"
    code = current.get("weathercode", current.get("weather_code"))
    text = "🌤️ Current weather\n"
    if detailed:
        text += f"{RULE}\n"
    text += f"Temperature: {current.get('temperature', 'N/A')}°C\n"
    if code is not None:
        text += f"Conditions: {describe_weather(code)}\n"
    text += f"Wind speed: {current.get('windspeed', 'N/A')} km/h\n"
    text += f"Wind direction: {current.get('winddirection', 'N/A')}°\n"
    if detailed and current.get("time"):
        text += f"Time: {current['time']}\n"
    return text + "\n"


def render_daily(daily: dict[str, Any], limit: int) -> str:
    text = f"📅 {limit}-day forecast\n{RULE}\n"
    for i in range(min(_series_length(daily), limit)):
        text += f"\n{_format_day(daily['time'][i])}\n"

        temps = []
        high = _at(daily, "temperature_2m_max", i)
        low = _at(daily, "temperature_2m_min", i)
        if high is not None:
            temps.append(f"High: {high}°C")
        if low is not None:
            temps.append(f"Low: {low}°C")
        if temps:
            text += f"  {' / '.join(temps)}\n"

        code = _at(daily, "weather_code", i)
        if code is not None:
            text += f"  Conditions: {describe_weather(code)}\n"

        precipitation = _at(daily, "precipitation_sum", i)
        if precipitation is not None and precipitation > 0:
            text += f"  Precipitation: {precipitation}mm\n"
    return text


def render_hourly(hourly: dict[str, Any], limit: int = MAX_HOURLY_ENTRIES) -> str:
    text = f"⏰ Next {limit} hours (hourly)\n{RULE}\n"
    for i in range(min(_series_length(hourly), limit)):
        parts = []
        temperature = _at(hourly, "temperature_2m", i)
        if temperature is not None:
            parts.append(f"Temperature: {temperature}°C")
        code = _at(hourly, "weather_code", i)
        if code is not None:
            parts.append(describe_weather(code))
        precipitation = _at(hourly, "precipitation", i)
        if precipitation is not None and precipitation > 0:
            parts.append(f"Precipitation: {precipitation}mm")
        wind = _at(hourly, "wind_speed_10m", i)
        if wind is not None:
            parts.append(f"Wind: {wind} km/h")

        text += f"\n{_format_hour(hourly['time'][i])}\n"
        if parts:
            text += f"  {' | '.join(parts)}\n"
    return text


def render_report(
    data: dict[str, Any], latitude: float, longitude: float, forecast_days: int
) -> str:
    """Full report for the weather tool: header, current, daily, hourly."""
    elevation = data.get("elevation")
    elevation_text = f"{elevation:.1f}" if isinstance(elevation, (int, float)) else "N/A"

    text = f"📍 Location: latitude {latitude}, longitude {longitude}\n"
    text += f"⏰ Timezone: {data.get('timezone') or 'auto'}\n"
    text += f"📊 Elevation: {elevation_text}m\n\n"

    if isinstance(data.get("current_weather"), dict):
        text += render_current(data["current_weather"])
    if _series_length(data.get("daily")):
        text += render_daily(data["daily"], forecast_days)
    if _series_length(data.get("hourly")):
        text += "\n\n" + render_hourly(data["hourly"])
    return text


def render_city_report(data: dict[str, Any], city: str, forecast_days: int = 7) -> str:
    """Compact report for the per-city weather resource (no hourly section)."""
    text = f"📍 {city} weather\n{RULE}\n\n"
    if isinstance(data.get("current_weather"), dict):
        text += render_current(data["current_weather"], detailed=False)
    if _series_length(data.get("daily")):
        text += render_daily(data["daily"], forecast_days)
    return text


class WeatherConfig(ToolConfig):
    """Input for the weather tool."""

    latitude: float = Field(description="Latitude (WGS84)")
    longitude: float = Field(description="Longitude (WGS84)")
    forecast_days: IntegralInt = Field(
        default=7,
        ge=1,
        le=MAX_FORECAST_DAYS,
        alias="forecastDays",
        description="Forecast length in days (default: 7, max: 16)",
    )


class WeatherTool(BasePlatformTool):
    """Current conditions and forecast from Open-Meteo."""

    name: ClassVar[str] = "getWeather"
    description: ClassVar[str] = (
        "Return current weather and a forecast for a latitude/longitude pair. "
        "Uses the Open-Meteo Weather API."
    )
    config_model: ClassVar[type[ToolConfig]] = WeatherConfig
    output_description: ClassVar[str | None] = "Weather report"
    failure_message: ClassVar[str] = "Failed to fetch the weather"
    failure_hint: ClassVar[str | None] = "Check your network connection or try again later."

    def __init__(self, url: str = OPEN_METEO_URL, timeout: float = 30.0):
        self.url = url
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ServerConfig) -> WeatherTool:
        return cls(url=config.forecast_url, timeout=config.http_timeout)

    async def execute(self, config: WeatherConfig) -> ToolResponse:
        data = await fetch_forecast(
            config.latitude,
            config.longitude,
            config.forecast_days,
            url=self.url,
            timeout=self.timeout,
        )
        return ToolResponse.text(
            render_report(data, config.latitude, config.longitude, config.forecast_days)
        )
