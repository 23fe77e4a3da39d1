from __future__ import annotations

from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from toolhub.core.errors import UpstreamError
from toolhub.core.schema import ErrorKind, validate
from toolhub.tools.base import fault_tolerant
from toolhub.tools.weather import (
    WEATHER_CODES,
    WeatherConfig,
    WeatherTool,
    describe_weather,
    fetch_forecast,
    render_city_report,
    render_daily,
    render_hourly,
    render_report,
)

START = date(2026, 10, 17)


def _forecast(days: int = 16, hours: int = 48) -> dict:
    return {
        "latitude": 37.55,
        "longitude": 126.98,
        "timezone": "Asia/Seoul",
        "elevation": 38.0,
        "current_weather": {
            "temperature": 18.2,
            "windspeed": 7.4,
            "winddirection": 250,
            "weathercode": 2,
            "time": "2026-10-17T14:00",
        },
        "daily": {
            "time": [(START + timedelta(days=i)).isoformat() for i in range(days)],
            "temperature_2m_max": [20.0 + i for i in range(days)],
            "temperature_2m_min": [10.0 + i for i in range(days)],
            "precipitation_sum": [0.0 if i % 2 else 1.2 for i in range(days)],
            "weather_code": [61 if i % 2 else 3 for i in range(days)],
        },
        "hourly": {
            "time": [f"2026-10-{17 + h // 24:02d}T{h % 24:02d}:00" for h in range(hours)],
            "temperature_2m": [15.0] * hours,
            "weather_code": [0] * hours,
            "precipitation": [0.0] * hours,
            "wind_speed_10m": [5.0] * hours,
        },
    }


def _mock_client(payload):
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = payload
    mock_client = AsyncMock()
    mock_client.get = AsyncMock(return_value=mock_response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


def _daily_entries(text: str) -> int:
    return sum(1 for line in text.split("\n") if line.startswith("  High: "))


class TestDescribeWeather:
    def test_known_codes(self):
        assert describe_weather(0) == "Clear sky"
        assert describe_weather(95) == "Thunderstorm"
        assert len(WEATHER_CODES) == 28

    def test_unknown_code(self):
        assert describe_weather(42) == "Weather code 42"


class TestRendering:
    def test_report_sections(self):
        text = render_report(_forecast(days=7), 37.5, 127.0, 7)
        assert text.startswith("📍 Location: latitude 37.5, longitude 127.0\n")
        assert "⏰ Timezone: Asia/Seoul\n" in text
        assert "📊 Elevation: 38.0m\n" in text
        assert "Conditions: Partly cloudy" in text
        assert "Time: 2026-10-17T14:00" in text
        assert "📅 7-day forecast" in text
        assert "⏰ Next 24 hours (hourly)" in text

    def test_header_defaults(self):
        data = _forecast()
        del data["timezone"], data["elevation"]
        text = render_report(data, 1.0, 2.0, 7)
        assert "⏰ Timezone: auto\n" in text
        assert "📊 Elevation: N/Am\n" in text

    def test_daily_capped_by_forecast_days(self):
        assert _daily_entries(render_daily(_forecast(days=16)["daily"], 1)) == 1
        assert _daily_entries(render_daily(_forecast(days=16)["daily"], 16)) == 16
        # fewer days returned than asked for
        assert _daily_entries(render_daily(_forecast(days=3)["daily"], 16)) == 3

    def test_daily_precipitation_only_when_positive(self):
        text = render_daily(_forecast(days=2)["daily"], 2)
        assert text.count("Precipitation:") == 1
        assert "Oct 17 (Sat)" in text

    def test_hourly_capped_at_24(self):
        text = render_hourly(_forecast(hours=48)["hourly"])
        assert text.count("Temperature: 15.0°C") == 24
        assert "Precipitation" not in text

    def test_missing_sub_fields_tolerated(self):
        data = {"daily": {"time": ["2026-10-17"]}, "hourly": {"time": ["2026-10-17T00:00"]}}
        text = render_report(data, 0.0, 0.0, 7)
        assert "Oct 17 (Sat)" in text
        assert "Current weather" not in text

    def test_city_report_has_no_hourly_section(self):
        text = render_city_report(_forecast(days=7), "Seoul")
        assert text.startswith("📍 Seoul weather\n")
        assert "📅 7-day forecast" in text
        assert "hourly" not in text
        assert "Time:" not in text


class TestWeatherConfig:
    def test_default_forecast_days(self):
        result = validate(WeatherConfig, {"latitude": 37.5, "longitude": 127})
        assert result.ok
        assert result.value.forecast_days == 7

    @pytest.mark.parametrize("days", [0, 17])
    def test_forecast_days_bounds(self, days):
        result = validate(WeatherConfig, {"latitude": 0, "longitude": 0, "forecastDays": days})
        assert result.errors[0].field == "forecastDays"
        assert result.errors[0].kind == ErrorKind.CONSTRAINT_VIOLATION

    def test_integral_float_forecast_days(self):
        result = validate(WeatherConfig, {"latitude": 0, "longitude": 0, "forecastDays": 7.0})
        assert result.ok
        assert result.value.forecast_days == 7
        assert type(result.value.forecast_days) is int

    @pytest.mark.parametrize("days", [2.5, "7", True])
    def test_non_integral_forecast_days_rejected(self, days):
        result = validate(WeatherConfig, {"latitude": 0, "longitude": 0, "forecastDays": days})
        assert result.errors[0].field == "forecastDays"


class TestWeatherTool:
    async def test_fetch_forecast_params(self):
        mock_client = _mock_client(_forecast())
        with patch("httpx.AsyncClient", return_value=mock_client):
            await fetch_forecast(37.5, 127.0, 3, url="http://meteo.test/forecast")
        args, kwargs = mock_client.get.call_args
        assert args == ("http://meteo.test/forecast",)
        params = kwargs["params"]
        assert params["forecast_days"] == 3
        assert params["current_weather"] == "true"
        assert params["timezone"] == "auto"
        assert "relative_humidity_2m" in params["hourly"]

    async def test_upstream_error_payload(self):
        payload = {"error": True, "reason": "Latitude must be in range of -90 to 90°."}
        with patch("httpx.AsyncClient", return_value=_mock_client(payload)):
            with pytest.raises(UpstreamError, match="Latitude must be in range"):
                await fetch_forecast(100.0, 0.0, 7)

    @pytest.mark.parametrize("days", [1, 16])
    async def test_execute_caps_daily_entries(self, days):
        config = validate(
            WeatherConfig, {"latitude": 37.5, "longitude": 127.0, "forecastDays": days}
        ).value
        with patch("httpx.AsyncClient", return_value=_mock_client(_forecast(days=16))):
            response = await WeatherTool().execute(config)
        assert _daily_entries(response.first_text()) == days

    async def test_failure_is_guarded(self):
        payload = {"error": True, "reason": "Invalid coordinates"}
        tool = WeatherTool()
        guarded = fault_tolerant(
            tool.execute, tool_name=tool.name,
            failure_message=tool.failure_message, hint=tool.failure_hint,
        )
        with patch("httpx.AsyncClient", return_value=_mock_client(payload)):
            response = await guarded(WeatherConfig(latitude=0.0, longitude=0.0))
        assert response.is_error
        assert response.first_text() == (
            "Failed to fetch the weather: Invalid coordinates\n"
            "Check your network connection or try again later."
        )
