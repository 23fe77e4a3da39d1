from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from toolhub.models.resource import ResourceMetadata, ResourceResponse
from toolhub.models.tool import ToolMetadata, ToolResponse


@pytest.fixture
async def client():
    """Create an async test client with a mocked ToolHubPlatform."""
    mock_platform = MagicMock()
    mock_platform.is_booted = True
    # Sync methods
    mock_platform.list_tools.return_value = []
    mock_platform.list_resources.return_value = []
    mock_platform.tools = MagicMock()
    mock_platform.tools.__contains__.return_value = True
    mock_platform.resources = MagicMock()
    mock_platform.resources.__contains__.return_value = True
    # Async methods
    mock_platform.boot = AsyncMock()
    mock_platform.shutdown = AsyncMock()
    mock_platform.call_tool = AsyncMock()
    mock_platform.read_resource = AsyncMock()

    with patch("toolhub.server.ToolHubPlatform") as MockPlatform:
        MockPlatform.return_value = mock_platform

        from toolhub.server import app

        # Inject mock platform directly into app state (bypasses lifespan)
        app.state.platform = mock_platform

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            ac._mock_platform = mock_platform
            yield ac

        # Clean up state
        if hasattr(app.state, "platform"):
            del app.state.platform


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "booted": True}


class TestTools:
    async def test_list_tools(self, client):
        client._mock_platform.list_tools.return_value = [
            ToolMetadata(
                name="greet", description="Return a greeting",
                input_schema={"type": "object"},
            )
        ]
        resp = await client.get("/api/tools")
        assert resp.status_code == 200
        tool = resp.json()["tools"][0]
        assert tool["name"] == "greet"
        assert tool["inputSchema"] == {"type": "object"}

    async def test_call_tool(self, client):
        client._mock_platform.call_tool.return_value = ToolResponse.text("6 * 3 = 18")
        resp = await client.post(
            "/api/tools/calculator/call", json={"arguments": {"a": 6, "b": 3, "operator": "*"}}
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["content"] == [{"type": "text", "text": "6 * 3 = 18"}]
        assert body["isError"] is False
        client._mock_platform.call_tool.assert_awaited_once_with(
            "calculator", {"a": 6, "b": 3, "operator": "*"}
        )

    async def test_call_tool_error_envelope_is_200(self, client):
        client._mock_platform.call_tool.return_value = ToolResponse.text(
            "Calculation failed: boom", is_error=True
        )
        resp = await client.post("/api/tools/calculator/call", json={})
        assert resp.status_code == 200
        assert resp.json()["isError"] is True

    async def test_call_unknown_tool(self, client):
        client._mock_platform.tools.__contains__.return_value = False
        resp = await client.post("/api/tools/nope/call", json={"arguments": {}})
        assert resp.status_code == 404
        assert "not found" in resp.json()["detail"]


class TestResources:
    async def test_list_resources(self, client):
        client._mock_platform.list_resources.return_value = [
            ResourceMetadata(uri="time://seoul", name="time-seoul")
        ]
        resp = await client.get("/api/resources")
        assert resp.status_code == 200
        assert resp.json()["resources"][0]["mimeType"] == "text/plain"

    async def test_read_resource(self, client):
        client._mock_platform.read_resource.return_value = ResourceResponse.text(
            "location://seoul", '{"city": "Seoul"}', mime_type="application/json"
        )
        resp = await client.get("/api/resources/read", params={"uri": "location://seoul"})
        assert resp.status_code == 200
        assert resp.json()["contents"][0]["mimeType"] == "application/json"
        client._mock_platform.read_resource.assert_awaited_once_with("location://seoul")

    async def test_read_unknown_resource(self, client):
        client._mock_platform.resources.__contains__.return_value = False
        resp = await client.get("/api/resources/read", params={"uri": "weather://atlantis"})
        assert resp.status_code == 404
