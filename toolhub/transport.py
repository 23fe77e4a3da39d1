from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import mcp.types as types
import structlog
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from toolhub.models.resource import ResourceMetadata, ResourceResponse
from toolhub.models.tool import ImageContent, ToolMetadata, ToolResponse
from toolhub.platform.app import ToolHubPlatform

logger = structlog.get_logger()


def to_mcp_tool(meta: ToolMetadata) -> types.Tool:
    return types.Tool(
        name=meta.name,
        description=meta.description,
        inputSchema=meta.input_schema,
        outputSchema=meta.output_schema,
    )


def to_call_result(response: ToolResponse) -> types.CallToolResult:
    content: list[types.TextContent | types.ImageContent] = []
    for item in response.content:
        if isinstance(item, ImageContent):
            content.append(
                types.ImageContent(type="image", data=item.data, mimeType=item.mime_type)
            )
        else:
            content.append(types.TextContent(type="text", text=item.text))
    return types.CallToolResult(
        content=content,
        structuredContent=response.structured_content,
        isError=response.is_error,
    )


def to_mcp_resource(meta: ResourceMetadata) -> types.Resource:
    return types.Resource(
        uri=meta.uri,
        name=meta.name,
        description=meta.description,
        mimeType=meta.mime_type,
    )


def to_read_contents(response: ResourceResponse) -> list[ReadResourceContents]:
    return [
        ReadResourceContents(content=item.text, mime_type=item.mime_type)
        for item in response.contents
    ]


def build_server(platform: ToolHubPlatform) -> Server:
    """MCP low-level server whose handlers delegate to *platform*."""
    config = platform.config
    server: Server = Server(config.server_name, version=config.server_version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(meta) for meta in platform.list_tools()]

    # Arguments are validated by the platform so failures come back as envelopes
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        return to_call_result(await platform.call_tool(name, arguments))

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return [to_mcp_resource(meta) for meta in platform.list_resources()]

    @server.read_resource()
    async def read_resource(uri: Any) -> Iterable[ReadResourceContents]:
        return to_read_contents(await platform.read_resource(str(uri)))

    return server


async def run_stdio(platform: ToolHubPlatform) -> None:
    """Serve *platform* over MCP stdio until the client disconnects."""
    server = build_server(platform)
    logger.info("transport.stdio.started", server=platform.config.server_name)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("transport.stdio.stopped")
