from __future__ import annotations

import asyncio
import json

import typer

from toolhub.config import configure_logging
from toolhub.models.platform import ServerConfig
from toolhub.platform.app import ToolHubPlatform

app = typer.Typer(name="toolhub", help="ToolHub MCP tool server")


def _platform() -> ToolHubPlatform:
    config = ServerConfig()
    configure_logging(level=config.log_level, json_output=config.log_json)
    return ToolHubPlatform(config)


@app.command()
def serve(
    http: bool = typer.Option(False, "--http", help="Serve the HTTP API instead of MCP stdio"),
    host: str | None = typer.Option(None, "--host", help="HTTP server host"),
    port: int | None = typer.Option(None, "--port", "-p", help="HTTP server port"),
) -> None:
    """Start the MCP stdio server (default) or the HTTP API."""
    if http:
        import uvicorn

        config = ServerConfig()
        configure_logging(level=config.log_level, json_output=config.log_json)
        uvicorn.run(
            "toolhub.server:app",
            host=host or config.host,
            port=port or config.port,
            reload=False,
        )
        return

    from toolhub.transport import run_stdio

    platform = _platform()

    async def _serve():
        await platform.boot()
        try:
            await run_stdio(platform)
        finally:
            await platform.shutdown()

    asyncio.run(_serve())


@app.command(name="list")
def list_cmd(
    tools: bool = typer.Option(False, "--tools", "-t", help="List tools"),
    resources: bool = typer.Option(False, "--resources", "-r", help="List resources"),
) -> None:
    """List registered tools or resources."""
    platform = _platform()

    async def _list():
        await platform.boot()
        try:
            if tools:
                for t in platform.list_tools():
                    typer.echo(f"  {t.name}: {t.description}")
            elif resources:
                for r in platform.list_resources():
                    typer.echo(f"  {r.uri} ({r.mime_type}): {r.description}")
            else:
                typer.echo("Use --tools or --resources")
        finally:
            await platform.shutdown()

    asyncio.run(_list())


@app.command()
def call(
    tool_name: str = typer.Argument(help="Name of the tool to call"),
    input_json: str = typer.Option("{}", "--input", "-i", help="JSON arguments for the tool"),
) -> None:
    """Call a tool once and print its response envelope."""
    try:
        arguments = json.loads(input_json)
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON input: {e}", err=True)
        raise typer.Exit(code=1)

    platform = _platform()

    async def _call():
        await platform.boot()
        try:
            return await platform.call_tool(tool_name, arguments)
        finally:
            await platform.shutdown()

    response = asyncio.run(_call())
    data = response.model_dump(by_alias=True, exclude_none=True)
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
    if response.is_error:
        raise typer.Exit(code=1)


@app.command()
def read(
    uri: str = typer.Argument(help="Resource URI, e.g. weather://seoul"),
) -> None:
    """Read a resource and print its text."""
    platform = _platform()

    async def _read():
        await platform.boot()
        try:
            return await platform.read_resource(uri)
        finally:
            await platform.shutdown()

    response = asyncio.run(_read())
    for item in response.contents:
        typer.echo(item.text)


def main() -> None:
    """CLI entrypoint."""
    app()
