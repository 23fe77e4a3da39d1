from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException

from toolhub.models.platform import ServerConfig
from toolhub.models.resource import ResourceResponse
from toolhub.models.server import (
    HealthResponse,
    ResourceListResponse,
    ToolCallRequest,
    ToolListResponse,
)
from toolhub.models.tool import ToolResponse
from toolhub.platform.app import ToolHubPlatform

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Boot platform on startup, shutdown on exit."""
    platform = ToolHubPlatform(ServerConfig())
    await platform.boot()
    app.state.platform = platform
    logger.info("server.started")
    yield
    await platform.shutdown()
    logger.info("server.stopped")


app = FastAPI(title="ToolHub", lifespan=lifespan)


def _get_platform() -> ToolHubPlatform:
    return app.state.platform


# --- Health ---


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(booted=_get_platform().is_booted)


# --- Tools ---


@app.get("/api/tools", response_model=ToolListResponse)
async def list_tools():
    return ToolListResponse(tools=_get_platform().list_tools())


@app.post("/api/tools/{name}/call", response_model=ToolResponse)
async def call_tool(name: str, request: ToolCallRequest):
    platform = _get_platform()
    if name not in platform.tools:
        raise HTTPException(status_code=404, detail=f"Tool '{name}' not found")
    return await platform.call_tool(name, request.arguments)


# --- Resources ---


@app.get("/api/resources", response_model=ResourceListResponse)
async def list_resources():
    return ResourceListResponse(resources=_get_platform().list_resources())


@app.get("/api/resources/read", response_model=ResourceResponse)
async def read_resource(uri: str):
    platform = _get_platform()
    if uri not in platform.resources:
        raise HTTPException(status_code=404, detail=f"Resource '{uri}' not found")
    return await platform.read_resource(uri)
