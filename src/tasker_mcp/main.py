# FastAPI application for SSE mode
# Hosts the MCP SSE endpoints next to root and health routes

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import BaseModel

from . import __version__
from .config import Settings
from .mcp_server import create_mcp_server, mount_sse
from .services.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    tools: int


def create_app(settings: Settings, registry: ToolRegistry) -> FastAPI:
    """Build the SSE application around an already populated registry."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Serving {len(registry)} tools over SSE on {settings.host}:{settings.port}, "
            f"forwarding to Tasker at {settings.tasker_url}"
        )
        yield
        logger.info("Shutting down Tasker MCP...")
        await registry.aclose()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="Tasker MCP",
        description="Tasker tasks exposed as MCP tools",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry
    app.state.mcp_server = create_mcp_server(registry)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Welcome to Tasker MCP"}

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", message="Service is running", tools=len(registry))

    mount_sse(app, app.state.mcp_server)
    return app
