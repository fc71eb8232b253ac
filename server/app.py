"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from orchestrator.tool_registry import ToolRegistry
from server.dependencies import get_tool_registry, shutdown_tool_registry
from server.routes import health, tools
from server.routes.health import API_VERSION
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    logger.info("Research tools server starting up")
    yield
    shutdown_tool_registry()
    logger.info("Research tools server shutting down")


def create_app(registry: ToolRegistry | None = None) -> FastAPI:
    """
    Factory function to create the FastAPI application.

    Args:
        registry: Optional pre-built registry; by default one is built lazily
            from environment configuration on first use.
    """
    app = FastAPI(
        title="Deep Research Tools API",
        description="Search, fetch, assess and finalize tools for research sessions",
        version=API_VERSION,
        lifespan=lifespan,
    )

    if registry is not None:
        app.dependency_overrides[get_tool_registry] = lambda: registry

    app.include_router(health.router)
    app.include_router(tools.router)

    return app
