"""FastAPI dependencies for tool registry access."""

from orchestrator.tool_registry import ToolRegistry, build_tool_registry
from tools.web.factory import ResearchToolkit, create_research_toolkit
from utils.logger import get_logger

logger = get_logger(__name__)

_toolkit: ResearchToolkit | None = None
_registry: ToolRegistry | None = None


def get_tool_registry() -> ToolRegistry:
    """Dependency to get the tool registry (process-wide singleton)."""
    global _toolkit, _registry
    if _registry is None:
        _toolkit = create_research_toolkit()
        _registry = build_tool_registry(_toolkit)
        logger.info(f"Tool registry ready: {', '.join(_registry.tool_names())}")
    return _registry


def shutdown_tool_registry() -> None:
    """Release the shared HTTP pool, if one was created."""
    global _toolkit, _registry
    if _toolkit is not None:
        _toolkit.close()
    _toolkit = None
    _registry = None
