"""Tool boundary over HTTP: list tools and invoke one by name."""

import asyncio
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from orchestrator.tool_registry import ToolRegistry
from server.dependencies import get_tool_registry
from server.schemas.responses import ToolCallResponseDTO, ToolDescriptorDTO, ToolListResponseDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Tools"])


@router.get("/tools", response_model=ToolListResponseDTO)
async def list_tools(registry: ToolRegistry = Depends(get_tool_registry)):
    """List the registered tools with their argument schemas."""
    return ToolListResponseDTO(tools=[ToolDescriptorDTO(**d) for d in registry.describe()])


@router.post("/tools/{name}", response_model=ToolCallResponseDTO)
async def call_tool(
    name: str,
    arguments: dict[str, Any] | None = Body(default=None),
    registry: ToolRegistry = Depends(get_tool_registry),
):
    """
    Invoke one tool.

    Tool failures (network, parse, invalid arguments) come back with ok=false
    and a structured error; only an unknown tool name is an HTTP error.
    """
    if name not in registry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown tool '{name}'. Available: {', '.join(registry.tool_names())}",
        )

    # Search and fetch block on network I/O
    result = await asyncio.to_thread(registry.dispatch, name, arguments or {})

    logger.info(
        f"HTTP tool call {name} ok={result.ok}",
        extra={"extra_fields": {"tool": name, "ok": result.ok, "latency_ms": result.latency_ms}},
    )
    return ToolCallResponseDTO.from_tool_result(result)
