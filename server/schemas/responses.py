"""Pydantic response models (DTOs) for FastAPI endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str


class ToolDescriptorDTO(BaseModel):
    name: str
    description: str
    parameters: dict[str, Any] = Field(default_factory=dict)


class ToolListResponseDTO(BaseModel):
    tools: list[ToolDescriptorDTO]


class ErrorDTO(BaseModel):
    code: str
    message: str
    tool: str
    retryable: bool
    details: dict[str, Any] = Field(default_factory=dict)


class ToolCallResponseDTO(BaseModel):
    tool: str
    ok: bool
    result: dict[str, Any] | None = None
    rendered: str | None = None
    error: ErrorDTO | None = None
    latency_ms: int

    @classmethod
    def from_tool_result(cls, tr):
        """Convert ToolCallResult to DTO."""
        payload = tr.to_dict()
        return cls(
            tool=tr.tool,
            ok=tr.ok,
            result=payload["result"] if tr.ok else None,
            rendered=tr.render() if tr.ok else None,
            error=ErrorDTO(**payload["error"]) if tr.error else None,
            latency_ms=tr.latency_ms,
        )
