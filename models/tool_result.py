from dataclasses import dataclass, field
from typing import Any

VALID_ERROR_CODES = {"network_error", "parse_error", "invalid_arguments", "unknown_tool"}


@dataclass(frozen=True)
class ToolError:
    code: str
    message: str
    tool: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.code not in VALID_ERROR_CODES:
            md = dict(self.details)
            md.setdefault("original_code", self.code)
            object.__setattr__(self, "details", md)
            object.__setattr__(self, "code", "unknown")

    @classmethod
    def from_exception(cls, tool: str, exc) -> "ToolError":
        details = exc.to_dict()
        for key in ("code", "message", "retryable"):
            details.pop(key, None)
        return cls(
            code=exc.code,
            message=exc.message,
            tool=tool,
            retryable=exc.retryable,
            details=details,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "tool": self.tool,
            "retryable": self.retryable,
            "details": self.details,
        }


@dataclass(frozen=True)
class ToolCallResult:
    tool: str
    ok: bool
    value: Any = None
    error: ToolError | None = None
    latency_ms: int = 0

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def render(self) -> str:
        """Text handed back to the policy for this call."""
        if self.error is not None:
            return f"ERROR [{self.error.code}] {self.tool}: {self.error.message}"
        return str(self.value)

    def to_dict(self) -> dict[str, Any]:
        value = self.value
        if value is not None and hasattr(value, "to_dict"):
            value = value.to_dict()
        return {
            "tool": self.tool,
            "ok": self.ok,
            "result": value,
            "error": self.error.to_dict() if self.error else None,
            "latency_ms": self.latency_ms,
        }
