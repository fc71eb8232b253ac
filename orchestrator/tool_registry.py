"""Explicit name -> handler registry forming the tool boundary."""

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from models.tool_result import ToolCallResult, ToolError
from tools.web.errors import InvalidToolArguments, ResearchToolError, UnknownToolError
from tools.web.factory import ResearchToolkit
from utils.logger import get_logger

logger = get_logger(__name__)


# ── Argument schemas ─────────────────────────────────────────────────────────


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class SearchArgs(BaseModel):
    query: str = Field(..., min_length=1, description="Search query - be specific")

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class FetchArgs(BaseModel):
    url: str = Field(..., min_length=1, description="Complete URL to fetch")

    @field_validator("url")
    @classmethod
    def url_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class AssessArgs(BaseModel):
    ranked_sources: list[str] = Field(
        default_factory=list,
        description="Ranked list of sources by relevance. Format: '1. [URL] - why it's useful'",
    )
    key_findings: list[str] = Field(
        default_factory=list,
        description="Key facts you've learned so far - be specific and cite sources",
    )
    critical_gaps: list[str] = Field(
        default_factory=list,
        description="Specific gaps - what CRITICAL info is missing? Be realistic about what's needed.",
    )
    readiness_level: str = Field(
        "",
        description="Your assessment: 'sufficient' if you can answer well, 'needs_more' if critical gaps exist",
    )


class FinalizeArgs(BaseModel):
    summary: str = Field("", description="Brief summary of what your answer will cover")


SEARCH_DESCRIPTION = (
    "Search DuckDuckGo for information. Returns up to 5 relevant results with titles and URLs. "
    "Use this to find sources. Keep queries focused and specific."
)
FETCH_DESCRIPTION = (
    "Fetch the main text content from a URL. Returns clean text without ads or navigation. "
    "Use this ONLY for the most relevant URLs from search results (top 2-3 max). "
    "The content will be truncated to 3000 characters to keep costs low."
)
ASSESS_DESCRIPTION = (
    "CRITICAL RESEARCH ANALYSIS TOOL - Use this after gathering information. "
    "1. RANK the sources you've read by relevance (1=most relevant). "
    "2. IDENTIFY what key information is still missing. "
    "3. DECIDE if you have enough to answer the question well."
)
FINALIZE_DESCRIPTION = (
    "FINAL SYNTHESIS TOOL - Call this when research is complete. "
    "After calling this, you MUST provide your final answer with Overview, "
    "Main Features/Key Points, Additional Details and Sources Consulted sections. "
    "Do NOT call any other tools after this."
)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    args_model: type[BaseModel]
    handler: Callable[[BaseModel], Any]

    def json_schema(self) -> dict[str, Any]:
        return self.args_model.model_json_schema()


class ToolRegistry:
    """
    Routing boundary between a policy and the research tools.

    Tools are added with explicit register() calls; there is no discovery.
    The registry holds no state besides the registrations themselves.
    """

    def __init__(self):
        self._tools: dict[str, ToolSpec] = {}

    def register(
        self,
        name: str,
        handler: Callable[[BaseModel], Any],
        args_model: type[BaseModel],
        description: str = "",
    ) -> ToolSpec:
        if not name:
            raise ValueError("Tool name must be non-empty")
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        spec = ToolSpec(name=name, description=description, args_model=args_model, handler=handler)
        self._tools[name] = spec
        return spec

    def get(self, name: str) -> ToolSpec:
        spec = self._tools.get(name)
        if spec is None:
            raise UnknownToolError(
                f"Unknown tool '{name}'. Available: {', '.join(self.tool_names())}",
                details={"available": self.tool_names()},
            )
        return spec

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def tool_names(self) -> list[str]:
        return list(self._tools)

    def describe(self) -> list[dict[str, Any]]:
        return [
            {"name": spec.name, "description": spec.description, "parameters": spec.json_schema()}
            for spec in self._tools.values()
        ]

    def openai_tool_schemas(self) -> list[dict[str, Any]]:
        """Tool definitions in the chat-completions `tools` format."""
        return [
            {
                "type": "function",
                "function": {
                    "name": spec.name,
                    "description": spec.description,
                    "parameters": spec.json_schema(),
                },
            }
            for spec in self._tools.values()
        ]

    def invoke(self, name: str, arguments: Mapping[str, Any] | None = None) -> Any:
        """
        Validate arguments and call the tool.

        Raises:
            UnknownToolError: no tool named `name`
            InvalidToolArguments: arguments fail the tool's schema
            NetworkError / ParseError: raised by the tool itself
        """
        spec = self.get(name)
        try:
            args = spec.args_model.model_validate(dict(arguments or {}))
        except ValidationError as e:
            raise InvalidToolArguments(
                f"Invalid arguments for '{name}': {e.error_count()} validation error(s)",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e
        return spec.handler(args)

    def dispatch(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolCallResult:
        """
        Invoke a tool and capture tool failures as a structured result.

        Only ResearchToolError subclasses are captured; anything else is a
        bug and propagates.
        """
        started = time.perf_counter()
        try:
            value = self.invoke(name, arguments)
        except ResearchToolError as e:
            latency_ms = int((time.perf_counter() - started) * 1000)
            logger.warning(
                f"Tool '{name}' failed: {e.message}",
                extra={"extra_fields": {"tool": name, "error_code": e.code, "latency_ms": latency_ms}},
            )
            return ToolCallResult(
                tool=name, ok=False, error=ToolError.from_exception(name, e), latency_ms=latency_ms
            )

        latency_ms = int((time.perf_counter() - started) * 1000)
        return ToolCallResult(tool=name, ok=True, value=value, latency_ms=latency_ms)


def build_tool_registry(toolkit: ResearchToolkit) -> ToolRegistry:
    """Register the four research tools under their stable names."""
    registry = ToolRegistry()
    registry.register(
        "search",
        lambda args: toolkit.search_provider.search(args.query),
        SearchArgs,
        SEARCH_DESCRIPTION,
    )
    registry.register(
        "fetch",
        lambda args: toolkit.content_extractor.fetch(args.url),
        FetchArgs,
        FETCH_DESCRIPTION,
    )
    registry.register(
        "assess",
        lambda args: toolkit.progress_tracker.assess(
            args.ranked_sources, args.key_findings, args.critical_gaps, args.readiness_level
        ),
        AssessArgs,
        ASSESS_DESCRIPTION,
    )
    registry.register(
        "finalize",
        lambda args: toolkit.synthesis_gate.finalize(args.summary),
        FinalizeArgs,
        FINALIZE_DESCRIPTION,
    )
    return registry
