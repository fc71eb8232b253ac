"""
Models package for research tool results.
"""

from .research import (
    TRUNCATION_MARKER,
    FetchedDocument,
    Readiness,
    ResearchState,
    SearchHit,
    SearchResultSet,
    SynthesisSignal,
)
from .tool_result import ToolCallResult, ToolError

__all__ = [
    "TRUNCATION_MARKER",
    "FetchedDocument",
    "Readiness",
    "ResearchState",
    "SearchHit",
    "SearchResultSet",
    "SynthesisSignal",
    "ToolCallResult",
    "ToolError",
]
