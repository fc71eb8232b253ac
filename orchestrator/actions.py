from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ActionKind(str, Enum):
    SEARCH = "search"
    FETCH = "fetch"
    ASSESS = "assess"
    FINALIZE = "finalize"
    STOP = "stop"


@dataclass(frozen=True)
class SearchAction:
    query: str
    call_id: str | None = None

    kind = ActionKind.SEARCH

    @property
    def tool_name(self) -> str:
        return self.kind.value

    def arguments(self) -> dict[str, Any]:
        return {"query": self.query}


@dataclass(frozen=True)
class FetchAction:
    url: str
    call_id: str | None = None

    kind = ActionKind.FETCH

    @property
    def tool_name(self) -> str:
        return self.kind.value

    def arguments(self) -> dict[str, Any]:
        return {"url": self.url}


@dataclass(frozen=True)
class AssessAction:
    ranked_sources: tuple[str, ...] = ()
    key_findings: tuple[str, ...] = ()
    critical_gaps: tuple[str, ...] = ()
    readiness_level: str = ""
    call_id: str | None = None

    kind = ActionKind.ASSESS

    @property
    def tool_name(self) -> str:
        return self.kind.value

    def arguments(self) -> dict[str, Any]:
        return {
            "ranked_sources": list(self.ranked_sources),
            "key_findings": list(self.key_findings),
            "critical_gaps": list(self.critical_gaps),
            "readiness_level": self.readiness_level,
        }


@dataclass(frozen=True)
class FinalizeAction:
    summary: str
    call_id: str | None = None

    kind = ActionKind.FINALIZE

    @property
    def tool_name(self) -> str:
        return self.kind.value

    def arguments(self) -> dict[str, Any]:
        return {"summary": self.summary}


@dataclass(frozen=True)
class StopAction:
    answer: str = ""
    reason: str = "policy_stop"

    kind = ActionKind.STOP


ToolAction = Union[SearchAction, FetchAction, AssessAction, FinalizeAction]
Action = Union[SearchAction, FetchAction, AssessAction, FinalizeAction, StopAction]

RESEARCH_KINDS = frozenset({ActionKind.SEARCH, ActionKind.FETCH})


def _as_str_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    # a lone string or scalar stands for a one-item list
    return (str(value),)


def action_from_tool_call(name: str, arguments: dict[str, Any], call_id: str | None = None) -> ToolAction:
    """
    Map a named tool call onto an action.

    Missing fields become empty values so the registry can report them as
    invalid arguments.

    Raises:
        ValueError: `name` is not one of the research tools
    """
    args = arguments or {}
    if name == ActionKind.SEARCH.value:
        return SearchAction(query=str(args.get("query") or ""), call_id=call_id)
    if name == ActionKind.FETCH.value:
        return FetchAction(url=str(args.get("url") or ""), call_id=call_id)
    if name == ActionKind.ASSESS.value:
        return AssessAction(
            ranked_sources=_as_str_tuple(args.get("ranked_sources")),
            key_findings=_as_str_tuple(args.get("key_findings")),
            critical_gaps=_as_str_tuple(args.get("critical_gaps")),
            readiness_level=str(args.get("readiness_level") or ""),
            call_id=call_id,
        )
    if name == ActionKind.FINALIZE.value:
        return FinalizeAction(summary=str(args.get("summary") or ""), call_id=call_id)
    raise ValueError(f"Unknown tool '{name}'")
