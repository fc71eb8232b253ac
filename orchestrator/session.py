"""Research session runner: drives a policy against the tool registry."""

from collections.abc import Callable
from dataclasses import dataclass, field

from models.research import ResearchState, SynthesisSignal
from models.tool_result import ToolCallResult
from utils.logger import get_logger

from .actions import RESEARCH_KINDS, StopAction, ToolAction
from .policy import ResearchPolicy, SessionView, ToolCallRecord
from .tool_registry import ToolRegistry

logger = get_logger(__name__)

DEFAULT_MAX_TOOL_CALLS = 12
BUDGET_EXHAUSTED = "tool_budget_exhausted"


def _log_tool_call_starting(step: int, action: ToolAction) -> None:
    logger.info(
        f"Tool call starting: {action.tool_name}",
        extra={"extra_fields": {"step": step, "tool": action.tool_name, "arguments": action.arguments()}},
    )


def _log_tool_call_completed(step: int, action: ToolAction, result: ToolCallResult) -> None:
    logger.info(
        f"Tool call completed: {action.tool_name} ok={result.ok}",
        extra={
            "extra_fields": {
                "step": step,
                "tool": action.tool_name,
                "ok": result.ok,
                "error_code": result.error.code if result.error else None,
                "latency_ms": result.latency_ms,
            }
        },
    )


@dataclass
class SessionHooks:
    """Extra per-call callbacks, run after the session has logged the event."""

    on_tool_call_starting: Callable[[int, ToolAction], None] | None = None
    on_tool_call_completed: Callable[[int, ToolAction, ToolCallResult], None] | None = None


@dataclass(frozen=True)
class SessionOutcome:
    query: str
    answer: str
    records: tuple[ToolCallRecord, ...]
    last_assessment: ResearchState | None
    synthesis: SynthesisSignal | None
    stop_reason: str

    @property
    def tool_calls(self) -> int:
        return len(self.records)

    @property
    def failed_calls(self) -> list[ToolCallRecord]:
        return [r for r in self.records if not r.result.ok]


class ResearchSession:
    """
    Runs one research session.

    Calls happen strictly one at a time. Tool errors are recorded and handed
    back to the policy; the session only ends when the policy stops or the
    tool-call budget runs out.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        policy: ResearchPolicy,
        *,
        max_tool_calls: int = DEFAULT_MAX_TOOL_CALLS,
        hooks: SessionHooks | None = None,
    ):
        if max_tool_calls < 1:
            raise ValueError("max_tool_calls must be at least 1")
        self.registry = registry
        self.policy = policy
        self.max_tool_calls = max_tool_calls
        self.hooks = hooks or SessionHooks()

    def run(self, query: str) -> SessionOutcome:
        records: list[ToolCallRecord] = []
        last_assessment: ResearchState | None = None
        synthesis: SynthesisSignal | None = None

        logger.info(f"Research session started: '{query[:100]}'")

        while True:
            view = SessionView(
                query=query,
                records=tuple(records),
                last_assessment=last_assessment,
                synthesis=synthesis,
                calls_remaining=self.max_tool_calls - len(records),
            )
            action = self.policy.select_next_action(view)

            if isinstance(action, StopAction):
                stop_reason = action.reason
                answer = action.answer
                break

            if len(records) >= self.max_tool_calls:
                logger.warning(
                    f"Tool-call budget of {self.max_tool_calls} exhausted; ignoring {action.tool_name}"
                )
                stop_reason = BUDGET_EXHAUSTED
                answer = ""
                break

            if synthesis is not None and action.kind in RESEARCH_KINDS:
                logger.warning(f"Research tool '{action.tool_name}' called after synthesis signal")

            step = len(records) + 1
            _log_tool_call_starting(step, action)
            if self.hooks.on_tool_call_starting:
                self.hooks.on_tool_call_starting(step, action)

            result = self.registry.dispatch(action.tool_name, action.arguments())

            _log_tool_call_completed(step, action, result)
            if self.hooks.on_tool_call_completed:
                self.hooks.on_tool_call_completed(step, action, result)

            records.append(ToolCallRecord(step=step, action=action, result=result))
            if result.ok and isinstance(result.value, ResearchState):
                last_assessment = result.value
            elif result.ok and isinstance(result.value, SynthesisSignal):
                synthesis = result.value

        logger.info(
            "Research session finished",
            extra={
                "extra_fields": {
                    "stop_reason": stop_reason,
                    "tool_calls": len(records),
                    "synthesized": synthesis is not None,
                }
            },
        )
        return SessionOutcome(
            query=query,
            answer=answer,
            records=tuple(records),
            last_assessment=last_assessment,
            synthesis=synthesis,
            stop_reason=stop_reason,
        )
