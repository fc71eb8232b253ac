"""Policy interface: whatever decides the next tool call."""

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

from models.research import ResearchState, SynthesisSignal
from models.tool_result import ToolCallResult

from .actions import Action, StopAction, ToolAction


@dataclass(frozen=True)
class ToolCallRecord:
    step: int
    action: ToolAction
    result: ToolCallResult


@dataclass(frozen=True)
class SessionView:
    """Read-only picture of a session handed to the policy before each decision."""

    query: str
    records: tuple[ToolCallRecord, ...] = ()
    last_assessment: ResearchState | None = None
    synthesis: SynthesisSignal | None = None
    calls_remaining: int = 0

    @property
    def last_record(self) -> ToolCallRecord | None:
        return self.records[-1] if self.records else None


class ResearchPolicy(ABC):
    """
    Chooses the next action of a research session.

    Implementations may be an LLM, a script or a human; the session only
    relies on select_next_action().
    """

    @abstractmethod
    def select_next_action(self, view: SessionView) -> Action:
        """
        Decide what to do next.

        Args:
            view: Current session view

        Returns:
            A tool action, or StopAction to end the session
        """


class ScriptedPolicy(ResearchPolicy):
    """Replays a fixed list of actions, then stops."""

    def __init__(self, actions: Iterable[Action], *, final_answer: str = ""):
        self._actions = deque(actions)
        self.final_answer = final_answer
        self.views: list[SessionView] = []

    def select_next_action(self, view: SessionView) -> Action:
        self.views.append(view)
        if self._actions:
            return self._actions.popleft()
        return StopAction(answer=self.final_answer, reason="script_exhausted")
