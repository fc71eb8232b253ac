import json
from collections import deque
from typing import Any

import openai

from orchestrator.actions import Action, StopAction, ToolAction, action_from_tool_call
from orchestrator.policy import ResearchPolicy, SessionView
from utils.logger import get_logger

from .research_prompt import RESEARCH_SYSTEM_PROMPT

logger = get_logger(__name__)


class OpenAIResearchPolicy(ResearchPolicy):
    """
    Research policy backed by the OpenAI chat-completions tool-calling API.

    Keeps the chat transcript for one session: each tool result recorded by
    the session is fed back as a `tool` message before the model is asked
    for its next move. An assistant turn without tool calls is the final
    answer.
    """

    def __init__(
        self,
        tool_schemas: list[dict[str, Any]],
        *,
        api_key: str | None = None,
        model_name: str = "gpt-4o",
        client: Any = None,
        system_prompt: str = RESEARCH_SYSTEM_PROMPT,
        temperature: float = 0.2,
        max_correction_turns: int = 3,
    ):
        """
        Args:
            tool_schemas: Tool definitions, e.g. ToolRegistry.openai_tool_schemas()
            api_key: OpenAI API key (ignored when `client` is given)
            model_name: Chat model to use
            client: Pre-built client exposing chat.completions.create (tests pass a stub)
            system_prompt: Instructions for the model
            temperature: Sampling temperature
            max_correction_turns: Re-asks allowed when the model emits unusable tool calls
        """
        if client is None and not api_key:
            raise ValueError("OpenAIResearchPolicy needs an api_key or a client")
        self.client = client or openai.OpenAI(api_key=api_key)
        self.model_name = model_name
        self.tool_schemas = tool_schemas
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.max_correction_turns = max_correction_turns

        self.messages: list[dict[str, Any]] = []
        self._pending: deque[ToolAction] = deque()
        self._records_seen = 0

    def select_next_action(self, view: SessionView) -> Action:
        if not self.messages:
            self.messages = [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": view.query},
            ]

        self._absorb_results(view)
        if self._pending:
            return self._pending.popleft()

        for _ in range(self.max_correction_turns + 1):
            message = self._complete()
            tool_calls = list(getattr(message, "tool_calls", None) or [])
            self.messages.append(self._assistant_entry(message, tool_calls))

            if not tool_calls:
                return StopAction(answer=message.content or "")

            actions = [a for a in (self._to_action(tc) for tc in tool_calls) if a is not None]
            if actions:
                self._pending.extend(actions[1:])
                return actions[0]

        logger.error(f"Model produced no usable tool call after {self.max_correction_turns} corrections")
        return StopAction(answer="", reason="policy_error")

    def _complete(self):
        response = self.client.chat.completions.create(
            model=self.model_name,
            messages=self.messages,
            tools=self.tool_schemas,
            temperature=self.temperature,
        )
        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.debug(f"Research policy turn used {getattr(usage, 'total_tokens', 'N/A')} tokens")
        return response.choices[0].message

    def _absorb_results(self, view: SessionView) -> None:
        for record in view.records[self._records_seen :]:
            if record.action.call_id:
                self.messages.append(
                    {
                        "role": "tool",
                        "tool_call_id": record.action.call_id,
                        "content": record.result.render(),
                    }
                )
        self._records_seen = len(view.records)

    def _to_action(self, tool_call) -> ToolAction | None:
        name = tool_call.function.name
        try:
            arguments = json.loads(tool_call.function.arguments or "{}")
            if not isinstance(arguments, dict):
                raise ValueError("tool arguments must be a JSON object")
            return action_from_tool_call(name, arguments, call_id=tool_call.id)
        except (ValueError, TypeError) as e:  # JSONDecodeError is a ValueError
            logger.warning(f"Rejected tool call '{name}': {e}")
            self.messages.append(
                {"role": "tool", "tool_call_id": tool_call.id, "content": f"ERROR: {e}"}
            )
            return None

    @staticmethod
    def _assistant_entry(message, tool_calls: list) -> dict[str, Any]:
        entry: dict[str, Any] = {"role": "assistant", "content": message.content}
        if tool_calls:
            entry["tool_calls"] = [
                {
                    "id": tc.id,
                    "type": "function",
                    "function": {"name": tc.function.name, "arguments": tc.function.arguments},
                }
                for tc in tool_calls
            ]
        return entry
