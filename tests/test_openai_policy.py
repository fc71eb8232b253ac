import json
from types import SimpleNamespace

import pytest

from conftest import SEARCH_URL, ddg_href, ddg_page, ddg_result
from api.openai_policy import OpenAIResearchPolicy
from orchestrator.actions import FetchAction, SearchAction, StopAction
from orchestrator.policy import SessionView
from orchestrator.session import ResearchSession

pytestmark = pytest.mark.unit


def tool_call(call_id: str, name: str, arguments) -> SimpleNamespace:
    raw = arguments if isinstance(arguments, str) else json.dumps(arguments)
    return SimpleNamespace(id=call_id, type="function", function=SimpleNamespace(name=name, arguments=raw))


def completion(content: str | None = None, tool_calls=None) -> SimpleNamespace:
    message = SimpleNamespace(role="assistant", content=content, tool_calls=tool_calls)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message)], usage=SimpleNamespace(total_tokens=42)
    )


class FakeChatClient:
    """Stands in for openai.OpenAI: replays canned completions and records requests."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.requests: list[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.requests.append({**kwargs, "messages": [dict(m) for m in kwargs["messages"]]})
        return self._responses.pop(0)


def make_policy(responses, registry=None, **kwargs):
    schemas = registry.openai_tool_schemas() if registry else []
    client = FakeChatClient(responses)
    return OpenAIResearchPolicy(schemas, client=client, **kwargs), client


def test_requires_key_or_client():
    with pytest.raises(ValueError):
        OpenAIResearchPolicy([], api_key=None)


def test_text_reply_is_final_answer():
    policy, client = make_policy([completion(content="Paris.")])

    action = policy.select_next_action(SessionView(query="Capital of France?"))

    assert action == StopAction(answer="Paris.")
    sent = client.requests[0]
    assert sent["model"] == "gpt-4o"
    assert [m["role"] for m in sent["messages"]] == ["system", "user"]
    assert sent["messages"][1]["content"] == "Capital of France?"


def test_tool_call_becomes_action(registry):
    policy, client = make_policy(
        [completion(tool_calls=[tool_call("call_1", "search", {"query": "koog"})])], registry
    )

    action = policy.select_next_action(SessionView(query="q"))

    assert action == SearchAction("koog", call_id="call_1")
    assert {t["function"]["name"] for t in client.requests[0]["tools"]} == {
        "search",
        "fetch",
        "assess",
        "finalize",
    }
    assert policy.messages[-1]["tool_calls"][0]["id"] == "call_1"


def test_parallel_tool_calls_are_queued():
    policy, client = make_policy(
        [
            completion(
                tool_calls=[
                    tool_call("call_1", "fetch", {"url": "https://a.example/"}),
                    tool_call("call_2", "fetch", {"url": "https://b.example/"}),
                ]
            )
        ]
    )

    first = policy.select_next_action(SessionView(query="q"))
    second = policy.select_next_action(SessionView(query="q"))

    assert first == FetchAction("https://a.example/", call_id="call_1")
    assert second == FetchAction("https://b.example/", call_id="call_2")
    assert len(client.requests) == 1


def test_bad_arguments_are_corrected():
    policy, client = make_policy(
        [
            completion(tool_calls=[tool_call("call_1", "search", "{not json")]),
            completion(tool_calls=[tool_call("call_2", "browse", {"url": "x"})]),
            completion(tool_calls=[tool_call("call_3", "search", {"query": "fixed"})]),
        ]
    )

    action = policy.select_next_action(SessionView(query="q"))

    assert action == SearchAction("fixed", call_id="call_3")
    errors = [m for m in client.requests[2]["messages"] if m["role"] == "tool"]
    assert [m["tool_call_id"] for m in errors] == ["call_1", "call_2"]
    assert all(m["content"].startswith("ERROR:") for m in errors)


def test_gives_up_after_max_corrections():
    bad = [completion(tool_calls=[tool_call(f"call_{i}", "browse", {})]) for i in range(3)]
    policy, client = make_policy(bad, max_correction_turns=2)

    action = policy.select_next_action(SessionView(query="q"))

    assert action == StopAction(answer="", reason="policy_error")
    assert len(client.requests) == 3


def test_session_round_trip_feeds_results_back(fake_web, registry):
    fake_web.add(SEARCH_URL, text=ddg_page(ddg_result("Koog", ddg_href("https://koog.ai/"))))
    policy, client = make_policy(
        [
            completion(tool_calls=[tool_call("call_1", "search", {"query": "koog"})]),
            completion(tool_calls=[tool_call("call_2", "fetch", {"url": "https://offline.example/"})]),
            completion(tool_calls=[tool_call("call_3", "finalize", {"summary": "Koog"})]),
            completion(content="## Overview\nKoog is a framework."),
        ],
        registry,
    )

    outcome = ResearchSession(registry, policy).run("What is Koog?")

    assert outcome.answer == "## Overview\nKoog is a framework."
    assert outcome.stop_reason == "policy_stop"
    assert outcome.tool_calls == 3
    assert outcome.synthesis is not None

    tool_messages = [m for m in client.requests[3]["messages"] if m["role"] == "tool"]
    assert [m["tool_call_id"] for m in tool_messages] == ["call_1", "call_2", "call_3"]
    assert tool_messages[0]["content"].startswith("Found 1 results:")
    assert tool_messages[1]["content"].startswith("ERROR [network_error] fetch:")
    assert tool_messages[2]["content"].startswith("Ready to synthesize")


def test_scalar_list_argument_is_wrapped(registry):
    policy, _ = make_policy(
        [
            completion(
                tool_calls=[
                    tool_call("call_1", "assess", {"ranked_sources": 3, "readiness_level": "sufficient"})
                ]
            ),
            completion(content="Answer."),
        ],
        registry,
    )

    outcome = ResearchSession(registry, policy).run("q")

    assert outcome.answer == "Answer."
    assert outcome.records[0].action.ranked_sources == ("3",)
    assert outcome.records[0].result.ok is True
    assert outcome.last_assessment.reviewed_count == 1


def test_non_string_arguments_payload_is_corrected():
    bad_call = SimpleNamespace(
        id="call_1", type="function", function=SimpleNamespace(name="search", arguments=42)
    )
    policy, client = make_policy(
        [
            completion(tool_calls=[bad_call]),
            completion(tool_calls=[tool_call("call_2", "search", {"query": "koog"})]),
        ]
    )

    action = policy.select_next_action(SessionView(query="q"))

    assert action == SearchAction("koog", call_id="call_2")
    errors = [m for m in client.requests[1]["messages"] if m["role"] == "tool"]
    assert errors[0]["tool_call_id"] == "call_1"
    assert errors[0]["content"].startswith("ERROR:")
