"""Multi-round tool-calling loop."""

from __future__ import annotations

import asyncio
import json
from typing import List, Optional

import httpx
import pytest

from chatwire.base.cancellation import CancellationToken
from chatwire.base.errors import BoundedRoundsError, ErrorKind, ToolExecutionError
from chatwire.base.models import ChatCompletionRequest, ChatCompletionResponse, ChatMessage
from chatwire.base.tools import ToolCallOrchestrator, ToolRegistry
from chatwire.openai import ChatCompletions
from chatwire.tests.helpers import completion_body, make_transport, mock_http_client, tool_call_json


class ScriptedCompleter:
    """Replays canned responses and snapshots the conversation at each send."""

    def __init__(self, bodies: List[dict]) -> None:
        self._bodies = list(bodies)
        self.sent: List[List[dict]] = []
        self.tools_sent: List[Optional[list]] = []

    async def complete(self, request: ChatCompletionRequest, *, cancel: Optional[CancellationToken] = None):
        self.sent.append([m.model_dump(mode="json", by_alias=True) for m in request.messages])
        self.tools_sent.append([t.name for t in request.tools] if request.tools else None)
        body = self._bodies.pop(0) if len(self._bodies) > 1 else self._bodies[0]
        return ChatCompletionResponse.model_validate(body)


def _registry() -> ToolRegistry:
    registry = ToolRegistry()
    registry.register("add", lambda a: a["x"] + a["y"])
    registry.register("upper", lambda a: a["s"].upper())
    return registry


def _request() -> ChatCompletionRequest:
    return ChatCompletionRequest(model="gpt-test", messages=[ChatMessage.user("do it")])


TWO_CALLS = completion_body(
    None,
    tool_calls=[
        tool_call_json("call_a", "add", {"x": 1, "y": 2}),
        tool_call_json("call_b", "upper", {"s": "abc"}),
    ],
)


@pytest.mark.asyncio
async def test_two_tool_calls_append_one_assistant_and_two_tool_messages():
    completer = ScriptedCompleter([TWO_CALLS, completion_body("done")])
    request = _request()

    response = await ToolCallOrchestrator(completer, _registry()).complete_with_tools(request)

    assert response.text == "done"  # nosec B101
    assert len(completer.sent) == 2  # nosec B101
    second_round = completer.sent[1]
    assert [m["role"] for m in second_round] == ["user", "assistant", "tool", "tool"]  # nosec B101
    assert [c["id"] for c in second_round[1]["tool_calls"]] == ["call_a", "call_b"]  # nosec B101
    assert second_round[2] == {"role": "tool", "content": "3", "tool_call_id": "call_a"}  # nosec B101
    assert second_round[3] == {"role": "tool", "content": "ABC", "tool_call_id": "call_b"}  # nosec B101
    assert request.messages[-1].tool_call_id == "call_b"  # nosec B101


@pytest.mark.asyncio
async def test_tools_are_filled_from_registry_when_empty():
    completer = ScriptedCompleter([completion_body("plain")])
    request = _request()

    await ToolCallOrchestrator(completer, _registry()).complete_with_tools(request)

    assert completer.tools_sent == [["add", "upper"]]  # nosec B101
    assert len(request.messages) == 1  # nosec B101


@pytest.mark.asyncio
async def test_explicit_tools_are_left_untouched():
    completer = ScriptedCompleter([completion_body("plain")])
    request = _request()
    request.tools = _registry().schemas()[:1]

    await ToolCallOrchestrator(completer, _registry()).complete_with_tools(request)

    assert completer.tools_sent == [["add"]]  # nosec B101


@pytest.mark.asyncio
@pytest.mark.parametrize("max_rounds", [1, 2, 5])
async def test_endless_tool_requests_raise_after_max_rounds(max_rounds):
    looping = completion_body(None, tool_calls=[tool_call_json("call_x", "add", {"x": 0, "y": 0})])
    completer = ScriptedCompleter([looping])

    with pytest.raises(BoundedRoundsError) as info:
        await ToolCallOrchestrator(completer, _registry()).complete_with_tools(_request(), max_rounds=max_rounds)

    assert len(completer.sent) == max_rounds  # nosec B101
    assert info.value.max_rounds == max_rounds  # nosec B101
    assert info.value.kind is ErrorKind.BOUNDED_ROUNDS  # nosec B101


@pytest.mark.asyncio
async def test_final_answer_in_last_allowed_round_succeeds():
    completer = ScriptedCompleter([TWO_CALLS, completion_body("done")])

    response = await ToolCallOrchestrator(completer, _registry()).complete_with_tools(_request(), max_rounds=2)

    assert response.text == "done"  # nosec B101


@pytest.mark.asyncio
async def test_invalid_max_rounds():
    with pytest.raises(ValueError):
        await ToolCallOrchestrator(ScriptedCompleter([completion_body()]), _registry()).complete_with_tools(
            _request(), max_rounds=0
        )


@pytest.mark.asyncio
async def test_failing_tool_aborts_without_appending():
    registry = _registry()

    def broken(args):
        raise KeyError("missing")

    registry.register("upper", broken)
    completer = ScriptedCompleter([TWO_CALLS, completion_body("never")])
    request = _request()

    with pytest.raises(ToolExecutionError) as info:
        await ToolCallOrchestrator(completer, registry).complete_with_tools(request)

    assert info.value.tool_name == "upper"  # nosec B101
    assert len(completer.sent) == 1  # nosec B101
    assert len(request.messages) == 1  # nosec B101


@pytest.mark.asyncio
async def test_calls_of_one_round_run_concurrently():
    registry = ToolRegistry()
    both_started = asyncio.Event()
    running = []

    async def wait_for_peer(args):
        running.append(args["n"])
        if len(running) == 2:
            both_started.set()
        await asyncio.wait_for(both_started.wait(), timeout=2)
        return args["n"]

    registry.register("peer", wait_for_peer)
    first = completion_body(
        None,
        tool_calls=[tool_call_json("c1", "peer", {"n": 1}), tool_call_json("c2", "peer", {"n": 2})],
    )
    completer = ScriptedCompleter([first, completion_body("ok")])
    request = _request()

    await ToolCallOrchestrator(completer, registry).complete_with_tools(request)

    assert [m.text for m in request.messages if m.role == "tool"] == ["1", "2"]  # nosec B101


@pytest.mark.asyncio
async def test_loop_over_http_sends_tool_results_in_second_request():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        if len(bodies) == 1:
            return httpx.Response(200, json=TWO_CALLS)
        return httpx.Response(200, json=completion_body("finished"))

    async with mock_http_client(handler) as http:
        chat = ChatCompletions(make_transport(http))
        response = await chat.complete_with_tools(_request(), _registry())

    assert response.text == "finished"  # nosec B101
    assert [t["function"]["name"] for t in bodies[0]["tools"]] == ["add", "upper"]  # nosec B101
    second = bodies[1]["messages"]
    assert second[1]["role"] == "assistant" and "content" not in second[1]  # nosec B101
    assert second[2] == {"role": "tool", "content": "3", "tool_call_id": "call_a"}  # nosec B101


@pytest.mark.asyncio
async def test_response_without_choices_is_final():
    completer = ScriptedCompleter([{"id": "chatcmpl-empty", "choices": []}])
    request = _request()

    response = await ToolCallOrchestrator(completer, _registry()).complete_with_tools(request)

    assert response.choices == [] and response.tool_calls == []  # nosec B101
    assert len(completer.sent) == 1 and len(request.messages) == 1  # nosec B101
