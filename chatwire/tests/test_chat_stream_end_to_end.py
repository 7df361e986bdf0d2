"""Streaming chat completion against a fake SSE server."""

from __future__ import annotations

import json

import httpx
import pytest

from chatwire.base.cancellation import CancellationToken
from chatwire.base.errors import ApiError, ErrorCode, StreamError, TransportError
from chatwire.base.models import ChatCompletionRequest, ChatMessage
from chatwire.openai import ChatCompletions
from chatwire.tests.helpers import make_transport, mock_http_client, sse_body

HI_STREAM = sse_body(
    'data: {"choices":[{"delta":{"content":"Hi"}}]}',
    "",
    'data: {"choices":[{"delta":{"content":"!"}}]}',
    "",
    "data: [DONE]",
)


def _request() -> ChatCompletionRequest:
    return ChatCompletionRequest(model="gpt-test", messages=[ChatMessage.user("hi")], stream=True)


def _sse_response(body: bytes) -> httpx.Response:
    return httpx.Response(200, headers={"content-type": "text/event-stream"}, content=body)


@pytest.mark.asyncio
async def test_hi_stream_yields_two_chunks_concatenating_to_hi():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["path"] = request.url.path
        return _sse_response(HI_STREAM)

    async with mock_http_client(handler) as http:
        chat = ChatCompletions(make_transport(http))
        chunks = [chunk async for chunk in chat.stream(_request())]

    assert len(chunks) == 2  # nosec B101
    assert "".join(c.choices[0].delta.content for c in chunks) == "Hi!"  # nosec B101
    assert seen["path"] == "/v1/chat/completions"  # nosec B101
    assert seen["body"]["stream"] is True  # nosec B101
    assert seen["body"]["messages"] == [{"role": "user", "content": "hi"}]  # nosec B101


@pytest.mark.asyncio
async def test_stream_text_and_collect():
    async with mock_http_client(lambda r: _sse_response(HI_STREAM)) as http:
        chat = ChatCompletions(make_transport(http))
        texts = [t async for t in chat.stream_text(_request())]
        summary = await chat.stream_collect(_request())

    assert texts == ["Hi", "!"]  # nosec B101
    assert summary.text == "Hi!"  # nosec B101
    assert summary.chunk_count == 2  # nosec B101


@pytest.mark.asyncio
async def test_include_usage_requests_and_collects_usage():
    body = sse_body(
        'data: {"id":"c1","model":"m","choices":[{"index":0,"delta":{"role":"assistant","content":"ok"}}]}',
        'data: {"id":"c1","choices":[{"index":0,"delta":{},"finish_reason":"stop"}]}',
        'data: {"id":"c1","choices":[],"usage":{"prompt_tokens":3,"completion_tokens":1,"total_tokens":4}}',
        "data: [DONE]",
    )
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return _sse_response(body)

    async with mock_http_client(handler) as http:
        chat = ChatCompletions(make_transport(http))
        summary = await chat.stream_collect(_request(), include_usage=True)

    assert seen["body"]["stream_options"] == {"include_usage": True}  # nosec B101
    assert summary.usage is not None and summary.usage.total_tokens == 4  # nosec B101
    assert summary.finish_reason == "stop"  # nosec B101
    assert summary.to_response().text == "ok"  # nosec B101


@pytest.mark.asyncio
async def test_streamed_tool_call_fragments_are_reassembled():
    body = sse_body(
        'data: {"choices":[{"index":0,"delta":{"tool_calls":[{"index":0,"id":"call_1","type":"function","function":{"name":"lookup","arguments":""}}]}}]}',
        'data: {"choices":[{"index":0,"delta":{"tool_calls":[{"index":0,"function":{"arguments":"{\\"q\\":"}}]}}]}',
        'data: {"choices":[{"index":0,"delta":{"tool_calls":[{"index":0,"function":{"arguments":"\\"x\\"}"}}]}}]}',
        'data: {"choices":[{"index":0,"delta":{},"finish_reason":"tool_calls"}]}',
        "data: [DONE]",
    )

    async with mock_http_client(lambda r: _sse_response(body)) as http:
        summary = await ChatCompletions(make_transport(http)).stream_collect(_request())

    calls = summary.to_response().tool_calls
    assert len(calls) == 1  # nosec B101
    assert calls[0].id == "call_1" and calls[0].name == "lookup"  # nosec B101
    assert calls[0].function.parsed_arguments() == {"q": "x"}  # nosec B101


@pytest.mark.asyncio
async def test_stream_error_status_raises_api_error():
    envelope = {"error": {"message": "slow down", "type": "rate_limit"}}

    async with mock_http_client(lambda r: httpx.Response(429, json=envelope)) as http:
        chat = ChatCompletions(make_transport(http))
        with pytest.raises(ApiError) as info:
            async for _ in chat.stream(_request()):
                pass  # pragma: no cover

    assert info.value.code is ErrorCode.RATE_LIMIT  # nosec B101


@pytest.mark.asyncio
async def test_malformed_frame_mid_stream_raises_stream_error():
    body = sse_body('data: {"choices":[{"delta":{"content":"a"}}]}', "data: {oops", "data: [DONE]")

    async with mock_http_client(lambda r: _sse_response(body)) as http:
        chat = ChatCompletions(make_transport(http))
        seen = []
        with pytest.raises(StreamError):
            async for chunk in chat.stream(_request()):
                seen.append(chunk.text)

    assert seen == ["a"]  # nosec B101


@pytest.mark.asyncio
async def test_cancel_during_stream_raises_transport_error():
    token = CancellationToken()

    async with mock_http_client(lambda r: _sse_response(HI_STREAM)) as http:
        chat = ChatCompletions(make_transport(http))
        seen = []
        with pytest.raises(TransportError) as info:
            async for chunk in chat.stream(_request(), cancel=token):
                seen.append(chunk.text)
                token.cancel()

    assert seen == ["Hi"]  # nosec B101
    assert info.value.code is ErrorCode.CANCELLED  # nosec B101
