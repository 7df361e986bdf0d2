"""TransportClient exchanges against an ``httpx.MockTransport`` fake service."""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
import pytest

from chatwire.base.cancellation import CancellationToken
from chatwire.base.errors import ApiError, ErrorCode, ErrorKind, ProtocolError, TransportError
from chatwire.base.models import ChatCompletionResponse
from chatwire.base.timeouts import TimeoutConfig
from chatwire.base.transport import TransportClient
from chatwire.tests.helpers import API_KEY, BASE_URL, completion_body, make_transport, mock_http_client


def test_constructor_requires_key_and_base_url():
    with pytest.raises(ValueError):
        TransportClient("", BASE_URL)
    with pytest.raises(ValueError):
        TransportClient(API_KEY, "")


@pytest.mark.asyncio
async def test_send_json_attaches_bearer_and_decodes_model():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["org"] = request.headers.get("openai-organization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=completion_body("hello"))

    async with mock_http_client(handler) as http:
        transport = make_transport(http, organization="org-1")
        result = await transport.send(
            "POST",
            "/chat/completions",
            json_body={"model": "m", "messages": []},
            response_model=ChatCompletionResponse,
        )

    assert isinstance(result, ChatCompletionResponse)  # nosec B101
    assert result.text == "hello"  # nosec B101
    assert seen["url"] == f"{BASE_URL}/chat/completions"  # nosec B101
    assert seen["auth"] == f"Bearer {API_KEY}"  # nosec B101
    assert seen["org"] == "org-1"  # nosec B101
    assert seen["body"] == {"model": "m", "messages": []}  # nosec B101


@pytest.mark.asyncio
async def test_send_without_model_returns_raw_json_and_binary_returns_bytes():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/raw"):
            return httpx.Response(200, json={"x": 1})
        return httpx.Response(200, content=b"\xff\xd8audio")

    async with mock_http_client(handler) as http:
        transport = make_transport(http)
        assert await transport.send("GET", "raw") == {"x": 1}  # nosec B101
        assert await transport.send("GET", "bin", binary=True) == b"\xff\xd8audio"  # nosec B101


@pytest.mark.asyncio
async def test_send_multipart_form_and_files():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.content
        return httpx.Response(200, json={"text": "ok"})

    async with mock_http_client(handler) as http:
        transport = make_transport(http)
        await transport.send(
            "POST",
            "audio/transcriptions",
            form={"model": "whisper-1", "tags[]": ["a", "b"]},
            files=[("file", ("a.wav", b"RIFF", "audio/wav"))],
        )

    assert seen["content_type"].startswith("multipart/form-data; boundary=")  # nosec B101
    body = seen["body"]
    assert b'name="model"' in body and b"whisper-1" in body  # nosec B101
    assert body.count(b'name="tags[]"') == 2  # nosec B101
    assert body.index(b"\r\n\r\na\r\n") < body.index(b"\r\n\r\nb\r\n")  # nosec B101
    assert b'filename="a.wav"' in body and b"RIFF" in body  # nosec B101


@pytest.mark.asyncio
async def test_json_and_form_are_mutually_exclusive():
    async with mock_http_client(lambda r: httpx.Response(200, json={})) as http:
        transport = make_transport(http)
        with pytest.raises(ValueError):
            await transport.send("POST", "x", json_body={}, form={"a": "b"})


@pytest.mark.asyncio
async def test_api_error_envelope_is_classified():
    envelope = {"error": {"message": "bad key", "type": "invalid_request_error", "code": "invalid_api_key"}}

    async with mock_http_client(lambda r: httpx.Response(401, json=envelope)) as http:
        transport = make_transport(http)
        with pytest.raises(ApiError) as info:
            await transport.send("GET", "models")

    assert info.value.status_code == 401  # nosec B101
    assert info.value.code is ErrorCode.AUTH  # nosec B101
    assert info.value.error_code == "invalid_api_key"  # nosec B101


@pytest.mark.asyncio
async def test_unparsable_success_body_is_protocol_error():
    async with mock_http_client(lambda r: httpx.Response(200, content=b"not json")) as http:
        transport = make_transport(http)
        with pytest.raises(ProtocolError) as info:
            await transport.send("POST", "chat/completions", json_body={}, response_model=ChatCompletionResponse)

    assert info.value.raw_body == "not json"  # nosec B101


@pytest.mark.asyncio
async def test_connection_failures_become_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with mock_http_client(handler) as http:
        transport = make_transport(http)
        with pytest.raises(TransportError) as info:
            await transport.send("GET", "models")

    assert info.value.kind is ErrorKind.TRANSPORT  # nosec B101
    assert info.value.code is ErrorCode.UNAVAILABLE  # nosec B101
    assert isinstance(info.value.cause, httpx.ConnectError)  # nosec B101


@pytest.mark.asyncio
async def test_timeouts_become_transport_errors_with_timeout_code():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    async with mock_http_client(handler) as http:
        transport = make_transport(http, timeouts=TimeoutConfig(1.0, 2.0, 3.0))
        with pytest.raises(TransportError) as info:
            await transport.send("GET", "models")

    assert info.value.code is ErrorCode.TIMEOUT  # nosec B101


@pytest.mark.asyncio
async def test_precancelled_token_raises_cancelled_without_sending():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    token = CancellationToken()
    token.cancel("user abort")
    async with mock_http_client(handler) as http:
        transport = make_transport(http)
        with pytest.raises(TransportError) as info:
            await transport.send("GET", "models", cancel=token)

    assert info.value.code is ErrorCode.CANCELLED  # nosec B101
    assert calls == []  # nosec B101


@pytest.mark.asyncio
async def test_token_cancels_in_flight_request():
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200, json={})

    token = CancellationToken()
    async with mock_http_client(handler) as http:
        transport = make_transport(http)
        pending = asyncio.ensure_future(transport.send("GET", "slow", cancel=token))
        await started.wait()
        token.cancel("stop")
        with pytest.raises(TransportError) as info:
            await asyncio.wait_for(pending, timeout=2)

    assert info.value.code is ErrorCode.CANCELLED  # nosec B101


@pytest.mark.asyncio
async def test_stream_non_2xx_is_classified_before_yielding():
    envelope = {"error": {"message": "overloaded", "type": "server_error"}}

    async with mock_http_client(lambda r: httpx.Response(503, json=envelope)) as http:
        transport = make_transport(http)
        with pytest.raises(ApiError) as info:
            async with transport.stream("chat/completions", {"stream": True}):
                pytest.fail("stream body must not be yielded on error")  # pragma: no cover

    assert info.value.code is ErrorCode.UNAVAILABLE  # nosec B101


@pytest.mark.asyncio
async def test_stream_sets_event_stream_accept_header():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["accept"] = request.headers["accept"]
        return httpx.Response(200, content=b"data: [DONE]\n")

    async with mock_http_client(handler) as http:
        transport = make_transport(http)
        async with transport.stream("chat/completions", {"stream": True}) as response:
            lines = [line async for line in response.aiter_lines()]

    assert seen["accept"] == "text/event-stream"  # nosec B101
    assert lines == ["data: [DONE]"]  # nosec B101


@pytest.mark.asyncio
async def test_owned_client_is_closed_and_injected_client_is_not():
    owned = TransportClient(API_KEY, BASE_URL)
    await owned.aclose()
    assert owned._client.is_closed  # nosec B101

    async with mock_http_client(lambda r: httpx.Response(200, json={})) as http:
        async with make_transport(http):
            pass
        assert not http.is_closed  # nosec B101


@pytest.mark.asyncio
async def test_send_emits_start_and_finalize_events(log_records):
    async with mock_http_client(lambda r: httpx.Response(200, json=completion_body("x"))) as http:
        transport = make_transport(http)
        await transport.send("POST", "chat/completions", json_body={}, response_model=ChatCompletionResponse, model="m")

    phases = [e["phase"] for e in log_records.events("transport.send")]
    assert phases == ["start", "finalize"]  # nosec B101
    final = log_records.events("transport.send")[-1]
    assert final["emitted"] is True and final["status"] == 200 and final["model"] == "m"  # nosec B101
    assert log_records.events("transport.request_body") == []  # nosec B101


@pytest.mark.asyncio
async def test_bodies_are_logged_only_at_debug(monkeypatch, log_records):
    monkeypatch.setenv("CHATWIRE_LOG_LEVEL", "DEBUG")

    async with mock_http_client(lambda r: httpx.Response(200, json={"ok": True})) as http:
        transport = make_transport(http)
        await transport.send("POST", "x", json_body={"secret_prompt": "hi"})

    bodies = log_records.events("transport.request_body")
    assert bodies and bodies[0]["json"] == {"secret_prompt": "hi"}  # nosec B101
    assert all(r.levelno == logging.DEBUG for r in log_records.records if "request_body" in r.getMessage())  # nosec B101
