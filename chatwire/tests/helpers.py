"""Shared fakes for the test suite.

The fake service is ``httpx.MockTransport``: tests pass a handler receiving
the outgoing ``httpx.Request`` and returning the canned ``httpx.Response``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, List

import httpx

from chatwire.base.transport import TransportClient

API_KEY = "sk-unit-key"  # pragma: allowlist secret - fake credential for tests
BASE_URL = "https://api.test/v1"

Handler = Callable[[httpx.Request], httpx.Response]


def mock_http_client(handler: Handler) -> httpx.AsyncClient:
    """Async client whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def make_transport(http_client: httpx.AsyncClient, **kwargs: Any) -> TransportClient:
    return TransportClient(API_KEY, BASE_URL, http_client=http_client, **kwargs)


def sse_body(*frames: str) -> bytes:
    """Join raw SSE lines into a response body (one line per frame)."""
    return ("\n".join(frames) + "\n").encode("utf-8")


def chunk_frame(content: str, **extra: Any) -> str:
    payload = {"choices": [{"index": 0, "delta": {"content": content}}], **extra}
    return "data: " + json.dumps(payload)


def completion_body(content: Any = "ok", tool_calls: Any = None, **extra: Any) -> dict:
    message: dict = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "model": "gpt-test",
        "choices": [{"index": 0, "message": message, "finish_reason": "tool_calls" if tool_calls else "stop"}],
        **extra,
    }


def tool_call_json(call_id: str, name: str, arguments: Any) -> dict:
    return {
        "id": call_id,
        "type": "function",
        "function": {"name": name, "arguments": arguments if isinstance(arguments, str) else json.dumps(arguments)},
    }


class RecordingHandler(logging.Handler):
    """Collects records reaching the ``chatwire`` logger."""

    def __init__(self) -> None:
        super().__init__(level=logging.NOTSET)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self, name: str = "") -> List[dict]:
        """Decoded JSON payloads, optionally filtered by event name."""
        out = []
        for record in self.records:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if not name or payload.get("event") == name:
                out.append(payload)
        return out
