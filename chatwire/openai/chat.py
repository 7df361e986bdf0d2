"""Chat completions service (``POST /chat/completions``).

Purpose
-------
Bind the chat DTOs to the transport: one-shot completions, SSE streaming
(typed chunks or plain text deltas), stream accumulation, and the
multi-round tool-calling loop.

Notes
-----
- ``complete`` always sends a non-streaming body: ``stream`` and
  ``stream_options`` are dropped from the payload even if set on the request.
- ``stream`` forces ``stream=true``; the HTTP response is closed when the
  iteration ends, fails, or is abandoned by the consumer.
"""

from __future__ import annotations

from typing import AsyncIterator, Optional

from ..base.cancellation import CancellationToken
from ..base.encoding import to_json_payload
from ..base.models import ChatCompletionRequest, ChatCompletionResponse, StreamChunk
from ..base.streaming import SseDecoder, StreamSummary, collect_stream
from ..base.tools import ToolCallOrchestrator, ToolRegistry
from ..base.transport import TransportClient
from ..config.defaults import DEFAULT_MAX_TOOL_ROUNDS

CHAT_COMPLETIONS_PATH = "chat/completions"


class ChatCompletions:
    """Chat completion calls over a :class:`TransportClient`."""

    def __init__(self, transport: TransportClient) -> None:
        self._transport = transport

    async def complete(
        self,
        request: ChatCompletionRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> ChatCompletionResponse:
        """Send ``request`` and return the full response."""
        payload = to_json_payload(request)
        payload.pop("stream", None)
        payload.pop("stream_options", None)
        return await self._transport.send(
            "POST",
            CHAT_COMPLETIONS_PATH,
            json_body=payload,
            response_model=ChatCompletionResponse,
            cancel=cancel,
            model=request.model,
        )

    async def stream(
        self,
        request: ChatCompletionRequest,
        *,
        cancel: Optional[CancellationToken] = None,
        include_usage: bool = False,
    ) -> AsyncIterator[StreamChunk]:
        """Yield decoded chunks of a streaming completion in wire order.

        Args:
            request: The request; its ``stream`` flag is forced on.
            cancel: Optional token stopping the stream between lines.
            include_usage: Ask the service for a final usage-only chunk.
        """
        payload = to_json_payload(request)
        payload["stream"] = True
        if include_usage:
            options = dict(payload.get("stream_options") or {})
            options["include_usage"] = True
            payload["stream_options"] = options
        async with self._transport.stream(
            CHAT_COMPLETIONS_PATH, payload, cancel=cancel, model=request.model
        ) as response:
            async for chunk in SseDecoder(response.aiter_lines(), cancel=cancel):
                yield chunk

    async def stream_text(
        self,
        request: ChatCompletionRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> AsyncIterator[str]:
        """Yield only the non-empty text deltas of a streaming completion."""
        async for chunk in self.stream(request, cancel=cancel):
            text = chunk.text
            if text:
                yield text

    async def stream_collect(
        self,
        request: ChatCompletionRequest,
        *,
        cancel: Optional[CancellationToken] = None,
        include_usage: bool = False,
    ) -> StreamSummary:
        """Stream a completion and fold it into a :class:`StreamSummary`."""
        return await collect_stream(self.stream(request, cancel=cancel, include_usage=include_usage))

    def tool_orchestrator(self, registry: ToolRegistry) -> ToolCallOrchestrator:
        return ToolCallOrchestrator(self, registry)

    async def complete_with_tools(
        self,
        request: ChatCompletionRequest,
        registry: ToolRegistry,
        max_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> ChatCompletionResponse:
        """Run the tool-calling loop; see :class:`ToolCallOrchestrator`."""
        return await self.tool_orchestrator(registry).complete_with_tools(request, max_rounds, cancel=cancel)


__all__ = ["ChatCompletions", "CHAT_COMPLETIONS_PATH"]
