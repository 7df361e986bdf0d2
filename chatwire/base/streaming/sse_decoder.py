"""Server-Sent Events decoder for streaming chat completions.

Purpose
-------
Turn the line sequence of a ``text/event-stream`` response into typed
:class:`StreamChunk` objects, one per ``data:`` frame, in wire order.

Line handling
-------------
Each line is read only when the consumer asks for the next chunk (no
read-ahead), then:

- blank lines and ``:`` comment lines (keep-alives such as ``: ping``) are
  skipped;
- a line starting with ``data:`` (prefix matched case-insensitively) carries a
  payload: the text after the prefix with one leading space removed;

  - the payload ``[DONE]`` ends the stream successfully;
  - any other payload is parsed as a ``StreamChunk``; a payload that does not
    parse aborts the stream with :class:`StreamError` carrying the payload;

- any other line (``event:``, ``id:``, ``retry:``...) is ignored.

The underlying iterator running out before ``[DONE]`` ends the sequence
normally; ``saw_done`` tells the two endings apart. Read failures raise
``StreamError``; token cancellation raises ``TransportError`` with code
``cancelled``. In every case ``on_close`` runs once when iteration stops.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Awaitable, Callable, Optional

from pydantic import ValidationError

from ..cancellation import CancellationToken, CancelledError
from ..errors_parts.chatwire_error import ChatwireError
from ..errors_parts.classification import classify_exception
from ..errors_parts.error_code import ErrorCode
from ..errors_parts.error_types import StreamError, TransportError
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models_parts.chat import StreamChunk

DATA_PREFIX = "data:"
DONE_MARKER = "[DONE]"
COMMENT_PREFIX = ":"


async def _next_line(lines: AsyncIterator[str]) -> Optional[str]:
    try:
        return await lines.__anext__()
    except StopAsyncIteration:
        return None


class SseDecoder:
    """Async iterator of :class:`StreamChunk` over SSE lines.

    Args:
        lines: Async iterator of text lines without terminators (for example
            ``httpx.Response.aiter_lines()``).
        cancel: Optional token checked around every line read.
        on_close: Optional coroutine function awaited once when decoding stops.
        logger: Logger for structured events (defaults to ``chatwire.stream``).
        context: Log context of the owning exchange.
    """

    def __init__(
        self,
        lines: AsyncIterator[str],
        *,
        cancel: Optional[CancellationToken] = None,
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
        logger: Optional[logging.Logger] = None,
        context: Optional[LogContext] = None,
    ) -> None:
        self._lines = lines.__aiter__()
        self._cancel = cancel
        self._on_close = on_close
        self._logger = logger or get_logger("chatwire.stream")
        self._ctx = context
        self._started = False
        self.saw_done = False
        self.chunks_emitted = 0

    def __aiter__(self) -> AsyncIterator[StreamChunk]:
        if self._started:
            raise RuntimeError("SseDecoder can only be iterated once")
        self._started = True
        return self._run()

    async def _read_line(self) -> Optional[str]:
        try:
            if self._cancel is None:
                return await _next_line(self._lines)
            return await self._cancel.guard(_next_line(self._lines))
        except CancelledError as exc:
            raise TransportError(f"stream cancelled: {exc}", code=ErrorCode.CANCELLED, cause=exc) from exc
        except ChatwireError:
            raise
        except Exception as exc:
            raise StreamError(
                f"stream read failed: {type(exc).__name__}: {exc}",
                code=classify_exception(exc),
                cause=exc,
            ) from exc

    def _parse(self, payload: str) -> StreamChunk:
        try:
            return StreamChunk.model_validate_json(payload)
        except ValidationError as exc:
            raise StreamError(
                "malformed stream frame",
                code=ErrorCode.VALIDATION,
                raw_body=payload,
                cause=exc,
            ) from exc

    async def _run(self) -> AsyncIterator[StreamChunk]:
        error_code: Optional[str] = None
        try:
            while True:
                line = await self._read_line()
                if line is None:
                    break
                if not line.strip() or line.startswith(COMMENT_PREFIX):
                    continue
                if line[: len(DATA_PREFIX)].lower() != DATA_PREFIX:
                    log_event(self._logger, "stream.ignored_line", self._ctx, level=logging.DEBUG, line=line)
                    continue
                payload = line[len(DATA_PREFIX):]
                if payload.startswith(" "):
                    payload = payload[1:]
                if payload == DONE_MARKER:
                    self.saw_done = True
                    break
                log_event(self._logger, "stream.frame", self._ctx, level=logging.DEBUG, payload=payload)
                chunk = self._parse(payload)
                self.chunks_emitted += 1
                yield chunk
        except ChatwireError as exc:
            error_code = exc.code.value
            raise
        finally:
            normalized_log_event(
                self._logger,
                "stream.decode",
                self._ctx,
                phase="finalize",
                error_code=error_code,
                emitted=self.chunks_emitted > 0,
                chunks=self.chunks_emitted,
                saw_done=self.saw_done,
            )
            if self._on_close is not None:
                await self._on_close()


def decode_sse(
    lines: AsyncIterator[str],
    *,
    cancel: Optional[CancellationToken] = None,
    on_close: Optional[Callable[[], Awaitable[None]]] = None,
) -> SseDecoder:
    """Shortcut for ``SseDecoder(lines, cancel=..., on_close=...)``."""
    return SseDecoder(lines, cancel=cancel, on_close=on_close)


__all__ = ["SseDecoder", "decode_sse", "DATA_PREFIX", "DONE_MARKER"]
