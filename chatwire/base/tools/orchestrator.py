"""Multi-round tool-calling loop.

Purpose
-------
Drive a chat completion to a final answer while the model keeps requesting
tools: send the conversation, execute every requested call against a
:class:`ToolRegistry`, append the assistant turn and the tool results, and
send again, up to a fixed number of rounds.

Conversation contract
---------------------
``request.messages`` is the conversation and is appended to in place. Each
round that requests tools appends exactly one assistant message (carrying the
tool calls) followed by one ``tool`` message per call, in the order the calls
were received, each tagged with its ``tool_call_id``. Messages are appended
only after every call of the round succeeded.

Failure modes
-------------
- Transport/API/protocol errors from the completer propagate unchanged.
- The first failing tool call aborts the round with ``ToolExecutionError``;
  the remaining calls of that round are cancelled.
- ``BoundedRoundsError`` when the model still requests tools after
  ``max_rounds`` sends; no further request is made.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol

from ..cancellation import CancellationToken
from ..errors_parts.error_code import ErrorCode
from ..errors_parts.error_types import BoundedRoundsError
from ..logging import LogContext, get_logger, normalized_log_event
from ..models_parts.chat import ChatCompletionRequest, ChatCompletionResponse
from ..models_parts.message import ChatMessage
from ..models_parts.tool_types import ToolCall
from .registry import ToolRegistry

DEFAULT_MAX_ROUNDS = 5


class ChatCompleter(Protocol):
    async def complete(
        self,
        request: ChatCompletionRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> ChatCompletionResponse: ...


class ToolCallOrchestrator:
    """Runs the send / execute tools / append loop for one conversation.

    Args:
        completer: Anything with an async ``complete(request, cancel=...)``
            (normally :class:`chatwire.openai.ChatCompletions`).
        registry: Tools available to the model.
        logger: Logger for per-round events (defaults to ``chatwire.tools``).
    """

    def __init__(
        self,
        completer: ChatCompleter,
        registry: ToolRegistry,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._completer = completer
        self._registry = registry
        self._logger = logger or get_logger("chatwire.tools")

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def _execute_all(self, calls: List[ToolCall], cancel: Optional[CancellationToken]) -> List[str]:
        tasks = [asyncio.ensure_future(self._registry.execute(call, cancel=cancel)) for call in calls]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def complete_with_tools(
        self,
        request: ChatCompletionRequest,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> ChatCompletionResponse:
        """Return the first response that requests no tools.

        Args:
            request: Request whose ``messages`` list is the conversation.
                ``tools`` is filled from the registry when empty.
            max_rounds: Maximum number of requests sent.
            cancel: Optional token threaded through sends and tool calls.

        Raises:
            BoundedRoundsError: tools were still requested after ``max_rounds``.
            ToolExecutionError: a tool failed.
            ChatwireError: any failure of the underlying exchange.
        """
        if max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")
        if not request.tools:
            request.tools = self._registry.schemas() or None
        ctx = LogContext(model=request.model)
        for round_number in range(1, max_rounds + 1):
            response = await self._completer.complete(request, cancel=cancel)
            calls = response.tool_calls
            if not calls:
                normalized_log_event(
                    self._logger,
                    "tools.round",
                    ctx,
                    phase="finalize",
                    attempt=round_number,
                    emitted=True,
                    tokens=response.usage,
                )
                return response
            assistant = response.first_message
            normalized_log_event(
                self._logger,
                "tools.round",
                ctx,
                phase="tool_calls",
                attempt=round_number,
                calls=[call.function.name for call in calls],
            )
            results = await self._execute_all(calls, cancel)
            request.messages.append(assistant.model_copy(update={"tool_calls": calls}))
            request.messages.extend(
                ChatMessage.tool_result(call.id, content) for call, content in zip(calls, results)
            )
        normalized_log_event(
            self._logger,
            "tools.round",
            ctx,
            phase="finalize",
            attempt=max_rounds,
            error_code=ErrorCode.UNSUPPORTED.value,
            emitted=False,
        )
        raise BoundedRoundsError(
            f"model still requested tools after {max_rounds} rounds",
            max_rounds=max_rounds,
        )


__all__ = ["ToolCallOrchestrator", "ChatCompleter", "DEFAULT_MAX_ROUNDS"]
