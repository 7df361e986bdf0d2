"""Stream accumulation helpers.

Folds a sequence of :class:`StreamChunk` objects into a :class:`StreamSummary`:
concatenated delta text per choice index, the last finish reason, tool calls
reassembled from their indexed fragments, and the final usage block (sent by
the service in a last chunk when ``stream_options.include_usage`` is set).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AsyncIterable, Dict, Iterable, List, Optional

from ..models_parts.chat import ChatCompletionResponse, Choice, StreamChunk
from ..models_parts.message import ChatMessage
from ..models_parts.tool_types import FunctionCall, ToolCall, ToolCallDelta
from ..models_parts.usage import Usage


@dataclass
class _ToolCallBuffer:
    id: str = ""
    type: str = "function"
    name: str = ""
    arguments: List[str] = field(default_factory=list)

    def to_tool_call(self) -> ToolCall:
        return ToolCall(
            id=self.id,
            type=self.type,
            function=FunctionCall(name=self.name, arguments="".join(self.arguments)),
        )


@dataclass
class ChoiceSummary:
    """Accumulated state of one choice index."""

    index: int
    role: str = "assistant"
    text_parts: List[str] = field(default_factory=list)
    finish_reason: Optional[str] = None
    _tool_calls: Dict[int, _ToolCallBuffer] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "".join(self.text_parts)

    @property
    def tool_calls(self) -> List[ToolCall]:
        return [self._tool_calls[i].to_tool_call() for i in sorted(self._tool_calls)]

    def add_tool_delta(self, delta: ToolCallDelta) -> None:
        buf = self._tool_calls.setdefault(delta.index, _ToolCallBuffer())
        if delta.id:
            buf.id = delta.id
        if delta.type:
            buf.type = delta.type
        if delta.function is not None:
            if delta.function.name:
                buf.name = delta.function.name
            if delta.function.arguments:
                buf.arguments.append(delta.function.arguments)


@dataclass
class StreamSummary:
    """Result of folding a chunk stream."""

    id: Optional[str] = None
    model: Optional[str] = None
    created: Optional[int] = None
    usage: Optional[Usage] = None
    chunk_count: int = 0
    choices: Dict[int, ChoiceSummary] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """Text of choice 0 (empty when nothing arrived)."""
        first = self.choices.get(0)
        return first.text if first is not None else ""

    @property
    def finish_reason(self) -> Optional[str]:
        first = self.choices.get(0)
        return first.finish_reason if first is not None else None

    def add(self, chunk: StreamChunk) -> None:
        self.chunk_count += 1
        self.id = self.id or chunk.id
        self.model = self.model or chunk.model
        self.created = self.created or chunk.created
        if chunk.usage is not None:
            self.usage = chunk.usage
        for choice in chunk.choices:
            summary = self.choices.setdefault(choice.index, ChoiceSummary(index=choice.index))
            if choice.finish_reason:
                summary.finish_reason = choice.finish_reason
            delta = choice.delta
            if delta is None:
                continue
            if delta.role:
                summary.role = delta.role
            if delta.content:
                summary.text_parts.append(delta.content)
            for tool_delta in delta.tool_calls or ():
                summary.add_tool_delta(tool_delta)

    def to_response(self) -> ChatCompletionResponse:
        """Rebuild a non-streaming style response from the accumulated state."""
        choices = []
        for index in sorted(self.choices):
            summary = self.choices[index]
            calls = summary.tool_calls
            message = ChatMessage(
                role=summary.role,
                content=summary.text or None,
                tool_calls=calls or None,
            )
            choices.append(Choice(index=index, message=message, finish_reason=summary.finish_reason))
        return ChatCompletionResponse(
            id=self.id,
            object="chat.completion",
            created=self.created,
            model=self.model,
            choices=choices,
            usage=self.usage,
        )


def accumulate_chunks(chunks: Iterable[StreamChunk]) -> StreamSummary:
    """Fold ``chunks`` (already materialized) into a :class:`StreamSummary`."""
    summary = StreamSummary()
    for chunk in chunks:
        summary.add(chunk)
    return summary


async def collect_stream(chunks: AsyncIterable[StreamChunk]) -> StreamSummary:
    """Consume an async chunk stream and return its :class:`StreamSummary`."""
    summary = StreamSummary()
    async for chunk in chunks:
        summary.add(chunk)
    return summary


__all__ = ["ChoiceSummary", "StreamSummary", "accumulate_chunks", "collect_stream"]
