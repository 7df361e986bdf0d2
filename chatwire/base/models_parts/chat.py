"""
Chat completion request/response DTOs.

``ChatCompletionRequest`` mirrors the body of ``POST /chat/completions``. Its
``messages`` list is the conversation: the tool orchestrator appends to it in
place between rounds. Parameters not declared here can be passed as keyword
arguments or via ``set_extension`` and are sent as top-level body keys.

``ChatCompletionResponse`` requires ``choices`` so that an unrelated JSON
object (``{}`` for instance) is rejected as a protocol failure instead of being
mistaken for an empty completion. ``StreamChunk`` is one decoded SSE frame.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from .message import ChatMessage, ChatMessageDelta
from .tool_types import ToolCall, ToolDefinition
from .usage import Usage
from .wire_model import WireModel


class ResponseFormat(WireModel):
    """``response_format``: ``text``, ``json_object`` or ``json_schema``."""

    type: str = "text"
    json_schema: Optional[Dict[str, Any]] = None


class ChatCompletionRequest(WireModel):
    model: str
    messages: List[ChatMessage] = Field(default_factory=list)
    tools: Optional[List[ToolDefinition]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    parallel_tool_calls: Optional[bool] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    n: Optional[int] = None
    stop: Optional[Union[str, List[str]]] = None
    seed: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    logit_bias: Optional[Dict[str, float]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None
    response_format: Optional[ResponseFormat] = None
    user: Optional[str] = None
    reasoning_effort: Optional[str] = None
    modalities: Optional[List[str]] = None
    store: Optional[bool] = None
    metadata: Optional[Dict[str, str]] = None
    service_tier: Optional[str] = None
    stream: Optional[bool] = None
    stream_options: Optional[Dict[str, Any]] = None


class Choice(WireModel):
    index: int = 0
    message: Optional[ChatMessage] = None
    finish_reason: Optional[str] = None
    logprobs: Optional[Dict[str, Any]] = None


class ChatCompletionResponse(WireModel):
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: List[Choice]
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None

    @property
    def first_message(self) -> Optional[ChatMessage]:
        return self.choices[0].message if self.choices else None

    @property
    def text(self) -> Optional[str]:
        message = self.first_message
        return message.text if message is not None else None

    @property
    def tool_calls(self) -> List[ToolCall]:
        """Tool calls requested by the first choice, in received order."""
        message = self.first_message
        if message is None or not message.tool_calls:
            return []
        return list(message.tool_calls)


class StreamChoice(WireModel):
    index: int = 0
    delta: Optional[ChatMessageDelta] = None
    finish_reason: Optional[str] = None
    logprobs: Optional[Dict[str, Any]] = None


class StreamChunk(WireModel):
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: List[StreamChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None

    @property
    def text(self) -> str:
        """Concatenated delta text of all choices in this chunk."""
        return "".join(c.delta.content for c in self.choices if c.delta is not None and c.delta.content)


__all__ = [
    "ResponseFormat",
    "ChatCompletionRequest",
    "Choice",
    "ChatCompletionResponse",
    "StreamChoice",
    "StreamChunk",
]
