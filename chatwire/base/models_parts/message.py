"""
Chat message DTOs.

Defines :class:`ChatMessage`, the unit of a conversation, and
:class:`ChatMessageDelta`, the partial message carried by streaming chunks.
``ChatMessage.content`` accepts a plain string or a list of content parts on
input (JSON or Python) and is stored as the ``TextContent | PartsContent``
tagged union; it serializes back to the original wire shape.
"""
from __future__ import annotations

from typing import Any, List, Optional, Sequence, Union

from pydantic import field_serializer, field_validator

from .content import ContentPart, MessageContent, PartsContent, TextContent
from .tool_types import ToolCall, ToolCallDelta
from .wire_model import WireModel


# Common roles; any string is accepted to stay forward compatible.
ROLES = ("system", "developer", "user", "assistant", "tool")


class ChatMessage(WireModel):
    """A single conversation entry.

    Attributes:
        role: Author role (``system``, ``developer``, ``user``, ``assistant``,
            ``tool``).
        content: Text or parts; ``None`` for assistant messages that only
            carry tool calls.
        name: Optional participant name.
        tool_calls: Calls requested by an assistant message.
        tool_call_id: On ``tool`` messages, the id of the call answered.
    """

    role: str
    content: Optional[MessageContent] = None
    name: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None

    @field_validator("content", mode="before")
    @classmethod
    def coerce_content(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"kind": "text", "text": value}
        if isinstance(value, (list, tuple)):
            return {"kind": "parts", "parts": list(value)}
        return value

    @field_serializer("content")
    def serialize_content(self, value: Optional[Union[TextContent, PartsContent]], info: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, TextContent):
            return value.text
        return [part.model_dump(mode=info.mode, by_alias=info.by_alias) for part in value.parts]

    @property
    def text(self) -> Optional[str]:
        """Plain text view: the string content, or the joined text parts."""
        if self.content is None:
            return None
        if isinstance(self.content, TextContent):
            return self.content.text
        return self.content.joined_text()

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: Union[str, Sequence[ContentPart]]) -> "ChatMessage":
        return cls(role="user", content=content)

    @classmethod
    def assistant(
        cls,
        content: Optional[str] = None,
        *,
        tool_calls: Optional[List[ToolCall]] = None,
    ) -> "ChatMessage":
        return cls(role="assistant", content=content, tool_calls=tool_calls)

    @classmethod
    def tool_result(cls, tool_call_id: str, content: str) -> "ChatMessage":
        """Build the ``tool`` message answering ``tool_call_id``."""
        return cls(role="tool", content=content, tool_call_id=tool_call_id)


class ChatMessageDelta(WireModel):
    """Fragment of an assistant message delivered by one stream chunk."""

    role: Optional[str] = None
    content: Optional[str] = None
    refusal: Optional[str] = None
    tool_calls: Optional[List[ToolCallDelta]] = None


__all__ = ["ChatMessage", "ChatMessageDelta", "ROLES"]
