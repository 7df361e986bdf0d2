"""
Message content DTOs.

A chat message's ``content`` is either plain text or an ordered list of typed
parts (text, image URL, input audio, file). On the wire both shapes share the
``content`` key: a JSON string or a JSON array. In memory they are modelled as
a tagged union, ``TextContent | PartsContent``, so consumers branch on
``kind`` instead of probing the JSON shape.
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .wire_model import WireModel


ContentPartType = Literal["text", "image_url", "input_audio", "file"]


class ImageUrl(WireModel):
    url: str
    detail: Optional[str] = None


class InputAudio(WireModel):
    data: str
    format: str


class FileData(WireModel):
    """File reference inside a content part (uploaded id or inline data URL)."""

    file_id: Optional[str] = None
    file_data: Optional[str] = None
    filename: Optional[str] = None


class ContentPart(WireModel):
    """A single part of a multimodal message.

    Exactly one payload field matching ``type`` is expected to be set; others
    stay ``None`` and are omitted on the wire.
    """

    type: str
    text: Optional[str] = None
    image_url: Optional[ImageUrl] = None
    input_audio: Optional[InputAudio] = None
    file: Optional[FileData] = None

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def of_image_url(cls, url: str, detail: Optional[str] = None) -> "ContentPart":
        return cls(type="image_url", image_url=ImageUrl(url=url, detail=detail))

    @classmethod
    def of_input_audio(cls, data: str, audio_format: str) -> "ContentPart":
        return cls(type="input_audio", input_audio=InputAudio(data=data, format=audio_format))

    @classmethod
    def of_file(
        cls,
        *,
        file_id: Optional[str] = None,
        file_data: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> "ContentPart":
        return cls(type="file", file=FileData(file_id=file_id, file_data=file_data, filename=filename))


class TextContent(BaseModel):
    """Plain text message content (a JSON string on the wire)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class PartsContent(BaseModel):
    """Structured message content (a JSON array of parts on the wire)."""

    kind: Literal["parts"] = "parts"
    parts: List[ContentPart] = Field(default_factory=list)

    def joined_text(self, separator: str = "") -> str:
        return separator.join(p.text for p in self.parts if p.type == "text" and p.text)


MessageContent = Annotated[Union[TextContent, PartsContent], Field(discriminator="kind")]


__all__ = [
    "ContentPartType",
    "ImageUrl",
    "InputAudio",
    "FileData",
    "ContentPart",
    "TextContent",
    "PartsContent",
    "MessageContent",
]
