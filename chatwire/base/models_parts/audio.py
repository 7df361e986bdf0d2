"""
Audio endpoint DTOs.

``SpeechRequest`` is a JSON body answered with raw audio bytes.
``TranscriptionRequest`` is sent as ``multipart/form-data``: every declared
field is flattened into a form field, so only ``model`` is declared and
optional parameters (``language``, ``prompt``, ``temperature``...) go through
the extension map to avoid sending empty values for them.
"""
from __future__ import annotations

from typing import Optional

from pydantic import Field

from .files import FilePayload
from .wire_model import WireModel


class SpeechRequest(WireModel):
    model: str
    input: str
    voice: str
    response_format: Optional[str] = None
    speed: Optional[float] = None
    instructions: Optional[str] = None


class TranscriptionRequest(WireModel):
    file: FilePayload = Field(exclude=True)
    model: str


class TranscriptionResponse(WireModel):
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None


__all__ = ["SpeechRequest", "TranscriptionRequest", "TranscriptionResponse"]
