"""Multimodal message construction helpers.

Small functions producing :class:`ContentPart` and :class:`ChatMessage`
objects for the common shapes: text, image by URL, image from raw bytes
(inlined as a base64 ``data:`` URL), input audio (base64) and uploaded file
references.
"""

from __future__ import annotations

import base64
from typing import Optional

from ..base.encoding.files import guess_content_type
from ..base.models import ChatMessage, ContentPart, FileContent


def text_message(role: str, text: str) -> ChatMessage:
    return ChatMessage(role=role, content=text)


def multimodal_message(role: str, *parts: ContentPart) -> ChatMessage:
    return ChatMessage(role=role, content=list(parts))


def text_part(text: str) -> ContentPart:
    return ContentPart.of_text(text)


def image_url_part(url: str, detail: Optional[str] = None) -> ContentPart:
    return ContentPart.of_image_url(url, detail)


def image_bytes_part(data: bytes, mime_type: str, detail: Optional[str] = None) -> ContentPart:
    """Inline image bytes as a ``data:<mime>;base64,...`` URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return ContentPart.of_image_url(f"data:{mime_type};base64,{encoded}", detail)


def image_file_part(file: FileContent, detail: Optional[str] = None) -> ContentPart:
    mime_type = file.content_type or guess_content_type(file.filename)
    return image_bytes_part(file.data, mime_type, detail)


def audio_part(data: bytes, audio_format: str) -> ContentPart:
    """Input audio part; ``audio_format`` is e.g. ``wav`` or ``mp3``."""
    return ContentPart.of_input_audio(base64.b64encode(data).decode("ascii"), audio_format)


def file_id_part(file_id: str) -> ContentPart:
    return ContentPart.of_file(file_id=file_id)


def user_message_with_image(text: str, image_url: str, detail: Optional[str] = None) -> ChatMessage:
    return multimodal_message("user", text_part(text), image_url_part(image_url, detail))


def user_message_with_image_file(text: str, image: FileContent, detail: Optional[str] = None) -> ChatMessage:
    return multimodal_message("user", text_part(text), image_file_part(image, detail))


def user_message_with_audio(text: str, audio: FileContent, audio_format: str) -> ChatMessage:
    return multimodal_message("user", text_part(text), audio_part(audio.data, audio_format))


def user_message_with_file(text: str, file_id: str) -> ChatMessage:
    return multimodal_message("user", text_part(text), file_id_part(file_id))


__all__ = [
    "text_message",
    "multimodal_message",
    "text_part",
    "image_url_part",
    "image_bytes_part",
    "image_file_part",
    "audio_part",
    "file_id_part",
    "user_message_with_image",
    "user_message_with_image_file",
    "user_message_with_audio",
    "user_message_with_file",
]
