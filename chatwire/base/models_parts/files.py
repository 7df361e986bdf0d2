"""
File payload and Files API DTOs.

``FileContent`` (in-memory bytes) and ``FilePathReference`` (a path on disk)
are the two ways a multipart request can carry a file. They are plain pydantic
models, not wire objects: multipart request models declare them with
``Field(exclude=True)`` so the form encoder skips them and the transport
attaches them as file parts instead.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .wire_model import WireModel


class FileContent(BaseModel):
    """In-memory file payload."""

    model_config = ConfigDict(frozen=True)

    filename: str
    data: bytes
    content_type: Optional[str] = None


class FilePathReference(BaseModel):
    """File payload read from disk at send time."""

    model_config = ConfigDict(frozen=True)

    path: Path
    filename: Optional[str] = None
    content_type: Optional[str] = None


FilePayload = Union[FileContent, FilePathReference]


class FileUploadRequest(WireModel):
    """Body of ``POST /files``; ``purpose`` is e.g. ``assistants`` or ``batch``."""

    file: FilePayload = Field(exclude=True)
    purpose: str


class FileObject(WireModel):
    id: str
    object: Optional[str] = None
    bytes: Optional[int] = None
    created_at: Optional[int] = None
    filename: Optional[str] = None
    purpose: Optional[str] = None
    status: Optional[str] = None


class FileList(WireModel):
    object: Optional[str] = None
    data: List[FileObject]


class FileDeleted(WireModel):
    id: str
    object: Optional[str] = None
    deleted: bool


__all__ = [
    "FileContent",
    "FilePathReference",
    "FilePayload",
    "FileUploadRequest",
    "FileObject",
    "FileList",
    "FileDeleted",
]
