"""
File part construction for multipart uploads.

Turns a :class:`FileContent` or :class:`FilePathReference` into the
``(filename, bytes, content_type)`` triple httpx expects under ``files=``.
Paths are read fully at call time; the content type is taken from the payload
when given, otherwise guessed from the file name.
"""
from __future__ import annotations

import mimetypes
from typing import Tuple

from ..errors_parts.error_types import EncodingError
from ..models_parts.files import FileContent, FilePathReference, FilePayload

DEFAULT_CONTENT_TYPE = "application/octet-stream"

FilePart = Tuple[str, bytes, str]


def guess_content_type(filename: str) -> str:
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or DEFAULT_CONTENT_TYPE


def file_part(file: FilePayload) -> FilePart:
    """Build the httpx file tuple for ``file``.

    Raises:
        EncodingError: the referenced path cannot be read, or the payload
            type is not a supported file payload.
    """
    if isinstance(file, FileContent):
        return file.filename, file.data, file.content_type or guess_content_type(file.filename)
    if isinstance(file, FilePathReference):
        filename = file.filename or file.path.name
        try:
            data = file.path.read_bytes()
        except OSError as exc:
            raise EncodingError(f"cannot read file '{file.path}': {exc}", cause=exc) from exc
        return filename, data, file.content_type or guess_content_type(filename)
    raise EncodingError(f"unsupported file payload: {type(file).__name__}")


__all__ = ["DEFAULT_CONTENT_TYPE", "FilePart", "file_part", "guess_content_type"]
