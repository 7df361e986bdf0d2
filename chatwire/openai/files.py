"""Files service: upload, list, retrieve, delete and download.

Uploads are ``multipart/form-data`` (``purpose`` text field plus the ``file``
part); downloads return raw bytes.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from ..base.cancellation import CancellationToken
from ..base.encoding import encode_multipart, file_part, to_form_data
from ..base.models import FileDeleted, FileList, FileObject, FileUploadRequest
from ..base.transport import TransportClient

FILES_PATH = "files"


def _file_path(file_id: str, suffix: str = "") -> str:
    if not file_id:
        raise ValueError("file_id must be non-empty")
    return f"{FILES_PATH}/{quote(file_id, safe='')}{suffix}"


class Files:
    def __init__(self, transport: TransportClient) -> None:
        self._transport = transport

    async def upload(
        self,
        request: FileUploadRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> FileObject:
        return await self._transport.send(
            "POST",
            FILES_PATH,
            form=to_form_data(encode_multipart(request)),
            files=[("file", file_part(request.file))],
            response_model=FileObject,
            cancel=cancel,
        )

    async def list(
        self,
        purpose: Optional[str] = None,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> FileList:
        path = f"{FILES_PATH}?purpose={quote(purpose, safe='')}" if purpose else FILES_PATH
        return await self._transport.send("GET", path, response_model=FileList, cancel=cancel)

    async def retrieve(self, file_id: str, *, cancel: Optional[CancellationToken] = None) -> FileObject:
        return await self._transport.send("GET", _file_path(file_id), response_model=FileObject, cancel=cancel)

    async def delete(self, file_id: str, *, cancel: Optional[CancellationToken] = None) -> FileDeleted:
        return await self._transport.send("DELETE", _file_path(file_id), response_model=FileDeleted, cancel=cancel)

    async def content(self, file_id: str, *, cancel: Optional[CancellationToken] = None) -> bytes:
        """Download the raw content of a stored file."""
        return await self._transport.send("GET", _file_path(file_id, "/content"), binary=True, cancel=cancel)


__all__ = ["Files", "FILES_PATH"]
