"""
Provider error envelope DTOs.

Non-2xx responses from OpenAI-compatible services carry a body of the form
``{"error": {"message": ..., "type": ..., "code": ..., "param": ...}}``. The
``error`` object is required: a body without it is not an envelope and is
reported as a protocol failure instead of an API error.
"""
from __future__ import annotations

from typing import Optional, Union

from .wire_model import WireModel


class ErrorDetail(WireModel):
    message: Optional[str] = None
    type: Optional[str] = None
    code: Optional[Union[str, int]] = None
    param: Optional[str] = None


class ErrorEnvelope(WireModel):
    error: ErrorDetail


__all__ = ["ErrorDetail", "ErrorEnvelope"]
