"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``chatwire.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.error_kind import ErrorKind
from .errors_parts.chatwire_error import ChatwireError
from .errors_parts.error_types import (
    ApiError,
    BoundedRoundsError,
    EncodingError,
    ProtocolError,
    StreamError,
    ToolExecutionError,
    TransportError,
)
from .errors_parts.classification import classify_exception, status_error_code

__all__ = [
    "ErrorCode",
    "ErrorKind",
    "ChatwireError",
    "TransportError",
    "ProtocolError",
    "EncodingError",
    "ApiError",
    "StreamError",
    "ToolExecutionError",
    "BoundedRoundsError",
    "classify_exception",
    "status_error_code",
]
