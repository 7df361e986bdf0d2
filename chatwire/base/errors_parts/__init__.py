"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chatwire.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .error_kind import ErrorKind
from .chatwire_error import ChatwireError
from .error_types import (
    ApiError,
    BoundedRoundsError,
    EncodingError,
    ProtocolError,
    StreamError,
    ToolExecutionError,
    TransportError,
)
from .classification import classify_exception, status_error_code

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
