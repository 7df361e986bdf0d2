"""
Concrete failure kinds raised by the client.

Each subclass fixes :attr:`ChatwireError.kind` so callers can branch with a
plain ``except`` clause instead of inspecting attributes:

- :class:`TransportError`: the request never produced a classified response
  (connection failure, timeout, cooperative cancellation).
- :class:`ProtocolError`: a response arrived but its body could not be
  decoded as the expected model or as an error envelope.
- :class:`EncodingError`: the request could not be encoded (unsupported
  multipart shape, colliding extension key). Raised before sending.
- :class:`ApiError`: the service answered non-2xx with a valid error envelope.
- :class:`StreamError`: a streaming response failed after it was opened.
- :class:`ToolExecutionError`: a tool handler failed or was unknown.
- :class:`BoundedRoundsError`: the tool-calling loop ran out of rounds.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .chatwire_error import ChatwireError
from .error_code import ErrorCode
from .error_kind import ErrorKind


@dataclass(eq=False)
class TransportError(ChatwireError):
    kind: ErrorKind = ErrorKind.TRANSPORT


@dataclass(eq=False)
class ProtocolError(ChatwireError):
    kind: ErrorKind = ErrorKind.PROTOCOL


@dataclass(eq=False)
class EncodingError(ProtocolError):
    code: ErrorCode = ErrorCode.VALIDATION


@dataclass(eq=False)
class ApiError(ChatwireError):
    """Non-2xx response carrying a parsed provider error envelope."""

    kind: ErrorKind = ErrorKind.API

    @property
    def error_type(self) -> Optional[str]:
        """Provider error ``type`` (e.g. ``invalid_request_error``)."""
        detail = self.envelope.error if self.envelope is not None else None
        return detail.type if detail is not None else None

    @property
    def error_code(self) -> Optional[str]:
        """Provider error ``code`` as sent on the wire, stringified."""
        detail = self.envelope.error if self.envelope is not None else None
        if detail is None or detail.code is None:
            return None
        return str(detail.code)


@dataclass(eq=False)
class StreamError(ChatwireError):
    kind: ErrorKind = ErrorKind.STREAM


@dataclass(eq=False)
class ToolExecutionError(ChatwireError):
    """A tool handler raised, or the requested tool is not registered."""

    kind: ErrorKind = ErrorKind.TOOL_EXECUTION
    code: ErrorCode = ErrorCode.INTERNAL
    tool_name: Optional[str] = None


@dataclass(eq=False)
class BoundedRoundsError(ChatwireError):
    """The model kept requesting tools past the configured round budget."""

    kind: ErrorKind = ErrorKind.BOUNDED_ROUNDS
    code: ErrorCode = ErrorCode.UNSUPPORTED
    max_rounds: int = 0


__all__ = [
    "TransportError",
    "ProtocolError",
    "EncodingError",
    "ApiError",
    "StreamError",
    "ToolExecutionError",
    "BoundedRoundsError",
]
