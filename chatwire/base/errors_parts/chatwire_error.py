"""
Structured client error exception type.

Every failure surfaced by the transport, stream decoder, tool registry and
orchestrator is a :class:`ChatwireError` (or subclass) carrying a normalized
:class:`ErrorKind` and :class:`ErrorCode` plus whatever diagnostics the failing
stage had: HTTP status, raw body text, parsed error envelope, and the
underlying exception.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .error_code import ErrorCode
from .error_kind import ErrorKind

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..models_parts.error_envelope import ErrorEnvelope


@dataclass(eq=False)
class ChatwireError(Exception):
    """Base class for all client failures.

    Attributes:
        message: Human-readable error message suitable for logging.
        kind: Stage of the exchange that failed.
        code: Normalized :class:`ErrorCode` classification for the failure.
        status_code: HTTP status when a response was received.
        raw_body: Raw response (or stream frame) text for diagnostics.
        envelope: Parsed provider error envelope, when one was present.
        cause: Original exception, when the failure wraps one.
    """

    message: str
    kind: ErrorKind = ErrorKind.PROTOCOL
    code: ErrorCode = ErrorCode.UNKNOWN
    status_code: Optional[int] = None
    raw_body: Optional[str] = None
    envelope: Optional["ErrorEnvelope"] = None
    cause: Optional[BaseException] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        status = f" (HTTP {self.status_code})" if self.status_code is not None else ""
        return f"{self.kind.value}/{self.code.value}{status}: {self.message}"


__all__ = ["ChatwireError"]
