"""Cancellation error type.

Defines the ``CancelledError`` raised when a :class:`CancellationToken` fires
while an operation is waiting on it. Distinct from ``asyncio.CancelledError``:
this one is an ordinary exception that the transport and tool layers convert
into a ``ChatwireError`` with code ``cancelled``.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively."""


__all__ = ["CancelledError"]
