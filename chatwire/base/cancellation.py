"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``chatwire.base.cancellation`` import path while the concrete implementations
live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is accepted by ``TransportClient.send``/``stream``,
  the SSE decoder, ``ToolRegistry.execute`` and the tool orchestrator.
- ``CancelledError`` is raised by ``CancellationToken.guard`` and
  ``raise_if_cancelled``; public operations translate it into a
  ``ChatwireError`` whose code is ``ErrorCode.CANCELLED``.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
