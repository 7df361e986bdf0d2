"""
Failure kinds for the client error hierarchy.

`ErrorKind` answers *where* an exchange failed (network, wire format, remote
API, stream, tool handler, round budget) while :class:`ErrorCode` answers
*why*. Each :class:`ChatwireError` subclass pins exactly one kind.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Stage at which a request/response exchange failed."""

    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    API = "api"
    STREAM = "stream"
    TOOL_EXECUTION = "tool_execution"
    BOUNDED_ROUNDS = "bounded_rounds"


__all__ = ["ErrorKind"]
