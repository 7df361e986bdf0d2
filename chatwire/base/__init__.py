"""
Client Base Package

Provider-agnostic building blocks shared by the endpoint services:

- Models (DTOs): wire request/response objects with extension maps
- Encoding: JSON bodies, multipart text fields and file parts
- Transport: bearer-authenticated exchanges and error classification
- Streaming: SSE decoding and chunk accumulation
- Tools: definitions, registry and the multi-round orchestrator
- Errors, cancellation, timeouts and structured logging
"""

from .cancellation import CancellationToken, CancelledError
from .errors import (
    ApiError,
    BoundedRoundsError,
    ChatwireError,
    EncodingError,
    ErrorCode,
    ErrorKind,
    ProtocolError,
    StreamError,
    ToolExecutionError,
    TransportError,
)
from .timeouts import TimeoutConfig, get_timeout_config
from .transport import TransportClient
from .streaming import SseDecoder, StreamSummary, collect_stream
from .tools import ToolCallOrchestrator, ToolRegistry

__all__ = [
    # Cancellation
    "CancellationToken",
    "CancelledError",
    # Errors
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
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
    # Exchange
    "TransportClient",
    "SseDecoder",
    "StreamSummary",
    "collect_stream",
    # Tools
    "ToolRegistry",
    "ToolCallOrchestrator",
]
