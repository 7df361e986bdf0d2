"""Streaming response support: SSE decoding and chunk accumulation."""

from .sse_decoder import DATA_PREFIX, DONE_MARKER, SseDecoder, decode_sse
from .accumulator import ChoiceSummary, StreamSummary, accumulate_chunks, collect_stream

__all__ = [
    "SseDecoder",
    "decode_sse",
    "DATA_PREFIX",
    "DONE_MARKER",
    "ChoiceSummary",
    "StreamSummary",
    "accumulate_chunks",
    "collect_stream",
]
