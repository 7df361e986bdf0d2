"""chatwire package

Async client for OpenAI-compatible HTTP APIs.

Purpose:
    Provide typed request/response models, a single transport that classifies
    every failure into one error taxonomy, SSE streaming, and a tool-calling
    loop that runs in-process Python handlers.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`OpenAIClient` and the endpoint services
    - Models: chat, embeddings, images, audio and files DTOs
    - Errors: :class:`ChatwireError` and its subclasses, :class:`ErrorCode`
    - Tools: :class:`ToolRegistry`, :class:`ToolCallOrchestrator`
    - Cancellation: :class:`CancellationToken`
"""

from .base.cancellation import CancellationToken
from .base.errors import (
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
from .base.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    ContentPart,
    EmbeddingRequest,
    EmbeddingResponse,
    FileContent,
    FilePathReference,
    FileUploadRequest,
    ImageGenerationRequest,
    ImageGenerationResponse,
    SpeechRequest,
    StreamChunk,
    ToolCall,
    ToolDefinition,
    TranscriptionRequest,
    TranscriptionResponse,
)
from .base.streaming import SseDecoder, StreamSummary
from .base.tools import ToolCallOrchestrator, ToolRegistry
from .base.transport import TransportClient
from .config import get_provider_config, load_client_settings
from .openai import Audio, ChatCompletions, Embeddings, Files, Images, OpenAIClient

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Client
    "OpenAIClient",
    "ChatCompletions",
    "Embeddings",
    "Images",
    "Audio",
    "Files",
    "TransportClient",
    "SseDecoder",
    "StreamSummary",
    # Config
    "get_provider_config",
    "load_client_settings",
    # Models
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "ContentPart",
    "StreamChunk",
    "ToolCall",
    "ToolDefinition",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "ImageGenerationRequest",
    "ImageGenerationResponse",
    "SpeechRequest",
    "TranscriptionRequest",
    "TranscriptionResponse",
    "FileContent",
    "FilePathReference",
    "FileUploadRequest",
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
    # Tools
    "ToolRegistry",
    "ToolCallOrchestrator",
    # Cancellation
    "CancellationToken",
]
