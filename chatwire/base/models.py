"""
Wire DTOs public surface.

This module re-exports the implementations under
``chatwire.base.models_parts`` so callers have a single stable import path.
"""

from .models_parts.wire_model import WireModel, check_extension_keys
from .models_parts.content import (
    ContentPart,
    ContentPartType,
    FileData,
    ImageUrl,
    InputAudio,
    MessageContent,
    PartsContent,
    TextContent,
)
from .models_parts.tool_types import (
    FunctionCall,
    FunctionCallDelta,
    FunctionDefinition,
    ToolCall,
    ToolCallDelta,
    ToolDefinition,
)
from .models_parts.message import ChatMessage, ChatMessageDelta
from .models_parts.usage import Usage
from .models_parts.error_envelope import ErrorDetail, ErrorEnvelope
from .models_parts.chat import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    ResponseFormat,
    StreamChoice,
    StreamChunk,
)
from .models_parts.files import (
    FileContent,
    FileDeleted,
    FileList,
    FileObject,
    FilePathReference,
    FilePayload,
    FileUploadRequest,
)
from .models_parts.embeddings import Embedding, EmbeddingRequest, EmbeddingResponse
from .models_parts.images import GeneratedImage, ImageGenerationRequest, ImageGenerationResponse
from .models_parts.audio import SpeechRequest, TranscriptionRequest, TranscriptionResponse

__all__ = [
    "WireModel",
    "check_extension_keys",
    "ContentPart",
    "ContentPartType",
    "FileData",
    "ImageUrl",
    "InputAudio",
    "MessageContent",
    "PartsContent",
    "TextContent",
    "FunctionCall",
    "FunctionCallDelta",
    "FunctionDefinition",
    "ToolCall",
    "ToolCallDelta",
    "ToolDefinition",
    "ChatMessage",
    "ChatMessageDelta",
    "Usage",
    "ErrorDetail",
    "ErrorEnvelope",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "Choice",
    "ResponseFormat",
    "StreamChoice",
    "StreamChunk",
    "FileContent",
    "FileDeleted",
    "FileList",
    "FileObject",
    "FilePathReference",
    "FilePayload",
    "FileUploadRequest",
    "Embedding",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "GeneratedImage",
    "ImageGenerationRequest",
    "ImageGenerationResponse",
    "SpeechRequest",
    "TranscriptionRequest",
    "TranscriptionResponse",
]
