"""OpenAI-compatible endpoint services and the client facade."""

from .audio import Audio
from .chat import ChatCompletions
from .client import OpenAIClient
from .embeddings import Embeddings
from .files import Files
from .images import Images
from . import message_builder

__all__ = [
    "OpenAIClient",
    "ChatCompletions",
    "Embeddings",
    "Images",
    "Audio",
    "Files",
    "message_builder",
]
