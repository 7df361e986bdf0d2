"""Embeddings endpoint DTOs (``POST /embeddings``)."""
from __future__ import annotations

from typing import List, Optional, Union

from .usage import Usage
from .wire_model import WireModel


class EmbeddingRequest(WireModel):
    model: str
    input: Union[str, List[str], List[int], List[List[int]]]
    dimensions: Optional[int] = None
    encoding_format: Optional[str] = None
    user: Optional[str] = None


class Embedding(WireModel):
    index: int = 0
    object: Optional[str] = None
    # float vector, or a base64 string when encoding_format="base64"
    embedding: Union[List[float], str]


class EmbeddingResponse(WireModel):
    object: Optional[str] = None
    data: List[Embedding]
    model: Optional[str] = None
    usage: Optional[Usage] = None

    def vectors(self) -> List[List[float]]:
        """Float vectors ordered by ``index``."""
        ordered = sorted(self.data, key=lambda e: e.index)
        return [e.embedding for e in ordered if isinstance(e.embedding, list)]


__all__ = ["EmbeddingRequest", "Embedding", "EmbeddingResponse"]
