"""Embeddings service (``POST /embeddings``)."""

from __future__ import annotations

from typing import List, Optional, Union

from ..base.cancellation import CancellationToken
from ..base.encoding import to_json_payload
from ..base.models import EmbeddingRequest, EmbeddingResponse
from ..base.transport import TransportClient
from ..config.defaults import EMBEDDING_DEFAULT_MODEL

EMBEDDINGS_PATH = "embeddings"


class Embeddings:
    def __init__(self, transport: TransportClient) -> None:
        self._transport = transport

    async def create(
        self,
        request: EmbeddingRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> EmbeddingResponse:
        return await self._transport.send(
            "POST",
            EMBEDDINGS_PATH,
            json_body=to_json_payload(request),
            response_model=EmbeddingResponse,
            cancel=cancel,
            model=request.model,
        )

    async def embed(
        self,
        texts: Union[str, List[str]],
        *,
        model: str = EMBEDDING_DEFAULT_MODEL,
        dimensions: Optional[int] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> List[List[float]]:
        """Embed one or more texts and return their float vectors in input order."""
        response = await self.create(
            EmbeddingRequest(model=model, input=texts, dimensions=dimensions),
            cancel=cancel,
        )
        return response.vectors()


__all__ = ["Embeddings", "EMBEDDINGS_PATH"]
