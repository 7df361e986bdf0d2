"""Image generation service (``POST /images/generations``)."""

from __future__ import annotations

from typing import Optional

from ..base.cancellation import CancellationToken
from ..base.encoding import to_json_payload
from ..base.models import ImageGenerationRequest, ImageGenerationResponse
from ..base.transport import TransportClient
from ..config.defaults import IMAGE_DEFAULT_MODEL

IMAGE_GENERATIONS_PATH = "images/generations"


class Images:
    def __init__(self, transport: TransportClient) -> None:
        self._transport = transport

    async def generate(
        self,
        request: ImageGenerationRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> ImageGenerationResponse:
        return await self._transport.send(
            "POST",
            IMAGE_GENERATIONS_PATH,
            json_body=to_json_payload(request),
            response_model=ImageGenerationResponse,
            cancel=cancel,
            model=request.model,
        )

    async def generate_one(
        self,
        prompt: str,
        *,
        model: str = IMAGE_DEFAULT_MODEL,
        size: Optional[str] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> ImageGenerationResponse:
        """Generate a single image for ``prompt``."""
        return await self.generate(
            ImageGenerationRequest(prompt=prompt, model=model, n=1, size=size),
            cancel=cancel,
        )


__all__ = ["Images", "IMAGE_GENERATIONS_PATH"]
