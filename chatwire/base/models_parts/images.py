"""Image generation endpoint DTOs (``POST /images/generations``)."""
from __future__ import annotations

from typing import List, Optional

from .wire_model import WireModel


class ImageGenerationRequest(WireModel):
    prompt: str
    model: Optional[str] = None
    n: Optional[int] = None
    size: Optional[str] = None
    quality: Optional[str] = None
    style: Optional[str] = None
    response_format: Optional[str] = None
    user: Optional[str] = None


class GeneratedImage(WireModel):
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None


class ImageGenerationResponse(WireModel):
    created: Optional[int] = None
    data: List[GeneratedImage]


__all__ = ["ImageGenerationRequest", "GeneratedImage", "ImageGenerationResponse"]
