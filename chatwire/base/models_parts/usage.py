"""Token usage accounting DTO."""
from __future__ import annotations

from typing import Any, Dict, Optional

from .wire_model import WireModel


class Usage(WireModel):
    """Token counts reported by the service; unknown counters land in extensions."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    prompt_tokens_details: Optional[Dict[str, Any]] = None
    completion_tokens_details: Optional[Dict[str, Any]] = None


__all__ = ["Usage"]
