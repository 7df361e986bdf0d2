"""OpenAI-compatible client facade.

This module wires one :class:`TransportClient` to the endpoint services
(chat, embeddings, images, audio, files). Settings come from the unified
configuration layer unless given explicitly; any OpenAI-compatible provider
configured there (``openai``, ``openrouter``, ``deepseek``, ``xai``) can be
targeted by name.

Lifecycle: the facade owns the transport it builds. An injected
``httpx.AsyncClient`` stays owned by the caller.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..base.dto.client_settings import ClientSettings
from ..base.logging import get_logger, normalized_log_event
from ..base.log_support.logging_context import LogContext
from ..base.tools import ToolCallOrchestrator, ToolRegistry
from ..base.transport import TransportClient
from ..config import load_client_settings
from .audio import Audio
from .chat import ChatCompletions
from .embeddings import Embeddings
from .files import Files
from .images import Images


class OpenAIClient:
    """Entry point bundling the endpoint services over one transport.

    Args:
        provider: Configuration section to load when ``settings`` is omitted.
        settings: Explicit settings; skips the configuration layer.
        http_client: Optional ``httpx.AsyncClient`` to send requests on.
        **overrides: Per-call configuration overrides (``api_key``,
            ``base_url``, ``model``, ``organization``, ``timeout_seconds``).

    Raises:
        ValueError: no API key could be resolved.
    """

    def __init__(
        self,
        provider: str = "openai",
        *,
        settings: Optional[ClientSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        **overrides: Any,
    ) -> None:
        self._settings = settings or load_client_settings(provider, overrides or None)
        api_key = self._settings.secret()
        if not api_key:
            raise ValueError(f"no API key configured for provider '{self._settings.provider}'")
        self._logger = get_logger(f"chatwire.{self._settings.provider}")
        self._transport = TransportClient(
            api_key,
            self._settings.base_url,
            http_client=http_client,
            timeouts=self._settings.timeout_config() if http_client is None or self._settings.timeout_seconds is not None else None,
            organization=self._settings.organization,
            headers=self._settings.headers,
            provider=self._settings.provider,
        )
        self.chat = ChatCompletions(self._transport)
        self.embeddings = Embeddings(self._transport)
        self.images = Images(self._transport)
        self.audio = Audio(self._transport)
        self.files = Files(self._transport)
        normalized_log_event(
            self._logger,
            "client.init",
            LogContext(provider=self._settings.provider, model=self._settings.model),
            phase="start",
            base_url=self._settings.base_url,
        )

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def transport(self) -> TransportClient:
        return self._transport

    @property
    def default_model(self) -> Optional[str]:
        return self._settings.model

    def tool_orchestrator(self, registry: ToolRegistry) -> ToolCallOrchestrator:
        """Tool-calling loop bound to this client's chat service."""
        return ToolCallOrchestrator(self.chat, registry, logger=get_logger("chatwire.tools"))

    def describe(self) -> Dict[str, Any]:
        """Non-secret summary of the effective settings."""
        return {
            "provider": self._settings.provider,
            "model": self._settings.model,
            "base_url": self._settings.base_url,
            "organization": self._settings.organization,
        }

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "OpenAIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["OpenAIClient"]
