"""chatwire.config.defaults
========================

Central place for small, stable default values used across the client. These
can be overridden via environment variables or an external config file, but
provide sensible fallbacks for local development and tests.

Only plain constants live here; this module imports nothing from the rest of
the package to avoid circular dependencies.
"""

from __future__ import annotations

# ---- OpenAI-compatible endpoints ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"

OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_MODEL = "openrouter/auto"

DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"

XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"
XAI_DEFAULT_MODEL = "grok-2-latest"

# ---- Endpoint defaults ----
EMBEDDING_DEFAULT_MODEL = "text-embedding-3-small"
IMAGE_DEFAULT_MODEL = "dall-e-3"
SPEECH_DEFAULT_MODEL = "tts-1"
SPEECH_DEFAULT_VOICE = "alloy"
TRANSCRIPTION_DEFAULT_MODEL = "whisper-1"

# ---- Tool orchestration ----
# Upper bound on model round-trips inside one tool-calling exchange.
DEFAULT_MAX_TOOL_ROUNDS = 5

__all__ = [
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_MODEL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_MODEL",
    "XAI_DEFAULT_BASE_URL",
    "XAI_DEFAULT_MODEL",
    "EMBEDDING_DEFAULT_MODEL",
    "IMAGE_DEFAULT_MODEL",
    "SPEECH_DEFAULT_MODEL",
    "SPEECH_DEFAULT_VOICE",
    "TRANSCRIPTION_DEFAULT_MODEL",
    "DEFAULT_MAX_TOOL_ROUNDS",
]
