"""Unified timeout configuration for the transport layer.

This module centralizes the timeout values applied to HTTP exchanges and
converts them into :class:`httpx.Timeout` objects for the async client.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration, re-parsing environment overrides
    only when they change. Supported environment variables (all optional):
        CHATWIRE_TIMEOUT_CONNECT_SECONDS
        CHATWIRE_TIMEOUT_READ_SECONDS
        CHATWIRE_TIMEOUT_STREAM_SECONDS

to_httpx_timeout(config, streaming=False)
    Builds the ``httpx.Timeout`` for a regular exchange or for a streaming
    response, where ``read`` bounds the idle gap between two SSE lines.

Design Constraints
------------------
1. No hard-coded ad-hoc timeouts outside this module.
2. Avoid per-call env parsing (cache keyed on the raw env values).
3. Invalid or non-positive values fall back to defaults silently.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

CONNECT_ENV = "CHATWIRE_TIMEOUT_CONNECT_SECONDS"
READ_ENV = "CHATWIRE_TIMEOUT_READ_SECONDS"
STREAM_ENV = "CHATWIRE_TIMEOUT_STREAM_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to establish the connection.
        read_timeout_seconds: Time allowed for a whole non-streaming response
            (also used for writes and pool acquisition).
        stream_timeout_seconds: Idle timeout while waiting for the next line
            of a streaming response.
    """

    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = 60.0
    stream_timeout_seconds: float = 300.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is refreshed when any of the ``CHATWIRE_TIMEOUT_*`` variables
    change between calls, which lets tests adjust them at runtime.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in (CONNECT_ENV, READ_ENV, STREAM_ENV))
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(CONNECT_ENV, defaults.connect_timeout_seconds),
        read_timeout_seconds=_parse_env_float(READ_ENV, defaults.read_timeout_seconds),
        stream_timeout_seconds=_parse_env_float(STREAM_ENV, defaults.stream_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


def to_httpx_timeout(config: TimeoutConfig | None = None, *, streaming: bool = False) -> httpx.Timeout:
    """Translate a :class:`TimeoutConfig` into an ``httpx.Timeout``."""
    cfg = config or get_timeout_config()
    read = cfg.stream_timeout_seconds if streaming else cfg.read_timeout_seconds
    return httpx.Timeout(
        connect=cfg.connect_timeout_seconds,
        read=read,
        write=cfg.read_timeout_seconds,
        pool=cfg.connect_timeout_seconds,
    )


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "to_httpx_timeout",
    "CONNECT_ENV",
    "READ_ENV",
    "STREAM_ENV",
]
