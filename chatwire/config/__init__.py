"""Unified configuration layer for service clients.

Goals
-----
* Centralize defaults (models, base URLs) per OpenAI-compatible provider.
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by CHATWIRE_CONFIG_FILE
    3. Environment variables (e.g. OPENAI_MODEL, OPENAI_API_KEY)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``.
* Keep zero hard dependency on PyYAML (YAML is parsed only if installed).

Environment Variable Conventions
--------------------------------
<PROVIDER>_API_KEY, <PROVIDER>_BASE_URL, <PROVIDER>_MODEL, <PROVIDER>_ORGANIZATION
e.g. OPENAI_API_KEY, OPENROUTER_BASE_URL. A ``.env`` file (path from
CHATWIRE_DOTENV_FILE, default ``.env``) is loaded once; it only fills
variables that are unset or hold placeholder values.

External Config File (Optional)
-------------------------------
JSON is attempted first, then YAML when PyYAML is available::

    openai:
      model: gpt-4o-mini
      organization: org-123
    openrouter:
      base_url: https://openrouter.ai/api/v1

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* load_client_settings(provider: str = "openai", overrides: dict | None = None) -> ClientSettings
* get_model(provider: str) -> str | None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from ..base.dto.client_settings import ClientSettings
from .defaults import (
    DEEPSEEK_DEFAULT_BASE_URL,
    DEEPSEEK_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
    XAI_DEFAULT_BASE_URL,
    XAI_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_provider_key

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore

CONFIG_FILE_ENV = "CHATWIRE_CONFIG_FILE"
DOTENV_FILE_ENV = "CHATWIRE_DOTENV_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "openrouter": {"model": OPENROUTER_DEFAULT_MODEL, "base_url": OPENROUTER_DEFAULT_BASE_URL},
    "deepseek": {"model": DEEPSEEK_DEFAULT_MODEL, "base_url": DEEPSEEK_DEFAULT_BASE_URL},
    "xai": {"model": XAI_DEFAULT_MODEL, "base_url": XAI_DEFAULT_BASE_URL},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "organization": "ORGANIZATION",
}

_FILE_CACHE: Dict[str, Dict[str, Any]] = {}
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables are overridden only when they look like placeholders.
    """
    global _DOTENV_LOADED  # noqa: PLW0603 - module level once-flag
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                os.environ[k] = v


def _parse_config_text(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        if yaml is None:
            return {}
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            return {}
    return data if isinstance(data, dict) else {}


def _load_external_config() -> Dict[str, Any]:
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    if path in _FILE_CACHE:
        return _FILE_CACHE[path]
    p = Path(path)
    data = _parse_config_text(p.read_text(encoding="utf-8")) if p.exists() else {}
    _FILE_CACHE[path] = data
    return data


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    return out


def reset_config_cache() -> None:
    """Forget the parsed config file and the .env once-flag (tests)."""
    global _DOTENV_LOADED  # noqa: PLW0603
    _FILE_CACHE.clear()
    _DOTENV_LOADED = False


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars ->
    aliased key env vars (only if no key yet) -> overrides. ``None`` values in
    ``overrides`` are ignored.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {"provider": name}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if not cfg.get("api_key"):
        key, _ = resolve_provider_key(name)
        if key:
            cfg["api_key"] = key

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def load_client_settings(provider: str = "openai", overrides: Optional[Dict[str, Any]] = None) -> ClientSettings:
    """Merge configuration for ``provider`` and validate it as :class:`ClientSettings`."""
    return ClientSettings.from_mapping(get_provider_config(provider, overrides))


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "load_client_settings",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
    "CONFIG_FILE_ENV",
]
