"""Typed settings object for client construction.

Purpose
-------
Capture the connection parameters a service client needs (credential, base
URL, organization, static headers, timeout hint) in one validated object, so
the configuration layer and explicit call-site arguments meet at a single
contract.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``model_copy`` convenience.

Notes
-----
- ``timeout_seconds`` overrides the read timeout of the environment-derived
  :class:`TimeoutConfig`; connect and stream timeouts keep their values.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ..timeouts import TimeoutConfig, get_timeout_config


class ClientSettings(BaseModel):
    """Connection settings for an OpenAI-compatible service.

    Attributes
    ----------
    provider:
        Configuration section name (``"openai"``, ``"openrouter"``, ...).
    model:
        Default model used when a request omits one.
    api_key:
        Bearer credential; stored as ``SecretStr`` so it never appears in reprs.
    base_url:
        API root, e.g. ``https://api.openai.com/v1``.
    organization:
        Optional organization header value.
    timeout_seconds:
        Optional read timeout override for non-streaming requests.
    headers:
        Static headers added to every request.
    """

    model_config = ConfigDict(extra="ignore")

    provider: str = "openai"
    model: Optional[str] = None
    api_key: Optional[SecretStr] = None
    base_url: str
    organization: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    headers: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClientSettings":
        """Build settings from a merged configuration mapping."""
        return cls.model_validate(dict(data))

    def secret(self) -> Optional[str]:
        return self.api_key.get_secret_value() if self.api_key is not None else None

    def timeout_config(self) -> TimeoutConfig:
        base = get_timeout_config()
        if self.timeout_seconds is None:
            return base
        return replace(base, read_timeout_seconds=float(self.timeout_seconds))


__all__ = ["ClientSettings"]
