"""HTTP client construction helpers."""

from .client import build_async_client

__all__ = ["build_async_client"]
