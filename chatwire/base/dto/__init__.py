"""Boundary DTOs shared by the service layer."""

from .client_settings import ClientSettings

__all__ = ["ClientSettings"]
