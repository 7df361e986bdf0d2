"""HTTP exchange layer: the transport client and response classification."""

from ..errors_parts.classification import status_error_code
from .client import FileParts, TransportClient
from .error_classifier import body_text, classify_binary, classify_json, is_success, raise_for_error

__all__ = [
    "TransportClient",
    "FileParts",
    "classify_json",
    "classify_binary",
    "raise_for_error",
    "is_success",
    "body_text",
    "status_error_code",
]
