"""
Response classification: success value or typed failure.

Every HTTP response produced by the transport goes through this module exactly
once. The outcome is one of:

- 2xx and the body decodes as the expected model -> the model;
- 2xx and the body does not decode -> :class:`ProtocolError` (never an empty
  success);
- non-2xx and the body decodes as an :class:`ErrorEnvelope` ->
  :class:`ApiError` annotated with the status-derived :class:`ErrorCode`;
- non-2xx and the body is not an envelope -> :class:`ProtocolError`.

The raw body text and status are kept on every failure.
"""
from __future__ import annotations

import json
from typing import Any, NoReturn, Optional, Type, TypeVar, Union, overload

from pydantic import BaseModel, ValidationError

from ..errors_parts.classification import status_error_code
from ..errors_parts.error_code import ErrorCode
from ..errors_parts.error_types import ApiError, ProtocolError
from ..models_parts.error_envelope import ErrorEnvelope

M = TypeVar("M", bound=BaseModel)


def is_success(status: int) -> bool:
    return 200 <= status < 300


def body_text(body: Union[bytes, str]) -> str:
    """Decode a raw body for diagnostics without ever raising."""
    if isinstance(body, str):
        return body
    return body.decode("utf-8", errors="replace")


def raise_for_error(status: int, body: Union[bytes, str]) -> NoReturn:
    """Raise the failure for a non-2xx response.

    Raises:
        ApiError: the body is a provider error envelope.
        ProtocolError: the body could not be parsed as an envelope.
    """
    raw = body_text(body)
    try:
        envelope = ErrorEnvelope.model_validate_json(raw)
    except ValidationError as exc:
        raise ProtocolError(
            f"HTTP {status} with an unparsable error body",
            code=status_error_code(status),
            status_code=status,
            raw_body=raw,
            cause=exc,
        ) from exc
    message = envelope.error.message or f"HTTP {status}"
    raise ApiError(
        message,
        code=status_error_code(status),
        status_code=status,
        raw_body=raw,
        envelope=envelope,
    )


@overload
def classify_json(status: int, body: Union[bytes, str], response_model: Type[M]) -> M: ...


@overload
def classify_json(status: int, body: Union[bytes, str], response_model: None = None) -> Any: ...


def classify_json(status: int, body: Union[bytes, str], response_model: Optional[Type[M]] = None) -> Any:
    """Classify a JSON response.

    Args:
        status: HTTP status code.
        body: Raw response body.
        response_model: Model to validate a 2xx body into; ``None`` returns
            the decoded JSON value as-is.
    """
    if not is_success(status):
        raise_for_error(status, body)
    raw = body_text(body)
    if response_model is None:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ProtocolError(
                "response body is not valid JSON",
                code=ErrorCode.VALIDATION,
                status_code=status,
                raw_body=raw,
                cause=exc,
            ) from exc
    try:
        return response_model.model_validate_json(raw)
    except ValidationError as exc:
        raise ProtocolError(
            f"response body does not match {response_model.__name__}",
            code=ErrorCode.VALIDATION,
            status_code=status,
            raw_body=raw,
            cause=exc,
        ) from exc


def classify_binary(status: int, body: bytes) -> bytes:
    """Return the raw bytes of a 2xx response; classify failures like JSON calls."""
    if not is_success(status):
        raise_for_error(status, body)
    return body


__all__ = ["classify_json", "classify_binary", "raise_for_error", "is_success", "body_text"]
