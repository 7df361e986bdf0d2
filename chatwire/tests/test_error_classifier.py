"""Response classification and exception-to-code mapping."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from chatwire.base.errors import (
    ApiError,
    ChatwireError,
    ErrorCode,
    ErrorKind,
    ProtocolError,
    TransportError,
    classify_exception,
    status_error_code,
)
from chatwire.base.models import ChatCompletionResponse, FileDeleted
from chatwire.base.transport import classify_binary, classify_json

ENVELOPE = {
    "error": {
        "message": "Invalid model",
        "type": "invalid_request_error",
        "code": "model_not_found",
        "param": "model",
    }
}


def test_200_with_unparsable_body_is_protocol_error():
    with pytest.raises(ProtocolError) as info:
        classify_json(200, b"<html>oops</html>", ChatCompletionResponse)
    err = info.value
    assert err.status_code == 200  # nosec B101
    assert err.raw_body == "<html>oops</html>"  # nosec B101
    assert err.kind is ErrorKind.PROTOCOL  # nosec B101


def test_200_with_empty_object_is_not_an_empty_success():
    with pytest.raises(ProtocolError):
        classify_json(200, b"{}", ChatCompletionResponse)


def test_4xx_with_envelope_is_api_error_with_details():
    body = json.dumps(ENVELOPE).encode()

    with pytest.raises(ApiError) as info:
        classify_json(404, body, ChatCompletionResponse)
    err = info.value
    assert err.status_code == 404  # nosec B101
    assert err.code is ErrorCode.NOT_FOUND  # nosec B101
    assert err.message == "Invalid model"  # nosec B101
    assert err.error_type == "invalid_request_error"  # nosec B101
    assert err.error_code == "model_not_found"  # nosec B101
    assert err.envelope is not None and err.envelope.error.param == "model"  # nosec B101
    assert err.raw_body == body.decode()  # nosec B101


def test_numeric_envelope_code_is_stringified():
    body = json.dumps({"error": {"message": "slow down", "code": 1302}})

    with pytest.raises(ApiError) as info:
        classify_json(429, body)
    assert info.value.error_code == "1302"  # nosec B101
    assert info.value.code is ErrorCode.RATE_LIMIT  # nosec B101


def test_non_2xx_without_envelope_is_protocol_error():
    with pytest.raises(ProtocolError) as info:
        classify_json(502, b"Bad Gateway")
    assert info.value.status_code == 502  # nosec B101
    assert info.value.raw_body == "Bad Gateway"  # nosec B101
    assert not isinstance(info.value, ApiError)  # nosec B101


def test_success_decodes_model_or_raw_json():
    model = classify_json(200, b'{"id":"file-1","deleted":true}', FileDeleted)
    assert isinstance(model, FileDeleted) and model.deleted is True  # nosec B101
    assert classify_json(200, b'{"a":[1,2]}') == {"a": [1, 2]}  # nosec B101


def test_binary_success_and_failure():
    assert classify_binary(200, b"\x00\x01") == b"\x00\x01"  # nosec B101
    with pytest.raises(ApiError):
        classify_binary(401, json.dumps(ENVELOPE).encode())


@pytest.mark.parametrize(
    "status,code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (408, ErrorCode.TIMEOUT),
        (409, ErrorCode.CONFLICT),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (502, ErrorCode.TRANSIENT),
        (503, ErrorCode.UNAVAILABLE),
        (504, ErrorCode.TIMEOUT),
        (599, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.UNKNOWN),
    ],
)
def test_status_error_code_mapping(status, code):
    assert status_error_code(status) is code  # nosec B101


def test_classify_exception_types():
    request = httpx.Request("GET", "https://api.test")
    err = TransportError("x", code=ErrorCode.CANCELLED)
    assert classify_exception(err) is ErrorCode.CANCELLED  # nosec B101
    assert classify_exception(httpx.ReadTimeout("slow", request=request)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused", request=request)) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_exception(httpx.ReadError("reset", request=request)) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(RuntimeError("connection reset by peer")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(RuntimeError("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_error_str_includes_kind_code_and_status():
    err = ApiError("nope", code=ErrorCode.AUTH, status_code=401)
    assert isinstance(err, ChatwireError)  # nosec B101
    assert str(err) == "api/auth (HTTP 401): nope"  # nosec B101
