"""Async transport for OpenAI-compatible HTTP APIs.

Purpose:
    Perform one request/response exchange: build the request (bearer auth,
    JSON or multipart body), send it on an ``httpx.AsyncClient``, classify the
    response and decode it into a model, raw JSON or raw bytes. Also opens
    streaming responses for the SSE decoder.

External dependencies:
    - ``httpx`` for the async HTTP client. A client may be injected; when it
      is not, one is built with :func:`build_async_client` and owned (closed
      by :meth:`TransportClient.aclose`).

Failure modes:
    - ``TransportError``: connection failures, timeouts and token
      cancellation, i.e. anything before a response could be classified.
    - ``ApiError`` / ``ProtocolError``: from the error classifier.
    Native ``asyncio.CancelledError`` propagates unchanged.

Logging:
    Each exchange emits ``transport.send`` start/finalize events carrying a
    short request id; request and response bodies are logged only at DEBUG.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Mapping, Optional, Sequence, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel

from ..cancellation import CancellationToken, CancelledError
from ..errors_parts.chatwire_error import ChatwireError
from ..errors_parts.classification import classify_exception
from ..errors_parts.error_code import ErrorCode
from ..errors_parts.error_types import TransportError
from ..http.client import build_async_client
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..timeouts import TimeoutConfig, get_timeout_config, to_httpx_timeout
from .error_classifier import body_text, classify_binary, classify_json, is_success, raise_for_error

M = TypeVar("M", bound=BaseModel)

FileParts = Sequence[Tuple[str, Tuple[str, bytes, str]]]


class TransportClient:
    """Bearer-authenticated request/response exchanges against one base URL.

    Args:
        api_key: Bearer credential sent on every request.
        base_url: API root (e.g. ``https://api.openai.com/v1``); request paths
            are appended to it.
        http_client: Optional preconfigured ``httpx.AsyncClient``. It is never
            closed by this object.
        timeouts: Explicit timeouts. Defaults to the environment-derived
            configuration for an owned client, and to the injected client's own
            timeout otherwise.
        organization: Optional ``OpenAI-Organization`` header value.
        headers: Extra static headers.
        logger: Logger for structured events (defaults to ``chatwire.transport``).
        provider: Provider name recorded in log context.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeouts: Optional[TimeoutConfig] = None,
        organization: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
        provider: str = "openai",
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        if not base_url:
            raise ValueError("base_url is required")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._organization = organization
        self._static_headers = dict(headers or {})
        self._provider = provider
        self._logger = logger or get_logger("chatwire.transport")
        self._owns_client = http_client is None
        if http_client is None:
            self._timeouts: Optional[TimeoutConfig] = timeouts or get_timeout_config()
            self._client = build_async_client(timeouts=self._timeouts)
        else:
            self._timeouts = timeouts
            self._client = http_client

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def provider(self) -> str:
        return self._provider

    def url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _headers(self, accept: str = "application/json") -> Dict[str, str]:
        headers = dict(self._static_headers)
        headers["Authorization"] = f"Bearer {self._api_key}"
        headers["Accept"] = accept
        if self._organization:
            headers["OpenAI-Organization"] = self._organization
        return headers

    def _timeout(self, *, streaming: bool) -> Any:
        if self._timeouts is None:
            return httpx.USE_CLIENT_DEFAULT
        return to_httpx_timeout(self._timeouts, streaming=streaming)

    def _context(self, method: str, path: str, model: Optional[str]) -> LogContext:
        return LogContext(
            provider=self._provider,
            model=model,
            endpoint=f"{method} /{path.lstrip('/')}",
            request_id=uuid.uuid4().hex[:12],
        )

    async def _dispatch(
        self,
        request: httpx.Request,
        *,
        stream: bool,
        cancel: Optional[CancellationToken],
    ) -> httpx.Response:
        """Send ``request``, mapping every pre-response failure to ``TransportError``."""
        try:
            if cancel is None:
                return await self._client.send(request, stream=stream)
            return await cancel.guard(self._client.send(request, stream=stream))
        except CancelledError as exc:
            raise TransportError(f"request cancelled: {exc}", code=ErrorCode.CANCELLED, cause=exc) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__,
                code=classify_exception(exc),
                cause=exc,
            ) from exc
        except ChatwireError:
            raise
        except Exception as exc:
            raise TransportError(
                f"unexpected transport failure: {type(exc).__name__}: {exc}",
                code=classify_exception(exc),
                cause=exc,
            ) from exc

    async def send(
        self,
        method: str,
        path: str,
        *,
        json_body: Optional[Mapping[str, Any]] = None,
        form: Optional[Mapping[str, Any]] = None,
        files: Optional[FileParts] = None,
        response_model: Optional[Type[M]] = None,
        binary: bool = False,
        cancel: Optional[CancellationToken] = None,
        model: Optional[str] = None,
    ) -> Any:
        """Perform one exchange and return its decoded result.

        Args:
            method: HTTP method.
            path: Path relative to the base URL.
            json_body: JSON body (mutually exclusive with ``form``/``files``).
            form: Multipart text fields (``to_form_data`` output).
            files: Multipart file parts as ``(field, (filename, data, type))``.
            response_model: Model for a 2xx JSON body; ``None`` returns raw JSON.
            binary: Return the raw 2xx body bytes instead of decoding JSON.
            cancel: Optional cancellation token.
            model: Model name, for log context only.

        Returns:
            ``response_model`` instance, decoded JSON value, or ``bytes``.
        """
        if json_body is not None and (form is not None or files is not None):
            raise ValueError("json_body cannot be combined with form or files")
        request = self._client.build_request(
            method,
            self.url(path),
            headers=self._headers(accept="*/*" if binary else "application/json"),
            json=json_body,
            data=form,
            files=files,
            timeout=self._timeout(streaming=False),
        )
        ctx = self._context(method, path, model)
        normalized_log_event(self._logger, "transport.send", ctx, phase="start", attempt=1)
        log_event(self._logger, "transport.request_body", ctx, level=logging.DEBUG, json=json_body, form=form)
        started = time.perf_counter()
        try:
            response = await self._dispatch(request, stream=False, cancel=cancel)
            log_event(
                self._logger,
                "transport.response_body",
                ctx,
                level=logging.DEBUG,
                status=response.status_code,
                body=None if binary and is_success(response.status_code) else body_text(response.content),
            )
            if binary:
                result = classify_binary(response.status_code, response.content)
            else:
                result = classify_json(response.status_code, response.content, response_model)
        except ChatwireError as exc:
            normalized_log_event(
                self._logger,
                "transport.send",
                ctx,
                phase="finalize",
                attempt=1,
                error_code=exc.code.value,
                emitted=False,
                status=exc.status_code,
                kind=exc.kind.value,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise
        normalized_log_event(
            self._logger,
            "transport.send",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=True,
            status=response.status_code,
            tokens=getattr(result, "usage", None),
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return result

    async def _read_body(self, response: httpx.Response, cancel: Optional[CancellationToken]) -> bytes:
        try:
            if cancel is None:
                return await response.aread()
            return await cancel.guard(response.aread())
        except CancelledError as exc:
            raise TransportError(f"request cancelled: {exc}", code=ErrorCode.CANCELLED, cause=exc) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"failed reading error body: {type(exc).__name__}",
                code=classify_exception(exc),
                status_code=response.status_code,
                cause=exc,
            ) from exc

    @asynccontextmanager
    async def stream(
        self,
        path: str,
        json_body: Mapping[str, Any],
        *,
        cancel: Optional[CancellationToken] = None,
        model: Optional[str] = None,
    ) -> AsyncIterator[httpx.Response]:
        """Open a streaming POST and yield the response once its status is 2xx.

        Non-2xx responses are read fully and classified like ``send`` would
        (``ApiError`` / ``ProtocolError``). The response is closed when the
        context exits, whether the body was consumed or not.
        """
        request = self._client.build_request(
            "POST",
            self.url(path),
            headers=self._headers(accept="text/event-stream"),
            json=json_body,
            timeout=self._timeout(streaming=True),
        )
        ctx = self._context("POST", path, model)
        normalized_log_event(self._logger, "transport.stream", ctx, phase="start", attempt=1)
        log_event(self._logger, "transport.request_body", ctx, level=logging.DEBUG, json=json_body)
        response = await self._dispatch(request, stream=True, cancel=cancel)
        try:
            if not is_success(response.status_code):
                body = await self._read_body(response, cancel)
                try:
                    raise_for_error(response.status_code, body)
                except ChatwireError as exc:
                    normalized_log_event(
                        self._logger,
                        "transport.stream",
                        ctx,
                        phase="finalize",
                        attempt=1,
                        error_code=exc.code.value,
                        emitted=False,
                        status=response.status_code,
                    )
                    raise
            normalized_log_event(
                self._logger,
                "transport.stream",
                ctx,
                phase="open",
                attempt=1,
                status=response.status_code,
            )
            yield response
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "TransportClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["TransportClient", "FileParts"]
