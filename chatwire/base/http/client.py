"""Async HTTP client factory.

Purpose:
    Build the ``httpx.AsyncClient`` used by :class:`TransportClient` when the
    caller does not inject one. Timeouts derive exclusively from
    :func:`get_timeout_config`; no numeric literals are introduced here.

Lifecycle:
    - There is no module-level pool. Each transport either receives a client
      from its caller (and never closes it) or builds one here and owns it
      until ``aclose``.
    - Connection limits, proxies and HTTP/2 are the caller's concern; pass a
      preconfigured client to control them.
"""

from __future__ import annotations

from typing import Mapping, Optional

import httpx

from ..timeouts import TimeoutConfig, to_httpx_timeout


def build_async_client(
    *,
    timeouts: Optional[TimeoutConfig] = None,
    headers: Optional[Mapping[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return a new ``httpx.AsyncClient`` configured with the client timeouts.

    Parameters:
        timeouts: Explicit timeout configuration; defaults to the
            environment-derived :func:`get_timeout_config`.
        headers: Static headers sent with every request.
        transport: Optional transport (e.g. ``httpx.MockTransport`` in tests).

    Returns:
        An unopened ``httpx.AsyncClient``; the caller owns and closes it.
    """
    return httpx.AsyncClient(
        timeout=to_httpx_timeout(timeouts),
        headers=dict(headers or {}),
        transport=transport,
    )


__all__ = ["build_async_client"]
