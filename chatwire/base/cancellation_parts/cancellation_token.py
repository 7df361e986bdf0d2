"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class threaded through request sends,
stream line reads and tool handler invocations. Besides polling via
``raise_if_cancelled`` the token can *race* an awaitable with ``guard`` so an
in-flight await is abandoned as soon as ``cancel`` is called, even from
another thread.
"""

from __future__ import annotations

import asyncio
import contextlib
from threading import Lock
from typing import Awaitable, Callable, List, TypeVar

from .state import State
from .cancelled_error import CancelledError

T = TypeVar("T")


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for ``cancel``, ``raise_if_cancelled`` and callback
    registration. Child tokens inherit cancellation when the parent is
    cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, fire callbacks and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
        message = reason or "operation cancelled"
        for callback in callbacks:
            callback(message)
        for child in children:
            child.cancel(reason)

    def add_callback(self, callback: Callable[[str], None]) -> None:
        """Invoke ``callback(reason)`` once on cancellation (immediately if already cancelled)."""
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return
            message = self._state.reason or "operation cancelled"
        callback(message)

    def remove_callback(self, callback: Callable[[str], None]) -> None:
        with self._lock:
            with contextlib.suppress(ValueError):
                self._state.callbacks.remove(callback)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token fires first.

        The awaitable runs as a task raced against the token. When the token
        wins, the task is cancelled and awaited before ``CancelledError`` is
        raised, so resources it holds are released first. Cancelling the
        calling task cancels the inner task as well.
        """
        if self._state.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            self.raise_if_cancelled()
        loop = asyncio.get_running_loop()
        task = asyncio.ensure_future(awaitable)
        waiter: asyncio.Future[str] = loop.create_future()

        def _resolve(reason: str) -> None:
            if not waiter.done():
                waiter.set_result(reason)

        def _wake(reason: str) -> None:
            loop.call_soon_threadsafe(_resolve, reason)

        self.add_callback(_wake)
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            self.remove_callback(_wake)
            waiter.cancel()

        if task.done():
            return task.result()
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task
        raise CancelledError(self._state.reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
