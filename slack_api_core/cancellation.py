"""Cancellation tokens passed explicitly to every remote call."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, TypeVar

from .errors import SlackCancelledError

_T = TypeVar("_T")


class CancelToken:
    """Caller-owned cancellation signal with an optional deadline.

    A token fires either when ``cancel()`` is called or when its deadline
    passes. Tokens are bound to the event loop that awaits them; call
    ``cancel()`` from that loop (use ``loop.call_soon_threadsafe`` from other
    threads).

    Usage:
        token = CancelToken(timeout=5.0)
        identity = await session.auth_test(token)
    """

    def __init__(self, *, timeout: float | None = None) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None
        self._deadline: float | None = (
            time.monotonic() + timeout if timeout is not None else None
        )

    @property
    def cancelled(self) -> bool:
        """True once cancelled explicitly or past the deadline."""
        return self._event.is_set() or self.expired

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def reason(self) -> str | None:
        if self._event.is_set():
            return self._reason
        if self.expired:
            return "deadline exceeded"
        return None

    def cancel(self, reason: str = "cancelled") -> None:
        """Fire the token. Later calls keep the first reason."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    async def wait(self) -> None:
        """Wait until ``cancel()`` is called. Deadlines are not observed here."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise SlackCancelledError(self.reason or "cancelled")


async def run_cancellable(
    cancel: CancelToken,
    operation: Coroutine[Any, Any, _T],
    *,
    discard: Callable[[_T], Awaitable[None]] | None = None,
) -> _T:
    """Run ``operation`` until it finishes or ``cancel`` fires.

    On cancellation the operation task is cancelled and awaited, so resources
    held inside its context managers are released before this returns. A
    result that completed alongside the cancellation is never returned; it is
    handed to ``discard`` when one is given.

    Raises:
        SlackCancelledError: ``cancel`` fired or its deadline passed first.
    """
    task = asyncio.ensure_future(operation)
    waiter = asyncio.ensure_future(cancel.wait())
    done: set[asyncio.Future[Any]] = set()
    try:
        done, _ = await asyncio.wait(
            {task, waiter},
            timeout=cancel.remaining(),
            return_when=asyncio.FIRST_COMPLETED,
        )
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    if cancel.cancelled or not done:
        if not task.cancelled() and task.exception() is None and discard is not None:
            await discard(task.result())
        raise SlackCancelledError(cancel.reason or "deadline exceeded")

    return task.result()
