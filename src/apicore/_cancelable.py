"""Wrap one in-flight call in a cancellable awaitable.

'why': give every generated method a handle that can abort its request without touching others
"""
from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Generator
from typing import Any, Generic, TypeVar

from ._errors import RequestAbortedError
from ._logging import get_logger
from ._models import RequestState


_logger = get_logger("cancel")

T = TypeVar("T")


class AbortSignal:
    """Flag shared between a CancelableRequest and the code it runs."""

    __slots__ = ("_aborted",)

    def __init__(self) -> None:
        self._aborted: bool = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    def abort(self) -> None:
        self._aborted = True

    def raise_if_aborted(self) -> None:
        """Raise RequestAbortedError once the signal has fired.

        Checked around every suspension point so a late result is discarded.
        """

        if self._aborted:
            raise RequestAbortedError()


class CancelableRequest(Generic[T]):
    """Future-like handle over one dispatched operation.

    The operation starts immediately on the running event loop. `cancel()`
    fires the abort signal and cancels the task; awaiting a cancelled request
    raises RequestAbortedError. After settlement `cancel()` is a no-op.
    """

    def __init__(self, operation: Callable[[AbortSignal], Awaitable[T]]) -> None:
        self._signal: AbortSignal = AbortSignal()
        self._state: RequestState = RequestState.PENDING
        loop = asyncio.get_running_loop()
        self._task: asyncio.Task[T] = loop.create_task(self._run(operation))
        self._task.add_done_callback(self._on_done)

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def is_cancelled(self) -> bool:
        return self._state is RequestState.CANCELLED

    def done(self) -> bool:
        return self._state is not RequestState.PENDING

    def cancel(self) -> None:
        """Abort the request if it is still pending."""

        if self._state is not RequestState.PENDING:
            return
        self._state = RequestState.CANCELLED
        self._signal.abort()
        _ = self._task.cancel()
        _logger.debug("request cancelled")

    async def _run(self, operation: Callable[[AbortSignal], Awaitable[T]]) -> T:
        try:
            value = await operation(self._signal)
        except Exception:
            if self._state is RequestState.CANCELLED:
                raise RequestAbortedError() from None
            self._state = RequestState.REJECTED
            raise
        if self._state is RequestState.CANCELLED:
            raise RequestAbortedError()
        self._state = RequestState.FULFILLED
        return value

    def _on_done(self, task: asyncio.Task[T]) -> None:
        if task.cancelled():
            if self._state is RequestState.PENDING:
                self._state = RequestState.CANCELLED
            return
        if self._state is RequestState.CANCELLED:
            # Retrieve the discarded outcome so the loop does not report it as unhandled.
            _ = task.exception()

    async def _settle(self) -> T:
        try:
            return await self._task
        except asyncio.CancelledError:
            if self._signal.aborted:
                raise RequestAbortedError() from None
            raise

    def __await__(self) -> Generator[Any, None, T]:
        return self._settle().__await__()

    def __repr__(self) -> str:
        return f"<CancelableRequest state={self._state.value}>"
