"""Invoke helpers — hand a handler's awaitable to the running event loop.

Wren handlers can be ``def`` or ``async def``. The engine never awaits a
handler: an awaitable result is scheduled as a task, and only its failure
is routed back into the chain.

Usage::

    from wren._internal.invoke import schedule

    task = schedule(result, on_failure=advance, pending=state.pending)
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from wren.errors import DispatchError, HandlerRejected


def as_error(value: Any, detail: str) -> Any:
    """Return *value*, or a ``HandlerRejected`` if *value* is falsy."""
    if value:
        return value
    return HandlerRejected(detail, reason=value)


def schedule(
    awaitable: Awaitable[Any],
    on_failure: Callable[[Any], Any],
    pending: set[asyncio.Future[Any]],
) -> asyncio.Future[Any] | None:
    """Schedule *awaitable* on the running loop and watch it for failure.

    *on_failure* is called with the exception (or a ``HandlerRejected``
    when the task is cancelled). The task is held in *pending* until it
    settles so it cannot be garbage collected mid-flight.

    Without a running loop the awaitable is closed and *on_failure* gets a
    ``DispatchError``; ``None`` is returned.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        on_failure(DispatchError("Handler returned an awaitable but no event loop is running."))
        return None

    task = asyncio.ensure_future(awaitable, loop=loop)
    pending.add(task)

    def settled(done: asyncio.Future[Any]) -> None:
        pending.discard(done)
        if done.cancelled():
            on_failure(HandlerRejected("Handler awaitable was cancelled."))
            return
        exc = done.exception()
        if exc is not None:
            on_failure(as_error(exc, "Handler awaitable failed with a falsy error."))

    task.add_done_callback(settled)
    return task
