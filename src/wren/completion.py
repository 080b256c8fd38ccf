"""Completion resolver — bridges a dispatch's terminal action to the caller.

Every dispatch returns a ``concurrent.futures.Future``. If the caller also
supplied a callback, it is invoked alongside the future: ``(None, reply)``
on success, ``(error,)`` on failure. Both styles are honoured together.
"""

import logging
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from wren.errors import DispatchFailed, ResponseAlreadySent
from wren.http.response import Reply

logger = logging.getLogger("wren.dispatch")

Callback = Callable[..., Any]


class Completion:
    """Resolves one dispatch exactly once."""

    __slots__ = ("_callback", "_done", "future")

    def __init__(self, callback: Callback | None = None) -> None:
        if callback is not None and not callable(callback):
            msg = f"callback must be callable, got {type(callback).__name__}"
            raise TypeError(msg)
        self._callback = callback
        self._done = False
        self.future: Future[Reply] = Future()

    @property
    def done(self) -> bool:
        return self._done

    def _finish(self, action: str) -> None:
        if self._done:
            raise ResponseAlreadySent(action)
        self._done = True

    def succeed(self, reply: Reply, *, action: str = "send") -> None:
        """Resolve the future with *reply* and call ``callback(None, reply)``."""
        self._finish(action)
        # The future may have been cancelled by a caller that timed out.
        if not self.future.done():
            self.future.set_result(reply)
        if self._callback is not None:
            self._callback(None, reply)

    def fail(self, error: Any, *, action: str = "error") -> None:
        """Reject the future with *error* and call ``callback(error)``.

        Futures only hold exceptions, so other error values are wrapped in
        ``DispatchFailed`` for the future. The callback gets the raw value.
        """
        self._finish(action)
        logger.debug("Dispatch failed: %r", error)
        if not self.future.done():
            exc = error if isinstance(error, BaseException) else DispatchFailed(error)
            self.future.set_exception(exc)
        if self._callback is not None:
            self._callback(error)
