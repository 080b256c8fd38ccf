"""Wren exception hierarchy.

Shared across the registry, the dispatch engine, and the response builder
so every module raises and catches the same types.
"""

from typing import Any


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when a registration is invalid.

    Typically raised by ``Registry.register()`` at setup time.
    """


class PatternError(ConfigurationError):
    """A route pattern could not be compiled.

    Patterns compile lazily, so this surfaces during dispatch and travels
    down the chain like any other error in flight.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


class DispatchError(WrenError):
    """The engine could not continue a dispatch."""


class HandlerRejected(DispatchError):  # noqa: N818
    """A handler's awaitable was cancelled or failed with a falsy value.

    Keeps the error in flight truthy. The original value, if any, is
    available as ``reason``.
    """

    def __init__(self, detail: str, reason: Any = None) -> None:
        self.reason = reason
        super().__init__(detail)


class DispatchFailed(DispatchError):  # noqa: N818
    """Wraps a non-exception error value so a future can carry it.

    Callbacks receive the raw value; only the future needs the wrapper.
    """

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(f"Dispatch failed: {error!r}")


class ResponseError(WrenError):
    """The response builder was used incorrectly."""


class ResponseAlreadySent(ResponseError):  # noqa: N818
    """A second terminal action was attempted on one dispatch."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"Response already sent; {action}() cannot be called again.")
