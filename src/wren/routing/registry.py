"""Handler registry — ordered groups of handlers and mounted sub-registries.

Registration order is dispatch order. Each ``register()`` call appends one
``HandlerGroup``; a registry passed as a unit is mounted as a
``SubDispatcher`` and flattened into the work queue at dispatch time.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from wren.errors import ConfigurationError
from wren.routing.pattern import PathMatcher, compile_pattern, is_pattern


class HandlerKind(Enum):
    """Whether a handler runs on the normal path or consumes errors."""

    NORMAL = "normal"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Handler:
    """A registered handler and its declared kind.

    ``NORMAL`` handlers are called as ``func(request, response, advance)``;
    ``ERROR`` handlers as ``func(request, response, advance, error)`` and
    only while an error is in flight.
    """

    func: Callable[..., Any]
    kind: HandlerKind = HandlerKind.NORMAL

    @classmethod
    def error(cls, func: Callable[..., Any]) -> "Handler":
        """Declare *func* as an error-consuming handler."""
        return cls(func=func, kind=HandlerKind.ERROR)

    @property
    def consumes_errors(self) -> bool:
        return self.kind is HandlerKind.ERROR

    def __call__(self, *args: Any) -> Any:
        return self.func(*args)


def error_handler(func: Callable[..., Any]) -> Handler:
    """Decorator form of ``Handler.error``::

        @error_handler
        def report(request, response, advance, error):
            response.status(500).send(str(error))
    """
    return Handler.error(func)


@dataclass(frozen=True, slots=True)
class SubDispatcher:
    """A registry mounted inside another registry."""

    registry: "Registry"


Unit = Handler | SubDispatcher


@dataclass(frozen=True, slots=True)
class HandlerGroup:
    """The units of one ``register()`` call and the pattern gating them.

    When ``pattern`` is set and does not match, every unit in the group
    is skipped.
    """

    pattern: PathMatcher | None
    units: tuple[Unit, ...]


class Registry:
    """Ordered, append-only collection of handler groups.

    Usage::

        api = Registry()
        api.register("/users/:id", load_user, show_user)

        root = Registry()
        root.register(parse_body)
        root.register("/api/*rest", api)

    Registries are never mutated by dispatch, so one registry can be
    mounted under several parents and dispatched concurrently.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[HandlerGroup] = []

    def register(self, *args: Any) -> None:
        """Append one handler group.

        If the first argument is a pattern (``str``, compiled regex, or a
        ``PathMatcher``) it gates the whole group. Remaining arguments are
        callables, ``Handler`` objects, or registries, kept in call order.
        """
        pattern: PathMatcher | None = None
        units = args
        if units and is_pattern(units[0]):
            pattern = compile_pattern(units[0])
            units = units[1:]

        if not units:
            msg = "register() needs at least one handler or registry."
            raise ConfigurationError(msg)

        self._entries.append(HandlerGroup(pattern=pattern, units=tuple(self._as_unit(u) for u in units)))

    use = register

    def _as_unit(self, value: Any) -> Unit:
        if isinstance(value, Handler):
            return value
        if isinstance(value, Registry):
            if value is self:
                msg = "A registry cannot be mounted inside itself."
                raise ConfigurationError(msg)
            return SubDispatcher(registry=value)
        if isinstance(value, (str, re.Pattern)):
            msg = (
                f"Unexpected pattern {value!r}: a route pattern must be the first "
                "argument to register()."
            )
            raise ConfigurationError(msg)
        if callable(value):
            return Handler(func=value)
        msg = f"Cannot register {value!r}: expected a callable, Handler, or Registry."
        raise ConfigurationError(msg)

    @property
    def entries(self) -> tuple[HandlerGroup, ...]:
        """Snapshot of the registered groups, in registration order."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self._entries)})"
