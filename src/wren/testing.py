"""Test helpers for wren routers.

Builds proxy-style events and records callback invocations so tests can
assert on exactly what the caller saw.
"""

from dataclasses import dataclass, field
from typing import Any

from wren.http.response import Reply


def make_event(path: str = "", **extra: Any) -> dict[str, Any]:
    """Build a minimal proxy-style event for *path*.

    Extra keyword arguments become top-level event keys::

        make_event("/users/1", httpMethod="GET")
        # {"requestContext": {"path": "/users/1"}, "httpMethod": "GET"}
    """
    return {"requestContext": {"path": path}, **extra}


@dataclass
class CallbackRecorder:
    """Callback spy for ``Router.dispatch``.

    Usage::

        cb = CallbackRecorder()
        router.dispatch(event, callback=cb)
        assert cb.reply.body == "Hello"
    """

    __test__ = False  # Tell pytest this is not a test class

    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)

    @property
    def called(self) -> bool:
        return bool(self.calls)

    @property
    def error(self) -> Any:
        """Error argument of the first call, or ``None``."""
        assert self.calls, "Callback was never called"
        return self.calls[0][0]

    @property
    def reply(self) -> Reply | None:
        """Reply argument of the first call, or ``None`` for failures."""
        assert self.calls, "Callback was never called"
        args = self.calls[0]
        return args[1] if len(args) > 1 else None
