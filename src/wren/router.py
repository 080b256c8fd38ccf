"""Router — the public entry point.

A ``Router`` is a ``Registry`` that can also be dispatched. Routers mount
inside each other like any registry; only the outermost router's config
applies to a dispatch.
"""

import asyncio
from concurrent.futures import Future
from typing import Any

import anyio

from wren.completion import Callback, Completion
from wren.config import RouterConfig
from wren.dispatch import start
from wren.http.response import Reply
from wren.routing.registry import Registry


class Router(Registry):
    """Registry of handlers with dispatch entry points.

    Usage::

        router = Router()

        @error_handler
        def report(req, res, advance, error):
            res.status(500).send(str(error))

        router.use("/hello/:name", lambda req, res, advance: res.send(f"Hi {req.params['name']}"))
        router.use(report)

        future = router.dispatch(event, context, callback)
        reply = await router.handle(event, timeout=5)
    """

    __slots__ = ("config",)

    def __init__(self, config: RouterConfig | None = None) -> None:
        super().__init__()
        self.config = config or RouterConfig()

    def dispatch(
        self,
        event: Any,
        context: Any = None,
        callback: Callback | None = None,
    ) -> Future[Reply]:
        """Run the handler chain for *event*.

        *context* defaults to an empty dict. *callback*, if given, receives
        ``(None, reply)`` or ``(error,)``. The returned future resolves with
        the ``Reply`` or fails with the error, whether or not a callback was
        supplied.
        """
        completion = Completion(callback)
        start(
            self.entries,
            event,
            {} if context is None else context,
            completion,
            self.config,
        )
        return completion.future

    async def handle(
        self,
        event: Any,
        context: Any = None,
        *,
        timeout: float | None = None,
    ) -> Reply:
        """Dispatch *event* and await the reply on the running loop.

        Raises ``TimeoutError`` if no terminal action fires within
        *timeout* seconds. The dispatch itself is not cancelled.
        """
        future = self.dispatch(event, context)
        with anyio.fail_after(timeout):
            return await asyncio.wrap_future(future)
