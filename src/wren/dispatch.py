"""Dispatch engine — flattens the registry and drives the handler chain.

One ``DispatchState`` is built per call and owns everything mutable: the
work queue, the request, the response builder, and the error in flight.
The registry is only read, so overlapping dispatches of the same router
never see each other's state.

The chain is driven by ``Advance``, the continuation handed to every
handler. Each call pops units off the front of the queue:

- a ``SubDispatcher`` is replaced by its registry's groups,
- a ``HandlerGroup`` is replaced by its units, or dropped when its
  pattern does not match the request path,
- a ``Handler`` is invoked when its kind fits the current mode (normal
  handlers without an error in flight, error handlers with one) and
  skipped otherwise.

When the queue runs dry with an error still in flight, the error is
delivered to the caller.
"""

import asyncio
import inspect
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from wren._internal.invoke import schedule
from wren.completion import Completion
from wren.config import RouterConfig
from wren.http.request import Request
from wren.http.response import ResponseBuilder
from wren.routing.pattern import PathMatcher
from wren.routing.registry import Handler, HandlerGroup, HandlerKind, SubDispatcher, Unit

logger = logging.getLogger("wren.dispatch")

QueueItem = HandlerGroup | Unit


@dataclass(slots=True)
class DispatchState:
    """Per-call state. Created fresh for every dispatch, never shared."""

    queue: deque[QueueItem]
    request: Request
    response: ResponseBuilder
    completion: Completion
    config: RouterConfig
    error: Any = None
    pending: set[asyncio.Future[Any]] = field(default_factory=set)


class Advance:
    """The continuation passed to handlers.

    ``advance()`` moves to the next handler; ``advance(err)`` puts *err* in
    flight so only error handlers run until one clears it.
    ``advance.route()`` first discards the normal handlers left in the
    current stack.

    Returns whatever the next invoked handler returned (the scheduled task
    when that was awaitable), or ``None`` if no handler ran.
    """

    __slots__ = ("_state",)

    def __init__(self, state: DispatchState) -> None:
        self._state = state

    def __call__(self, error: Any = None) -> Any:
        state = self._state
        if state.completion.done:
            # The dispatch ended with its terminal action; nothing else runs.
            if error is not None:
                logger.warning(
                    "Error reached the chain after the response was sent",
                    exc_info=error if isinstance(error, BaseException) else None,
                )
            return None

        queue = state.queue
        state.error = error

        while queue:
            unit = queue.popleft()

            if isinstance(unit, SubDispatcher):
                queue.extendleft(reversed(unit.registry.entries))
                continue

            if isinstance(unit, HandlerGroup):
                if unit.pattern is not None:
                    try:
                        params = self._match(unit.pattern)
                    except Exception as exc:
                        logger.debug("Dropping group whose pattern failed to match: %r", exc)
                        error = state.error = exc
                        continue
                    if params is None:
                        continue
                    state.request.merge_params(params)
                queue.extendleft(reversed(unit.units))
                continue

            # Error handlers only run with an error in flight, normal
            # handlers only without one.
            if (error is None) == unit.consumes_errors:
                continue
            return self._invoke(unit, error)

        self._exhausted(error)
        return None

    def route(self, error: Any = None) -> Any:
        """Skip the rest of the current handler stack, then advance.

        Discards every normal handler at the front of the queue, stopping at
        the first error handler, group, or sub-dispatcher.
        """
        queue = self._state.queue
        while queue and isinstance(queue[0], Handler) and queue[0].kind is HandlerKind.NORMAL:
            queue.popleft()
        return self(error)

    def _match(self, pattern: PathMatcher) -> dict[str, str] | None:
        path = self._state.request.path
        if path is None:
            logger.debug("No request path; skipping pattern-gated group %r", pattern)
            return None
        return pattern.match(path)

    def _invoke(self, handler: Handler, error: Any) -> Any:
        state = self._state
        try:
            if error is None:
                result = handler(state.request, state.response, self)
            else:
                result = handler(state.request, state.response, self, error)
        except Exception as exc:
            return self(exc)

        if inspect.isawaitable(result):
            return schedule(result, on_failure=self, pending=state.pending)
        return result

    def _exhausted(self, error: Any) -> None:
        state = self._state
        if error is not None:
            state.completion.fail(error, action="advance")
        elif state.config.complete_on_exhaustion:
            state.completion.succeed(state.response.snapshot(), action="advance")
        else:
            logger.debug("Handler chain exhausted without a response")


def start(
    entries: tuple[HandlerGroup, ...],
    event: Any,
    context: Any,
    completion: Completion,
    config: RouterConfig,
) -> DispatchState:
    """Build the state for one dispatch and run the chain until it yields.

    A path resolver that raises starts the chain with that error in flight.
    """
    error = None
    try:
        path = config.path_resolver(event)
    except Exception as exc:
        logger.debug("Path resolver failed: %r", exc)
        path, error = None, exc

    state = DispatchState(
        queue=deque(entries),
        request=Request(event=event, context=context, path=path),
        response=ResponseBuilder(completion, status_code=config.default_status),
        completion=completion,
        config=config,
    )
    Advance(state)(error)
    return state
