"""Wren — continuation-passing request dispatch for event handlers.

Routes an incoming event through an ordered chain of handlers, some gated
by path patterns, some mounted from nested routers, with errors carried
down the chain to the handlers declared to consume them.

Basic usage::

    from wren import Router, error_handler

    router = Router()

    def auth(req, res, advance):
        res.props["user"] = "alice"
        advance()

    @error_handler
    def report(req, res, advance, error):
        res.status(500).send(str(error))

    router.use(auth)
    router.use("/hello/:name", lambda req, res, advance: res.send(f"Hi {req.params['name']}"))
    router.use(report)

    future = router.dispatch({"requestContext": {"path": "/hello/bob"}})
    future.result().body  # "Hi bob"
"""

from importlib import import_module

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "DispatchError",
    "DispatchFailed",
    "Handler",
    "HandlerKind",
    "HandlerRejected",
    "PathMatcher",
    "PatternError",
    "Registry",
    "Reply",
    "Request",
    "ResponseAlreadySent",
    "ResponseBuilder",
    "ResponseError",
    "Router",
    "RouterConfig",
    "WrenError",
    "error_handler",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "wren.errors",
    "DispatchError": "wren.errors",
    "DispatchFailed": "wren.errors",
    "HandlerRejected": "wren.errors",
    "PatternError": "wren.errors",
    "ResponseAlreadySent": "wren.errors",
    "ResponseError": "wren.errors",
    "WrenError": "wren.errors",
    "Handler": "wren.routing.registry",
    "HandlerKind": "wren.routing.registry",
    "Registry": "wren.routing.registry",
    "error_handler": "wren.routing.registry",
    "PathMatcher": "wren.routing.pattern",
    "Reply": "wren.http.response",
    "ResponseBuilder": "wren.http.response",
    "Request": "wren.http.request",
    "Router": "wren.router",
    "RouterConfig": "wren.config",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    module = _LAZY_IMPORTS.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module), name)
