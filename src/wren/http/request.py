"""Dispatch request.

Wraps the incoming event and context for the length of one dispatch.
Only ``params`` changes, as route patterns match along the chain.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def _lookup(source: Any, key: str) -> Any:
    """Read *key* from a mapping or an attribute-style object."""
    if isinstance(source, Mapping):
        return source.get(key)
    return getattr(source, key, None)


def resolve_path(event: Any) -> str | None:
    """Default path resolver for proxy-style events.

    Reads ``event["requestContext"]["path"]`` first, then ``event["path"]``.
    Works with mappings and with objects exposing the same attributes.

    Examples::

        resolve_path({"requestContext": {"path": "/users/1"}})  -> "/users/1"
        resolve_path({"path": "/users/1"})                      -> "/users/1"
        resolve_path({})                                        -> None
    """
    request_context = _lookup(event, "requestContext")
    if request_context is not None:
        path = _lookup(request_context, "path")
        if isinstance(path, str):
            return path
    path = _lookup(event, "path")
    if isinstance(path, str):
        return path
    return None


@dataclass(slots=True)
class Request:
    """The request seen by every handler of one dispatch.

    ``params`` is ``None`` until a route pattern matches; later matches are
    merged in, with the most recent match winning on key conflicts.
    """

    event: Any
    context: Any
    path: str | None = None
    params: dict[str, str] | None = None

    def merge_params(self, params: Mapping[str, str]) -> None:
        """Merge the params bound by a matching route pattern."""
        if self.params is None:
            self.params = dict(params)
        else:
            self.params.update(params)
