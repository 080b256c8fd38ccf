"""Response builder and the finalized Reply.

Handlers share one mutable ``ResponseBuilder`` per dispatch: headers,
status, and ``props`` accumulate as the chain runs. A terminal action
(``send`` or ``error``) freezes the state into a ``Reply`` or a failure
and resolves the dispatch.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Self

from wren.errors import ResponseError

if TYPE_CHECKING:
    from wren.completion import Completion


@dataclass(frozen=True, slots=True)
class Reply:
    """The response delivered to the caller on success."""

    body: str | None
    headers: dict[str, str] = field(default_factory=dict)
    status_code: int = 200

    def to_dict(self) -> dict[str, Any]:
        """Proxy-integration shape: ``{"body", "headers", "statusCode"}``."""
        return {
            "body": self.body,
            "headers": dict(self.headers),
            "statusCode": self.status_code,
        }


class ResponseBuilder:
    """Mutable response shared by the handlers of one dispatch.

    Chainable setters return the builder itself::

        res.set({"Content-Type": "application/json"}).status(201).send(body)

    ``props`` is free-form scratch space for passing data between handlers.
    """

    __slots__ = ("_completion", "body", "headers", "props", "status_code")

    def __init__(self, completion: "Completion", *, status_code: int = 200) -> None:
        self._completion = completion
        self.headers: dict[str, str] = {}
        self.status_code = status_code
        self.body: str | None = None
        self.props: dict[str, Any] = {}

    @property
    def sent(self) -> bool:
        """True once ``send()`` or ``error()`` has resolved the dispatch."""
        return self._completion.done

    def set(self, headers: Mapping[str, str]) -> Self:
        """Merge *headers* into the response headers."""
        self.headers.update(headers)
        return self

    def status(self, status_code: int) -> Self:
        """Set the status code."""
        self.status_code = status_code
        return self

    def send(self, body: str) -> None:
        """Finalize the response and resolve the dispatch successfully.

        A non-string body is a handler bug; it is reported through
        ``error()`` instead of being delivered.
        """
        if not isinstance(body, str):
            self.error(ResponseError(f"send() requires a str body, got {type(body).__name__}"))
            return
        self.body = body
        self._completion.succeed(self.snapshot(), action="send")

    def error(self, err: Any) -> None:
        """Resolve the dispatch as failed, carrying *err* unmodified."""
        self._completion.fail(err, action="error")

    def snapshot(self) -> Reply:
        """Freeze the current state into a ``Reply``."""
        return Reply(body=self.body, headers=dict(self.headers), status_code=self.status_code)

    def __repr__(self) -> str:
        return f"ResponseBuilder(status_code={self.status_code}, headers={self.headers!r}, sent={self.sent})"
