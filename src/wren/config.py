"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from wren.http.request import resolve_path


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(
            path_resolver=lambda event: event["rawPath"],
            complete_on_exhaustion=True,
        )
    """

    # Extracts the request path from an incoming event; None skips every
    # pattern-gated group.
    path_resolver: Callable[[Any], str | None] = resolve_path

    # Status code a fresh response starts with
    default_status: int = 200

    # Resolve with the current response state when the chain runs out
    # without a terminal action (body is None in that case)
    complete_on_exhaustion: bool = False
