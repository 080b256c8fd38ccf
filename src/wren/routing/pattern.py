"""Route patterns — the matcher contract and the default pattern syntax.

The dispatch engine only depends on ``PathMatcher``: given a path, return
the bound parameters or ``None``. ``compile_pattern`` adapts the values a
registration accepts (strings, compiled regexes, custom matchers) to that
contract.

String syntax::

    "/users"               static path
    "/users/:id"           named segment        -> {"id": "42"}
    "/files/*rest"         splat, spans slashes -> {"rest": "a/b.txt"}
    "/users/{id:int}"      typed segment        -> {"id": "42"}
    "/users(/:id)"         optional part
"""

import re
from typing import Protocol, runtime_checkable
from urllib.parse import unquote

from wren.errors import PatternError
from wren.routing.params import CONVERTERS

_NAME = re.compile(r"[A-Za-z_]\w*")


@runtime_checkable
class PathMatcher(Protocol):
    """Anything that can match a request path.

    ``match`` returns the bound parameters (possibly empty) or ``None``
    when the path does not match.
    """

    def match(self, path: str) -> dict[str, str] | None: ...


def translate(pattern: str) -> str:
    """Translate a route pattern string into an anchored regex source.

    Raises ``PatternError`` for unbalanced parentheses, duplicate or
    missing parameter names, and unknown converters.
    """
    out: list[str] = []
    names: set[str] = set()
    depth = 0
    i = 0

    def bind(name: str, regex: str) -> str:
        if name in names:
            raise PatternError(pattern, f"duplicate parameter {name!r}")
        names.add(name)
        return f"(?P<{name}>{regex})"

    while i < len(pattern):
        char = pattern[i]
        if char in ":*":
            name_match = _NAME.match(pattern, i + 1)
            if name_match is None:
                if char == ":":
                    raise PatternError(pattern, f"missing parameter name at offset {i}")
                # Bare splat: match anything without binding it
                out.append(".*?")
                i += 1
                continue
            name = name_match.group()
            out.append(bind(name, "[^/]+" if char == ":" else ".*?"))
            i = name_match.end()
        elif char == "{":
            end = pattern.find("}", i)
            if end == -1:
                raise PatternError(pattern, f"unclosed '{{' at offset {i}")
            inner = pattern[i + 1 : end]
            name, _, param_type = inner.partition(":")
            param_type = param_type or "str"
            if not _NAME.fullmatch(name):
                raise PatternError(pattern, f"invalid parameter name {name!r}")
            if param_type not in CONVERTERS:
                raise PatternError(pattern, f"unknown converter {param_type!r}")
            out.append(bind(name, CONVERTERS[param_type]))
            i = end + 1
        elif char == "(":
            depth += 1
            out.append("(?:")
            i += 1
        elif char == ")":
            if depth == 0:
                raise PatternError(pattern, f"unbalanced ')' at offset {i}")
            depth -= 1
            out.append(")?")
            i += 1
        else:
            out.append(re.escape(char))
            i += 1

    if depth:
        raise PatternError(pattern, "unbalanced '('")
    return "^" + "".join(out) + "$"


class RoutePattern:
    """A string route pattern, compiled on first use.

    Compilation is deferred so that registration never validates syntax;
    a bad pattern raises ``PatternError`` the first time it is matched.
    """

    __slots__ = ("_regex", "source")

    def __init__(self, source: str) -> None:
        self.source = source
        self._regex: re.Pattern[str] | None = None

    def _compile(self) -> re.Pattern[str]:
        if self._regex is None:
            self._regex = re.compile(translate(self.source))
        return self._regex

    def match(self, path: str) -> dict[str, str] | None:
        found = self._compile().match(path)
        if found is None:
            return None
        return {name: unquote(value) for name, value in found.groupdict().items() if value is not None}

    def __repr__(self) -> str:
        return f"RoutePattern({self.source!r})"


class RegexPattern:
    """A compiled regex used as a route pattern.

    Unanchored (``search``); named groups that took part in the match
    become params.
    """

    __slots__ = ("regex",)

    def __init__(self, regex: re.Pattern[str]) -> None:
        self.regex = regex

    def match(self, path: str) -> dict[str, str] | None:
        found = self.regex.search(path)
        if found is None:
            return None
        return {name: value for name, value in found.groupdict().items() if value is not None}

    def __repr__(self) -> str:
        return f"RegexPattern({self.regex.pattern!r})"


def is_pattern(value: object) -> bool:
    """True if *value* can be used as the pattern of a registration."""
    if isinstance(value, (str, re.Pattern)):
        return True
    # Handlers and registries are callables or expose no ``match``; a
    # matcher object is the only other accepted pattern.
    return isinstance(value, PathMatcher) and not callable(value)


def compile_pattern(pattern: str | re.Pattern[str] | PathMatcher) -> PathMatcher:
    """Adapt a registration pattern to the ``PathMatcher`` contract."""
    if isinstance(pattern, str):
        return RoutePattern(pattern)
    if isinstance(pattern, re.Pattern):
        return RegexPattern(pattern)
    return pattern
