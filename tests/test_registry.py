"""Tests for wren.routing.registry — handler groups and mounting."""

import re

import pytest

from wren.errors import ConfigurationError
from wren.routing.pattern import RegexPattern, RoutePattern
from wren.routing.registry import (
    Handler,
    HandlerGroup,
    HandlerKind,
    Registry,
    SubDispatcher,
    error_handler,
)


def _handler(req, res, advance) -> None:
    advance()


def _on_error(req, res, advance, error) -> None:
    advance(error)


class TestHandler:
    def test_plain_callable_is_normal(self) -> None:
        registry = Registry()
        registry.register(_handler)

        (unit,) = registry.entries[0].units
        assert unit == Handler(func=_handler, kind=HandlerKind.NORMAL)
        assert unit.consumes_errors is False

    def test_error_constructor(self) -> None:
        handler = Handler.error(_on_error)
        assert handler.kind is HandlerKind.ERROR
        assert handler.consumes_errors is True

    def test_error_handler_decorator(self) -> None:
        @error_handler
        def report(req, res, advance, error) -> None:
            pass

        assert isinstance(report, Handler)
        assert report.kind is HandlerKind.ERROR

    def test_handler_is_still_callable(self) -> None:
        handler = error_handler(lambda req, res, advance, error: error)
        assert handler(None, None, None, "boom") == "boom"

    def test_frozen(self) -> None:
        handler = Handler(func=_handler)
        with pytest.raises(AttributeError):
            handler.kind = HandlerKind.ERROR  # type: ignore[misc]


class TestRegister:
    def test_one_group_per_call(self) -> None:
        registry = Registry()
        registry.register(_handler, _handler)
        registry.register(_handler)

        assert len(registry) == 2
        assert [len(group.units) for group in registry.entries] == [2, 1]

    def test_use_is_an_alias(self) -> None:
        registry = Registry()
        registry.use(_handler)
        assert len(registry) == 1

    def test_no_pattern(self) -> None:
        registry = Registry()
        registry.register(_handler)
        assert registry.entries[0].pattern is None

    def test_string_pattern_extracted_once(self) -> None:
        registry = Registry()
        registry.register("/users/:id", _handler, _handler)

        group = registry.entries[0]
        assert isinstance(group.pattern, RoutePattern)
        assert group.pattern.source == "/users/:id"
        assert len(group.units) == 2

    def test_regex_pattern(self) -> None:
        registry = Registry()
        registry.register(re.compile(r"^/users"), _handler)
        assert isinstance(registry.entries[0].pattern, RegexPattern)

    def test_invalid_pattern_not_validated_at_registration(self) -> None:
        registry = Registry()
        registry.register("/users/(:id", _handler)
        assert len(registry) == 1

    def test_sub_registry_interleaved_in_call_order(self) -> None:
        sub = Registry()
        registry = Registry()
        registry.register(_handler, sub, _on_error)

        units = registry.entries[0].units
        assert units[0] == Handler(func=_handler)
        assert units[1] == SubDispatcher(registry=sub)
        assert units[2] == Handler(func=_on_error)

    def test_mounted_registry_gated_by_pattern(self) -> None:
        sub = Registry()
        registry = Registry()
        registry.register("/sub/*all", sub)

        group = registry.entries[0]
        assert group.pattern is not None
        assert group.units == (SubDispatcher(registry=sub),)

    def test_explicit_handler_kept(self) -> None:
        handler = Handler.error(_on_error)
        registry = Registry()
        registry.register(handler)
        assert registry.entries[0].units == (handler,)


class TestRegisterErrors:
    def test_empty_registration(self) -> None:
        with pytest.raises(ConfigurationError, match="at least one"):
            Registry().register()

    def test_pattern_only(self) -> None:
        with pytest.raises(ConfigurationError, match="at least one"):
            Registry().register("/users")

    def test_pattern_not_first(self) -> None:
        with pytest.raises(ConfigurationError, match="must be the first"):
            Registry().register(_handler, "/users")

    def test_non_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="Cannot register 42"):
            Registry().register(42)

    def test_mount_self(self) -> None:
        registry = Registry()
        with pytest.raises(ConfigurationError, match="inside itself"):
            registry.register(registry)


class TestEntries:
    def test_snapshot_is_immutable(self) -> None:
        registry = Registry()
        registry.register(_handler)

        entries = registry.entries
        assert isinstance(entries, tuple)
        registry.register(_handler)
        assert len(entries) == 1
        assert len(registry.entries) == 2

    def test_groups_are_frozen(self) -> None:
        registry = Registry()
        registry.register(_handler)
        group = registry.entries[0]
        assert isinstance(group, HandlerGroup)
        with pytest.raises(AttributeError):
            group.units = ()  # type: ignore[misc]

    def test_repr(self) -> None:
        registry = Registry()
        registry.register(_handler)
        assert repr(registry) == "Registry(entries=1)"
