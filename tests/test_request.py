"""Tests for wren.http.request — Request and the default path resolver."""

from types import SimpleNamespace

from wren.http.request import Request, resolve_path


class TestResolvePath:
    def test_request_context_path(self) -> None:
        assert resolve_path({"requestContext": {"path": "/a"}, "path": "/b"}) == "/a"

    def test_top_level_path(self) -> None:
        assert resolve_path({"path": "/b"}) == "/b"

    def test_missing(self) -> None:
        assert resolve_path({}) is None

    def test_non_string_ignored(self) -> None:
        assert resolve_path({"requestContext": {"path": 42}}) is None

    def test_attribute_event(self) -> None:
        event = SimpleNamespace(requestContext=SimpleNamespace(path="/attr"))
        assert resolve_path(event) == "/attr"


class TestRequest:
    def test_defaults(self) -> None:
        req = Request(event={}, context={})
        assert req.path is None
        assert req.params is None

    def test_merge_params_creates_mapping(self) -> None:
        req = Request(event={}, context={})
        req.merge_params({"id": "1"})
        assert req.params == {"id": "1"}

    def test_merge_params_last_wins(self) -> None:
        req = Request(event={}, context={})
        req.merge_params({"id": "1", "tab": "posts"})
        req.merge_params({"id": "2"})
        assert req.params == {"id": "2", "tab": "posts"}

    def test_merge_copies_input(self) -> None:
        req = Request(event={}, context={})
        params = {"id": "1"}
        req.merge_params(params)
        req.merge_params({"id": "2"})
        assert params == {"id": "1"}
