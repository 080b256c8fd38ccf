"""Tests for wren.testing — event builder and callback recorder."""

from wren.http.response import Reply
from wren.testing import CallbackRecorder, make_event


class TestMakeEvent:
    def test_path(self) -> None:
        assert make_event("/a") == {"requestContext": {"path": "/a"}}

    def test_extra_keys(self) -> None:
        assert make_event("/a", httpMethod="GET") == {
            "requestContext": {"path": "/a"},
            "httpMethod": "GET",
        }


class TestCallbackRecorder:
    def test_records_success(self) -> None:
        cb = CallbackRecorder()
        reply = Reply(body="ok")
        cb(None, reply)

        assert cb.called
        assert cb.error is None
        assert cb.reply is reply

    def test_records_failure(self) -> None:
        cb = CallbackRecorder()
        err = RuntimeError()
        cb(err)

        assert cb.error is err
        assert cb.reply is None

    def test_not_called(self) -> None:
        assert CallbackRecorder().called is False
