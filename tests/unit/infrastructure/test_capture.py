"""Tests for infrastructure/capture.py."""

from __future__ import annotations

import json

import pytest

from tracepack.infrastructure.capture import exception_chain, exception_frames, record_from_exception


class WidgetError(Exception):
    pass


class _Unprintable(Exception):
    def __str__(self) -> str:
        raise RuntimeError("no text")


def _raise_value_error() -> None:
    raise ValueError("bad value")


def _raise_chained() -> None:
    try:
        _raise_value_error()
    except ValueError as exc:
        raise WidgetError("wrapped") from exc


def _catch(func) -> BaseException:
    try:
        func()
    except BaseException as exc:  # noqa: BLE001
        return exc
    raise AssertionError("nothing raised")


class TestExceptionChain:
    """Tests for exception_chain."""

    def test_explicit_cause(self) -> None:
        exc = _catch(_raise_chained)
        assert [type(e) for e in exception_chain(exc)] == [WidgetError, ValueError]

    def test_implicit_context(self) -> None:
        def raise_during_handling() -> None:
            try:
                _raise_value_error()
            except ValueError:
                raise KeyError("during handling")  # noqa: B904

        exc = _catch(raise_during_handling)
        assert [type(e) for e in exception_chain(exc)] == [KeyError, ValueError]

    def test_suppressed_context(self) -> None:
        def raise_from_none() -> None:
            try:
                _raise_value_error()
            except ValueError:
                raise KeyError("clean") from None

        exc = _catch(raise_from_none)
        assert [type(e) for e in exception_chain(exc)] == [KeyError]

    def test_cycle_terminates(self) -> None:
        first, second = ValueError("a"), ValueError("b")
        first.__cause__ = second
        second.__cause__ = first
        assert list(exception_chain(first)) == [first, second]


class TestExceptionFrames:
    """Tests for exception_frames."""

    def test_not_raised(self) -> None:
        assert exception_frames(ValueError("never raised")) == []

    def test_most_recent_first(self) -> None:
        exc = _catch(_raise_value_error)

        frames = exception_frames(exc)

        assert frames[0].method_name == "_raise_value_error"
        assert frames[0].class_name == __name__
        assert frames[1].method_name == "_catch"
        assert frames[2].method_name == "test_most_recent_first"
        assert frames[2].class_name == f"{__name__}.TestExceptionFrames"

    def test_raise_line_recorded(self) -> None:
        exc = _catch(_raise_value_error)
        assert exception_frames(exc)[0].line_number == _raise_value_error.__code__.co_firstlineno + 1

    def test_library_frames(self) -> None:
        exc = _catch(lambda: json.loads("{"))
        class_names = [frame.class_name for frame in exception_frames(exc)]
        assert "json.decoder.JSONDecoder" in class_names


class TestRecordFromException:
    """Tests for record_from_exception."""

    def test_chain_converted(self) -> None:
        record = record_from_exception(_catch(_raise_chained))

        assert record.type_name == f"{__name__}.WidgetError"
        assert record.message == "wrapped"
        assert record.cause is not None
        assert record.cause.type_name == "ValueError"
        assert record.cause.message == "bad value"
        assert record.cause.cause is None

    def test_frames_are_unannotated_proxies(self) -> None:
        record = record_from_exception(_catch(_raise_value_error))
        assert record.frames
        assert all(proxy.packaging is None for proxy in record.frames)

    def test_cycle(self) -> None:
        first, second = ValueError("a"), KeyError("b")
        first.__cause__ = second
        second.__cause__ = first

        record = record_from_exception(first)

        assert [r.type_name for r in record.chain()] == ["ValueError", "KeyError"]

    def test_single_exception(self) -> None:
        record = record_from_exception(_catch(_raise_value_error))

        assert record.type_name == "ValueError"
        assert record.cause is None
        assert len(list(record.chain())) == 1

    def test_unraised_exception_has_no_frames(self) -> None:
        assert record_from_exception(ValueError("x")).frames == ()

    def test_unprintable_message(self) -> None:
        assert record_from_exception(_Unprintable()).message == "<unprintable>"

    def test_rejects_non_exception(self) -> None:
        with pytest.raises(TypeError, match="must be BaseException"):
            record_from_exception("boom")  # type: ignore[arg-type]
