"""Tests for domain/model/stack_frame.py."""

import pytest

from tracepack.domain.model.packaging_info import PackagingInfo
from tracepack.domain.model.stack_frame import FrameProxy, StackFrame


class TestStackFrameCreation:
    """Tests for valid StackFrame creation."""

    def test_minimal_valid(self) -> None:
        frame = StackFrame(class_name="pkg.mod.Widget", method_name="run", file_name=None, line_number=0)
        assert frame.class_name == "pkg.mod.Widget"
        assert frame.method_name == "run"
        assert frame.file_name is None
        assert frame.line_number == 0

    def test_equality_is_field_wise(self) -> None:
        a = StackFrame(class_name="m", method_name="f", file_name="m.py", line_number=3)
        b = StackFrame(class_name="m", method_name="f", file_name="m.py", line_number=3)
        c = StackFrame(class_name="m", method_name="f", file_name="m.py", line_number=4)
        assert a == b
        assert a != c
        assert hash(a) == hash(b)

    def test_is_frozen(self) -> None:
        frame = StackFrame(class_name="m", method_name="f", file_name=None, line_number=1)
        with pytest.raises(AttributeError):
            frame.line_number = 2  # type: ignore[misc]

    def test_str_format(self) -> None:
        frame = StackFrame(class_name="com.foo.Bar", method_name="baz", file_name="Bar.py", line_number=10)
        assert str(frame) == "com.foo.Bar.baz(Bar.py:10)"


class TestStackFrameFailFirst:
    """Tests for FAIL-FIRST validation in StackFrame."""

    def test_empty_class_name_raises(self) -> None:
        with pytest.raises(ValueError, match="class_name must not be empty"):
            StackFrame(class_name="", method_name="f", file_name=None, line_number=1)

    def test_empty_method_name_raises(self) -> None:
        with pytest.raises(ValueError, match="method_name must not be empty"):
            StackFrame(class_name="m", method_name="", file_name=None, line_number=1)

    def test_negative_line_raises(self) -> None:
        with pytest.raises(ValueError, match="line_number must be >= 0"):
            StackFrame(class_name="m", method_name="f", file_name=None, line_number=-1)


class TestFrameProxy:
    """Tests for FrameProxy packaging slot."""

    def test_starts_without_packaging(self) -> None:
        proxy = FrameProxy(StackFrame(class_name="m", method_name="f", file_name=None, line_number=1))
        assert proxy.packaging is None
        assert proxy.class_name == "m"

    def test_packaging_overwrites(self) -> None:
        proxy = FrameProxy(StackFrame(class_name="m", method_name="f", file_name=None, line_number=1))
        proxy.packaging = PackagingInfo.unavailable()
        proxy.packaging = PackagingInfo(location="lib", version="1.0", exact=True)
        assert proxy.packaging == PackagingInfo(location="lib", version="1.0", exact=True)

    def test_rejects_non_frame(self) -> None:
        with pytest.raises(TypeError, match="frame must be StackFrame"):
            FrameProxy("m.f")  # type: ignore[arg-type]

    def test_has_no_dict(self) -> None:
        proxy = FrameProxy(StackFrame(class_name="m", method_name="f", file_name=None, line_number=1))
        with pytest.raises(AttributeError):
            proxy.extra = 1  # type: ignore[attr-defined]
