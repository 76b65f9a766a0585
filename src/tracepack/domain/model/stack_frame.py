"""Stack frame value object and its annotated proxy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tracepack.domain.model.packaging_info import PackagingInfo


@dataclass(frozen=True, slots=True)
class StackFrame:
    """One entry of a stack trace.

    Two frames are equal when all four fields are equal. Frame alignment
    relies on this.

    Attributes:
        class_name: Dotted name of the code owner (module.Class or module)
        method_name: Function name
        file_name: Source file (None if unknown)
        line_number: Current line (0 if unknown)
    """

    class_name: str
    method_name: str
    file_name: str | None
    line_number: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.class_name:
            raise ValueError("class_name must not be empty")
        if not self.method_name:
            raise ValueError("method_name must not be empty")
        if self.line_number < 0:
            raise ValueError(f"line_number must be >= 0, got {self.line_number}")

    def __str__(self) -> str:
        """Format as class.method(file:line)."""
        return f"{self.class_name}.{self.method_name}({self.file_name}:{self.line_number})"


class FrameProxy:
    """Reported stack frame with a packaging slot.

    The frame itself is immutable; only packaging is written, and writing
    replaces the previous value.
    """

    __slots__ = ("frame", "packaging")

    def __init__(self, frame: StackFrame, packaging: PackagingInfo | None = None) -> None:
        if not isinstance(frame, StackFrame):
            raise TypeError(f"frame must be StackFrame, got {type(frame).__name__}")
        self.frame = frame
        self.packaging = packaging

    @property
    def class_name(self) -> str:
        return self.frame.class_name

    def __repr__(self) -> str:
        return f"FrameProxy({self.frame!s}, packaging={self.packaging})"
