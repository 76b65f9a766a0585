"""Reported exception with its frames and cause chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tracepack.domain.model.stack_frame import FrameProxy, StackFrame

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(slots=True, eq=False)
class ThrowableRecord:
    """Node of a reported exception chain.

    Frames are ordered most recent call first: index 0 is where the exception
    was raised, the last index is the outermost caller.

    Attributes:
        type_name: Qualified exception type name
        message: Exception message
        frames: Frames of this exception, owned by this record
        cause: Next record in the chain (None at the end)
    """

    type_name: str
    message: str
    frames: tuple[FrameProxy, ...]
    cause: ThrowableRecord | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.type_name:
            raise ValueError("type_name must not be empty")
        for proxy in self.frames:
            if not isinstance(proxy, FrameProxy):
                raise TypeError(f"frames must contain FrameProxy, got {type(proxy).__name__}")

    @classmethod
    def of(
        cls,
        type_name: str,
        frames: Iterable[StackFrame],
        *,
        message: str = "",
        cause: ThrowableRecord | None = None,
    ) -> ThrowableRecord:
        """Build a record from plain frames (most recent first)."""
        return cls(
            type_name=type_name,
            message=message,
            frames=tuple(FrameProxy(frame) for frame in frames),
            cause=cause,
        )

    def chain(self) -> Iterator[ThrowableRecord]:
        """Iterate this record and its causes, each record at most once."""
        seen: set[int] = set()
        record: ThrowableRecord | None = self
        while record is not None and id(record) not in seen:
            seen.add(id(record))
            yield record
            record = record.cause

    @property
    def stack_frames(self) -> tuple[StackFrame, ...]:
        """Plain frames without packaging."""
        return tuple(proxy.frame for proxy in self.frames)
