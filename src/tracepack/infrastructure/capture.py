"""Build ThrowableRecord chains from Python exceptions.

Frames of each record cover the traceback plus the callers of the frame
that caught the exception, most recent first. With the callers included,
the trace shares its outer frames with the stack of whoever annotates it.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from tracepack.domain.model.stack_frame import FrameProxy
from tracepack.domain.model.throwable_record import ThrowableRecord
from tracepack.infrastructure.introspection import to_stack_frame, walk_stack

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tracepack.domain.model.stack_frame import StackFrame

_UNPRINTABLE = "<unprintable>"


def record_from_exception(exc: BaseException) -> ThrowableRecord:
    """Convert exc and its causes to a ThrowableRecord chain.

    Chain order: __cause__, else __context__ unless suppressed. Each
    exception appears once even if the chain loops.
    """
    if not isinstance(exc, BaseException):
        raise TypeError(f"exc must be BaseException, got {type(exc).__name__}")

    chain = list(exception_chain(exc))
    record = _to_record(chain[-1], None)
    for current in reversed(chain[:-1]):
        record = _to_record(current, record)
    return record


def _to_record(exc: BaseException, cause: ThrowableRecord | None) -> ThrowableRecord:
    return ThrowableRecord(
        type_name=_type_name(exc),
        message=_message(exc),
        frames=tuple(FrameProxy(frame) for frame in exception_frames(exc)),
        cause=cause,
    )


def exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Iterate exc and its causes, each exception once."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__


def exception_frames(exc: BaseException) -> list[StackFrame]:
    """Frames of exc, most recent first, including callers of the catcher."""
    traceback = exc.__traceback__
    if traceback is None:
        return []
    catcher = traceback.tb_frame
    frames: list[StackFrame] = []
    while traceback is not None:
        frames.append(to_stack_frame(traceback.tb_frame, traceback.tb_lineno))
        traceback = traceback.tb_next
    frames.reverse()
    frames.extend(walk_stack(catcher.f_back))
    return frames


def _type_name(exc: BaseException) -> str:
    cls = type(exc)
    if cls.__module__ == builtins.__name__:
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _message(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        return _UNPRINTABLE
