"""Frame alignment: length of the common outer part of two stacks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tracepack.domain.model.stack_frame import FrameProxy, StackFrame

if TYPE_CHECKING:
    from collections.abc import Sequence


def count_common_frames(
    live: Sequence[StackFrame | FrameProxy],
    reported: Sequence[StackFrame | FrameProxy],
) -> int:
    """Count equal frames at the end of both sequences.

    Both sequences are most recent first, so their ends are the outermost
    callers. Walks backward until the first mismatch or until either
    sequence is exhausted.

    Args:
        live: Stack of the annotating code
        reported: Frames of the reported exception

    Returns:
        Number of common trailing frames, 0 <= n <= min(len(live), len(reported))
    """
    live_index = len(live) - 1
    reported_index = len(reported) - 1
    count = 0
    while live_index >= 0 and reported_index >= 0:
        if _unwrap(live[live_index]) != _unwrap(reported[reported_index]):
            break
        count += 1
        live_index -= 1
        reported_index -= 1
    return count


def _unwrap(item: StackFrame | FrameProxy) -> StackFrame:
    return item.frame if isinstance(item, FrameProxy) else item
