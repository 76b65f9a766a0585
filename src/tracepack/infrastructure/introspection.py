"""Frame introspection: owner naming, live stack capture, owner lookup.

Naming rule shared by reported and live frames:
- function defined in a class body: owner is "module.Class"
- module-level function or module code: owner is "module"
- code nested in a function ("f.<locals>.g"): owner is the class enclosing
  the outermost function, or the module
"""

from __future__ import annotations

import os
import sys
import types
from pathlib import Path
from typing import TYPE_CHECKING, Final

from tracepack.domain.model.stack_frame import StackFrame

if TYPE_CHECKING:
    from collections.abc import Iterable

_LOCALS_MARKER: Final = "<locals>"
_UNKNOWN_MODULE: Final = "<unknown>"


class _StackProbe(Exception):  # noqa: N818
    """Raised and caught only to reach the current frame portably."""


def owner_path(qualname: str) -> tuple[str, ...]:
    """Attribute path from a module to the class owning a function.

    Example:
        >>> owner_path("Widget.run.<locals>.helper")
        ('Widget',)
    """
    parts = qualname.split(".")[:-1]
    if _LOCALS_MARKER in parts:
        # Drop the function that holds <locals>, keep its enclosing classes
        parts = parts[: parts.index(_LOCALS_MARKER)][:-1]
    return tuple(parts)


def declaring_name(module_name: str, qualname: str) -> str:
    """Dotted owner name for code with given qualname."""
    return ".".join((module_name, *owner_path(qualname)))


def qualified_name(owner: object) -> str | None:
    """Dotted name of a class or module, None for anything else."""
    if isinstance(owner, types.ModuleType):
        return owner.__name__
    if isinstance(owner, type):
        return f"{owner.__module__}.{owner.__qualname__}"
    return None


def module_of(owner: object) -> types.ModuleType | None:
    """Module defining owner (owner itself if it is a module)."""
    if isinstance(owner, types.ModuleType):
        return owner
    module_name = getattr(owner, "__module__", None)
    if not isinstance(module_name, str):
        return None
    return sys.modules.get(module_name)


def module_file(module: types.ModuleType | None) -> str | None:
    """Source file of module, None for builtin and namespace modules."""
    if module is None:
        return None
    file = getattr(module, "__file__", None)
    return file if isinstance(file, str) else None


def code_root(file: str, search_path: Iterable[str] | None = None) -> Path:
    """Import root holding file: longest matching sys.path entry.

    Falls back to the file's directory when no entry contains it.
    """
    path = Path(file).resolve()
    best: Path | None = None
    for entry in sys.path if search_path is None else search_path:
        root = Path(entry or os.getcwd()).resolve()
        if not path.is_relative_to(root):
            continue
        if best is None or len(root.parts) > len(best.parts):
            best = root
    return best if best is not None else path.parent


def to_stack_frame(frame: types.FrameType, line_number: int | None) -> StackFrame:
    """Convert frame object to StackFrame."""
    module_name = frame.f_globals.get("__name__")
    if not isinstance(module_name, str) or not module_name:
        module_name = _UNKNOWN_MODULE
    code = frame.f_code
    qualname = code.co_qualname
    return StackFrame(
        class_name=declaring_name(module_name, qualname),
        method_name=qualname.rsplit(".", 1)[-1],
        file_name=code.co_filename,
        line_number=line_number or 0,
    )


def walk_stack(frame: types.FrameType | None) -> list[StackFrame]:
    """Frames from frame outward, most recent first."""
    frames: list[StackFrame] = []
    while frame is not None:
        frames.append(to_stack_frame(frame, frame.f_lineno))
        frame = frame.f_back
    return frames


def capture_live_stack() -> list[StackFrame]:
    """Snapshot of the caller's stack, most recent first.

    Index 0 is the function calling capture_live_stack. Works without
    sys._getframe: the frame is reached through a caught exception.
    """
    try:
        raise _StackProbe
    except _StackProbe as probe:
        traceback = probe.__traceback__
    if traceback is None:
        return []
    return walk_stack(traceback.tb_frame.f_back)


def frame_owner(frame: types.FrameType) -> object | None:
    """Live class or module owning the code of frame.

    Returns None if the module is not loaded or the class path does not
    resolve (e.g. class created inside a function).
    """
    module = sys.modules.get(frame.f_globals.get("__name__", ""))
    if module is None:
        return None
    owner: object = module
    for attr in owner_path(frame.f_code.co_qualname):
        owner = getattr(owner, attr, None)
        if owner is None:
            return None
    return owner
