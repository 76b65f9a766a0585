"""Artifact cache: class name -> PackagingInfo."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from tracepack.domain.model.packaging_info import PackagingInfo


class ArtifactCache:
    """Read-through memo of resolved packaging info.

    Unbounded, never evicted: owner name -> artifact mapping is assumed
    stable for the process lifetime. First write wins.

    Thread Safety:
      - _lock guards every read and write of _entries
      - Computation in get_or_compute runs outside the lock; concurrent
        callers may compute twice but store one value
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[str, PackagingInfo] = {}
        self._lock = threading.Lock()

    def get(self, class_name: str) -> PackagingInfo | None:
        """Cached info for class_name, None if absent."""
        with self._lock:
            return self._entries.get(class_name)

    def put(self, class_name: str, info: PackagingInfo) -> PackagingInfo:
        """Store info unless class_name is already cached.

        Returns:
            The stored entry (the earlier one if present)
        """
        with self._lock:
            return self._entries.setdefault(class_name, info)

    def get_or_compute(
        self,
        class_name: str,
        compute: Callable[[], PackagingInfo],
    ) -> PackagingInfo:
        """Cached info, or compute and store it."""
        cached = self.get(class_name)
        if cached is not None:
            return cached
        return self.put(class_name, compute())

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, class_name: object) -> bool:
        with self._lock:
            return class_name in self._entries
