"""One-time environment probes.

Two optional facilities are detected once, when a calculator is built:
- caller lookup: sys._getframe, for exact owner resolution of live frames
- distribution index: importlib.metadata, for distribution name/version

Result is an immutable Capabilities value passed to TypeResolver and
ArtifactLocator. Nothing is re-probed per call.
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from tracepack.domain.model.configuration import ResolverConfig
from tracepack.infrastructure.introspection import frame_owner

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)

# depth -> owner of the live frame at that depth (None if unknown)
CallerLookup = Callable[[int], object | None]


def _frame_owner_at(depth: int) -> object | None:
    """Owner of the live frame depth levels up; 0 is the function calling this."""
    try:
        # SLF001: sys._getframe is the only non-raising frame accessor
        frame = sys._getframe(depth + 1)  # noqa: SLF001
    except ValueError:
        # Stack is not that deep
        return None
    return frame_owner(frame)


@dataclass(frozen=True, slots=True)
class DistributionRef:
    """Installed distribution providing a module.

    Attributes:
        name: Distribution name as declared in its metadata
        version: Distribution version
    """

    name: str
    version: str


class DistributionIndex:
    """Top-level import package -> installed distributions.

    Built from importlib.metadata.packages_distributions(). Distribution
    metadata is read on demand; callers cache the results.
    """

    __slots__ = ("_packages",)

    def __init__(self, packages: Mapping[str, Sequence[str]]) -> None:
        self._packages: dict[str, tuple[str, ...]] = {
            top: tuple(sorted(set(names))) for top, names in packages.items() if names
        }

    @classmethod
    def from_metadata(cls) -> DistributionIndex:
        """Index installed distributions of the running interpreter."""
        return cls(importlib.metadata.packages_distributions())

    def __len__(self) -> int:
        return len(self._packages)

    def distributions_for(self, module_name: str) -> tuple[str, ...]:
        """Distribution names providing the top-level package of module_name."""
        return self._packages.get(module_name.partition(".")[0], ())

    def lookup(self, module_name: str, file: str | None = None) -> DistributionRef | None:
        """Distribution providing module_name, None if not installed.

        When several distributions share the top-level package (namespace
        packages), the one whose RECORD lists file wins.

        Raises:
            importlib.metadata.PackageNotFoundError: Index is stale.
        """
        names = self.distributions_for(module_name)
        if not names:
            return None
        dist = importlib.metadata.distribution(self._pick(names, file))
        return DistributionRef(name=dist.name, version=dist.version)

    def _pick(self, names: tuple[str, ...], file: str | None) -> str:
        if len(names) == 1 or file is None:
            return names[0]
        target = Path(file).resolve()
        for name in names:
            dist = importlib.metadata.distribution(name)
            for entry in dist.files or ():
                if Path(str(dist.locate_file(entry))).resolve() == target:
                    return name
        return names[0]


@dataclass(frozen=True, slots=True)
class Capabilities:
    """Probed environment facilities. None = facility unavailable.

    Attributes:
        caller_lookup: Live frame owner by depth
        distributions: Installed distribution index
    """

    caller_lookup: CallerLookup | None = None
    distributions: DistributionIndex | None = None

    @classmethod
    def probe(cls, config: ResolverConfig | None = None) -> Capabilities:
        """Detect available facilities once.

        Args:
            config: Can switch off either probe. Defaults to ResolverConfig().
        """
        config = config or ResolverConfig()
        caller_lookup = _probe_caller_lookup() if config.use_caller_lookup else None
        distributions = _probe_distributions() if config.use_distributions else None
        logger.debug(
            "capabilities probed: caller_lookup=%s distributions=%s",
            caller_lookup is not None,
            None if distributions is None else len(distributions),
        )
        return cls(caller_lookup=caller_lookup, distributions=distributions)

    @property
    def has_caller_lookup(self) -> bool:
        """Check if exact owner resolution is possible."""
        return self.caller_lookup is not None

    @property
    def has_distributions(self) -> bool:
        """Check if distribution metadata is available."""
        return self.distributions is not None


def _probe_caller_lookup() -> CallerLookup | None:
    getframe = getattr(sys, "_getframe", None)
    if getframe is None:
        logger.debug("sys._getframe unavailable, exact resolution disabled")
        return None
    try:
        getframe(0)
    except Exception:
        logger.warning("sys._getframe probe failed, exact resolution disabled", exc_info=True)
        return None
    return _frame_owner_at


def _probe_distributions() -> DistributionIndex | None:
    if getattr(importlib.metadata, "packages_distributions", None) is None:
        logger.debug("importlib.metadata.packages_distributions unavailable")
        return None
    try:
        return DistributionIndex.from_metadata()
    except Exception:
        logger.warning("distribution index probe failed", exc_info=True)
        return None
