"""Packaging calculator: annotates reported frames with artifact info.

Algorithm per record of a cause chain:
1. Snapshot the live stack and count frames shared with the report.
2. Common frames: ask the live stack who owns each one. A name match is
   exact; a mismatch ("misfire") shifts the following depth lookups by
   one and falls back to name lookup hinted by the last exact loader.
3. Remaining frames: name lookup hinted by the first exact loader.

Results are cached per owner name for the calculator's lifetime.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tracepack.application.services.aligner import count_common_frames
from tracepack.application.services.cache import ArtifactCache
from tracepack.domain.model.configuration import ResolverConfig
from tracepack.domain.model.packaging_info import PackagingInfo
from tracepack.infrastructure.artifact_locator import ArtifactLocator
from tracepack.infrastructure.capabilities import Capabilities
from tracepack.infrastructure.capture import record_from_exception
from tracepack.infrastructure.introspection import capture_live_stack, qualified_name
from tracepack.infrastructure.type_resolver import TypeResolver

if TYPE_CHECKING:
    from tracepack.domain.model.stack_frame import FrameProxy
    from tracepack.domain.model.throwable_record import ThrowableRecord
    from tracepack.domain.ports.loader import LoaderProtocol

logger = logging.getLogger(__name__)


class PackagingCalculator:
    """Attaches PackagingInfo to every frame of a ThrowableRecord chain.

    Contracts:
        - Never raises from calculate(); unknown artifacts become "na"
        - Every frame of the chain ends with exactly one PackagingInfo
        - Re-running on the same chain yields the same annotations

    Lifecycle:
        calculator = PackagingCalculator()
        try:
            ...
        except Exception as exc:
            record = calculator.calculate_exception(exc)
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        capabilities: Capabilities | None = None,
        cache: ArtifactCache | None = None,
        resolver: TypeResolver | None = None,
        locator: ArtifactLocator | None = None,
    ) -> None:
        """Initialize calculator.

        Args:
            config: Resolver configuration. Uses defaults if None.
            capabilities: Probed facilities. Probed from config if None.
            cache: Artifact cache. Fresh per calculator if None.
            resolver: Owner resolver. Built from capabilities if None.
            locator: Artifact locator. Built from capabilities if None.
        """
        self._config = config or ResolverConfig()
        self._capabilities = capabilities or Capabilities.probe(self._config)
        self._cache = cache if cache is not None else ArtifactCache()
        self._resolver = resolver or TypeResolver(self._capabilities, self._config)
        self._locator = locator or ArtifactLocator(self._capabilities)

    @property
    def cache(self) -> ArtifactCache:
        return self._cache

    @property
    def capabilities(self) -> Capabilities:
        return self._capabilities

    def calculate(self, record: ThrowableRecord) -> None:
        """Annotate record and all its causes in place."""
        for current in record.chain():
            _clear(current.frames)
            try:
                self._populate_frames(current.frames)
            except Exception:
                logger.warning("packaging calculation failed for %s", current.type_name, exc_info=True)
                _fill_unavailable(current.frames)

    def calculate_exception(self, exc: BaseException) -> ThrowableRecord:
        """Capture exc as a record chain and annotate it.

        Call from the except block that caught exc, so the callers of the
        catching frame are still live and can be matched exactly.
        """
        record = record_from_exception(exc)
        self.calculate(record)
        return record

    def _populate_frames(self, frames: tuple[FrameProxy, ...]) -> None:
        # live[0] is this frame; resolve_exact(k + 1) is the owner of live[k]
        live = capture_live_stack()
        common_frames = count_common_frames(live, frames)
        local_first_common = len(live) - common_frames
        step_first_common = len(frames) - common_frames

        last_exact_loader: LoaderProtocol | None = None
        first_exact_loader: LoaderProtocol | None = None

        misfire_count = 0
        for i in range(common_frames):
            owner: object | None = None
            if self._resolver.exact_available:
                owner = self._resolver.resolve_exact(local_first_common + i - misfire_count + 1)
            proxy = frames[step_first_common + i]

            if owner is not None and qualified_name(owner) == proxy.class_name:
                last_exact_loader = self._resolver.loader_of(owner)
                if first_exact_loader is None:
                    first_exact_loader = last_exact_loader
                proxy.packaging = self._by_exact_owner(owner)
            else:
                misfire_count += 1
                proxy.packaging = self._by_name(proxy, last_exact_loader)

        self._populate_uncommon_frames(common_frames, frames, first_exact_loader)

    def _populate_uncommon_frames(
        self,
        common_frames: int,
        frames: tuple[FrameProxy, ...],
        first_exact_loader: LoaderProtocol | None,
    ) -> None:
        for proxy in frames[: len(frames) - common_frames]:
            proxy.packaging = self._by_name(proxy, first_exact_loader)

    def _by_exact_owner(self, owner: object) -> PackagingInfo:
        class_name = qualified_name(owner)
        if class_name is None:
            return PackagingInfo.unavailable()
        try:
            return self._cache.get_or_compute(
                class_name,
                lambda: self._locator.locate(owner, exact=True),
            )
        except Exception:
            logger.warning("exact resolution failed for %s", class_name, exc_info=True)
            return PackagingInfo.unavailable()

    def _by_name(self, proxy: FrameProxy, loader_hint: LoaderProtocol | None) -> PackagingInfo:
        class_name = proxy.class_name
        try:
            return self._cache.get_or_compute(
                class_name,
                lambda: self._locator.locate(
                    self._resolver.resolve_by_name(class_name, loader_hint),
                    exact=False,
                ),
            )
        except Exception:
            logger.warning("best-effort resolution failed for %s", class_name, exc_info=True)
            return PackagingInfo.unavailable()


def _clear(frames: tuple[FrameProxy, ...]) -> None:
    for proxy in frames:
        proxy.packaging = None


def _fill_unavailable(frames: tuple[FrameProxy, ...]) -> None:
    """Give frames left without packaging the placeholder."""
    for proxy in frames:
        if proxy.packaging is None:
            proxy.packaging = PackagingInfo.unavailable()
