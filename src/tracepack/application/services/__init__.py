"""Application services: alignment, caching and the packaging calculator."""

from tracepack.application.services.aligner import count_common_frames
from tracepack.application.services.cache import ArtifactCache
from tracepack.application.services.calculator import PackagingCalculator

__all__ = [
    "ArtifactCache",
    "PackagingCalculator",
    "count_common_frames",
]
