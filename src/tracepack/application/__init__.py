"""Application layer: orchestrates domain objects and infrastructure."""

from tracepack.application.services import (
    ArtifactCache,
    PackagingCalculator,
    count_common_frames,
)

__all__ = [
    "ArtifactCache",
    "PackagingCalculator",
    "count_common_frames",
]
