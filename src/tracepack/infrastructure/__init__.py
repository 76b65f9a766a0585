"""Infrastructure layer: runtime introspection, loaders, artifact lookup."""

from tracepack.infrastructure.artifact_locator import ArtifactLocator, code_origin, location_name
from tracepack.infrastructure.capabilities import Capabilities, DistributionIndex, DistributionRef
from tracepack.infrastructure.capture import record_from_exception
from tracepack.infrastructure.loaders import (
    ModuleLoader,
    SearchPathLoader,
    context_loader,
    current_context_loader,
)
from tracepack.infrastructure.type_resolver import TypeResolver

__all__ = [
    "ArtifactLocator",
    "Capabilities",
    "DistributionIndex",
    "DistributionRef",
    "ModuleLoader",
    "SearchPathLoader",
    "TypeResolver",
    "code_origin",
    "context_loader",
    "current_context_loader",
    "location_name",
    "record_from_exception",
]
