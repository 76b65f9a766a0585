"""tracepack - annotate stack traces with the artifacts that produced each frame."""

__version__ = "0.1.0"

from tracepack.application.services.calculator import PackagingCalculator
from tracepack.domain.model import (
    NA,
    FrameProxy,
    PackagingInfo,
    ResolverConfig,
    StackFrame,
    ThrowableRecord,
)
from tracepack.infrastructure.capture import record_from_exception
from tracepack.infrastructure.loaders import context_loader

__all__ = [
    "NA",
    "FrameProxy",
    "PackagingCalculator",
    "PackagingInfo",
    "ResolverConfig",
    "StackFrame",
    "ThrowableRecord",
    "__version__",
    "context_loader",
    "record_from_exception",
]
