"""Domain model: immutable value objects and the reported exception chain."""

from tracepack.domain.model.configuration import ResolverConfig
from tracepack.domain.model.packaging_info import NA, PackagingInfo
from tracepack.domain.model.stack_frame import FrameProxy, StackFrame
from tracepack.domain.model.throwable_record import ThrowableRecord

__all__ = [
    "NA",
    "FrameProxy",
    "PackagingInfo",
    "ResolverConfig",
    "StackFrame",
    "ThrowableRecord",
]
