"""tracepack domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, dataclasses, collections.abc
"""

from tracepack.domain.exceptions import (
    IncompatibleDefinitionError,
    OwnerNotFoundError,
    TracepackError,
)
from tracepack.domain.model import (
    NA,
    FrameProxy,
    PackagingInfo,
    ResolverConfig,
    StackFrame,
    ThrowableRecord,
)
from tracepack.domain.ports import LoaderProtocol

__all__ = [
    # Exceptions
    "TracepackError",
    "OwnerNotFoundError",
    "IncompatibleDefinitionError",
    # Value objects
    "NA",
    "StackFrame",
    "PackagingInfo",
    "ResolverConfig",
    # Entities
    "FrameProxy",
    "ThrowableRecord",
    # Ports
    "LoaderProtocol",
]
