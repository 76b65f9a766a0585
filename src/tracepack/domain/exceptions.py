"""Domain exceptions: all public errors of tracepack.

Hexagonal architecture: all exceptions visible to users defined in domain.
Infrastructure/Application use these, not define their own public exceptions.
"""


class TracepackError(Exception):
    """Base for all tracepack error exceptions.

    Allows: except TracepackError to catch all library errors.
    """


class OwnerNotFoundError(TracepackError, LookupError):
    """No loaded module or attribute matches a dotted name.

    Inherits LookupError so loaders can be treated uniformly as "not found".

    Attributes:
        name: Dotted name that failed to resolve.
    """

    def __init__(self, name: str) -> None:
        """Initialize with the unresolved name."""
        self.name = name
        super().__init__(f"no loaded owner for {name!r}")


class IncompatibleDefinitionError(TracepackError, LookupError):
    """Name resolves, but to code defined outside the loader's search path.

    Attributes:
        name: Dotted name that was looked up.
        origin: File the resolved module was loaded from (None if unknown).
    """

    def __init__(self, name: str, origin: str | None) -> None:
        """Initialize with name and actual origin."""
        self.name = name
        self.origin = origin
        super().__init__(f"{name!r} is defined outside search path (origin: {origin})")
