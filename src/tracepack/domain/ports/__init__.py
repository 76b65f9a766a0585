"""Domain ports (interfaces/protocols)."""

from tracepack.domain.ports.loader import LoaderProtocol

__all__ = [
    "LoaderProtocol",
]
