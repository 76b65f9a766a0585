"""Loader port: lookup of a code owner by dotted name."""

from __future__ import annotations

from typing import Protocol


class LoaderProtocol(Protocol):
    """Contract for owner loaders.

    A loader maps a dotted owner name ("pkg.mod.Class" or "pkg.mod") to the
    live class or module object.

    Example:
        loader = ModuleLoader()
        owner = loader.load("json.decoder.JSONDecoder")
    """

    def load(self, name: str) -> object:
        """Resolve dotted name to its owner object.

        Args:
            name: Dotted owner name

        Returns:
            Class or module object

        Raises:
            LookupError: Name not found or defined elsewhere
            ImportError: Module could not be imported
        """
        ...
