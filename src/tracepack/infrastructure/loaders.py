"""Owner loaders and the context loader binding.

Fallback chain used by TypeResolver:
1. hint: SearchPathLoader of the last exactly matched owner
2. context: loader bound with context_loader() for the current thread/task
3. default: ModuleLoader over sys.modules
"""

from __future__ import annotations

import contextvars
import importlib
import sys
import types
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from tracepack.domain.exceptions import IncompatibleDefinitionError, OwnerNotFoundError
from tracepack.infrastructure.introspection import code_root, module_file, module_of

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from tracepack.domain.ports.loader import LoaderProtocol

_context_loader: contextvars.ContextVar[LoaderProtocol | None] = contextvars.ContextVar(
    "tracepack_context_loader",
    default=None,
)


def current_context_loader() -> LoaderProtocol | None:
    """Loader bound to the current context, None if unbound."""
    return _context_loader.get()


@contextmanager
def context_loader(loader: LoaderProtocol | None) -> Iterator[LoaderProtocol | None]:
    """Bind loader as context loader for the duration of the block.

    Example:
        with context_loader(SearchPathLoader.for_paths(["/opt/plugins"])):
            calculator.calculate(record)
    """
    token = _context_loader.set(loader)
    try:
        yield loader
    finally:
        _context_loader.reset(token)


class ModuleLoader:
    """Resolves dotted names against loaded modules.

    Picks the longest loaded module prefix of the name, then walks the rest
    as attributes. With allow_import, a missing module is imported first.
    """

    __slots__ = ("_allow_import", "_modules")

    def __init__(
        self,
        modules: Mapping[str, types.ModuleType] | None = None,
        *,
        allow_import: bool = False,
    ) -> None:
        self._modules = sys.modules if modules is None else modules
        self._allow_import = allow_import

    def load(self, name: str) -> object:
        """Resolve name to a class or module.

        Raises:
            OwnerNotFoundError: No module prefix found or attribute missing.
            ImportError: Import failed (allow_import only).
        """
        if not name:
            raise OwnerNotFoundError(name)
        module, attrs = self._find_module(name)
        owner: object = module
        for attr in attrs:
            try:
                owner = getattr(owner, attr)
            except AttributeError as exc:
                raise OwnerNotFoundError(name) from exc
        if not isinstance(owner, (type, types.ModuleType)):
            raise OwnerNotFoundError(name)
        return owner

    def _find_module(self, name: str) -> tuple[types.ModuleType, list[str]]:
        parts = name.split(".")
        for cut in range(len(parts), 0, -1):
            module = self._modules.get(".".join(parts[:cut]))
            if module is not None:
                return module, parts[cut:]

        if self._allow_import:
            for cut in range(len(parts), 0, -1):
                try:
                    return importlib.import_module(".".join(parts[:cut])), parts[cut:]
                except ModuleNotFoundError:
                    continue

        raise OwnerNotFoundError(name)

    def __repr__(self) -> str:
        return f"ModuleLoader(allow_import={self._allow_import})"


@dataclass(frozen=True, slots=True)
class SearchPathLoader:
    """ModuleLoader restricted to code under given import roots.

    Equal roots mean equal loaders, so the resolver can skip a context
    loader that repeats the hint.

    Attributes:
        roots: Resolved import roots (sys.path entries or archives)
        allow_import: Passed to the underlying ModuleLoader
    """

    roots: tuple[Path, ...]
    allow_import: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.roots:
            raise ValueError("roots must not be empty")

    @classmethod
    def for_paths(cls, paths: Iterable[str], *, allow_import: bool = False) -> SearchPathLoader:
        """Build loader from path strings."""
        return cls(roots=tuple(Path(p).resolve() for p in paths), allow_import=allow_import)

    def load(self, name: str) -> object:
        """Resolve name, accepting only owners defined under roots.

        Raises:
            OwnerNotFoundError: Name does not resolve.
            IncompatibleDefinitionError: Name resolves to code elsewhere.
        """
        owner = ModuleLoader(allow_import=self.allow_import).load(name)
        origin = module_file(module_of(owner))
        if origin is None or not self.contains(origin):
            raise IncompatibleDefinitionError(name, origin)
        return owner

    def contains(self, file: str) -> bool:
        """Check if file lies under one of the roots."""
        path = Path(file).resolve()
        return any(path.is_relative_to(root) for root in self.roots)


def loader_of(owner: object, *, allow_import: bool = False) -> SearchPathLoader | None:
    """Loader biased toward the import root that provided owner.

    Returns None for owners without a source file (builtins).
    """
    file = module_file(module_of(owner))
    if file is None:
        return None
    return SearchPathLoader(roots=(code_root(file),), allow_import=allow_import)
