"""Type resolver: live frame owner by depth, or owner by name."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tracepack.domain.model.configuration import ResolverConfig
from tracepack.infrastructure.loaders import ModuleLoader, current_context_loader, loader_of

if TYPE_CHECKING:
    from tracepack.domain.ports.loader import LoaderProtocol
    from tracepack.infrastructure.capabilities import Capabilities

logger = logging.getLogger(__name__)

# Expected outcomes of a lookup that simply did not find the name
_NOT_FOUND: tuple[type[Exception], ...] = (ImportError, LookupError, AttributeError)


class TypeResolver:
    """Resolves frame owners.

    Exact: owner of a live frame, through the probed caller lookup.
    By name: ordered fallback chain
        hint loader -> context loader (if not the hint) -> default loader.
    Not-found conditions move on to the next loader; unexpected errors are
    logged and also move on. Nothing is raised.
    """

    __slots__ = ("_capabilities", "_config", "_default_loader")

    def __init__(
        self,
        capabilities: Capabilities,
        config: ResolverConfig | None = None,
        default_loader: LoaderProtocol | None = None,
    ) -> None:
        self._capabilities = capabilities
        self._config = config or ResolverConfig()
        self._default_loader = default_loader or ModuleLoader(
            allow_import=self._config.allow_import,
        )

    @property
    def exact_available(self) -> bool:
        """Check if resolve_exact can return anything."""
        return self._capabilities.has_caller_lookup

    def resolve_exact(self, depth: int) -> object | None:
        """Owner of the live frame depth levels up; 1 is the caller.

        Must be called directly by the code whose stack depth was measured:
        any wrapper shifts depth by one.
        """
        lookup = self._capabilities.caller_lookup
        if lookup is None:
            return None
        try:
            return lookup(depth)
        except Exception:
            logger.warning("caller lookup failed at depth %d", depth, exc_info=True)
            return None

    def resolve_by_name(
        self,
        class_name: str,
        loader_hint: LoaderProtocol | None = None,
    ) -> object | None:
        """Owner for class_name through the loader fallback chain.

        Args:
            class_name: Dotted owner name from a reported frame
            loader_hint: Loader of the last exact match (may be None)

        Returns:
            First resolved owner, None if every loader failed
        """
        owner = self._try_load(loader_hint, class_name)
        if owner is not None:
            return owner

        context = current_context_loader()
        if context is not None and context != loader_hint:
            owner = self._try_load(context, class_name)
            if owner is not None:
                return owner

        return self._try_load(self._default_loader, class_name)

    def loader_of(self, owner: object) -> LoaderProtocol | None:
        """Loader to use as hint after owner matched exactly."""
        try:
            return loader_of(owner, allow_import=self._config.allow_import)
        except Exception:
            logger.warning("cannot derive loader for %r", owner, exc_info=True)
            return None

    @staticmethod
    def _try_load(loader: LoaderProtocol | None, class_name: str) -> object | None:
        if loader is None:
            return None
        try:
            return loader.load(class_name)
        except _NOT_FOUND as exc:
            logger.debug("%r not resolved by %r: %s", class_name, loader, exc)
            return None
        except Exception:
            logger.warning("unexpected error resolving %r with %r", class_name, loader, exc_info=True)
            return None
