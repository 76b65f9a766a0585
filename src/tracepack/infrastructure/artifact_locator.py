"""Artifact locator: owner -> (location, version).

Location examples:
    file:///venv/lib/python3.12/site-packages/  -> "site-packages/"
    file:///opt/app/vendor/greenmail-1.3.zip     -> "greenmail-1.3.zip"
Distribution metadata, when available, takes precedence over both.
"""

from __future__ import annotations

import logging
import sys
import types
from pathlib import Path
from typing import TYPE_CHECKING

from tracepack.domain.model.packaging_info import NA, PackagingInfo
from tracepack.infrastructure.introspection import code_root, module_file, module_of

if TYPE_CHECKING:
    from tracepack.infrastructure.capabilities import Capabilities, DistributionRef

logger = logging.getLogger(__name__)


def location_name(origin: str) -> str | None:
    """Last segment of a code origin, tried with "/" then "\\".

    A trailing separator marks a directory: the segment before it is
    returned, separator included.

    Example:
        >>> location_name("file:/C:/repo/greenmail/1.3/greenmail-1.3.jar")
        'greenmail-1.3.jar'
        >>> location_name("file:/home/app/classes/")
        'classes/'
    """
    return _last_segment(origin, "/") or _last_segment(origin, "\\")


def _last_segment(origin: str, separator: str) -> str | None:
    idx = origin.rfind(separator)
    if idx != -1 and idx + 1 == len(origin):
        idx = origin.rfind(separator, 0, idx)
        return origin[idx + 1 :]
    if idx > 0:
        return origin[idx + 1 :]
    return None


def code_origin(module: types.ModuleType | None) -> str | None:
    """URI of the archive or import root that provided module.

    Directories end with "/". None for modules without a source file.
    """
    archive = getattr(getattr(module, "__loader__", None), "archive", None)
    if isinstance(archive, str):
        return Path(archive).resolve().as_uri()

    file = module_file(module)
    if file is None:
        return None
    root = code_root(file)
    if root.is_dir():
        return root.as_uri().rstrip("/") + "/"
    return root.as_uri()


class ArtifactLocator:
    """Determines artifact location and version of a frame owner.

    Order for both fields:
    1. installed distribution (if the distribution index was probed)
    2. version: module or top-level package __version__;
       location: last segment of the code origin
    3. "na"

    Never raises: internal errors are logged and yield placeholders.
    """

    __slots__ = ("_capabilities",)

    def __init__(self, capabilities: Capabilities) -> None:
        self._capabilities = capabilities

    def locate(self, owner: object | None, *, exact: bool = True) -> PackagingInfo:
        """Packaging info for owner.

        Args:
            owner: Class or module (None = unresolved)
            exact: Whether owner was matched against the live stack

        Returns:
            PackagingInfo; ("na", "na", False) for unresolved owners or errors
        """
        if owner is None:
            return PackagingInfo.unavailable()
        try:
            module = module_of(owner)
            distribution = self._distribution(module)
            version = self._version(module, distribution)
            location = self._location(module, distribution)
        except Exception:
            logger.warning("cannot locate artifact of %r", owner, exc_info=True)
            return PackagingInfo.unavailable()
        return PackagingInfo(location=location, version=version, exact=exact)

    def _distribution(self, module: types.ModuleType | None) -> DistributionRef | None:
        index = self._capabilities.distributions
        if index is None or module is None:
            return None
        try:
            return index.lookup(module.__name__, module_file(module))
        except Exception:
            logger.debug("distribution lookup failed for %s", module.__name__, exc_info=True)
            return None

    @staticmethod
    def _version(module: types.ModuleType | None, distribution: DistributionRef | None) -> str:
        if distribution is not None:
            return distribution.version
        if module is None:
            return NA
        for candidate in (module, sys.modules.get(module.__name__.partition(".")[0])):
            version = getattr(candidate, "__version__", None)
            if isinstance(version, str) and version:
                return version
        return NA

    @staticmethod
    def _location(module: types.ModuleType | None, distribution: DistributionRef | None) -> str:
        if distribution is not None:
            return distribution.name
        origin = code_origin(module)
        if origin is None:
            return NA
        return location_name(origin) or NA
