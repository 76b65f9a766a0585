"""Packaging info value object."""

from dataclasses import dataclass
from typing import Final

# Placeholder for any unknown location or version
NA: Final = "na"


@dataclass(frozen=True, slots=True)
class PackagingInfo:
    """Artifact that provides the code of a stack frame.

    Attributes:
        location: Distribution name or last segment of the code origin
        version: Distribution or module version
        exact: True if the owner was matched against the live call stack,
            False if it was looked up by name only
    """

    location: str
    version: str
    exact: bool

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.location:
            raise ValueError("location must not be empty")
        if not self.version:
            raise ValueError("version must not be empty")

    @classmethod
    def unavailable(cls) -> "PackagingInfo":
        """Placeholder for frames whose artifact cannot be determined."""
        return cls(location=NA, version=NA, exact=False)

    @property
    def is_available(self) -> bool:
        """Check if anything at all is known about the artifact."""
        return self.location != NA or self.version != NA

    def __str__(self) -> str:
        """Format as location:version, prefixed with ~ when not exact."""
        prefix = "" if self.exact else "~"
        return f"{prefix}{self.location}:{self.version}"
