"""Resolver configuration.

False = facility disabled, True = facility used when the environment has it.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Configuration DTO for PackagingCalculator.

    Immutable configuration object.
    Consulted once, when capabilities are probed and loaders are built.

    Attributes:
        use_caller_lookup: Probe sys._getframe for exact owner resolution.
            False = every frame is resolved by name (best effort).
        use_distributions: Probe importlib.metadata for distribution
            names and versions. False = code origin and __version__ only.
        allow_import: Let the default loader import modules that are not
            loaded yet. Importing runs module code, so it is off by default.
    """

    use_caller_lookup: bool = True
    use_distributions: bool = True
    allow_import: bool = False
