from __future__ import annotations

"""
Domain Error Taxonomy.

Every failure raised by the reorganization core derives from LernaDocsError.
Configuration errors happen before the pass starts; resolution errors abort
the pass before the host tree is mutated.
"""

from typing import Optional

# -----------------------------------------------------------------------------
# BASE
# -----------------------------------------------------------------------------

class LernaDocsError(Exception):
    """Root of the lernadocs exception hierarchy."""


# -----------------------------------------------------------------------------
# CONFIGURATION ERRORS (PRE-PASS)
# -----------------------------------------------------------------------------

class ConfigurationError(LernaDocsError):
    """Workspace manifest is missing, unreadable or declares no packages."""


class PackageDescriptorError(ConfigurationError):
    """
    A package candidate has no usable descriptor.

    Attributes:
        path: Directory of the offending candidate.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


# -----------------------------------------------------------------------------
# RESOLUTION ERRORS (MID-PASS)
# -----------------------------------------------------------------------------

class ResolutionError(LernaDocsError):
    """
    A documentation node cannot be attributed to any workspace package.

    Attributes:
        source_path: Path of the node that failed to resolve.
    """

    def __init__(self, message: str, source_path: Optional[str] = None) -> None:
        super().__init__(message)
        self.source_path = source_path


class ContainerMissingError(ResolutionError):
    """A package was resolved but no container exists for it."""

    def __init__(self, package_name: str, source_path: Optional[str] = None) -> None:
        super().__init__(f"lerna package module for {package_name} not found.", source_path)
        self.package_name = package_name


# -----------------------------------------------------------------------------
# REGISTRY ERRORS
# -----------------------------------------------------------------------------

class RegistryError(LernaDocsError):
    """The global reflection registry would hold two nodes under one id."""
