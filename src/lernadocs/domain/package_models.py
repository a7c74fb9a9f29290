from __future__ import annotations

"""
Workspace Package Data Models.

Defines the immutable package record produced by the package registry and
the ordered name -> package mapping consumed by the reorganizer.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Package:
    """
    A workspace package.

    Attributes:
        name: Package name taken from its descriptor.
        root_path: Absolute, normalized directory holding the descriptor.
    """
    name: str
    root_path: str


# Insertion order is registration order; the resolver relies on it for ties.
PackageMap = Dict[str, Package]
