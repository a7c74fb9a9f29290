from __future__ import annotations

"""
Path to Package Resolution.

Maps a node's source path onto the workspace package that owns it, and
evaluates the path exclusion rules applied before absorption.
"""

import logging
from typing import List, Optional

from lernadocs.domain.errors import ResolutionError
from lernadocs.domain.package_models import Package, PackageMap
from lernadocs.infra.fs import path_is_within

logger = logging.getLogger(__name__)


def find_package_for_path(path: str, packages: PackageMap) -> Package:
    """
    Resolve the package owning a source path.

    A package fits when the path is its root or lies beneath it, compared
    segment by segment. Among fitting packages the one with the longest
    name wins; on equal length the first registered one is kept.

    Args:
        path: Absolute source path of a documentation node.
        packages: Registered packages in registration order.

    Returns:
        Package: The owning package.

    Raises:
        ResolutionError: If no registered package contains the path.
    """
    fit: Optional[Package] = None
    for package in packages.values():
        if not path_is_within(path, package.root_path):
            continue
        # Name length stands in for nesting depth.
        if fit is None or len(package.name) > len(fit.name):
            fit = package

    if fit is None:
        raise ResolutionError(f"No lerna package found for {path}", source_path=path)

    return fit


def is_path_excluded(path: str, path_exclude: List[str]) -> bool:
    """True if any configured exclusion substring occurs in the path."""
    return any(rule and rule in path for rule in path_exclude)
