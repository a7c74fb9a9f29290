from __future__ import annotations

"""
Workspace Package Discovery Service.

Reads the workspace manifest (lerna.json, or the package.json 'workspaces'
fallback), expands its package globs and reads each candidate's descriptor
to build the name -> root directory mapping used by the reorganizer.
"""

import glob
import logging
import os
from typing import Any, Dict, List, Optional

from lernadocs.domain.constants import (
    DEFAULT_MANIFEST_FILE,
    IGNORED_DIRECTORY_NAMES,
    PACKAGE_DESCRIPTOR_FILE,
)
from lernadocs.domain.errors import ConfigurationError, PackageDescriptorError
from lernadocs.domain.package_models import Package, PackageMap
from lernadocs.infra.fs import read_json_file, resolve_against

logger = logging.getLogger(__name__)

_WILDCARD_CHARS = ("*", "?", "[")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_package_registry(
        cwd: str,
        manifest_file: str = DEFAULT_MANIFEST_FILE,
) -> PackageMap:
    """
    Build the package registry for the workspace rooted at `cwd`.

    Args:
        cwd: Workspace directory holding the manifest.
        manifest_file: Manifest file name relative to cwd.

    Returns:
        PackageMap: Discovered packages in registration order.

    Raises:
        ConfigurationError: If the manifest is missing or declares nothing.
    """
    patterns = load_workspace_patterns(cwd, manifest_file)
    packages = resolve_packages(patterns, cwd)
    logger.info(
        "Lerna packages found: "
        + ", ".join(f"{p.name} -> {p.root_path}" for p in packages.values())
    )
    return packages


def load_workspace_patterns(
        cwd: str,
        manifest_file: str = DEFAULT_MANIFEST_FILE,
) -> List[str]:
    """
    Read the package location patterns declared by the workspace.

    Uses the manifest's 'packages' list. When absent and 'useWorkspaces' is
    set, falls back to the 'workspaces' entry of package.json, accepting both
    the list form and the {"packages": [...]} form.

    Args:
        cwd: Workspace directory.
        manifest_file: Manifest file name relative to cwd.

    Returns:
        List[str]: Glob-style package location patterns.

    Raises:
        ConfigurationError: If no patterns can be found.
    """
    manifest_path = resolve_against(cwd, manifest_file)
    manifest = _read_config_object(manifest_path)

    patterns: Optional[Any] = manifest.get("packages")
    if not patterns and manifest.get("useWorkspaces"):
        workspace_json = _read_config_object(resolve_against(cwd, PACKAGE_DESCRIPTOR_FILE))
        patterns = workspace_json.get("workspaces")
        if isinstance(patterns, dict):
            patterns = patterns.get("packages")

    if not patterns:
        raise ConfigurationError("No lerna.json found or packages defined.")

    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise ConfigurationError(
            f"Package patterns in '{manifest_path}' must be a list of strings."
        )
    return list(patterns)


def resolve_packages(patterns: List[str], cwd: str) -> PackageMap:
    """
    Expand package location patterns into a name -> Package mapping.

    A pattern ending in a wildcard only matches directories, and its
    candidates without a descriptor are skipped. An exact pattern without a
    descriptor is a configuration error. Duplicate names overwrite earlier
    entries (last writer wins) and are reported as warnings.

    Args:
        patterns: Glob patterns relative to cwd.
        cwd: Workspace directory.

    Returns:
        PackageMap: Discovered packages in registration order.

    Raises:
        ConfigurationError: If no patterns are given.
        PackageDescriptorError: If a required descriptor is missing or invalid.
    """
    if not patterns:
        raise ConfigurationError("No lerna.json found or packages defined.")

    packages: PackageMap = {}
    for raw_pattern in patterns:
        directory_wildcard = is_directory_wildcard(raw_pattern)
        for candidate in _expand_pattern(raw_pattern, cwd, directory_wildcard):
            descriptor = _read_descriptor(candidate, lenient=directory_wildcard)
            if descriptor is None:
                continue

            name = descriptor.get("name")
            if not isinstance(name, str) or not name.strip():
                raise PackageDescriptorError(
                    f"Package descriptor in '{candidate}' has no valid 'name'.", candidate
                )

            previous = packages.get(name)
            if previous is not None:
                logger.warning(
                    f"Package name '{name}' declared twice: '{previous.root_path}' "
                    f"replaced by '{candidate}'."
                )
            packages[name] = Package(name=name, root_path=candidate)

    return packages


def is_directory_wildcard(pattern: str) -> bool:
    """True when the pattern's last segment ends in a '*' or '**' wildcard."""
    return pattern.rstrip("/\\").endswith("*")

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _expand_pattern(pattern: str, cwd: str, directory_wildcard: bool) -> List[str]:
    """Glob a pattern relative to cwd and return absolute candidates in path order."""
    if not any(c in pattern for c in _WILDCARD_CHARS):
        return [resolve_against(cwd, pattern)]

    glob_pattern = pattern.rstrip("/\\") + "/" if directory_wildcard else pattern
    matches = glob.glob(glob_pattern, root_dir=cwd, recursive=True)

    candidates: Dict[str, None] = {}
    for match in sorted(matches, key=_path_segments):
        if _is_ignored(match):
            continue
        candidates[resolve_against(cwd, match)] = None
    return list(candidates)


def _path_segments(path: str) -> List[str]:
    # Ordering by segment keeps 'core' ahead of 'core-utils'.
    return os.path.normpath(path).split(os.sep)


def _is_ignored(relative_path: str) -> bool:
    """True when a cwd-relative match lies under an ignored directory."""
    return any(part in IGNORED_DIRECTORY_NAMES for part in _path_segments(relative_path))


def _read_descriptor(candidate: str, lenient: bool) -> Optional[Dict[str, Any]]:
    """
    Load `<candidate>/package.json`.

    Returns None when the file is missing and `lenient` is set.
    """
    descriptor_path = os.path.join(candidate, PACKAGE_DESCRIPTOR_FILE)
    try:
        data = read_json_file(descriptor_path)
    except (FileNotFoundError, NotADirectoryError) as e:
        if lenient:
            logger.warning(
                f"Directory '{candidate}' had no {PACKAGE_DESCRIPTOR_FILE} "
                f"but package glob ends with a wildcard so ignoring"
            )
            return None
        raise PackageDescriptorError(
            f"Missing package descriptor '{descriptor_path}': {e}", candidate
        ) from e
    except (OSError, ValueError) as e:
        raise PackageDescriptorError(
            f"Unreadable package descriptor '{descriptor_path}': {e}", candidate
        ) from e

    if not isinstance(data, dict):
        raise PackageDescriptorError(
            f"Package descriptor '{descriptor_path}' is not a JSON object.", candidate
        )
    return data


def _read_config_object(path: str) -> Dict[str, Any]:
    """Read a workspace-level JSON object, mapping I/O failures to ConfigurationError."""
    try:
        data = read_json_file(path)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Workspace file not found: {path}") from e
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Failed to read workspace manifest '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Workspace manifest '{path}' is not a JSON object.")
    return data
