from __future__ import annotations

"""
Domain Constants.

Centralizes the conventional file names of a lerna-style workspace and the
application defaults shared by the configuration and discovery layers.
"""

from typing import FrozenSet

# Workspace conventions
DEFAULT_MANIFEST_FILE = "lerna.json"
PACKAGE_DESCRIPTOR_FILE = "package.json"
DEFAULT_README_FILE = "README.md"
DEFAULT_OPTIONS_FILE = "lernadocs.json"

# Directories never considered as package candidates
IGNORED_DIRECTORY_NAMES: FrozenSet[str] = frozenset({"node_modules"})
