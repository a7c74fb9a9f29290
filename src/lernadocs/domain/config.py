from __future__ import annotations

"""
Configuration Domain Management.

Provides the default run configuration and loads the optional JSON options
file of a workspace, merging it over the defaults.
"""

import logging
import os
from typing import Any, Dict, Optional

from lernadocs.domain.constants import (
    DEFAULT_MANIFEST_FILE,
    DEFAULT_OPTIONS_FILE,
    DEFAULT_README_FILE,
)
from lernadocs.infra.fs import read_json_file

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the Pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Workspace
        "workspace_dir": os.getcwd(),
        "manifest_file": DEFAULT_MANIFEST_FILE,
        "readme_file": DEFAULT_README_FILE,

        # IO
        "input_file": "",
        "output_file": "",

        # Exclusion rules
        "lernaExclude": [],
        "pathExclude": [],

        # Diagnostics
        "print_tree": False,
        "show_leaves": True,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the options file and merge it over the defaults.

    A missing file yields the defaults. A corrupted file is reported and
    ignored.

    Args:
        path: Options file path. Defaults to lernadocs.json in the cwd.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()
    options_path = path or os.path.join(os.getcwd(), DEFAULT_OPTIONS_FILE)

    if not os.path.exists(options_path):
        logger.debug(f"Options file not found at {options_path}. Using defaults.")
        return config

    try:
        data = read_json_file(options_path)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load options file: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted options file. Using defaults.")
        return config

    config.update(data)
    return config
