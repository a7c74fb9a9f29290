from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, segment-based containment checks and the small
JSON/text readers and writers used by the package registry, the reorganizer
and the pipeline. Acts as an abstraction over 'os' so that the domain code
never touches the filesystem directly.
"""

import json
import logging
import os
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def resolve_against(base_dir: str, path: str) -> str:
    """Join a possibly relative path onto base_dir and normalize the result."""
    return os.path.normpath(os.path.join(base_dir, path))


def resolve_user_path(base_dir: str, path: str) -> str:
    """Like resolve_against, expanding a leading ~ first."""
    return resolve_against(base_dir, os.path.expanduser(path))


def path_is_within(path: str, root: str) -> bool:
    """
    Check whether `path` equals `root` or lies beneath it.

    Compares whole path segments, so '/ws/core' does not contain
    '/ws/core-utils/x.ts'.

    Args:
        path: Candidate path (file or directory).
        root: Directory to test containment against.

    Returns:
        bool: True if path is root or one of its descendants.
    """
    norm_path = os.path.normcase(os.path.normpath(path))
    norm_root = os.path.normcase(os.path.normpath(root))
    if norm_path == norm_root:
        return True
    if not norm_root.endswith(os.sep):
        norm_root += os.sep
    return norm_path.startswith(norm_root)

# -----------------------------------------------------------------------------
# READERS
# -----------------------------------------------------------------------------

def read_json_file(path: str) -> Any:
    """
    Load and decode a UTF-8 JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the content is not valid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in '{path}': {e}") from e


def read_text_if_exists(path: str) -> Optional[str]:
    """Return the text content of a file, or None when it does not exist."""
    if not os.path.isfile(path):
        return None
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()

# -----------------------------------------------------------------------------
# WRITERS
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def write_json_file(path: str, data: Any) -> None:
    """
    Serialize data as pretty-printed UTF-8 JSON, creating parent folders.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    parent = os.path.dirname(os.path.abspath(path))
    ok, err = safe_mkdir(parent)
    if not ok:
        raise OSError(f"Failed to create output directory '{parent}': {err}")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.write("\n")
    logger.debug(f"JSON written to {path}")
