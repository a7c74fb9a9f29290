from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema, including help messages,
argument types, and defaults. Provides logic to translate raw argparse
namespaces into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the lernadocs CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="lernadocs",
        description="Regroup a flat documentation forest by workspace package.",
    )

    # --- Path Management ---
    p.add_argument(
        "-w", "--workspace",
        dest="workspace_dir",
        default=None,
        help="Workspace directory holding lerna.json (default: current directory).",
    )
    p.add_argument(
        "-i", "--input",
        dest="input_file",
        default=None,
        help="Flat documentation forest (JSON).",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help="Destination of the reorganized forest (JSON).",
    )
    p.add_argument(
        "--manifest",
        dest="manifest_file",
        default=None,
        help="Workspace manifest file name (default: lerna.json).",
    )
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="Options file (default: lernadocs.json in the workspace).",
    )

    # --- Exclusion Rules ---
    p.add_argument(
        "--lerna-exclude",
        dest="lerna_exclude",
        default=None,
        help="Comma-separated package names that should be excluded.",
    )
    p.add_argument(
        "--path-exclude",
        dest="path_exclude",
        default=None,
        help="Comma-separated path fragments to entirely ignore.",
    )

    # --- Outline ---
    p.add_argument(
        "--print-tree",
        action="store_true",
        help="Print an outline of the reorganized forest.",
    )
    p.add_argument(
        "--modules-only",
        action="store_true",
        help="Hide non-module leaves in the outline.",
    )

    # --- Runtime and Diagnostics ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Reorganize without writing the output file.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the options file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run summary as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["workspace_dir"] = args.workspace_dir
    overrides["input_file"] = args.input_file
    overrides["output_file"] = args.output_file
    overrides["manifest_file"] = args.manifest_file

    if args.lerna_exclude:
        overrides["lernaExclude"] = _split_csv(args.lerna_exclude)
    if args.path_exclude:
        overrides["pathExclude"] = _split_csv(args.path_exclude)

    if args.print_tree:
        overrides["print_tree"] = True
    if args.modules_only:
        overrides["show_leaves"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
