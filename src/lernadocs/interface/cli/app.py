from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and merging
of configuration sources (defaults, options file, and CLI overrides), pipeline
execution, and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from lernadocs.core.pipeline.engine import run_pipeline
from lernadocs.core.pipeline.stages.validator import validate_config
from lernadocs.domain.config import get_default_config, load_config
from lernadocs.domain.constants import DEFAULT_OPTIONS_FILE
from lernadocs.domain.pipeline_models import PipelineResult
from lernadocs.infra.fs import normalize_path, resolve_user_path
from lernadocs.infra.logging import LoggingConfig, configure_logging, get_logger
from lernadocs.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad input, 130 interrupted).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (Console stderr, optional rotating file)
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (Defaults vs options file)
    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_dir = args.workspace_dir or os.getcwd()
        base_conf = load_config(args.config_file or os.path.join(base_dir, DEFAULT_OPTIONS_FILE))

    # 4. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    # 5. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 6. Pre-flight input verification
    workspace_dir = normalize_path(clean_conf["workspace_dir"], os.getcwd())
    if not os.path.isdir(workspace_dir):
        msg = f"Workspace directory does not exist: {workspace_dir}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    input_file = clean_conf["input_file"]
    if not input_file or not os.path.isfile(resolve_user_path(workspace_dir, input_file)):
        msg = f"Input forest file does not exist: {input_file or '(not set)'}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    # 7. Pipeline execution phase
    logger.info(f"Targeting workspace: {workspace_dir}")
    try:
        result = run_pipeline(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Execution interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130

    # 8. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged, and None means "not given on the command line".

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "workspace_dir", "input_file", "output_file", "manifest_file",
        "lernaExclude", "pathExclude", "print_tree", "show_leaves",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult) -> None:
    """
    Format and print the execution result to the standard output.

    Args:
        result: The pipeline result to render.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary
    print("Reorganization completed.")
    print(f"Packages discovered: {len(result.packages)}")

    for label, key in (
            ("Emitted", "emitted"),
            ("Dropped (empty)", "dropped_empty"),
            ("Dropped (excluded)", "dropped_excluded"),
    ):
        names = summary.get(key, [])
        if names:
            print(f"{label}: {', '.join(names)}")

    stats_keys = {
        "moved_nodes": "Nodes moved",
        "merged_modules": "Modules merged",
        "excluded_nodes": "Nodes excluded",
    }
    for key, label in stats_keys.items():
        if key in summary:
            print(f"{label}: {summary[key]}")

    if result.tree_lines:
        print()
        print("\n".join(result.tree_lines))

    if summary.get("dry_run"):
        print("Dry run: no output written.")
    elif result.output_file:
        print(f"Output: {result.output_file}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
