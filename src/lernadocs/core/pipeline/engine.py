from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates one documentation regrouping run:
1. Validates configuration and paths.
2. Builds the workspace package registry.
3. Loads the flat documentation forest.
4. Reorganizes the forest by package.
5. Renders an optional outline.
6. Persists the reorganized forest.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from lernadocs.core.analysis.tree_renderer import render_lines
from lernadocs.core.pipeline.stages.validator import validate_config
from lernadocs.core.services.package_registry import build_package_registry
from lernadocs.core.services.reorganizer import reorganize
from lernadocs.domain.errors import ConfigurationError, LernaDocsError
from lernadocs.domain.package_models import PackageMap
from lernadocs.domain.pipeline_models import (
    PipelineResult,
    create_error_result,
    create_success_result,
)
from lernadocs.domain.serialization import forest_from_dict, project_to_dict
from lernadocs.infra.fs import (
    normalize_path,
    read_json_file,
    resolve_user_path,
    write_json_file,
)

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
) -> PipelineResult:
    """
    Execute the full regrouping pipeline.

    Any failure yields an error result; no partially reorganized forest is
    ever written.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, run the reorganization but skip writing output.

    Returns:
        PipelineResult: Object containing status, packages and summary.
    """
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    workspace_dir = normalize_path(cfg.get("workspace_dir", ""), os.getcwd())
    if not os.path.isdir(workspace_dir):
        msg = f"Invalid workspace directory: {workspace_dir}"
        logger.error(msg)
        return create_error_result(msg, cfg, workspace_dir)

    if not cfg["input_file"]:
        msg = "No input forest file configured."
        logger.error(msg)
        return create_error_result(msg, cfg, workspace_dir)

    input_file = resolve_user_path(workspace_dir, cfg["input_file"])
    cfg["input_file"] = input_file

    # -------------------------------------------------------------------------
    # 2) Package Discovery
    # -------------------------------------------------------------------------
    try:
        packages = build_package_registry(workspace_dir, cfg["manifest_file"])
    except ConfigurationError as e:
        logger.error(f"Package discovery failed: {e}")
        return create_error_result(str(e), cfg, workspace_dir)

    package_roots = _package_roots(packages)

    # -------------------------------------------------------------------------
    # 3) Forest Loading
    # -------------------------------------------------------------------------
    try:
        project = forest_from_dict(read_json_file(input_file))
    except (OSError, ValueError, LernaDocsError) as e:
        msg = f"Failed to load documentation forest '{input_file}': {e}"
        logger.error(msg)
        return create_error_result(msg, cfg, workspace_dir, package_roots)

    # -------------------------------------------------------------------------
    # 4) Reorganization
    # -------------------------------------------------------------------------
    try:
        report = reorganize(
            project,
            packages,
            path_exclude=cfg["pathExclude"],
            lerna_exclude=cfg["lernaExclude"],
            readme_file=cfg["readme_file"],
        )
    except LernaDocsError as e:
        logger.error(f"Reorganization aborted: {e}")
        return create_error_result(str(e), cfg, workspace_dir, package_roots)

    # -------------------------------------------------------------------------
    # 5) Outline
    # -------------------------------------------------------------------------
    tree_lines: List[str] = []
    if cfg["print_tree"]:
        tree_lines = render_lines(project.children, show_leaves=cfg["show_leaves"])
        logger.info("Tree Preview:\n" + "\n".join(tree_lines))

    # -------------------------------------------------------------------------
    # 6) Persistence
    # -------------------------------------------------------------------------
    output_file = ""
    if cfg["output_file"] and not dry_run:
        output_file = resolve_user_path(workspace_dir, cfg["output_file"])
        try:
            write_json_file(output_file, project_to_dict(project))
        except OSError as e:
            msg = f"Failed to write reorganized forest: {e}"
            logger.critical(msg)
            return create_error_result(msg, cfg, workspace_dir, package_roots)
        logger.info(f"Reorganized forest saved to: {output_file}")

    summary = report.to_dict()
    summary["dry_run"] = dry_run
    summary["registered_nodes"] = len(project.registry)

    logger.info("Pipeline execution finished.")
    return create_success_result(
        cfg,
        workspace_dir,
        package_roots,
        output_file=output_file,
        tree_lines=tree_lines,
        summary_extra=summary,
    )


def _package_roots(packages: PackageMap) -> Dict[str, str]:
    return {name: package.root_path for name, package in packages.items()}
