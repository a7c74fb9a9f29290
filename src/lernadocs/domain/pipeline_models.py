from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the core data structures and factory functions used to communicate
execution results between the reorganizer, the pipeline engine and the CLI.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass
class ReorganizeReport:
    """
    Outcome of one reorganization pass.

    Attributes:
        emitted: Package names whose container reached the final forest.
        dropped_empty: Packages whose container ended up with no children.
        dropped_excluded: Packages listed in lernaExclude.
        merged_modules: Module-shaped nodes dissolved into a container.
        moved_nodes: Nodes re-parented onto a container.
        excluded_nodes: Top-level nodes dropped by pathExclude.
    """
    emitted: List[str] = field(default_factory=list)
    dropped_empty: List[str] = field(default_factory=list)
    dropped_excluded: List[str] = field(default_factory=list)
    merged_modules: int = 0
    moved_nodes: int = 0
    excluded_nodes: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete pipeline execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        workspace_dir: Normalized workspace directory.
        input_file: Forest file that was read.
        output_file: Path of the written forest (empty if not written).
        packages: Discovered packages (name -> root path).
        tree_lines: ASCII outline of the reorganized forest.
        summary: Technical execution summary and statistics.
    """
    ok: bool
    error: str

    workspace_dir: str
    input_file: str = ""
    output_file: str = ""

    packages: Dict[str, str] = field(default_factory=dict)
    tree_lines: List[str] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        workspace_dir: str,
        packages: Optional[Dict[str, str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a failed pipeline result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        workspace_dir: The target workspace directory.
        packages: Packages discovered before the failure, if any.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(
        ok=False,
        error=error,
        workspace_dir=workspace_dir,
        input_file=cfg.get("input_file", ""),
        output_file="",
        packages=packages or {},
        summary=summary_extra or {},
    )


def create_success_result(
        cfg: Dict[str, Any],
        workspace_dir: str,
        packages: Dict[str, str],
        output_file: str = "",
        tree_lines: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a successful pipeline result instance.

    Args:
        cfg: Final configuration used during execution.
        workspace_dir: Normalized workspace directory.
        packages: Discovered packages (name -> root path).
        output_file: Path of the written forest, empty when not persisted.
        tree_lines: Generated ASCII outline.
        summary_extra: Final execution metrics.

    Returns:
        PipelineResult: An immutable success result object.
    """
    return PipelineResult(
        ok=True,
        error="",
        workspace_dir=workspace_dir,
        input_file=cfg.get("input_file", ""),
        output_file=output_file,
        packages=packages,
        tree_lines=tree_lines or [],
        summary=summary_extra or {},
    )
