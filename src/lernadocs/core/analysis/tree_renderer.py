from __future__ import annotations

"""
Tree Renderer.

Converts a documentation forest into a visual ASCII outline for console
inspection. Handles indentation of nested nodes and optional hiding of
non-module leaves.
"""

from typing import List

from lernadocs.domain.doc_models import DocNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_forest(
        nodes: List[DocNode],
        lines: List[str],
        prefix: str = "",
        show_leaves: bool = True,
) -> None:
    """
    Recursively transform a list of nodes into outline strings.

    Uses standard ASCII connectors (├──, └──) and keeps sibling order, which
    is significant in the documentation output.

    Args:
        nodes: Sibling nodes to render at the current level.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        show_leaves: Whether to include nodes that are not module-like.
    """
    visible = [n for n in nodes if show_leaves or _is_branch(n)]
    total = len(visible)

    for i, node in enumerate(visible):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        lines.append(f"{prefix}{connector}{_label(node)}")

        if node.children:
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_forest(node.children, lines, prefix=new_prefix, show_leaves=show_leaves)


def render_lines(nodes: List[DocNode], show_leaves: bool = True) -> List[str]:
    """Convenience wrapper returning the outline as a new list."""
    lines: List[str] = []
    render_forest(nodes, lines, show_leaves=show_leaves)
    return lines

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _is_branch(node: DocNode) -> bool:
    return node.kind.is_module_shaped or bool(node.children)


def _label(node: DocNode) -> str:
    return f"{node.name} [{node.kind.value}]"
