from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for workspaces and documentation forests.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from lernadocs.domain.doc_models import DocNode, NodeKind, ProjectTree  # noqa: E402
from lernadocs.domain.package_models import Package, PackageMap  # noqa: E402
from lernadocs.domain.reflection_registry import ReflectionRegistry  # noqa: E402


# -----------------------------------------------------------------------------
# Builders
# -----------------------------------------------------------------------------
def _make_node(
        name: str,
        kind: NodeKind,
        source_path: str,
        children: Optional[List[DocNode]] = None,
) -> DocNode:
    """Build a node and attach the given children to it."""
    node = DocNode(name=name, kind=kind, source_path=source_path)
    for child in children or []:
        node.attach(child)
    return node


def _make_project(*nodes: DocNode) -> ProjectTree:
    """Build a project whose registry indexes every node of the forest."""
    registry = ReflectionRegistry()
    for node in nodes:
        registry.register_tree(node)
    return ProjectTree(name="project", registry=registry, children=list(nodes))


def _write_package(root: Path, name: str, readme: Optional[str] = None) -> Path:
    """Create a package directory with a package.json descriptor."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(json.dumps({"name": name}), encoding="utf-8")
    if readme is not None:
        (root / "README.md").write_text(readme, encoding="utf-8")
    return root


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_node() -> Callable[..., DocNode]:
    """Factory fixture: make_node(name, kind, source_path, children=None)."""
    return _make_node


@pytest.fixture
def make_project() -> Callable[..., ProjectTree]:
    """Factory fixture: make_project(*top_level_nodes) with a populated registry."""
    return _make_project


@pytest.fixture
def ws_packages() -> PackageMap:
    """Packages of a virtual workspace rooted at /ws."""
    return {
        "core": Package(name="core", root_path=os.path.normpath("/ws/core")),
        "core-utils": Package(name="core-utils", root_path=os.path.normpath("/ws/core-utils")),
        "internal-tools": Package(
            name="internal-tools", root_path=os.path.normpath("/ws/internal-tools")
        ),
    }


@pytest.fixture
def lerna_workspace(tmp_path: Path) -> Path:
    """
    Create an on-disk lerna workspace.

    Structure:
    /ws
      lerna.json            {"packages": ["packages/*"]}
      /packages
        /core               package.json (core), README.md
        /core-utils         package.json (core-utils)
        /scratch            no descriptor
    """
    ws = tmp_path / "ws"
    ws.mkdir()
    (ws / "lerna.json").write_text(json.dumps({"packages": ["packages/*"]}), encoding="utf-8")

    _write_package(ws / "packages" / "core", "core", readme="# Core\nCore package.")
    _write_package(ws / "packages" / "core-utils", "core-utils")
    (ws / "packages" / "scratch").mkdir()

    return ws


@pytest.fixture
def forest_document(lerna_workspace: Path) -> Dict[str, Any]:
    """
    Return a flat forest document whose source paths live in lerna_workspace.

    Contains a file module of 'core' with two declarations, a loose function
    of 'core-utils' and a test helper module of 'core'.
    """
    pkgs = lerna_workspace / "packages"
    core_index = str(pkgs / "core" / "src" / "index.ts")
    utils_date = str(pkgs / "core-utils" / "src" / "date.ts")
    core_helper = str(pkgs / "core" / "test" / "helper.ts")

    return {
        "name": "ws-docs",
        "children": [
            {
                "id": 1,
                "name": "\"core/src/index\"",
                "kind": "external_module",
                "source_path": core_index,
                "children": [
                    {"id": 2, "name": "Engine", "kind": "class",
                     "source_path": core_index, "flags": ["exported"]},
                    {"id": 3, "name": "start", "kind": "function",
                     "source_path": core_index, "flags": ["exported"]},
                ],
            },
            {
                "id": 4,
                "name": "formatDate",
                "kind": "function",
                "source_path": utils_date,
                "flags": ["exported"],
            },
            {
                "id": 5,
                "name": "\"core/test/helper\"",
                "kind": "external_module",
                "source_path": core_helper,
                "children": [
                    {"id": 6, "name": "mockEngine", "kind": "function",
                     "source_path": core_helper},
                ],
            },
        ],
    }


@pytest.fixture
def forest_file(lerna_workspace: Path, forest_document: Dict[str, Any]) -> Path:
    """Persist forest_document as forest.json inside the workspace."""
    path = lerna_workspace / "forest.json"
    path.write_text(json.dumps(forest_document), encoding="utf-8")
    return path
