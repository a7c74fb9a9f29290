from __future__ import annotations

"""
Integration tests for the Core Orchestration Pipeline.

Runs the whole discovery -> load -> reorganize -> persist chain against an
on-disk workspace and checks the written forest and the result contract.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict

from lernadocs.core.pipeline.engine import run_pipeline


def _config(ws: Path, **extra: Any) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {
        "workspace_dir": str(ws),
        "input_file": "forest.json",
        "output_file": os.path.join("out", "docs.json"),
    }
    cfg.update(extra)
    return cfg


def _children_names(node: Dict[str, Any]) -> list:
    return [child["name"] for child in node["children"]]


def test_pipeline_groups_forest_by_package(lerna_workspace: Path, forest_file: Path) -> None:
    result = run_pipeline(_config(lerna_workspace))

    assert result.ok, result.error
    assert set(result.packages) == {"core", "core-utils"}
    assert result.output_file == str(lerna_workspace / "out" / "docs.json")

    written = json.loads(Path(result.output_file).read_text(encoding="utf-8"))
    assert written["name"] == "ws-docs"
    assert _children_names(written) == ["core", "core-utils"]

    core, utils = written["children"]
    assert _children_names(core) == ["Engine", "start", "mockEngine"]
    assert core["kind"] == "module"
    assert core["description"] == "# Core\nCore package."
    assert _children_names(utils) == ["formatDate"]

    assert result.summary["merged_modules"] == 2
    assert result.summary["emitted"] == ["core", "core-utils"]
    assert result.summary["registered_nodes"] == 6


def test_pipeline_applies_exclusions(lerna_workspace: Path, forest_file: Path) -> None:
    test_dir = os.path.join(str(lerna_workspace / "packages" / "core" / "test"), "")
    result = run_pipeline(
        _config(lerna_workspace, pathExclude=[test_dir], lernaExclude=["core-utils"])
    )

    assert result.ok, result.error
    written = json.loads(Path(result.output_file).read_text(encoding="utf-8"))
    assert _children_names(written) == ["core"]
    assert _children_names(written["children"][0]) == ["Engine", "start"]
    assert result.summary["excluded_nodes"] == 1
    assert result.summary["dropped_excluded"] == ["core-utils"]
    assert result.summary["registered_nodes"] == 3


def test_pipeline_dry_run_writes_nothing(lerna_workspace: Path, forest_file: Path) -> None:
    result = run_pipeline(_config(lerna_workspace), dry_run=True)

    assert result.ok
    assert result.output_file == ""
    assert result.summary["dry_run"] is True
    assert not (lerna_workspace / "out").exists()


def test_pipeline_renders_outline(lerna_workspace: Path, forest_file: Path) -> None:
    result = run_pipeline(_config(lerna_workspace, print_tree=True, show_leaves=False))

    assert result.tree_lines == ["├── core [module]", "└── core-utils [module]"]


def test_pipeline_unresolvable_node_fails_without_output(
        lerna_workspace: Path, forest_document: Dict[str, Any]
) -> None:
    forest_document["children"].append(
        {"id": 99, "name": "stray", "kind": "function", "source_path": "/elsewhere/stray.ts"}
    )
    (lerna_workspace / "forest.json").write_text(json.dumps(forest_document), encoding="utf-8")

    result = run_pipeline(_config(lerna_workspace))

    assert result.ok is False
    assert "No lerna package found" in result.error
    assert set(result.packages) == {"core", "core-utils"}
    assert not (lerna_workspace / "out").exists()


def test_pipeline_missing_manifest(tmp_path: Path) -> None:
    (tmp_path / "forest.json").write_text('{"children": []}', encoding="utf-8")

    result = run_pipeline(_config(tmp_path))

    assert result.ok is False
    assert result.packages == {}


def test_pipeline_invalid_workspace(tmp_path: Path) -> None:
    result = run_pipeline(_config(tmp_path / "missing"))

    assert result.ok is False
    assert "Invalid workspace directory" in result.error


def test_pipeline_requires_input_file(lerna_workspace: Path) -> None:
    result = run_pipeline({"workspace_dir": str(lerna_workspace)})

    assert result.ok is False
    assert result.error == "No input forest file configured."


def test_pipeline_rejects_malformed_forest(lerna_workspace: Path) -> None:
    (lerna_workspace / "forest.json").write_text(
        json.dumps({"children": [{"name": "x", "kind": "bogus", "source_path": "/x"}]}),
        encoding="utf-8",
    )

    result = run_pipeline(_config(lerna_workspace))

    assert result.ok is False
    assert "Failed to load documentation forest" in result.error
    assert "unknown kind" in result.error


def test_pipeline_rejects_bad_source_position(lerna_workspace: Path) -> None:
    src = str(lerna_workspace / "packages" / "core" / "index.ts")
    (lerna_workspace / "forest.json").write_text(
        json.dumps([{
            "name": "start", "kind": "function", "source_path": src,
            "sources": [{"file_name": src, "line": None}],
        }]),
        encoding="utf-8",
    )

    result = run_pipeline(_config(lerna_workspace))

    assert result.ok is False
    assert "children[0].sources[0]: 'line'" in result.error
    assert not (lerna_workspace / "out").exists()
