from __future__ import annotations

"""
Unit tests for Configuration Domain Management.

Verifies the default configuration and the tolerant loading of the
workspace options file.
"""

import json
import os
from pathlib import Path

from lernadocs.domain.config import get_default_config, load_config


def test_default_config_keys() -> None:
    cfg = get_default_config()

    assert cfg["workspace_dir"] == os.getcwd()
    assert cfg["manifest_file"] == "lerna.json"
    assert cfg["readme_file"] == "README.md"
    assert cfg["lernaExclude"] == [] and cfg["pathExclude"] == []


def test_default_config_is_a_fresh_copy() -> None:
    first = get_default_config()
    first["lernaExclude"].append("core")

    assert get_default_config()["lernaExclude"] == []


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    assert load_config(str(tmp_path / "absent.json")) == get_default_config()


def test_load_config_merges_options(tmp_path: Path) -> None:
    options = tmp_path / "lernadocs.json"
    options.write_text(
        json.dumps({"lernaExclude": ["internal-tools"], "input_file": "forest.json"}),
        encoding="utf-8",
    )

    cfg = load_config(str(options))

    assert cfg["lernaExclude"] == ["internal-tools"]
    assert cfg["input_file"] == "forest.json"
    assert cfg["manifest_file"] == "lerna.json"


def test_load_config_corrupted_file_returns_defaults(tmp_path: Path) -> None:
    options = tmp_path / "lernadocs.json"
    options.write_text("{broken", encoding="utf-8")

    assert load_config(str(options)) == get_default_config()


def test_load_config_non_object_returns_defaults(tmp_path: Path) -> None:
    options = tmp_path / "lernadocs.json"
    options.write_text("[1, 2]", encoding="utf-8")

    assert load_config(str(options)) == get_default_config()
