from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies default injection, type coercion of CLI/options-file values and
the strict-mode failures.
"""

import pytest

from lernadocs.core.pipeline.stages.validator import validate_config
from lernadocs.domain.constants import DEFAULT_MANIFEST_FILE, DEFAULT_README_FILE


def test_validate_non_dict_returns_defaults() -> None:
    """TC-01: A non-dict config yields defaults and a warning."""
    cfg, warnings = validate_config(["not", "a", "dict"])

    assert cfg["manifest_file"] == DEFAULT_MANIFEST_FILE
    assert cfg["lernaExclude"] == []
    assert any("Invalid config type" in w for w in warnings)


def test_validate_fills_missing_keys() -> None:
    """TC-02: Missing keys are injected from the defaults."""
    cfg, warnings = validate_config({"input_file": "forest.json"})

    assert cfg["input_file"] == "forest.json"
    assert cfg["readme_file"] == DEFAULT_README_FILE
    assert cfg["print_tree"] is False
    assert cfg["show_leaves"] is True
    assert warnings == []


def test_validate_csv_exclusions_become_lists() -> None:
    """TC-03: Comma-separated exclusion strings are split and trimmed."""
    cfg, warnings = validate_config({
        "lernaExclude": "internal-tools, scratch",
        "pathExclude": "/test/,",
    })

    assert cfg["lernaExclude"] == ["internal-tools", "scratch"]
    assert cfg["pathExclude"] == ["/test/"]
    assert len(warnings) == 2


def test_validate_exclusion_list_discards_bad_items() -> None:
    """TC-04: Non-string and blank items are dropped from exclusion lists."""
    cfg, warnings = validate_config({"pathExclude": ["/a/", 3, "  ", None]})

    assert cfg["pathExclude"] == ["/a/"]
    assert sum("Item discarded" in w for w in warnings) == 2


def test_validate_invalid_exclusion_type_falls_back_to_empty() -> None:
    cfg, warnings = validate_config({"lernaExclude": {"core": True}})

    assert cfg["lernaExclude"] == []
    assert warnings


@pytest.mark.parametrize("raw, expected", [
    ("yes", True),
    ("ON", True),
    ("0", False),
    ("off", False),
    (1, True),
    (0, False),
])
def test_validate_bool_coercion(raw, expected) -> None:
    """TC-05: Textual and numeric booleans are coerced with a warning."""
    cfg, warnings = validate_config({"print_tree": raw})

    assert cfg["print_tree"] is expected
    assert len(warnings) == 1


def test_validate_unparseable_bool_uses_fallback() -> None:
    cfg, warnings = validate_config({"show_leaves": "maybe"})

    assert cfg["show_leaves"] is True
    assert any("expected bool" in w for w in warnings)


def test_validate_blank_string_uses_default() -> None:
    cfg, _ = validate_config({"manifest_file": "   "})

    assert cfg["manifest_file"] == DEFAULT_MANIFEST_FILE


def test_validate_wrong_string_type_uses_fallback() -> None:
    cfg, warnings = validate_config({"input_file": 42})

    assert cfg["input_file"] == ""
    assert any("expected str" in w for w in warnings)


@pytest.mark.parametrize("config", [
    "not-a-dict",
    {"input_file": 42},
    {"print_tree": "yes"},
    {"pathExclude": "a,b"},
    {"lernaExclude": ["ok", 1]},
])
def test_validate_strict_mode_raises(config) -> None:
    """TC-06: Strict mode refuses any coercion."""
    with pytest.raises(TypeError):
        validate_config(config, strict=True)
