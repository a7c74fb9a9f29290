from __future__ import annotations

"""
Unit tests for the Documentation Tree Data Models.

Verifies single-owner re-parenting, pre-order traversal and the
module-shaped classification of node kinds.
"""

import pytest

from lernadocs.domain.doc_models import DocNode, NodeFlag, NodeKind


def test_attach_transfers_ownership(make_node) -> None:
    """A re-attached node leaves its old parent's children."""
    old_parent = make_node("old", NodeKind.MODULE, "/ws/a.ts")
    new_parent = make_node("new", NodeKind.MODULE, "/ws/b.ts")
    child = make_node("fn", NodeKind.FUNCTION, "/ws/a.ts")

    old_parent.attach(child)
    new_parent.attach(child)

    assert child.parent is new_parent
    assert new_parent.children == [child]
    assert old_parent.children == []


def test_attach_preserves_order(make_node) -> None:
    parent = make_node("mod", NodeKind.MODULE, "/ws/a.ts")
    names = ["a", "b", "c"]
    for name in names:
        parent.attach(make_node(name, NodeKind.VARIABLE, "/ws/a.ts"))

    assert [c.name for c in parent.children] == names


def test_attach_self_is_rejected(make_node) -> None:
    node = make_node("mod", NodeKind.MODULE, "/ws/a.ts")
    with pytest.raises(ValueError):
        node.attach(node)


def test_detach_is_identity_based() -> None:
    """Detaching removes the node itself, not an equal-looking sibling."""
    parent = DocNode(name="mod", kind=NodeKind.MODULE, source_path="/ws/a.ts")
    twin_a = DocNode(name="x", kind=NodeKind.FUNCTION, source_path="/ws/a.ts")
    twin_b = DocNode(name="x", kind=NodeKind.FUNCTION, source_path="/ws/a.ts")
    parent.attach(twin_a)
    parent.attach(twin_b)

    twin_b.detach()

    assert len(parent.children) == 1
    assert parent.children[0] is twin_a
    assert twin_b.parent is None


def test_walk_is_preorder(make_node) -> None:
    leaf_a = make_node("a", NodeKind.FUNCTION, "/ws/x.ts")
    leaf_b = make_node("b", NodeKind.METHOD, "/ws/x.ts")
    cls = make_node("C", NodeKind.CLASS, "/ws/x.ts", children=[leaf_b])
    root = make_node("x", NodeKind.MODULE, "/ws/x.ts", children=[leaf_a, cls])

    assert [n.name for n in root.walk()] == ["x", "a", "C", "b"]


@pytest.mark.parametrize("kind, expected", [
    (NodeKind.MODULE, True),
    (NodeKind.EXTERNAL_MODULE, True),
    (NodeKind.NAMESPACE, False),
    (NodeKind.CLASS, False),
    (NodeKind.FUNCTION, False),
])
def test_module_shaped_kinds(kind: NodeKind, expected: bool) -> None:
    assert kind.is_module_shaped is expected


def test_flag_helpers() -> None:
    node = DocNode(name="x", kind=NodeKind.VARIABLE, source_path="/ws/x.ts")
    assert not node.has_flag(NodeFlag.EXPORTED)

    node.set_flag(NodeFlag.EXPORTED)
    node.set_flag(NodeFlag.STATIC)
    assert node.has_flag(NodeFlag.EXPORTED)
    assert node.has_flag(NodeFlag.STATIC)

    node.set_flag(NodeFlag.STATIC, False)
    assert not node.has_flag(NodeFlag.STATIC)
    assert node.has_flag(NodeFlag.EXPORTED)
