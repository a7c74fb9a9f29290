from __future__ import annotations

"""
Forest Serialization.

Converts between the JSON documents exchanged with the host scanner and the
in-memory ProjectTree. Loading registers every node in a fresh registry:
explicit ids are kept, missing ones are allocated afterwards.
"""

from typing import Any, Dict, List, Union

from lernadocs.domain.doc_models import (
    DocNode,
    NodeFlag,
    NodeKind,
    ProjectTree,
    SourceReference,
)
from lernadocs.domain.reflection_registry import ReflectionRegistry

DEFAULT_PROJECT_NAME = "project"

# -----------------------------------------------------------------------------
# DECODING
# -----------------------------------------------------------------------------

def forest_from_dict(data: Union[Dict[str, Any], List[Any]]) -> ProjectTree:
    """
    Build a ProjectTree from a decoded JSON document.

    Accepts either {"name": ..., "children": [...]} or a bare list of nodes.

    Raises:
        ValueError: If the document or one of its nodes is malformed.
    """
    if isinstance(data, list):
        name, raw_children = DEFAULT_PROJECT_NAME, data
    elif isinstance(data, dict):
        name = str(data.get("name") or DEFAULT_PROJECT_NAME)
        raw_children = data.get("children", [])
    else:
        raise ValueError(f"Forest document must be an object or a list, got {type(data).__name__}.")

    if not isinstance(raw_children, list):
        raise ValueError("Forest 'children' must be a list.")

    children = [_node_from_dict(item, f"children[{i}]") for i, item in enumerate(raw_children)]

    registry = ReflectionRegistry()
    pending: List[DocNode] = []
    for child in children:
        for node in child.walk():
            if node.id is None:
                pending.append(node)
            else:
                registry.register(node)
    for node in pending:
        registry.register(node)

    return ProjectTree(name=name, registry=registry, children=children)


def _node_from_dict(data: Any, location: str) -> DocNode:
    if not isinstance(data, dict):
        raise ValueError(f"{location}: node must be an object.")

    for key in ("name", "kind", "source_path"):
        if not isinstance(data.get(key), str) or not data[key]:
            raise ValueError(f"{location}: missing or invalid '{key}'.")

    try:
        kind = NodeKind(data["kind"])
    except ValueError:
        raise ValueError(f"{location}: unknown kind '{data['kind']}'.") from None

    node_id = data.get("id")
    if node_id is not None and (not isinstance(node_id, int) or isinstance(node_id, bool)):
        raise ValueError(f"{location}: 'id' must be an integer.")

    description = data.get("description")
    if description is not None and not isinstance(description, str):
        raise ValueError(f"{location}: 'description' must be a string.")

    node = DocNode(
        name=data["name"],
        kind=kind,
        source_path=data["source_path"],
        id=node_id,
        flags=_flags_from_value(data.get("flags", []), location),
        description=description,
        sources=_sources_from_value(data.get("sources", []), location),
    )

    raw_children = data.get("children", [])
    if not isinstance(raw_children, list):
        raise ValueError(f"{location}: 'children' must be a list.")
    for i, item in enumerate(raw_children):
        node.attach(_node_from_dict(item, f"{location}.children[{i}]"))

    return node


def _flags_from_value(value: Any, location: str) -> NodeFlag:
    if isinstance(value, int) and not isinstance(value, bool):
        return NodeFlag(value)
    if not isinstance(value, list):
        raise ValueError(f"{location}: 'flags' must be a list of names.")

    flags = NodeFlag.NONE
    for item in value:
        try:
            flags |= NodeFlag[str(item).upper()]
        except KeyError:
            raise ValueError(f"{location}: unknown flag '{item}'.") from None
    return flags


def _sources_from_value(value: Any, location: str) -> List[SourceReference]:
    if not isinstance(value, list):
        raise ValueError(f"{location}: 'sources' must be a list.")

    sources: List[SourceReference] = []
    for i, item in enumerate(value):
        item_location = f"{location}.sources[{i}]"
        if not isinstance(item, dict) or not isinstance(item.get("file_name"), str):
            raise ValueError(f"{item_location}: every source needs a 'file_name'.")
        sources.append(SourceReference(
            file_name=item["file_name"],
            line=_position_from_value(item.get("line", 0), "line", item_location),
            character=_position_from_value(item.get("character", 0), "character", item_location),
        ))
    return sources


def _position_from_value(value: Any, key: str, location: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{location}: '{key}' must be a non-negative integer.")
    return value

# -----------------------------------------------------------------------------
# ENCODING
# -----------------------------------------------------------------------------

def node_to_dict(node: DocNode) -> Dict[str, Any]:
    """Serialize a node and its subtree."""
    out: Dict[str, Any] = {
        "id": node.id,
        "name": node.name,
        "kind": node.kind.value,
        "source_path": node.source_path,
        "flags": flag_names(node.flags),
    }
    if node.description is not None:
        out["description"] = node.description
    if node.sources:
        out["sources"] = [
            {"file_name": s.file_name, "line": s.line, "character": s.character}
            for s in node.sources
        ]
    out["children"] = [node_to_dict(child) for child in node.children]
    return out


def project_to_dict(project: ProjectTree) -> Dict[str, Any]:
    """Serialize the whole project forest."""
    return {
        "name": project.name,
        "children": [node_to_dict(child) for child in project.children],
    }


def flag_names(flags: NodeFlag) -> List[str]:
    """List the names of the set flags in declaration order."""
    return [
        member.name.lower()
        for member in NodeFlag
        if member is not NodeFlag.NONE and member.name and flags & member
    ]
