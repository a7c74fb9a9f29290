from __future__ import annotations

"""
Documentation Tree Data Models.

Provides the node types handled by the reorganizer: documentation nodes with
single-owner parent/child links, and the host project tree that carries the
top-level forest together with its global reflection registry.
"""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import TYPE_CHECKING, Iterator, List, Optional

if TYPE_CHECKING:
    from lernadocs.domain.reflection_registry import ReflectionRegistry

# -----------------------------------------------------------------------------
# CLASSIFICATION
# -----------------------------------------------------------------------------

class NodeKind(Enum):
    """Kind of documented entity."""
    PROJECT = "project"
    MODULE = "module"
    EXTERNAL_MODULE = "external_module"
    NAMESPACE = "namespace"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    FUNCTION = "function"
    METHOD = "method"
    PROPERTY = "property"
    VARIABLE = "variable"
    TYPE_ALIAS = "type_alias"

    @property
    def is_module_shaped(self) -> bool:
        """True for nodes standing for a whole source file or sub-module."""
        return self in (NodeKind.MODULE, NodeKind.EXTERNAL_MODULE)


class NodeFlag(IntFlag):
    """Bit flags attached to a documentation node."""
    NONE = 0
    EXPORTED = 1
    EXTERNAL = 2
    PRIVATE = 4
    STATIC = 8
    ABSTRACT = 16


@dataclass(frozen=True)
class SourceReference:
    """
    Location inside a source file a node was extracted from.

    Attributes:
        file_name: Absolute path of the source file.
        line: Line number (0 for synthetic nodes).
        character: Column offset.
    """
    file_name: str
    line: int = 0
    character: int = 0

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class DocNode:
    """
    A documented entity (module, class, function...).

    Nodes compare by identity. A node is owned by at most one parent; use
    attach()/detach() instead of editing `children` and `parent` by hand.

    Attributes:
        name: Display name of the entity.
        kind: Entity classification.
        source_path: Absolute path of the originating file.
        id: Registry identifier, assigned on registration when None.
        flags: Bit flags (exported, private...).
        description: Optional free text (doc comment, README).
        sources: Source locations.
        parent: Owning node, None for top-level nodes.
        children: Ordered owned nodes.
    """
    name: str
    kind: NodeKind
    source_path: str
    id: Optional[int] = None
    flags: NodeFlag = NodeFlag.NONE
    description: Optional[str] = None
    sources: List[SourceReference] = field(default_factory=list)
    parent: Optional["DocNode"] = field(default=None, repr=False)
    children: List["DocNode"] = field(default_factory=list, repr=False)

    def attach(self, child: "DocNode") -> None:
        """
        Transfer ownership of `child` to this node.

        The child is removed from its previous owner before being appended,
        so it is never reachable from two parents.
        """
        if child is self:
            raise ValueError(f"Cannot attach node '{self.name}' to itself.")
        child.detach()
        self.children.append(child)
        child.parent = self

    def detach(self) -> None:
        """Remove this node from its owner's children, if it has one."""
        owner = self.parent
        if owner is None:
            return
        for i, sibling in enumerate(owner.children):
            if sibling is self:
                del owner.children[i]
                break
        self.parent = None

    def walk(self) -> Iterator["DocNode"]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def has_flag(self, flag: NodeFlag) -> bool:
        return bool(self.flags & flag)

    def set_flag(self, flag: NodeFlag, value: bool = True) -> None:
        if value:
            self.flags |= flag
        else:
            self.flags &= ~flag


class ProjectTree:
    """
    Host project: an ordered top-level forest plus the global registry.

    Top-level nodes have no parent. The reorganizer replaces `children`
    wholesale and mutates `registry` in place.
    """

    def __init__(
            self,
            name: str,
            registry: "ReflectionRegistry",
            children: Optional[List[DocNode]] = None,
    ) -> None:
        self.name = name
        self.registry = registry
        self.children: List[DocNode] = list(children or [])

    def walk(self) -> Iterator[DocNode]:
        """Yield every node in the forest in pre-order."""
        for child in self.children:
            yield from child.walk()

    def __repr__(self) -> str:
        return f"ProjectTree(name={self.name!r}, children={len(self.children)})"
