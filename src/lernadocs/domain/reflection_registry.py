from __future__ import annotations

"""
Global Reflection Registry.

Owns the id -> node index used by the host pipeline for cross-referencing.
All insertions and removals go through this class so that the
one-entry-per-live-node invariant is maintained in a single place.
"""

import logging
from typing import Dict, Iterator, Optional

from lernadocs.domain.doc_models import DocNode
from lernadocs.domain.errors import RegistryError

logger = logging.getLogger(__name__)


class ReflectionRegistry:
    """Index of every live documentation node, keyed by id."""

    def __init__(self) -> None:
        self._by_id: Dict[int, DocNode] = {}
        self._next_id: int = 1

    # -------------------------------------------------------------------------
    # ID ALLOCATION
    # -------------------------------------------------------------------------

    def next_id(self) -> int:
        """Reserve a fresh identifier that no registered node uses."""
        while self._next_id in self._by_id:
            self._next_id += 1
        allocated = self._next_id
        self._next_id += 1
        return allocated

    # -------------------------------------------------------------------------
    # MUTATION
    # -------------------------------------------------------------------------

    def register(self, node: DocNode) -> int:
        """
        Insert a node into the index.

        Assigns an id when the node has none. Registering the same node twice
        is a no-op.

        Args:
            node: Node to index.

        Returns:
            int: The node's id.

        Raises:
            RegistryError: If a different node already holds the id.
        """
        if node.id is None:
            node.id = self.next_id()

        existing = self._by_id.get(node.id)
        if existing is not None and existing is not node:
            raise RegistryError(
                f"Reflection id {node.id} already registered for '{existing.name}', "
                f"cannot register '{node.name}'."
            )

        self._by_id[node.id] = node
        if node.id >= self._next_id:
            self._next_id = node.id + 1
        return node.id

    def register_tree(self, node: DocNode) -> None:
        """Register a node and all of its descendants."""
        for item in node.walk():
            self.register(item)

    def unregister(self, node: DocNode) -> bool:
        """
        Remove the entry for a node.

        Returns:
            bool: True if an entry pointing at this node was removed.
        """
        if node.id is None:
            return False
        if self._by_id.get(node.id) is not node:
            logger.debug(f"No registry entry for '{node.name}' (id={node.id}).")
            return False
        del self._by_id[node.id]
        return True

    def unregister_tree(self, node: DocNode) -> int:
        """Remove a node and all of its descendants. Returns the removal count."""
        return sum(1 for item in node.walk() if self.unregister(item))

    # -------------------------------------------------------------------------
    # LOOKUP
    # -------------------------------------------------------------------------

    def get(self, node_id: int) -> Optional[DocNode]:
        return self._by_id.get(node_id)

    def find_by_name(self, name: str) -> Optional[DocNode]:
        """Return the first registered node with this name, in insertion order."""
        for node in self._by_id.values():
            if node.name == name:
                return node
        return None

    def __contains__(self, node: object) -> bool:
        if not isinstance(node, DocNode) or node.id is None:
            return False
        return self._by_id.get(node.id) is node

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[DocNode]:
        return iter(list(self._by_id.values()))
