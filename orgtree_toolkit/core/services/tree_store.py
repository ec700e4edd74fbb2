from __future__ import annotations

"""Service layer for structural edits on the in-memory organization forest.

:class:`TreeStore` is the only component that changes the forest after load.
Derived views (rows, layout) are recomputed by callers once an operation has
returned, so they never observe a half-applied change.

Scope and guarantees:
- Operates purely in-memory, no file I/O nor UI imports.
- An id that matches no node is a silent no-op: the forest is left untouched,
  a warning is logged and the caller gets ``None`` / ``False``.
- New ids come from the same :class:`IdentityAllocator` used at load time.

Examples
--------
Basic usage:

    store = TreeStore.from_document({"name": "CEO", "children": [{"name": "CTO"}]})
    cfo_id = store.add(store.roots[0].id, "CFO")
    store.edit(cfo_id, "CFO", {"title": "Finance"})
    store.delete(cfo_id)

"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from orgtree_toolkit.core.identity import IdentityAllocator
from orgtree_toolkit.core.importers import load_forest
from orgtree_toolkit.core.models import OrgNode

__all__ = ["TreeStore"]

logger = logging.getLogger(__name__)


class TreeStore:
    """Owner of the canonical forest.

    Parameters
    ----------
    forest : list[OrgNode], optional
        Canonical (normalized, id-assigned) roots. Defaults to an empty forest.
    allocator : IdentityAllocator, optional
        Allocator that issued the ids of *forest*. A fresh one is created when
        omitted, which is only correct for an empty forest.
    """

    def __init__(
        self,
        forest: Optional[List[OrgNode]] = None,
        allocator: Optional[IdentityAllocator] = None,
    ) -> None:
        self._roots: List[OrgNode] = list(forest or [])
        self._allocator = allocator or IdentityAllocator()

    @classmethod
    def from_document(cls, raw: Any, allocator: Optional[IdentityAllocator] = None) -> "TreeStore":
        """Run the load pipeline on *raw* and wrap the result.

        Raises
        ------
        MalformedDocumentError
            If *raw* is not a node object or a list of node objects.
        """
        allocator = allocator or IdentityAllocator()
        return cls(load_forest(raw, allocator), allocator)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def roots(self) -> List[OrgNode]:
        """The forest itself; treat as read-only outside this class."""
        return self._roots

    @property
    def allocator(self) -> IdentityAllocator:
        return self._allocator

    def is_empty(self) -> bool:
        return not self._roots

    def iter_nodes(self) -> Iterator[OrgNode]:
        """Yield every node in pre-order, roots left to right."""
        for root in self._roots:
            yield from root.iter_preorder()

    def node_count(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def find(self, node_id: int) -> Optional[OrgNode]:
        """Return the first node in pre-order whose id is *node_id*."""
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None

    def parent_of(self, node_id: int) -> Optional[OrgNode]:
        """Return the parent of *node_id*, or None for roots and unknown ids."""
        located = self._locate(node_id)
        if located is None:
            return None
        return located[0]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, parent_id: int, name: str, attributes: Optional[Dict[str, str]] = None) -> Optional[int]:
        """Append a new leaf named *name* under *parent_id*.

        Returns the new node's id, or None when no node has id *parent_id*
        (nothing is allocated in that case).
        """
        logger.info("Edit: add parent=%s", parent_id)
        parent = self.find(parent_id)
        if parent is None:
            logger.warning("Edit noop: add parent_not_found parent=%s", parent_id)
            return None

        node = OrgNode(
            name=name,
            attributes=dict(attributes or {}),
            children=[],
            id=self._allocator.allocate(),
        )
        parent.children.append(node)
        logger.info("Edit OK: add parent=%s node=%s", parent_id, node.id)
        return node.id

    def delete(self, node_id: int) -> bool:
        """Remove *node_id* with its whole subtree; roots included."""
        logger.info("Edit: delete node=%s", node_id)
        located = self._locate(node_id)
        if located is None:
            logger.warning("Edit noop: delete node_not_found node=%s", node_id)
            return False

        parent, index = located
        siblings = self._roots if parent is None else parent.children
        removed = siblings.pop(index)
        logger.info(
            "Edit OK: delete node=%s removed=%d",
            node_id, sum(1 for _ in removed.iter_preorder()),
        )
        return True

    def edit(self, node_id: int, name: str, attributes: Optional[Dict[str, str]] = None) -> bool:
        """Rename *node_id* and merge *attributes* into its attribute map.

        Id, children and position are left untouched.
        """
        logger.info("Edit: edit node=%s", node_id)
        node = self.find(node_id)
        if node is None:
            logger.warning("Edit noop: edit node_not_found node=%s", node_id)
            return False

        node.name = name
        if attributes:
            node.attributes.update(attributes)
        logger.info("Edit OK: edit node=%s", node_id)
        return True

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _locate(self, node_id: int) -> Optional[Tuple[Optional[OrgNode], int]]:
        """Return ``(parent, index)`` of the first pre-order match.

        ``parent`` is None when the match is a root.
        """
        stack: List[Tuple[Optional[OrgNode], int, OrgNode]] = [
            (None, index, root) for index, root in reversed(list(enumerate(self._roots)))
        ]
        while stack:
            parent, index, node = stack.pop()
            if node.id == node_id:
                return parent, index
            # Push in reverse so the leftmost child is visited first
            stack.extend(
                (node, i, child) for i, child in reversed(list(enumerate(node.children)))
            )
        return None
