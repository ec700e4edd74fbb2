from __future__ import annotations

"""Shared data structures used across the OrgTree Toolkit core.

This package exposes dataclasses and value objects used by services and other
core layers. It is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, GUI, etc.).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .settings import LayoutSettings, TableSettings
from .views import ColumnSpec, LayoutTransform, NodeCard

__all__ = [
    "OrgNode",
    "Row",
    "ColumnSpec",
    "LayoutTransform",
    "NodeCard",
    "LayoutSettings",
    "TableSettings",
]

# One flattened node: id/name/parent/level plus the node's attributes.
Row = Dict[str, Any]


@dataclass
class OrgNode:
    """One element of the organization tree.

    Attributes
    ----------
    name
        Display label of the node (a person or a unit).
    attributes
        Open mapping of extra fields such as ``title`` or ``location``.
    children
        Ordered child nodes, owned exclusively by this node.
    id
        Unique integer assigned once at load time (or at creation for added
        nodes). ``None`` only for raw nodes that have not been loaded yet.
    hidden_subtree
        Collapsed alternate-children slot carried by raw documents. The
        normalizer folds it into ``children`` and resets it to ``None``.
    """

    name: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["OrgNode"] = field(default_factory=list)
    id: Optional[int] = None
    hidden_subtree: Optional[List["OrgNode"]] = None

    def is_leaf(self) -> bool:
        """Return True if this node has no children."""
        return not self.children

    def iter_preorder(self) -> Iterator["OrgNode"]:
        """Yield this node then its descendants, children left to right."""
        stack: List[OrgNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain nested mapping suitable for graph renderers."""
        result = self._shallow_dict()
        stack = [(self, result)]
        while stack:
            node, out = stack.pop()
            for child in node.children:
                child_out = child._shallow_dict()
                out["children"].append(child_out)
                stack.append((child, child_out))
        return result

    def _shallow_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "attributes": dict(self.attributes),
            "children": [],
        }
