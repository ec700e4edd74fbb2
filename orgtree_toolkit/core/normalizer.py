from __future__ import annotations

"""Fold collapsed subtrees into the canonical node shape.

Raw documents may carry a node's children in a collapsed slot
(``hidden_subtree``) instead of, or next to, its visible children. After
normalization every node exposes all of its children through ``children`` and
the slot is ``None``, so every node gets an id and shows up in the table and
the graph.
"""

from typing import Iterable

from orgtree_toolkit.core.models import OrgNode

__all__ = ["normalize", "normalize_forest"]


def normalize(node: OrgNode) -> None:
    """Normalize *node* and its whole subtree in place."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.hidden_subtree:
            current.children.extend(current.hidden_subtree)
        current.hidden_subtree = None
        if current.attributes is None:
            current.attributes = {}
        stack.extend(current.children)


def normalize_forest(forest: Iterable[OrgNode]) -> None:
    for root in forest:
        normalize(root)
