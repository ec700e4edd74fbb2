from __future__ import annotations

"""Tabular projection of the organization forest.

Rows are plain dictionaries so that every attribute of a node can become a
column without a fixed schema::

    {"id": 1, "name": "CTO", "parent": "CEO", "level": 1, "title": "Tech"}

The column set is inferred from the rows themselves, in the order fields are
first seen during a pre-order traversal, followed by a synthetic actions
column whose triggers are bound to each row's id.
"""

import logging
import math
from numbers import Number
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from orgtree_toolkit.core.models import ColumnSpec, OrgNode, Row, TableSettings

__all__ = ["RowProjector", "STRUCTURAL_FIELDS"]

logger = logging.getLogger(__name__)

STRUCTURAL_FIELDS: Tuple[str, ...] = ("id", "name", "parent", "level")

ACTIONS_KEY = "actions"


def _column_label(key: str) -> str:
    return key[:1].upper() + key[1:]


class RowProjector:
    """Flatten, describe, filter, sort and page the forest's rows.

    All methods are pure: they never modify the forest nor the rows passed in.
    """

    def __init__(self, settings: Optional[TableSettings] = None) -> None:
        self.settings = settings or TableSettings()

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------
    def flatten(self, forest: Iterable[OrgNode]) -> List[Row]:
        """Return one row per node in pre-order, roots left to right."""
        rows: List[Row] = []
        stack: List[Tuple[OrgNode, Optional[str], int]] = [
            (root, None, 0) for root in reversed(list(forest))
        ]
        while stack:
            node, parent_name, level = stack.pop()
            row: Row = {"id": node.id, "name": node.name, "parent": parent_name, "level": level}
            for key, value in (node.attributes or {}).items():
                if key in STRUCTURAL_FIELDS:
                    logger.debug("Attribute '%s' of node %s shadows a structural field; skipped", key, node.id)
                    continue
                row[key] = value
            rows.append(row)
            stack.extend((child, node.name, level + 1) for child in reversed(node.children))
        return rows

    def infer_columns(
        self,
        rows: Iterable[Mapping[str, Any]],
        actions: Optional[Mapping[str, Callable[[int], Any]]] = None,
    ) -> List[ColumnSpec]:
        """Return data columns in first-seen order plus the actions column.

        *actions* maps action names (``edit``, ``add``, ``delete``) to callbacks
        taking a node id.
        """
        keys: Dict[str, None] = {}
        for row in rows:
            for key in row.keys():
                keys.setdefault(key, None)

        columns = [ColumnSpec(key=key, label=_column_label(key)) for key in keys]
        columns.append(
            ColumnSpec(
                key=ACTIONS_KEY,
                label=self.settings.actions_label,
                sortable=False,
                filterable=False,
                actions=tuple(self.settings.actions),
                callbacks=dict(actions or {}),
            )
        )
        return columns

    # ------------------------------------------------------------------
    # Table operations
    # ------------------------------------------------------------------
    @staticmethod
    def filter(rows: Sequence[Row], query: str) -> List[Row]:
        """Keep rows whose joined field values contain *query* (case-insensitive)."""
        if not query:
            return list(rows)
        needle = query.lower()
        return [row for row in rows if needle in _searchable_text(row)]

    @staticmethod
    def sort_rows(rows: Sequence[Row], key: str, descending: bool = False) -> List[Row]:
        """Stable sort on *key*; rows lacking a value always come last."""
        present = [row for row in rows if row.get(key) is not None]
        missing = [row for row in rows if row.get(key) is None]
        present.sort(key=lambda row: _sort_key(row[key]), reverse=descending)
        return present + missing

    def page_count(self, rows: Sequence[Row], per_page: Optional[int] = None) -> int:
        per_page = per_page or self.settings.rows_per_page
        return max(1, math.ceil(len(rows) / per_page))

    def paginate(self, rows: Sequence[Row], page: int = 1, per_page: Optional[int] = None) -> List[Row]:
        """Return the rows of 1-based *page*; out-of-range pages are clamped."""
        per_page = per_page or self.settings.rows_per_page
        page = min(max(1, page), self.page_count(rows, per_page))
        start = (page - 1) * per_page
        return list(rows[start:start + per_page])


def _searchable_text(row: Mapping[str, Any]) -> str:
    return " ".join("" if value is None else str(value) for value in row.values()).lower()


def _sort_key(value: Any) -> Tuple[int, Any]:
    # Numbers sort before text so mixed columns never compare int with str
    if isinstance(value, Number) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value).lower())
