from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from orgtree_toolkit.config import ConfigManager
from orgtree_toolkit.core.exceptions import MalformedDocumentError
from orgtree_toolkit.core.identity import IdentityAllocator
from orgtree_toolkit.core.importers import DocumentImporter
from orgtree_toolkit.core.models import (
    ColumnSpec,
    LayoutSettings,
    LayoutTransform,
    NodeCard,
    Row,
    TableSettings,
)
from orgtree_toolkit.core.services import LayoutEstimator, RowProjector, TreeStore

__all__ = ["OperationResult", "NodeForm", "OrgChartController"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Result of an editing action triggered from the views.

    Attributes
    ----------
    success
        Whether the operation changed the forest.
    message
        Human-readable summary suitable for logs or UI display.
    details
        Optional structured details for diagnostics or caller logic.
    """
    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None


@dataclass
class NodeForm:
    """Values of an open add or edit form.

    ``target_id`` is the parent for an add form and the edited node for an
    edit form.
    """
    target_id: int
    name: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)


class OrgChartController:
    """Controller coordinating the table and graph views with the services.

    This controller maintains transient UI-related state (load status, search
    term, page, sort, open forms) and delegates structural work to
    :class:`TreeStore`. It contains no UI toolkit code.

    Parameters
    ----------
    store : TreeStore, optional
        Store holding the current forest; empty by default.
    projector : RowProjector, optional
        Tabular projection service.
    estimator : LayoutEstimator, optional
        Graph layout estimation service.

    Notes
    -----
    - Unknown ids never raise; methods return False or an unsuccessful
      :class:`OperationResult`.
    - Listeners registered with :meth:`add_listener` run after each completed
      load or mutation, never in the middle of one.
    """

    def __init__(
        self,
        store: Optional[TreeStore] = None,
        projector: Optional[RowProjector] = None,
        estimator: Optional[LayoutEstimator] = None,
    ) -> None:
        # Dependencies
        self.store: TreeStore = store or TreeStore()
        self.projector: RowProjector = projector or RowProjector()
        self.estimator: LayoutEstimator = estimator or LayoutEstimator()
        self.importer = DocumentImporter()

        # Transient UI-related state
        self.loading: bool = False
        self.error: Optional[str] = None
        self.search_term: str = ""
        self.page: int = 1
        self.sort_key: Optional[str] = None
        self.sort_descending: bool = False
        self.pending_add: Optional[NodeForm] = None
        self.pending_edit: Optional[NodeForm] = None

        self._listeners: List[Callable[[], None]] = []
        self._rows_cache: Optional[List[Row]] = None

    @classmethod
    def from_config(cls, config: Optional[ConfigManager] = None) -> "OrgChartController":
        """Build a controller whose services use the configured settings."""
        config = config or ConfigManager()
        table = TableSettings.from_config(config.get_table_settings())
        layout = LayoutSettings.from_config(config.get_layout_settings())
        return cls(projector=RowProjector(table), estimator=LayoutEstimator(layout))

    # ---------------------------------------------------------------------------------
    # Loading
    # ---------------------------------------------------------------------------------

    def load_document(self, raw: Any) -> bool:
        """Replace the forest with the one described by *raw*.

        On a malformed document the error message is kept in :attr:`error`
        and the forest is left empty. Returns True on success.
        """
        return self._load(lambda allocator: TreeStore.from_document(raw, allocator))

    def load_file(self, file_path: Path) -> bool:
        """Same as :meth:`load_document` for a JSON, YAML or XML file."""
        return self._load(
            lambda allocator: TreeStore(self.importer.load_file(Path(file_path), allocator), allocator)
        )

    def _load(self, build: Callable[[IdentityAllocator], TreeStore]) -> bool:
        self.loading = True
        self.error = None
        self.pending_add = None
        self.pending_edit = None
        try:
            self.store = build(IdentityAllocator())
        except MalformedDocumentError as exc:
            logger.error("Load failed: %s", exc)
            self.error = str(exc)
            self.store = TreeStore()
        finally:
            self.loading = False
        self.page = 1
        self._changed()
        return self.error is None

    @property
    def status(self) -> str:
        """One of ``loading``, ``error``, ``empty`` or ``ready``."""
        if self.loading:
            return "loading"
        if self.error is not None:
            return "error"
        if self.store.is_empty():
            return "empty"
        return "ready"

    @property
    def status_message(self) -> str:
        return {
            "loading": "Loading...",
            "error": f"Error: {self.error}",
            "empty": "No data available",
            "ready": "",
        }[self.status]

    # ---------------------------------------------------------------------------------
    # Table view
    # ---------------------------------------------------------------------------------

    @property
    def rows(self) -> List[Row]:
        """All rows of the current forest (cached until the next change)."""
        if self._rows_cache is None:
            self._rows_cache = self.projector.flatten(self.store.roots)
        return self._rows_cache

    @property
    def columns(self) -> List[ColumnSpec]:
        return self.projector.infer_columns(
            self.rows,
            actions={"edit": self.on_edit, "add": self.on_add, "delete": self.on_delete},
        )

    @property
    def filtered_rows(self) -> List[Row]:
        rows = self.projector.filter(self.rows, self.search_term)
        if self.sort_key is not None:
            rows = self.projector.sort_rows(rows, self.sort_key, self.sort_descending)
        return rows

    def visible_rows(self) -> List[Row]:
        """Rows of the current page after search and sort."""
        return self.projector.paginate(self.filtered_rows, self.page)

    def page_count(self) -> int:
        return self.projector.page_count(self.filtered_rows)

    def set_search_term(self, term: str) -> None:
        self.search_term = term or ""
        self.page = 1

    def set_page(self, page: int) -> int:
        """Select a 1-based page, clamped to the available range."""
        self.page = min(max(1, int(page)), self.page_count())
        return self.page

    def set_sort(self, key: Optional[str], descending: bool = False) -> bool:
        """Sort the table by a sortable column; ``None`` restores tree order."""
        if key is None:
            self.sort_key = None
            self.sort_descending = False
            return True
        column = next((c for c in self.columns if c.key == key), None)
        if column is None or not column.sortable:
            return False
        self.sort_key = key
        self.sort_descending = bool(descending)
        return True

    # ---------------------------------------------------------------------------------
    # Graph view
    # ---------------------------------------------------------------------------------

    def compute_layout(self, width: float, height: float) -> LayoutTransform:
        return self.estimator.estimate(self.store.roots, width, height)

    def graph_data(self) -> List[Dict[str, Any]]:
        """Nested mappings of the forest for the graph renderer."""
        return [root.to_dict() for root in self.store.roots]

    def node_card(self, node_id: int) -> Optional[NodeCard]:
        node = self.store.find(node_id)
        return None if node is None else self.estimator.node_card(node)

    @property
    def zoom_extent(self) -> tuple[float, float]:
        return self.estimator.settings.zoom_extent

    # ---------------------------------------------------------------------------------
    # Row actions
    # ---------------------------------------------------------------------------------

    def on_add(self, parent_id: int) -> bool:
        """Open the add form for a new child of *parent_id*."""
        if self.store.find(parent_id) is None:
            logger.warning("Add form not opened: unknown parent=%s", parent_id)
            return False
        self.pending_edit = None
        self.pending_add = NodeForm(parent_id, "", {f: "" for f in self.projector.settings.form_fields})
        return True

    def submit_add(self, name: str, attributes: Optional[Dict[str, str]] = None) -> OperationResult:
        form = self.pending_add
        if form is None:
            return OperationResult(False, "No add form is open.")
        self.pending_add = None

        filled = {k: v for k, v in (attributes or {}).items() if v}
        new_id = self.store.add(form.target_id, name, filled)
        if new_id is None:
            return OperationResult(False, f"Parent not found for id '{form.target_id}'.",
                                   {"parent_id": form.target_id})
        self._changed()
        return OperationResult(True, f"Added '{name}'.", {"parent_id": form.target_id, "node_id": new_id})

    def cancel_add(self) -> None:
        self.pending_add = None

    def on_edit(self, node_id: int) -> bool:
        """Open the edit form prefilled from *node_id*."""
        node = self.store.find(node_id)
        if node is None:
            logger.warning("Edit form not opened: unknown node=%s", node_id)
            return False
        self.pending_add = None
        self.pending_edit = NodeForm(
            node_id,
            node.name or "",
            {f: node.attributes.get(f, "") for f in self.projector.settings.form_fields},
        )
        return True

    def submit_edit(self, name: str, attributes: Optional[Dict[str, str]] = None) -> OperationResult:
        form = self.pending_edit
        if form is None:
            return OperationResult(False, "No edit form is open.")
        self.pending_edit = None

        if not self.store.edit(form.target_id, name, attributes):
            return OperationResult(False, f"Node not found for id '{form.target_id}'.",
                                   {"node_id": form.target_id})
        self._changed()
        return OperationResult(True, f"Updated '{name}'.", {"node_id": form.target_id})

    def cancel_edit(self) -> None:
        self.pending_edit = None

    def on_delete(self, node_id: int) -> OperationResult:
        if not self.store.delete(node_id):
            return OperationResult(False, f"Node not found for id '{node_id}'.", {"node_id": node_id})
        # Forms aimed at a removed node cannot be submitted anymore
        if self.pending_add is not None and self.store.find(self.pending_add.target_id) is None:
            self.pending_add = None
        if self.pending_edit is not None and self.store.find(self.pending_edit.target_id) is None:
            self.pending_edit = None
        self._changed()
        return OperationResult(True, "Deleted node.", {"node_id": node_id})

    # ---------------------------------------------------------------------------------
    # Change notification
    # ---------------------------------------------------------------------------------

    def add_listener(self, callback: Callable[[], None]) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _changed(self) -> None:
        self._rows_cache = None
        self.page = min(self.page, self.page_count())
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                logger.exception("Change listener %r failed", callback)
