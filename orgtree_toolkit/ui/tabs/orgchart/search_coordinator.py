from __future__ import annotations

from typing import Callable


class SearchCoordinator:
    """Coordinate the search box and pager with the controller and the table.

    ``table`` needs ``set_rows(rows)``; ``set_columns(columns)`` and
    ``set_page_info(page, page_count)`` are used when present.
    """

    def __init__(
        self,
        *,
        controller_getter: Callable[[], object],
        table: object,
    ) -> None:
        self._get_controller = controller_getter
        self._table = table

    # ------------------------------------------------------------------
    def term_changed(self, term: str) -> None:
        ctrl = self._get_controller()
        if ctrl is None:
            return
        ctrl.set_search_term(term)  # type: ignore[attr-defined]
        self._push_rows(ctrl)

    def navigate(self, direction: str) -> None:
        """Move to the previous or next page of results."""
        ctrl = self._get_controller()
        if ctrl is None:
            return
        delta = -1 if direction == "prev" else 1
        ctrl.set_page(ctrl.page + delta)  # type: ignore[attr-defined]
        self._push_rows(ctrl)

    def refresh(self) -> None:
        """Re-send columns and rows, e.g. after an edit."""
        ctrl = self._get_controller()
        if ctrl is None:
            return
        if hasattr(self._table, "set_columns"):
            self._table.set_columns(ctrl.columns)  # type: ignore[attr-defined]
        self._push_rows(ctrl)

    # ------------------------------------------------------------------
    def _push_rows(self, ctrl: object) -> None:
        self._table.set_rows(ctrl.visible_rows())  # type: ignore[attr-defined]
        if hasattr(self._table, "set_page_info"):
            self._table.set_page_info(ctrl.page, ctrl.page_count())  # type: ignore[attr-defined]
