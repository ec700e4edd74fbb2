"""Typed views over the ``layout`` and ``table`` configuration sections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class LayoutSettings:
    """Fixed graph metrics used by the layout estimator."""

    node_width: float = 100
    node_padding: float = 10
    node_gutter: float = 40
    level_height: float = 150
    line_height: float = 16
    max_zoom: float = 1.0
    zoom_extent: Tuple[float, float] = (0.1, 2.0)

    @property
    def slot_width(self) -> float:
        """Horizontal room taken by one node and its gutter."""
        return self.node_width + 2 * self.node_padding + self.node_gutter

    @classmethod
    def from_config(cls, data: Optional[Dict[str, Any]]) -> "LayoutSettings":
        data = data or {}
        defaults = cls()
        extent = data.get("zoom_extent") or defaults.zoom_extent
        return cls(
            node_width=float(data.get("node_width", defaults.node_width)),
            node_padding=float(data.get("node_padding", defaults.node_padding)),
            node_gutter=float(data.get("node_gutter", defaults.node_gutter)),
            level_height=float(data.get("level_height", defaults.level_height)),
            line_height=float(data.get("line_height", defaults.line_height)),
            max_zoom=min(1.0, float(data.get("max_zoom", defaults.max_zoom))),
            zoom_extent=(float(extent[0]), float(extent[1])),
        )


@dataclass(frozen=True)
class TableSettings:
    """Behaviour of the tabular view."""

    rows_per_page: int = 10
    actions_label: str = "Actions"
    actions: Tuple[str, ...] = ("edit", "add", "delete")
    form_fields: Tuple[str, ...] = ("title", "location")

    @classmethod
    def from_config(cls, data: Optional[Dict[str, Any]]) -> "TableSettings":
        data = data or {}
        defaults = cls()
        return cls(
            rows_per_page=max(1, int(data.get("rows_per_page", defaults.rows_per_page))),
            actions_label=str(data.get("actions_label", defaults.actions_label)),
            actions=tuple(data.get("actions") or defaults.actions),
            form_fields=tuple(data.get("form_fields") or defaults.form_fields),
        )
