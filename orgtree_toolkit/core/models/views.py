"""Value objects handed to the table and graph collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ColumnSpec:
    """Description of one table column.

    Data columns read ``row[key]``. The synthetic actions column has no data;
    it lists the action names it exposes and the callbacks they trigger.
    """

    key: str
    label: str
    sortable: bool = True
    filterable: bool = True
    actions: Tuple[str, ...] = ()
    callbacks: Mapping[str, Callable[[int], Any]] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_action(self) -> bool:
        return bool(self.actions)

    def value_for(self, row: Mapping[str, Any]) -> Optional[Any]:
        if self.is_action:
            return None
        return row.get(self.key)

    def triggers_for(self, row: Mapping[str, Any]) -> Dict[str, Callable[[], Any]]:
        """Return zero-argument triggers bound to the row's id."""
        if not self.is_action:
            return {}
        node_id = row.get("id")
        return {
            name: partial(self.callbacks[name], node_id)
            for name in self.actions
            if name in self.callbacks
        }


@dataclass(frozen=True)
class LayoutTransform:
    """Pan/zoom applied by the graph view so the estimated tree fits."""

    translate_x: float
    translate_y: float
    zoom: float

    @property
    def translate(self) -> Dict[str, float]:
        return {"x": self.translate_x, "y": self.translate_y}

    def to_dict(self) -> Dict[str, float]:
        return {
            "translate_x": self.translate_x,
            "translate_y": self.translate_y,
            "zoom": self.zoom,
        }


@dataclass(frozen=True)
class NodeCard:
    """Box the graph renderer draws for one node.

    ``lines`` are unwrapped; wrapping to ``width`` is the renderer's job.
    """

    lines: Tuple[str, ...]
    width: float
    height: float
