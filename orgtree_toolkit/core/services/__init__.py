from __future__ import annotations

"""High-level services over the organization forest.

TreeStore owns structural mutation; RowProjector and LayoutEstimator derive
the tabular and graphical views from the current forest.
"""

from .tree_store import TreeStore  # noqa: F401
from .row_projector import RowProjector  # noqa: F401
from .layout_estimator import LayoutEstimator  # noqa: F401

__all__: list[str] = [
    "TreeStore",
    "RowProjector",
    "LayoutEstimator",
]
