"""Top-level package for the business-logic portion of OrgTree Toolkit.

Front-ends (GUI, CLI) should only depend on the public API exposed here rather
than importing internal modules directly.
"""

from .core.models import OrgNode  # re-export for convenience
from .core.services import LayoutEstimator, RowProjector, TreeStore

__all__: list[str] = [
    "OrgNode",
    "TreeStore",
    "RowProjector",
    "LayoutEstimator",
]
