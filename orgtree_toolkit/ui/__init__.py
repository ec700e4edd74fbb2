"""OrgTree Toolkit presentation layer.

Toolkit-agnostic controller and coordinators for the organization table and
graph views. Widget toolkits plug in through the small duck-typed interfaces
documented on each coordinator.
"""

# Controllers
from .controllers.orgchart_controller import OrgChartController  # noqa: F401

# Coordinators
from .tabs.orgchart import LayoutCoordinator, SearchCoordinator  # noqa: F401

__all__: list[str] = [
    "OrgChartController",
    "LayoutCoordinator",
    "SearchCoordinator",
]
