"""Coordinators wiring the organization chart views to the controller."""

from .layout_coordinator import LayoutCoordinator
from .search_coordinator import SearchCoordinator

__all__ = ["LayoutCoordinator", "SearchCoordinator"]
