from __future__ import annotations

"""Identity allocation for organization tree nodes.

Ids are plain integers drawn from a counter owned by an
:class:`IdentityAllocator` instance. The same allocator must serve the initial
load and every later addition so an id is never issued twice.
"""

import logging
from typing import Iterable, Optional

from orgtree_toolkit.core.models import OrgNode

__all__ = ["IdentityAllocator"]

logger = logging.getLogger(__name__)


class IdentityAllocator:
    """Issue strictly increasing integer ids.

    Parameters
    ----------
    start : int, default=0
        First value returned by :meth:`allocate`.

    Examples
    --------
    >>> alloc = IdentityAllocator()
    >>> alloc.allocate(), alloc.allocate()
    (0, 1)
    """

    def __init__(self, start: int = 0) -> None:
        self._next: int = int(start)
        self._last: Optional[int] = None

    @property
    def last_issued(self) -> Optional[int]:
        """Most recent id returned, or None if nothing was allocated yet."""
        return self._last

    def allocate(self) -> int:
        value = self._next
        self._next += 1
        self._last = value
        return value

    def assign_ids(self, forest: Iterable[OrgNode]) -> int:
        """Give every node of *forest* a fresh id in pre-order.

        Must run once per load, after normalization, on nodes without ids.
        Returns the number of ids issued.
        """
        count = 0
        for root in forest:
            for node in root.iter_preorder():
                node.id = self.allocate()
                count += 1
        logger.debug("Assigned %d ids (last=%s)", count, self._last)
        return count
