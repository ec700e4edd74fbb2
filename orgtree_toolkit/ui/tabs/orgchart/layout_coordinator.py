from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from orgtree_toolkit.core.models import LayoutTransform

logger = logging.getLogger(__name__)


class LayoutCoordinator:
    """Fit the graph view to its container once the view has been rendered.

    Container dimensions are only meaningful after the host has laid out the
    freshly updated view. :meth:`invalidate` marks the layout stale after a
    forest change; the estimate runs on the next :meth:`notify_layout_ready`.

    Parameters
    ----------
    controller_getter : Callable[[], object]
        Zero-arg callable returning the controller (``compute_layout(w, h)``).
    measure : Callable[[], Optional[Tuple[float, float]]]
        Returns the container ``(width, height)``, or None while unknown.
    apply : Callable[[LayoutTransform], None]
        Pushes the transform to the graph view.
    after : Callable[[int, Callable[[], None]], object], optional
        Tk-like scheduler (``widget.after``). When given, one zero-delay call
        to :meth:`notify_layout_ready` is scheduled per change. Hosts with an
        explicit post-render signal leave it out and call
        :meth:`notify_layout_ready` themselves.
    """

    def __init__(
        self,
        *,
        controller_getter: Callable[[], object],
        measure: Callable[[], Optional[Tuple[float, float]]],
        apply: Callable[[LayoutTransform], None],
        after: Optional[Callable[[int, Callable[[], None]], object]] = None,
    ) -> None:
        self._get_controller = controller_getter
        self._measure = measure
        self._apply = apply
        self._after = after
        self._pending: bool = False
        self._scheduled: bool = False
        self.last_transform: Optional[LayoutTransform] = None

    @property
    def pending(self) -> bool:
        return self._pending

    # -------------------------------------------------------------- Public API
    def invalidate(self) -> None:
        """Mark the layout stale; schedule at most one deferred estimate."""
        self._pending = True
        if self._after is not None and not self._scheduled:
            self._scheduled = True
            self._after(0, self.notify_layout_ready)

    def notify_layout_ready(self) -> Optional[LayoutTransform]:
        """Estimate and apply the transform if a change is pending.

        Extra calls for the same change do nothing.
        """
        self._scheduled = False
        if not self._pending:
            return None
        self._pending = False

        ctrl = self._get_controller()
        if ctrl is None:
            return None
        size = self._measure()
        if size is None:
            logger.debug("Layout skipped: container size unavailable")
            return None

        width, height = size
        transform = ctrl.compute_layout(width, height)  # type: ignore[attr-defined]
        self.last_transform = transform
        self._apply(transform)
        return transform
