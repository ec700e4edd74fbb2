from __future__ import annotations

"""Fit-to-viewport estimation for the graph view.

The graph view needs an initial pan/zoom before any real layout pass has run.
The estimate only uses structural counts: the widest level sets the width
(every node takes one fixed slot) and the depth sets the height (every level
takes one fixed band). Metrics come from :class:`LayoutSettings`.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from orgtree_toolkit.core.models import LayoutSettings, LayoutTransform, NodeCard, OrgNode

__all__ = ["LayoutEstimator"]

logger = logging.getLogger(__name__)

# Attributes drawn under the name on each node card, in order
CARD_ATTRIBUTES: Tuple[str, ...] = ("title", "location")


class LayoutEstimator:
    """Compute depth/sibling bounds and the transform that fits them."""

    def __init__(self, settings: Optional[LayoutSettings] = None) -> None:
        self.settings = settings or LayoutSettings()

    @staticmethod
    def max_depth(forest: Sequence[OrgNode]) -> int:
        """Number of levels of the deepest tree; 0 for an empty forest."""
        if not forest:
            return 0
        deepest = 0
        stack: List[Tuple[OrgNode, int]] = [(root, 1) for root in forest]
        while stack:
            node, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in node.children)
        return deepest

    @staticmethod
    def max_siblings_per_level(forest: Iterable[OrgNode]) -> int:
        """Largest node count found on a single level; all roots share level 0."""
        per_level: Dict[int, int] = {}
        stack: List[Tuple[OrgNode, int]] = [(root, 0) for root in forest]
        while stack:
            node, level = stack.pop()
            per_level[level] = per_level.get(level, 0) + 1
            stack.extend((child, level + 1) for child in node.children)
        return max(per_level.values(), default=0)

    def estimate(
        self,
        forest: Sequence[OrgNode],
        container_width: float,
        container_height: float,
    ) -> LayoutTransform:
        """Return the pan/zoom that fits *forest* into the container.

        Zoom never exceeds 1, nor ``settings.max_zoom`` when lower. The root is
        anchored horizontally centred, a quarter of the way down.
        """
        translate_x = max(0.0, container_width / 2)
        translate_y = max(0.0, container_height / 4)

        if not forest or container_width <= 0 or container_height <= 0:
            logger.debug(
                "Degenerate layout (roots=%d, container=%sx%s); using zoom 1",
                len(forest), container_width, container_height,
            )
            return LayoutTransform(translate_x, translate_y, 1.0)

        estimated_width = self.settings.slot_width * self.max_siblings_per_level(forest)
        estimated_height = self.settings.level_height * self.max_depth(forest)
        if estimated_width <= 0 or estimated_height <= 0:
            return LayoutTransform(translate_x, translate_y, 1.0)

        zoom = min(
            container_width / estimated_width,
            container_height / estimated_height,
            self.settings.max_zoom,
            1.0,
        )
        logger.debug(
            "Layout estimate: tree=%.0fx%.0f container=%sx%s zoom=%.3f",
            estimated_width, estimated_height, container_width, container_height, zoom,
        )
        return LayoutTransform(translate_x, translate_y, zoom)

    def node_card(self, node: OrgNode) -> NodeCard:
        """Describe the card drawn for *node*: its label lines and box size."""
        lines = [node.name] if node.name else []
        for key in CARD_ATTRIBUTES:
            value = (node.attributes or {}).get(key)
            if value:
                lines.append(value)
        s = self.settings
        return NodeCard(
            lines=tuple(lines),
            width=s.node_width + 2 * s.node_padding,
            height=len(lines) * s.line_height + 2 * s.node_padding,
        )
