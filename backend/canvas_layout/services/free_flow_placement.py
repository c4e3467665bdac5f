"""canvas_layout/services/free_flow_placement.py

Placement for boards in *free-flow* mode.

Free-flow trades automatic tidiness for stability: a new card is put next to
an existing one and nothing else on the board ever moves.  Each helper returns
a single slot; resizing only touches the resized card.
"""

from typing import List, Optional, Sequence
import logging

from canvas_layout.models import CanvasNode, NodePosition, utc_now
from canvas_layout.services.geometry import (
    DEFAULT_NODE_HEIGHT,
    DEFAULT_NODE_WIDTH,
    GRID_GAP,
    GRID_PADDING,
    clamp_node_dimensions,
    node_rect,
    node_width,
    rects_overlap,
)

log = logging.getLogger(__name__)

MAX_COLLISION_ITERATIONS = 200


def _collides_with_any(x: float, y: float, width: float, height: float,
                       nodes: Sequence[CanvasNode]) -> bool:
    candidate = (x, y, width, height)
    return any(rects_overlap(candidate, node_rect(node)) for node in nodes)


def _resolve_collision(x: float, start_y: float, nodes: Sequence[CanvasNode]) -> NodePosition:
    """Step a default-sized card down from *start_y* until it no longer overlaps."""
    y = start_y
    for _ in range(MAX_COLLISION_ITERATIONS):
        if not _collides_with_any(x, y, DEFAULT_NODE_WIDTH, DEFAULT_NODE_HEIGHT, nodes):
            return NodePosition(x=x, y=y)
        y += DEFAULT_NODE_HEIGHT + GRID_GAP
    log.warning("[FreeFlow] Gave up resolving collision at x=%s after %d steps",
                x, MAX_COLLISION_ITERATIONS)
    return NodePosition(x=x, y=y)


def _right_of(node: CanvasNode) -> NodePosition:
    return NodePosition(x=node.position.x + node_width(node) + GRID_GAP, y=node.position.y)


def _most_recent(nodes: Sequence[CanvasNode]) -> CanvasNode:
    latest = nodes[0]
    for node in nodes[1:]:
        if node.created_at >= latest.created_at:
            latest = node
    return latest


def place_next(nodes: Sequence[CanvasNode], focused_node_id: Optional[str] = None) -> NodePosition:
    """Slot for a new card to the right of the focused (or newest) card.

    Falls back to the board origin when the board is empty or the focused id
    is unknown.
    """
    if not nodes:
        return NodePosition(x=GRID_PADDING, y=GRID_PADDING)

    if focused_node_id is not None:
        anchor = next((n for n in nodes if n.id == focused_node_id), None)
        if anchor is None:
            return NodePosition(x=GRID_PADDING, y=GRID_PADDING)
    else:
        anchor = _most_recent(nodes)

    target = _right_of(anchor)
    return _resolve_collision(target.x, target.y, nodes)


def place_branch(parent: CanvasNode, nodes: Sequence[CanvasNode]) -> NodePosition:
    """Slot for a card branched from *parent*.

    Starts directly right of the parent and stacks downward past earlier
    branches, so several children fan out vertically without overlapping.
    """
    target = _right_of(parent)
    others = [n for n in nodes if n.id != parent.id]
    return _resolve_collision(target.x, target.y, others)


def resize_in_place(nodes: Sequence[CanvasNode], node_id: str,
                    width: float, height: float) -> List[CanvasNode]:
    """Apply new dimensions to *node_id* and leave every other card untouched."""
    width, height = clamp_node_dimensions(width, height)
    now = utc_now()
    return [
        node.model_copy(update={"width": width, "height": height, "updated_at": now})
        if node.id == node_id else node
        for node in nodes
    ]
