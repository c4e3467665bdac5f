"""canvas_layout/services/masonry_layout.py

Masonry packer – the default layout mode of a board.  Cards pinned by the
user (``data["isPinned"]``) keep their position and take no part in packing.

Nodes are visited in creation order and each one drops into the column whose
running height is currently the smallest ("shortest column wins", ties go to
the leftmost column).  Columns sit on a fixed pitch of
``DEFAULT_NODE_WIDTH + GRID_GAP``; a card wider than one column spans as many
adjacent columns as its width needs, and every spanned column is raised to the
card's bottom edge so that packed cards never overlap.

All functions are pure: the incoming list and its nodes are never mutated, and
nodes whose position does not change are handed back as the very same object.
"""

from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple
import logging
import math

from canvas_layout.models import CanvasNode, NodePosition, utc_now
from canvas_layout.services.geometry import (
    COLUMN_PITCH,
    DEFAULT_NODE_WIDTH,
    GRID_COLUMNS,
    GRID_GAP,
    GRID_PADDING,
    MAX_NODE_WIDTH,
    MIN_NODE_WIDTH,
    column_for_x,
    column_x,
    node_height,
    node_width,
)

log = logging.getLogger(__name__)


class MasonryPlacement(NamedTuple):
    """Where the packer put one node."""
    node: CanvasNode
    column: int   # leftmost column occupied
    span: int     # number of columns occupied
    x: float
    y: float


# --------------------------------------------------------------------------- #
#  Column bookkeeping
# --------------------------------------------------------------------------- #

def _columns_spanned(width: float) -> int:
    width = max(MIN_NODE_WIDTH, min(MAX_NODE_WIDTH, width))
    span = math.ceil((width + GRID_GAP) / COLUMN_PITCH)
    return max(1, min(GRID_COLUMNS, span))


def _pick_start_column(column_y: Sequence[float], span: int) -> Tuple[int, float]:
    """Return ``(start_column, top_y)`` of the lowest run of *span* columns."""
    best_col = 0
    best_top = max(column_y[0:span])
    for start in range(1, GRID_COLUMNS - span + 1):
        top = max(column_y[start:start + span])
        if top < best_top:
            best_col, best_top = start, top
    return best_col, best_top


def _is_pinned(node: CanvasNode) -> bool:
    return bool(node.data.get("isPinned"))


def _columns_of(node: CanvasNode) -> range:
    start = column_for_x(node.position.x)
    span = _columns_spanned(node_width(node))
    return range(start, min(GRID_COLUMNS, start + span))


def _creation_order(nodes: Sequence[CanvasNode]) -> List[CanvasNode]:
    # sorted() is stable, so equal timestamps keep their list order
    return sorted(nodes, key=lambda n: n.created_at)


def _pack(nodes: Sequence[CanvasNode]) -> Tuple[List[MasonryPlacement], List[float]]:
    column_y: List[float] = [GRID_PADDING] * GRID_COLUMNS
    placements: List[MasonryPlacement] = []

    for node in _creation_order([n for n in nodes if not _is_pinned(n)]):
        span = _columns_spanned(node_width(node))
        col, top = _pick_start_column(column_y, span)
        bottom = top + node_height(node) + GRID_GAP
        for c in range(col, col + span):
            column_y[c] = bottom
        placements.append(MasonryPlacement(node, col, span, column_x(col), top))

    return placements, column_y


def column_assignments(nodes: Sequence[CanvasNode]) -> List[MasonryPlacement]:
    """Return the packer's placement for every unpinned node, in creation order."""
    placements, _ = _pack(nodes)
    return placements


# --------------------------------------------------------------------------- #
#  Public API
# --------------------------------------------------------------------------- #

def arrange_all(nodes: Sequence[CanvasNode]) -> List[CanvasNode]:
    """Repack every unpinned node into the masonry grid.

    Nodes are packed in creation order but returned in input order.  Only
    ``position`` (and ``updated_at``) differ from the input; pinned cards
    (``data["isPinned"]``) and nodes already sitting on their slot are
    returned unchanged.
    """
    if not nodes:
        return []

    placements, _ = _pack(nodes)
    slots = {p.node.id: p for p in placements}
    arranged: List[CanvasNode] = []
    moved = 0
    for node in nodes:
        placement = slots.get(node.id)
        if placement is None or (node.position.x == placement.x and node.position.y == placement.y):
            arranged.append(node)
            continue
        moved += 1
        arranged.append(node.model_copy(update={
            "position": NodePosition(x=placement.x, y=placement.y),
            "updated_at": utc_now(),
        }))

    log.debug("[Masonry] Arranged %d nodes (%d moved, %d pinned)",
              len(arranged), moved, len(nodes) - len(placements))
    return arranged


def next_slot(nodes: Sequence[CanvasNode], width: Optional[float] = None) -> NodePosition:
    """Return the slot a single additional node would take.

    Existing nodes are not repositioned and pinned cards are ignored.
    *width* defaults to the standard card width.
    """
    if not nodes:
        return NodePosition(x=GRID_PADDING, y=GRID_PADDING)

    _, column_y = _pack(nodes)
    span = _columns_spanned(width if width is not None else DEFAULT_NODE_WIDTH)
    col, top = _pick_start_column(column_y, span)
    return NodePosition(x=column_x(col), y=top)


def rearrange_after_resize(nodes: Sequence[CanvasNode], resized_node_id: str) -> List[CanvasNode]:
    """Restack only the columns touched by *resized_node_id*.

    Every column the resized card spans is marked dirty.  Walking the board
    top to bottom, each unpinned node below the card that occupies a dirty
    column is pulled up or pushed down to sit ``GRID_GAP`` under whatever
    ends lowest in the columns it spans, and its own columns become dirty in
    turn.  Nodes above the card, pinned cards and nodes that never touch a
    dirty column are returned as the same objects.  Cheap enough to run once
    per frame while a resize drag is in progress.
    """
    resized = next((n for n in nodes if n.id == resized_node_id), None)
    if resized is None:
        log.warning("[Masonry] rearrange_after_resize: node %s not found", resized_node_id)
        return list(nodes)
    if _is_pinned(resized):
        return list(nodes)

    column_bottom: List[float] = [GRID_PADDING] * GRID_COLUMNS
    dirty = set()
    new_y: Dict[str, float] = {}

    for node in sorted((n for n in nodes if not _is_pinned(n)),
                       key=lambda n: (n.position.y, n.position.x)):
        columns = _columns_of(node)
        top = node.position.y
        restacked = node.id == resized.id
        if not restacked and top > resized.position.y and dirty.intersection(columns):
            top = max(column_bottom[c] for c in columns)
            if top != node.position.y:
                new_y[node.id] = top
            restacked = True

        bottom = top + node_height(node) + GRID_GAP
        for c in columns:
            column_bottom[c] = bottom if restacked else max(column_bottom[c], bottom)
        if restacked:
            dirty.update(columns)

    if not new_y:
        return list(nodes)

    log.debug("[Masonry] Resize of %s shifted %d nodes", resized_node_id, len(new_y))
    now = utc_now()
    return [
        node.model_copy(update={
            "position": NodePosition(x=node.position.x, y=new_y[node.id]),
            "updated_at": now,
        }) if node.id in new_y else node
        for node in nodes
    ]
