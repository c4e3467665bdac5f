"""canvas_layout/services/geometry.py

Sizing constants and small geometric helpers shared by every placement
strategy.  The numeric values mirror the card sizing rules of the board's
stylesheet (``--card-min-width`` and friends) and must be changed in both
places at once.
"""

from typing import Tuple

from canvas_layout.models import CanvasNode

# --------------------------------------------------------------------------- #
#  Grid constants
# --------------------------------------------------------------------------- #

GRID_COLUMNS = 4
GRID_GAP = 40       # px between neighbouring cards, both axes
GRID_PADDING = 32   # px from the board origin to the first card

# --------------------------------------------------------------------------- #
#  Card dimension constants
# --------------------------------------------------------------------------- #

DEFAULT_NODE_WIDTH = 280
DEFAULT_NODE_HEIGHT = 220

MIN_NODE_WIDTH = 180
MAX_NODE_WIDTH = 900
MIN_NODE_HEIGHT = 100
MAX_NODE_HEIGHT = 800

RESIZE_INCREMENT_PX = 96

# Horizontal distance between the left edges of two adjacent masonry columns
COLUMN_PITCH = DEFAULT_NODE_WIDTH + GRID_GAP

# (x, y, width, height)
Rect = Tuple[float, float, float, float]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_node_dimensions(width: float, height: float) -> Tuple[float, float]:
    """Clamp *width* × *height* into the supported card size range.

    Out-of-range values come from stale persisted data as often as from the
    user, so they are corrected silently rather than rejected.
    """
    return (
        _clamp(width, MIN_NODE_WIDTH, MAX_NODE_WIDTH),
        _clamp(height, MIN_NODE_HEIGHT, MAX_NODE_HEIGHT),
    )


def node_width(node: CanvasNode) -> float:
    width = node.width if node.width is not None else DEFAULT_NODE_WIDTH
    return _clamp(width, MIN_NODE_WIDTH, MAX_NODE_WIDTH)


def node_height(node: CanvasNode) -> float:
    height = node.height if node.height is not None else DEFAULT_NODE_HEIGHT
    return _clamp(height, MIN_NODE_HEIGHT, MAX_NODE_HEIGHT)


def node_rect(node: CanvasNode) -> Rect:
    return (node.position.x, node.position.y, node_width(node), node_height(node))


def column_x(column: int) -> float:
    """Left edge of masonry *column*."""
    return GRID_PADDING + column * COLUMN_PITCH


def column_for_x(x: float) -> int:
    """Return the masonry column whose left edge is nearest to *x*."""
    column = round((x - GRID_PADDING) / COLUMN_PITCH)
    return int(_clamp(column, 0, GRID_COLUMNS - 1))


def rects_overlap(a: Rect, b: Rect) -> bool:
    """True iff the two rectangles share interior area (touching edges don't count)."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    overlap_x = ax < bx + bw and ax + aw > bx
    overlap_y = ay < by + bh and ay + ah > by
    return overlap_x and overlap_y
