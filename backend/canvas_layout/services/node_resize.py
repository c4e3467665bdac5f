"""canvas_layout/services/node_resize.py

Resize handling on top of the two layout modes, plus the frame batcher that
keeps a resize drag from committing more than once per rendered frame.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple
import asyncio
import logging

from canvas_layout.models import CanvasNode, LayoutMode, utc_now
from canvas_layout.services.geometry import (
    RESIZE_INCREMENT_PX,
    clamp_node_dimensions,
    node_height,
    node_width,
)
from canvas_layout.services.free_flow_placement import resize_in_place
from canvas_layout.services.masonry_layout import rearrange_after_resize

log = logging.getLogger(__name__)

FRAME_INTERVAL = 1 / 60  # seconds


def apply_resize(
    nodes: Sequence[CanvasNode],
    node_id: str,
    width: float,
    height: float,
    mode: LayoutMode = LayoutMode.MASONRY,
) -> List[CanvasNode]:
    """Set clamped dimensions on *node_id* and re-layout according to *mode*.

    In masonry mode the resized node's column is restacked; in free-flow mode
    no other node moves.
    """
    if mode == LayoutMode.FREE_FLOW:
        return resize_in_place(nodes, node_id, width, height)

    width, height = clamp_node_dimensions(width, height)
    now = utc_now()
    resized = [
        node.model_copy(update={"width": width, "height": height, "updated_at": now})
        if node.id == node_id else node
        for node in nodes
    ]
    return rearrange_after_resize(resized, node_id)


def _step(nodes: Sequence[CanvasNode], node_id: str, mode: LayoutMode,
          d_width: float, d_height: float) -> List[CanvasNode]:
    node = next((n for n in nodes if n.id == node_id), None)
    if node is None:
        log.debug("[Resize] Node %s not found; nothing to resize", node_id)
        return list(nodes)
    return apply_resize(nodes, node_id,
                        node_width(node) + d_width, node_height(node) + d_height, mode)


def expand_width(nodes: Sequence[CanvasNode], node_id: str,
                 mode: LayoutMode = LayoutMode.MASONRY) -> List[CanvasNode]:
    return _step(nodes, node_id, mode, RESIZE_INCREMENT_PX, 0)


def shrink_width(nodes: Sequence[CanvasNode], node_id: str,
                 mode: LayoutMode = LayoutMode.MASONRY) -> List[CanvasNode]:
    return _step(nodes, node_id, mode, -RESIZE_INCREMENT_PX, 0)


def expand_height(nodes: Sequence[CanvasNode], node_id: str,
                  mode: LayoutMode = LayoutMode.MASONRY) -> List[CanvasNode]:
    return _step(nodes, node_id, mode, 0, RESIZE_INCREMENT_PX)


def shrink_height(nodes: Sequence[CanvasNode], node_id: str,
                  mode: LayoutMode = LayoutMode.MASONRY) -> List[CanvasNode]:
    return _step(nodes, node_id, mode, 0, -RESIZE_INCREMENT_PX)


# --------------------------------------------------------------------------- #
#  Frame batching
# --------------------------------------------------------------------------- #

CommitFn = Callable[[str, float, float], None]
ScheduleFn = Callable[[Callable[[], None]], Callable[[], None]]


def _schedule_next_frame(callback: Callable[[], None]) -> Callable[[], None]:
    """Run *callback* one frame interval from now on the running event loop."""
    handle = asyncio.get_running_loop().call_later(FRAME_INTERVAL, callback)
    return handle.cancel


class DimensionBatcher:
    """Coalesce a stream of dimension updates into one commit per frame.

    ``push`` only records the latest width/height per node; the first push
    after a flush schedules the next flush through *schedule*, which takes a
    callback and returns a canceller.  Superseded intermediate values are
    dropped.
    """

    def __init__(self, commit: CommitFn, schedule: Optional[ScheduleFn] = None):
        self._commit = commit
        self._schedule = schedule or _schedule_next_frame
        self._pending: Dict[str, Tuple[float, float]] = {}
        self._cancel: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> Dict[str, Tuple[float, float]]:
        return dict(self._pending)

    def push(self, node_id: str, width: float, height: float) -> None:
        self._pending[node_id] = (width, height)
        if self._cancel is None:
            self._cancel = self._schedule(self.flush)

    def flush(self) -> None:
        # An explicit flush supersedes the scheduled one
        cancel, self._cancel = self._cancel, None
        if cancel is not None:
            cancel()
        batch, self._pending = self._pending, {}
        for node_id, (width, height) in batch.items():
            self._commit(node_id, width, height)
        if batch:
            log.debug("[Resize] Flushed %d dimension update(s)", len(batch))

    def cancel(self) -> None:
        """Drop pending updates without committing them."""
        if self._cancel is not None:
            self._cancel()
            self._cancel = None
        self._pending.clear()
