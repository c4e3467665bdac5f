"""canvas_layout/services/node_share.py

Placement and cloning for nodes that enter a node set other than the one they
were laid out in: duplication within a board and sharing into another board.
Positions never depend on the destination board's layout mode.
"""

from typing import Any, Dict, Sequence
import copy
import logging
import uuid

from canvas_layout.exceptions import InvalidBoardError, NotAuthenticatedError
from canvas_layout.models import CanvasNode, NodePosition, utc_now
from canvas_layout.services.board_store import BoardStore
from canvas_layout.services.geometry import GRID_GAP, GRID_PADDING, node_width
from canvas_layout.services.masonry_layout import next_slot

log = logging.getLogger(__name__)

# Fields that only make sense on the original card
_ORIGIN_ONLY_FIELDS = ("calendarEvent",)
# Transient UI flags reset on every copy
_TRANSIENT_FLAGS = ("isGenerating", "isPromptCollapsed")


def _new_node_id() -> str:
    return f"idea-{uuid.uuid4()}"


def _strip_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _strip_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_strip_none(v) for v in value]
    return value


def clone_node_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return an independent copy of a node's content for a new card.

    Nothing in the result shares a mutable reference with *data*.
    """
    cloned = _strip_none(copy.deepcopy(data))
    for field in _ORIGIN_ONLY_FIELDS:
        cloned.pop(field, None)
    for flag in _TRANSIENT_FLAGS:
        cloned[flag] = False
    return cloned


def duplicate_node(source: CanvasNode) -> CanvasNode:
    """Copy *source* onto the same board, directly to its right.

    Applies in both layout modes.
    """
    now = utc_now()
    return CanvasNode(
        id=_new_node_id(),
        board_id=source.board_id,
        type=source.type,
        data=clone_node_data(source.data),
        position=NodePosition(
            x=source.position.x + node_width(source) + GRID_GAP,
            y=source.position.y,
        ),
        width=source.width,
        height=source.height,
        created_at=now,
        updated_at=now,
    )


def compute_share_position(destination_nodes: Sequence[CanvasNode]) -> NodePosition:
    """Slot for a node shared into a board holding *destination_nodes*."""
    if not destination_nodes:
        return NodePosition(x=GRID_PADDING, y=GRID_PADDING)
    return next_slot(destination_nodes)


def check_share_target(user_id: str, target_board_id: str) -> None:
    """Raise unless both identifiers of a share are present."""
    if not user_id:
        raise NotAuthenticatedError("Not authenticated")
    if not target_board_id:
        raise InvalidBoardError("Invalid board")


async def share_node_to_board(
    store: BoardStore,
    user_id: str,
    node: CanvasNode,
    target_board_id: str,
) -> str:
    """Copy *node* into *target_board_id* and return the new node's id.

    Identifiers are checked before the store is touched.  Store errors are
    propagated unchanged.
    """
    check_share_target(user_id, target_board_id)

    existing = await store.load_nodes(user_id, target_board_id)
    now = utc_now()
    shared = CanvasNode(
        id=_new_node_id(),
        board_id=target_board_id,
        type=node.type,
        data=clone_node_data(node.data),
        position=compute_share_position(existing),
        width=node.width,
        height=node.height,
        created_at=now,
        updated_at=now,
    )

    await store.append_node(user_id, target_board_id, shared)
    await store.update_node_count(user_id, target_board_id, len(existing) + 1)

    log.info("[Share] Node %s shared to board %s as %s", node.id, target_board_id, shared.id)
    return shared.id
