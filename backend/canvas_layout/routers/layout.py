from fastapi import APIRouter, Depends
import logging

from canvas_layout.api_models import (
    BranchRequest,
    DuplicateRequest,
    DuplicateResponse,
    NextSlotRequest,
    NodeListRequest,
    NodeListResponse,
    PlaceNextRequest,
    ResizeRequest,
    ShareRequest,
    ShareResponse,
    SlotResponse,
)
from canvas_layout.config import get_board_store
from canvas_layout.metrics import LAYOUT_LATENCY, NODES_SHARED_TOTAL
from canvas_layout.services.board_store import BoardStore
from canvas_layout.services.free_flow_placement import place_branch, place_next
from canvas_layout.services.masonry_layout import arrange_all, next_slot
from canvas_layout.services.node_resize import apply_resize
from canvas_layout.services.node_share import (
    check_share_target,
    compute_share_position,
    duplicate_node,
    share_node_to_board,
)

log = logging.getLogger(__name__)

router = APIRouter(
    prefix="/layout",
    tags=["Layout"],
)


@router.post("/next-slot", response_model=SlotResponse)
async def post_next_slot(body: NextSlotRequest):
    """Masonry slot for one additional node."""
    with LAYOUT_LATENCY.labels(operation="next_slot").time():
        slot = next_slot(body.nodes, width=body.width)
    return SlotResponse(x=slot.x, y=slot.y)


@router.post("/arrange", response_model=NodeListResponse)
async def post_arrange(body: NodeListRequest):
    """Full masonry repack ("tidy up" or switching a board to masonry)."""
    with LAYOUT_LATENCY.labels(operation="arrange_all").time():
        nodes = arrange_all(body.nodes)
    return NodeListResponse(nodes=nodes)


@router.post("/resize", response_model=NodeListResponse)
async def post_resize(body: ResizeRequest):
    with LAYOUT_LATENCY.labels(operation="resize").time():
        nodes = apply_resize(body.nodes, body.node_id, body.width, body.height, body.mode)
    return NodeListResponse(nodes=nodes)


@router.post("/next", response_model=SlotResponse)
async def post_place_next(body: PlaceNextRequest):
    """Free-flow slot beside the focused or newest node."""
    with LAYOUT_LATENCY.labels(operation="place_next").time():
        slot = place_next(body.nodes, focused_node_id=body.focused_node_id)
    return SlotResponse(x=slot.x, y=slot.y)


@router.post("/branch", response_model=SlotResponse)
async def post_branch(body: BranchRequest):
    with LAYOUT_LATENCY.labels(operation="place_branch").time():
        slot = place_branch(body.parent, body.nodes)
    return SlotResponse(x=slot.x, y=slot.y)


@router.post("/duplicate", response_model=DuplicateResponse)
async def post_duplicate(body: DuplicateRequest):
    return DuplicateResponse(node=duplicate_node(body.node))


@router.post("/share-position", response_model=SlotResponse)
async def post_share_position(body: NodeListRequest):
    slot = compute_share_position(body.nodes)
    return SlotResponse(x=slot.x, y=slot.y)


def require_share_target(body: ShareRequest) -> ShareRequest:
    """Reject a share with missing identifiers before a store client is opened."""
    check_share_target(body.user_id, body.target_board_id)
    return body


@router.post("/share", response_model=ShareResponse, status_code=201)
async def post_share(
    body: ShareRequest = Depends(require_share_target),
    store: BoardStore = Depends(get_board_store),
):
    """Copy a node into another board and return the new node id."""
    node_id = await share_node_to_board(store, body.user_id, body.node, body.target_board_id)
    NODES_SHARED_TOTAL.inc()
    return ShareResponse(node_id=node_id)
