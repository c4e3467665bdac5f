from pydantic import BaseModel, Field
from typing import List, Optional

from canvas_layout.models import CanvasNode, LayoutMode

# --- Request Models ---

class NodeListRequest(BaseModel):
    nodes: List[CanvasNode] = Field(default_factory=list, description="Board nodes in insertion order.")

class NextSlotRequest(NodeListRequest):
    width: Optional[float] = Field(None, gt=0, description="Width of the node about to be placed; defaults to the standard card width.")

class PlaceNextRequest(NodeListRequest):
    focused_node_id: Optional[str] = Field(None, description="Place beside this node instead of the newest one.")

class BranchRequest(NodeListRequest):
    parent: CanvasNode

class ResizeRequest(NodeListRequest):
    node_id: str = Field(..., min_length=1)
    width: float
    height: float
    mode: LayoutMode = LayoutMode.MASONRY

class DuplicateRequest(BaseModel):
    node: CanvasNode

class ShareRequest(BaseModel):
    user_id: str = Field("", description="Authenticated user; empty is rejected with 401.")
    target_board_id: str = Field("", description="Destination board; empty is rejected with 400.")
    node: CanvasNode

# --- Response Models ---

class SlotResponse(BaseModel):
    x: float
    y: float

class NodeListResponse(BaseModel):
    nodes: List[CanvasNode]

class DuplicateResponse(BaseModel):
    node: CanvasNode

class ShareResponse(BaseModel):
    node_id: str

class ErrorResponse(BaseModel):
    """Data for reporting an error to the frontend."""
    error_code: Optional[str] = Field(None, description="A unique code identifying the type of error.")
    error_message: str = Field(description="A user-friendly error message.")
