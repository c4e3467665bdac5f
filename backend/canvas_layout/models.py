from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from enum import Enum


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LayoutMode(str, Enum):
    """Board-level flag selecting how new and resized nodes are placed."""
    MASONRY = "masonry"
    FREE_FLOW = "free-flow"


class NodePosition(BaseModel):
    """Top-left corner of a node in board-local coordinates.

    Frozen so one instance can be shared between successive versions of a
    node and the render shell built from it.
    """
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class CanvasNode(BaseModel):
    """A card on the board, as handed over by the state container."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    board_id: str = Field("", alias="boardId")
    type: str = "idea"
    data: Dict[str, Any] = Field(default_factory=dict)
    position: NodePosition
    width: Optional[float] = None
    height: Optional[float] = None
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Persisted timestamps may arrive naive; ordering needs them comparable
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ShellData(BaseModel):
    """Identity-only placeholder; node content is read from the store, never from here."""
    model_config = ConfigDict(frozen=True)

    id: str


class RenderShell(BaseModel):
    """Minimal per-node object handed to the rendering boundary."""
    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    position: NodePosition
    data: ShellData
    selected: bool = False
    width: Optional[float] = None
    height: Optional[float] = None
