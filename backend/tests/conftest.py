from datetime import datetime, timedelta, timezone

import pytest

from canvas_layout.models import CanvasNode, NodePosition

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_node():
    """Factory for board nodes; *order* offsets createdAt by that many minutes."""

    def _make(node_id: str, x: float = 0, y: float = 0, *, order: int = 0,
              width: float | None = None, height: float | None = None,
              board_id: str = "board-1", data: dict | None = None) -> CanvasNode:
        return CanvasNode(
            id=node_id,
            board_id=board_id,
            type="idea",
            data=data if data is not None else {"heading": f"Card {node_id}"},
            position=NodePosition(x=x, y=y),
            width=width,
            height=height,
            created_at=BASE_TIME + timedelta(minutes=order),
            updated_at=BASE_TIME + timedelta(minutes=order),
        )

    return _make


@pytest.fixture
def shared_source_node(make_node):
    """A fully populated card like the ones users duplicate and share."""
    return make_node(
        "idea-source", 50, 50, width=280, height=220,
        data={
            "heading": "Source heading",
            "output": "Source output",
            "tags": ["tag-1"],
            "isGenerating": True,
            "isPromptCollapsed": True,
            "linkPreviews": {
                "https://example.com": {"url": "https://example.com", "title": "Ex", "fetchedAt": 1000},
            },
            "calendarEvent": {"id": "ev-1", "type": "event", "title": "Test", "date": "2024-01-01"},
        },
    )
