from __future__ import annotations

"""canvas_layout/services/board_store.py

Storage seam used when a node is copied into another board.  The engine only
needs three calls: read a board's nodes, append one node, and bump the board's
node counter.
"""

from typing import Dict, List, Protocol, Tuple
import logging

import httpx

from canvas_layout.models import CanvasNode

log = logging.getLogger(__name__)


class BoardStore(Protocol):
    async def load_nodes(self, user_id: str, board_id: str) -> List[CanvasNode]: ...

    async def append_node(self, user_id: str, board_id: str, node: CanvasNode) -> None: ...

    async def update_node_count(self, user_id: str, board_id: str, count: int) -> None: ...


class HttpBoardStore:
    """Minimal async HTTP client for the board backend's queries and mutations."""

    def __init__(self, base_url: str, token: str | None = None,
                 client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = client or httpx.AsyncClient()

    async def close(self) -> None:
        await self._client.aclose()

    async def _call(self, path: str, name: str, args: dict | None) -> dict:
        url = f"{self.base_url}/{path}/{name}"
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        resp = await self._client.post(url, json=args or {}, headers=headers)
        resp.raise_for_status()
        return resp.json()

    async def mutation(self, name: str, args: dict | None = None) -> dict:
        return await self._call("mutation", name, args)

    async def query(self, name: str, args: dict | None = None) -> dict:
        return await self._call("query", name, args)

    async def load_nodes(self, user_id: str, board_id: str) -> List[CanvasNode]:
        data = await self.query("loadNodes", {"userId": user_id, "boardId": board_id})
        nodes = [CanvasNode.model_validate(raw) for raw in data.get("nodes", [])]
        log.debug("[BoardStore] Loaded %d nodes from board %s", len(nodes), board_id)
        return nodes

    async def append_node(self, user_id: str, board_id: str, node: CanvasNode) -> None:
        await self.mutation("appendNode", {
            "userId": user_id,
            "boardId": board_id,
            "node": node.model_dump(mode="json", by_alias=True),
        })

    async def update_node_count(self, user_id: str, board_id: str, count: int) -> None:
        await self.mutation("updateNodeCount", {
            "userId": user_id,
            "boardId": board_id,
            "nodeCount": count,
        })


class InMemoryBoardStore:
    """Process-local store keyed by ``(user_id, board_id)``; resets on restart."""

    def __init__(self) -> None:
        self._boards: Dict[Tuple[str, str], List[CanvasNode]] = {}
        self.node_counts: Dict[Tuple[str, str], int] = {}

    async def load_nodes(self, user_id: str, board_id: str) -> List[CanvasNode]:
        return list(self._boards.get((user_id, board_id), []))

    async def append_node(self, user_id: str, board_id: str, node: CanvasNode) -> None:
        self._boards.setdefault((user_id, board_id), []).append(node)

    async def update_node_count(self, user_id: str, board_id: str, count: int) -> None:
        self.node_counts[(user_id, board_id)] = count

    def nodes(self, user_id: str, board_id: str) -> List[CanvasNode]:
        return list(self._boards.get((user_id, board_id), []))
