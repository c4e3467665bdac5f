# canvas_layout/config.py
import os
from typing import AsyncIterator
from fastapi import HTTPException, status
from dotenv import load_dotenv

from canvas_layout.services.board_store import HttpBoardStore

# Values may come from a local .env during development
load_dotenv()

# --- Board store configuration ---
BOARD_STORE_URL = os.environ.get("BOARD_STORE_URL")
BOARD_STORE_TOKEN = os.environ.get("BOARD_STORE_TOKEN")

# --- Logging ---
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


async def get_board_store() -> AsyncIterator[HttpBoardStore]:
    """FastAPI dependency yielding a store client for the configured backend."""
    if not BOARD_STORE_URL:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Board store is not configured. Set BOARD_STORE_URL.",
        )
    store = HttpBoardStore(BOARD_STORE_URL, token=BOARD_STORE_TOKEN)
    try:
        yield store
    finally:
        await store.close()
