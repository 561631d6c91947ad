"""
Local contact store location, log names and connection helper

File: database/common.py
Author: Aidan Allchin
Created: 2026-01-05
Last Modified: 2026-01-14
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

DATA_DIR = Path(__file__).parent.parent.parent / "data"
LOCAL_DB_PATH = DATA_DIR / "contacts.db"

# Values of interactions.source
CALL = "call"
MESSAGE = "message"
INTERACTION_SOURCES = (CALL, MESSAGE)


@asynccontextmanager
async def open_db(db_path: Path = LOCAL_DB_PATH) -> AsyncIterator[aiosqlite.Connection]:
    """Connect with foreign keys enforced, so deleting a contact drops its identifiers."""
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA foreign_keys = ON")
        yield conn


__all__ = [
    "DATA_DIR",
    "LOCAL_DB_PATH",
    "CALL",
    "MESSAGE",
    "INTERACTION_SOURCES",
    "open_db",
]
