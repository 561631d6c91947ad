"""
File: database/create_tables.py
Author: Aidan Allchin
Created: 2026-01-05
Last Modified: 2026-01-14
"""

import logging
from pathlib import Path

from .common import LOCAL_DB_PATH, open_db

log = logging.getLogger(__name__)


async def init_local_database(db_path: Path = LOCAL_DB_PATH) -> None:
    """Initialize the local SQLite database with required tables."""
    db_path.parent.mkdir(parents=True, exist_ok=True)

    async with open_db(db_path) as conn:

        # Address book
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS contacts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                lookup_key TEXT NOT NULL,
                display_name TEXT NOT NULL DEFAULT '',
                created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                UNIQUE(lookup_key)
            )
        """)

        # Phone numbers/addresses, one row per identifier (raw, as entered)
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS contact_identifiers (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                contact_id INTEGER NOT NULL REFERENCES contacts(id) ON DELETE CASCADE,
                identifier TEXT NOT NULL,
                position INTEGER NOT NULL DEFAULT 0
            )
        """)

        # Call and message logs
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS interactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                source TEXT NOT NULL,       -- 'call' or 'message'
                identifier TEXT,
                timestamp INTEGER           -- epoch millis
            )
        """)

        await conn.execute("CREATE INDEX IF NOT EXISTS idx_identifiers_contact ON contact_identifiers(contact_id)")
        await conn.execute("CREATE INDEX IF NOT EXISTS idx_interactions_source ON interactions(source)")

        await conn.commit()
        log.info(f"Local database initialized at {db_path}")
