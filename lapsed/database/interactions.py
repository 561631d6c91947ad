"""
File: database/interactions.py
Author: Aidan Allchin
Created: 2026-01-05
Last Modified: 2026-01-14
"""

import logging
from pathlib import Path
from typing import List

from ..models import InteractionRecord
from .common import INTERACTION_SOURCES, LOCAL_DB_PATH, open_db

log = logging.getLogger(__name__)


async def fetch_interactions(source: str, db_path: Path = LOCAL_DB_PATH) -> List[InteractionRecord]:
    """
    Get every stored interaction for one log.

    Args:
        source: Which log to read ("call" or "message")

    Returns:
        List of InteractionRecord objects (identifiers as stored, not normalized)
    """
    records = []
    async with open_db(db_path) as conn:
        async with conn.execute(
            "SELECT source, identifier, timestamp FROM interactions WHERE source = ?", (source,)
        ) as cursor:
            columns = [description[0] for description in cursor.description]
            async for row in cursor:
                records.append(InteractionRecord.from_db_dict(dict(zip(columns, row))))

    log.info(f"Retrieved {len(records)} {source} records")
    return records


async def import_interactions(
        source: str,
        records: List[InteractionRecord],
        db_path: Path = LOCAL_DB_PATH,
    ) -> int:
    """Append interaction records to one log. Returns the number written."""
    if source not in INTERACTION_SOURCES:
        raise ValueError(f"Unknown interaction source '{source}'. Must be one of: {INTERACTION_SOURCES}")
    if not records:
        return 0

    async with open_db(db_path) as conn:
        await conn.executemany(
            "INSERT INTO interactions (source, identifier, timestamp) VALUES (?, ?, ?)",
            [(source, r.identifier, r.timestamp) for r in records],
        )
        await conn.commit()

    log.info(f"Imported {len(records)} {source} records")
    return len(records)
