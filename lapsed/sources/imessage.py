"""
Message log read directly from the macOS iMessage database.

Read-only access to ~/Library/Messages/chat.db. Only the counterpart
handle and the message date are needed, for both sent and received
messages.

File: sources/imessage.py
Author: Aidan Allchin
Created: 2026-01-08
Last Modified: 2026-01-10
"""

import logging
from pathlib import Path
from typing import List, Optional

import aiosqlite

from ..models import InteractionRecord

log = logging.getLogger(__name__)

# Seconds between 1970-01-01 and 2001-01-01 (the iMessage epoch)
IMESSAGE_EPOCH_OFFSET = 978307200


def imessage_timestamp_to_millis(timestamp: Optional[int]) -> Optional[int]:
    """
    Convert an iMessage timestamp to epoch millis.

    iMessage stores nanoseconds since 2001-01-01 00:00:00 UTC; 0 means unset.
    """
    if not timestamp:
        return None
    return timestamp // 1_000_000 + IMESSAGE_EPOCH_OFFSET * 1000


class IMessageLogSource:
    """MessageLogSource over chat.db. A missing or unreadable database reads as empty."""

    QUERY = """
        SELECT handle.id, message.date
        FROM message
        JOIN handle ON message.handle_id = handle.ROWID
        WHERE message.date > 0
        AND handle.id IS NOT NULL
    """

    def __init__(self, db_path: Path = Path("~/Library/Messages/chat.db")):
        self.db_path = Path(db_path).expanduser()

    async def read_all(self) -> List[InteractionRecord]:
        if not self.db_path.exists():
            log.warning(f"iMessage database not found at {self.db_path}")
            return []

        records = []
        # Open read-only so the Messages app's database is never written to
        uri = f"file:{self.db_path}?mode=ro"
        try:
            async with aiosqlite.connect(uri, uri=True) as conn:
                async with conn.execute(self.QUERY) as cursor:
                    async for handle_id, date in cursor:
                        records.append(InteractionRecord(
                            identifier=handle_id,
                            timestamp=imessage_timestamp_to_millis(date),
                            source="message",
                        ))
        except aiosqlite.Error as e:
            log.warning(f"Could not read iMessage database (check Full Disk Access): {e}")
            return []

        log.info(f"Read {len(records)} messages from iMessage")
        return records
