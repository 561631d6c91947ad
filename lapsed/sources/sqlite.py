"""
Collaborators backed by the local contacts database.

File: sources/sqlite.py
Author: Aidan Allchin
Created: 2026-01-07
Last Modified: 2026-01-11
"""

import logging
from pathlib import Path
from typing import List

from ..database import (
    CALL,
    LOCAL_DB_PATH,
    MESSAGE,
    delete_contact,
    fetch_contacts,
    fetch_interactions,
)
from ..models import Contact, DeletionOutcome, InteractionRecord

log = logging.getLogger(__name__)


class SQLiteInteractionSource:
    def __init__(self, source: str, db_path: Path = LOCAL_DB_PATH):
        self.source = source
        self.db_path = Path(db_path)

    async def read_all(self) -> List[InteractionRecord]:
        return await fetch_interactions(self.source, self.db_path)


class SQLiteCallLogSource(SQLiteInteractionSource):
    def __init__(self, db_path: Path = LOCAL_DB_PATH):
        super().__init__(CALL, db_path)


class SQLiteMessageLogSource(SQLiteInteractionSource):
    def __init__(self, db_path: Path = LOCAL_DB_PATH):
        super().__init__(MESSAGE, db_path)


class SQLiteContactRoster:
    def __init__(self, db_path: Path = LOCAL_DB_PATH):
        self.db_path = Path(db_path)

    async def read_all(self) -> List[Contact]:
        return await fetch_contacts(self.db_path)


class SQLiteContactSink:
    """Deletes contacts from the local database by (id, lookup key)."""

    def __init__(self, db_path: Path = LOCAL_DB_PATH):
        self.db_path = Path(db_path)

    async def delete(self, contact: Contact) -> DeletionOutcome:
        try:
            deleted = await delete_contact(contact.id, contact.lookup_key, self.db_path)
        except Exception as e:
            log.error(f"Error deleting contact {contact.lookup_key}: {e}")
            return DeletionOutcome.failed(contact, str(e))

        if not deleted:
            return DeletionOutcome.failed(contact, "contact not found")
        return DeletionOutcome.ok(contact)
