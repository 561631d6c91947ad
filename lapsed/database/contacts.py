"""
File: database/contacts.py
Author: Aidan Allchin
Created: 2026-01-05
Last Modified: 2026-01-11
"""

import logging
from pathlib import Path
from typing import Dict, List

from ..models import Contact
from .common import LOCAL_DB_PATH, open_db

log = logging.getLogger(__name__)


async def fetch_contacts(db_path: Path = LOCAL_DB_PATH) -> List[Contact]:
    """
    Read the full address book, ordered by display name.

    Returns:
        List of Contact objects with their identifiers in entry order
    """
    identifiers: Dict[int, List[str]] = {}
    contacts = []

    async with open_db(db_path) as conn:
        async with conn.execute(
            "SELECT contact_id, identifier FROM contact_identifiers ORDER BY contact_id, position, id"
        ) as cursor:
            async for contact_id, identifier in cursor:
                identifiers.setdefault(contact_id, []).append(identifier)

        async with conn.execute(
            "SELECT id, lookup_key, display_name FROM contacts ORDER BY display_name COLLATE NOCASE, id"
        ) as cursor:
            async for row_id, lookup_key, display_name in cursor:
                contacts.append(Contact(
                    id=str(row_id),
                    lookup_key=lookup_key,
                    display_name=display_name or "",
                    identifiers=identifiers.get(row_id, []),
                ))

    log.info(f"Retrieved {len(contacts)} contacts")
    return contacts


async def import_contacts(contacts: List[Contact], db_path: Path = LOCAL_DB_PATH) -> int:
    """
    Insert or replace contacts, keyed by lookup key.

    The contact's `id` is ignored; the store assigns its own row ids.

    Returns:
        Number of contacts written
    """
    if not contacts:
        return 0

    async with open_db(db_path) as conn:
        for contact in contacts:
            await conn.execute("""
                INSERT INTO contacts (lookup_key, display_name) VALUES (?, ?)
                ON CONFLICT(lookup_key) DO UPDATE SET
                    display_name = excluded.display_name
            """, (contact.lookup_key, contact.display_name))

            async with conn.execute(
                "SELECT id FROM contacts WHERE lookup_key = ?", (contact.lookup_key,)
            ) as cursor:
                row = await cursor.fetchone()
            contact_id = row[0]

            await conn.execute("DELETE FROM contact_identifiers WHERE contact_id = ?", (contact_id,))
            await conn.executemany(
                "INSERT INTO contact_identifiers (contact_id, identifier, position) VALUES (?, ?, ?)",
                [(contact_id, identifier, i) for i, identifier in enumerate(contact.identifiers)],
            )
        await conn.commit()

    log.info(f"Imported {len(contacts)} contacts")
    return len(contacts)


async def delete_contact(contact_id: str, lookup_key: str, db_path: Path = LOCAL_DB_PATH) -> bool:
    """
    Delete one contact, matching on both row id and lookup key.

    Returns:
        True if a contact was removed, False if no row matched
    """
    try:
        row_id = int(contact_id)
    except (TypeError, ValueError):
        log.warning(f"Contact id '{contact_id}' is not a row id, matching on lookup key only")
        row_id = None

    async with open_db(db_path) as conn:
        if row_id is None:
            cursor = await conn.execute("DELETE FROM contacts WHERE lookup_key = ?", (lookup_key,))
        else:
            cursor = await conn.execute(
                "DELETE FROM contacts WHERE id = ? AND lookup_key = ?", (row_id, lookup_key)
            )
        deleted = cursor.rowcount
        await cursor.close()
        await conn.commit()

    if deleted:
        log.info(f"Deleted contact {lookup_key}")
    return deleted > 0
