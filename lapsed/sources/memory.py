"""
In-memory collaborators, for hosts that already hold their data and for tests.

File: sources/memory.py
Author: Aidan Allchin
Created: 2026-01-07
Last Modified: 2026-01-11
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..models import Contact, DeletionOutcome, InteractionRecord

log = logging.getLogger(__name__)


class StaticInteractionSource:
    """Serves a fixed list of interaction records."""

    def __init__(self, records: Optional[Iterable[InteractionRecord]] = None):
        self.records = list(records or [])

    async def read_all(self) -> List[InteractionRecord]:
        return list(self.records)


class InMemoryContactStore:
    """
    Address book held in a dict keyed by lookup key.

    Acts as both ContactRoster and ContactSink, so deletions are visible to
    the next read_all(). Lookup keys listed in `fail_on` fail with
    `failure_reason` instead of being deleted.
    """

    def __init__(
            self,
            contacts: Optional[Iterable[Contact]] = None,
            fail_on: Optional[Iterable[str]] = None,
            failure_reason: str = "delete rejected",
        ):
        self._contacts: Dict[str, Contact] = {c.lookup_key: c for c in contacts or []}
        self.fail_on = set(fail_on or [])
        self.failure_reason = failure_reason
        self.deleted: List[str] = []

    def __len__(self) -> int:
        return len(self._contacts)

    def __contains__(self, lookup_key: str) -> bool:
        return lookup_key in self._contacts

    async def read_all(self) -> List[Contact]:
        return list(self._contacts.values())

    async def delete(self, contact: Contact) -> DeletionOutcome:
        if contact.lookup_key in self.fail_on:
            return DeletionOutcome.failed(contact, self.failure_reason)
        if self._contacts.pop(contact.lookup_key, None) is None:
            return DeletionOutcome.failed(contact, "contact not found")
        self.deleted.append(contact.lookup_key)
        log.debug(f"Deleted {contact.lookup_key} from in-memory store")
        return DeletionOutcome.ok(contact)
