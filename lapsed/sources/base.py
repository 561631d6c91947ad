"""
Collaborator interfaces for the staleness pipeline.

The pipeline never touches a platform data store directly; it reads
through these protocols and deletes through ContactSink. Any object with
matching methods works, which is how tests swap in in-memory fakes.

File: sources/base.py
Author: Aidan Allchin
Created: 2026-01-05
Last Modified: 2026-01-09
"""

from typing import List, Protocol, runtime_checkable

from ..models import Contact, DeletionOutcome, InteractionRecord


@runtime_checkable
class InteractionSource(Protocol):
    """A read-only log of timestamped interactions."""

    async def read_all(self) -> List[InteractionRecord]: ...


@runtime_checkable
class CallLogSource(InteractionSource, Protocol):
    """Call history: identifier = counterpart number, timestamp = call time."""


@runtime_checkable
class MessageLogSource(InteractionSource, Protocol):
    """Message history: identifier = counterpart address, timestamp = message time."""


@runtime_checkable
class ContactRoster(Protocol):
    """Read-only view of the address book. Re-read on every run."""

    async def read_all(self) -> List[Contact]: ...


@runtime_checkable
class ContactSink(Protocol):
    """
    Write side of the address book.

    delete() reports failure through DeletionOutcome instead of raising.
    """

    async def delete(self, contact: Contact) -> DeletionOutcome: ...
