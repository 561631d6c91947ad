"""
Selection and batch deletion of classified contacts.

Idle --request_delete--> Confirming --confirm--> Deleting --> Idle
                         Confirming --cancel---> Idle

Selections are keyed by lookup key and are dropped whenever a new result
list is loaded, since row identity is not guaranteed to survive a
recompute.

File: deletion/coordinator.py
Author: Aidan Allchin
Created: 2026-01-07
Last Modified: 2026-01-11
"""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..models import ClassifiedContact, Contact, DeletionOutcome, DeletionSummary
from ..sources import ContactSink

log = logging.getLogger(__name__)

RecomputeListener = Callable[[], Any]


class DeletionState(str, Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    DELETING = "deleting"


class DeletionCoordinator:
    """
    Owns the selection set and drives confirmed deletions through a ContactSink.

    Invalid transitions (confirm while idle, toggling mid-deletion, ...) are
    no-ops so duplicate UI events are harmless.
    """

    def __init__(self, sink: ContactSink, max_concurrent_deletes: int = 8):
        self.sink = sink
        self.max_concurrent_deletes = max_concurrent_deletes
        self.state = DeletionState.IDLE
        self.last_summary: Optional[DeletionSummary] = None
        self._results: Optional[Dict[str, ClassifiedContact]] = None
        self._selected: Dict[str, Contact] = {}
        self._listeners: List[RecomputeListener] = []
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Results and selection
    # ------------------------------------------------------------------

    def load(self, results: Iterable[ClassifiedContact]) -> None:
        """Replace the visible result list. Clears the selection."""
        self._results = {c.lookup_key: c for c in results}
        if self._selected:
            log.debug(f"Dropping {len(self._selected)} selections after recompute")
        self._selected = {}

    @property
    def results(self) -> List[ClassifiedContact]:
        return list(self._results.values()) if self._results is not None else []

    @property
    def selection(self) -> List[Contact]:
        return list(self._selected.values())

    def is_selected(self, contact: Contact) -> bool:
        return contact.lookup_key in self._selected

    def toggle_selection(self, contact: Contact) -> bool:
        """
        Add the contact to the selection, or remove it if already selected.

        Only allowed while idle. Contacts that are not in the loaded results
        are ignored when results have been loaded.

        Returns:
            True if the contact is selected after the call
        """
        if self.state is not DeletionState.IDLE:
            log.debug(f"Ignoring selection change while {self.state.value}")
            return self.is_selected(contact)

        key = contact.lookup_key
        if self._results is not None and key not in self._results:
            log.debug(f"Ignoring selection of unknown contact {key}")
            return False

        if key in self._selected:
            del self._selected[key]
            return False
        self._selected[key] = contact
        return True

    def clear_selection(self) -> None:
        if self.state is DeletionState.IDLE:
            self._selected = {}

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    @property
    def confirmation_prompt(self) -> str:
        return f"Delete {len(self._selected)} contacts?"

    def request_delete(self) -> bool:
        """Idle -> Confirming if anything is selected."""
        if self.state is not DeletionState.IDLE or not self._selected:
            return False
        self.state = DeletionState.CONFIRMING
        return True

    def cancel(self) -> bool:
        """Confirming -> Idle. The selection is kept."""
        if self.state is not DeletionState.CONFIRMING:
            return False
        self.state = DeletionState.IDLE
        return True

    async def confirm(self) -> Optional[DeletionSummary]:
        """
        Confirming -> Deleting -> Idle.

        Deletes every selected contact through the sink. One failure never
        stops the rest. Afterwards the selection is cleared and recompute
        listeners fire once.

        Returns:
            DeletionSummary, or None if there was nothing to confirm
        """
        async with self._lock:
            if self.state is not DeletionState.CONFIRMING:
                log.debug(f"Ignoring confirm while {self.state.value}")
                return None
            self.state = DeletionState.DELETING

            try:
                outcomes = await self._delete_all(list(self._selected.values()))
            finally:
                self._selected = {}
                self.state = DeletionState.IDLE

            summary = DeletionSummary.from_outcomes(outcomes)
            self.last_summary = summary
            log.info(f"Deleted {summary.succeeded} contacts, {len(summary.failed)} failed")
            for contact, reason in summary.failed:
                log.warning(f"Could not delete {contact.display_name or contact.lookup_key}: {reason}")

        await self._notify_recompute()
        return summary

    async def _delete_all(self, contacts: List[Contact]) -> List[DeletionOutcome]:
        semaphore = asyncio.Semaphore(self.max_concurrent_deletes)

        async def _delete_one(contact: Contact) -> DeletionOutcome:
            async with semaphore:
                try:
                    outcome = await self.sink.delete(contact)
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    log.error(f"Contact sink raised while deleting {contact.lookup_key}: {e}")
                    return DeletionOutcome.failed(contact, str(e) or type(e).__name__)
                if outcome is None:
                    return DeletionOutcome.failed(contact, "no result from contact sink")
                return outcome

        return list(await asyncio.gather(*(_delete_one(c) for c in contacts)))

    # ------------------------------------------------------------------
    # Recompute notification
    # ------------------------------------------------------------------

    def on_recompute(self, callback: RecomputeListener) -> None:
        """Register a callback fired once after every completed deletion batch."""
        self._listeners.append(callback)

    async def _notify_recompute(self) -> None:
        # Deletions already happened; a failing listener must not hide the summary
        for callback in self._listeners:
            try:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                raise
            except Exception as e:
                log.error(f"Recompute listener failed: {e}")
