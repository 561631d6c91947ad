"""
File: staleness/classify.py
Author: Aidan Allchin
Created: 2026-01-06
Last Modified: 2026-01-11
"""

import logging
from typing import Iterable, List, Optional

from ..models import ClassifiedContact
from .join import JoinedContact

log = logging.getLogger(__name__)


def is_stale(last_interaction: Optional[int], cutoff: int) -> bool:
    """Never contacted, or last contacted strictly before the cutoff."""
    return last_interaction is None or last_interaction < cutoff


def classify_contacts(joined: Iterable[JoinedContact], cutoff: int, now: int) -> List[ClassifiedContact]:
    """
    Apply the staleness policy to every joined contact.

    Roster order is preserved. Clock values are trusted as given, so a
    negative cutoff just makes almost nothing stale.

    Args:
        joined: (Contact, last interaction) pairs from join_roster()
        cutoff: Interactions strictly older than this (epoch millis) are stale
        now: Current time (epoch millis), used for logging only

    Returns:
        One ClassifiedContact per input contact
    """
    classified = [
        ClassifiedContact(contact=contact, last_interaction=last, is_stale=is_stale(last, cutoff))
        for contact, last in joined
    ]

    stale_count = sum(1 for c in classified if c.is_stale)
    log.info(
        f"Classified {len(classified)} contacts: {stale_count} stale, "
        f"{len(classified) - stale_count} active (cutoff {(now - cutoff) // 86_400_000} days back)"
    )
    return classified


def stale_only(classified: Iterable[ClassifiedContact]) -> List[ClassifiedContact]:
    return [c for c in classified if c.is_stale]


def sort_by_last_interaction(classified: Iterable[ClassifiedContact]) -> List[ClassifiedContact]:
    """Never-contacted first, then oldest interaction first; ties by name"""
    def _key(c: ClassifiedContact):
        never = c.last_interaction is None
        return (not never, c.last_interaction or 0, c.contact.display_name.lower())
    return sorted(classified, key=_key)
