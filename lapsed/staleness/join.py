"""
File: staleness/join.py
Author: Aidan Allchin
Created: 2026-01-05
Last Modified: 2026-01-09

Joins the contact roster against the merged interaction index.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..collection import normalize_identifier
from ..models import Contact
from .merge import InteractionIndex, Normalizer

log = logging.getLogger(__name__)

JoinedContact = Tuple[Contact, Optional[int]]


def last_interaction_for(
        contact: Contact,
        index: InteractionIndex,
        normalizer: Normalizer = normalize_identifier,
    ) -> Optional[int]:
    """
    Most recent interaction across all of a contact's identifiers.

    Takes the max over every identifier rather than the first match, since
    a contact may have been reached on more than one number.
    """
    found = []
    for raw in contact.identifiers:
        identifier = normalizer(raw)
        if identifier is not None and identifier in index:
            found.append(index[identifier])
    return max(found) if found else None


def join_roster(
        roster: Iterable[Contact],
        index: InteractionIndex,
        normalizer: Normalizer = normalize_identifier,
    ) -> List[JoinedContact]:
    """
    Pair each contact with its last interaction timestamp (or None).

    Args:
        roster: Contacts in display order
        index: Merged interaction index
        normalizer: Identifier normalizer; must match the one used for the index

    Returns:
        List of (Contact, last interaction) in roster order
    """
    joined = [(contact, last_interaction_for(contact, index, normalizer)) for contact in roster]

    matched = sum(1 for _, last in joined if last is not None)
    log.debug(f"Joined {len(joined)} contacts against {len(index)} identifiers ({matched} with interactions)")
    return joined
