"""
Interaction aggregation and staleness classification.

Merge -> join -> classify. Everything here is pure and synchronous.
"""

from .classify import classify_contacts, is_stale, sort_by_last_interaction, stale_only
from .join import JoinedContact, join_roster, last_interaction_for
from .merge import InteractionIndex, Normalizer, merge_interactions
from .window import DEFAULT_LOOKBACK_MONTHS, compute_cutoff, datetime_to_millis, subtract_months

__all__ = [
    "classify_contacts",
    "is_stale",
    "sort_by_last_interaction",
    "stale_only",
    "JoinedContact",
    "join_roster",
    "last_interaction_for",
    "InteractionIndex",
    "Normalizer",
    "merge_interactions",
    "DEFAULT_LOOKBACK_MONTHS",
    "compute_cutoff",
    "datetime_to_millis",
    "subtract_months",
]
