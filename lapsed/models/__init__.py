"""
Shared data models for Lapsed.
"""

from .contact import NEVER_CONTACTED, ClassifiedContact, Contact
from .deletion import DeletionOutcome, DeletionSummary
from .interaction import InteractionRecord

__all__ = [
    "NEVER_CONTACTED",
    "ClassifiedContact",
    "Contact",
    "DeletionOutcome",
    "DeletionSummary",
    "InteractionRecord",
]
