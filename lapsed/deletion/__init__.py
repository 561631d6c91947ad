"""
Selection and confirmed batch deletion of stale contacts.
"""

from .coordinator import DeletionCoordinator, DeletionState

__all__ = [
    "DeletionCoordinator",
    "DeletionState",
]
