"""
Deletion outcome models.

File: models/deletion.py
Author: Aidan Allchin
Created: 2026-01-06
Last Modified: 2026-01-11
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .contact import Contact


class DeletionOutcome(BaseModel):
    """Result of asking the contact sink to delete one contact"""
    model_config = ConfigDict(frozen=True)

    contact: Contact
    succeeded: bool
    reason: Optional[str] = Field(None, description="Why the deletion failed (None on success)")

    @classmethod
    def ok(cls, contact: Contact) -> "DeletionOutcome":
        return cls(contact=contact, succeeded=True)

    @classmethod
    def failed(cls, contact: Contact, reason: str) -> "DeletionOutcome":
        return cls(contact=contact, succeeded=False, reason=reason or "unknown error")


class DeletionSummary(BaseModel):
    """Aggregated result of a confirmed batch deletion"""

    succeeded: int = Field(0, ge=0)
    failed: List[Tuple[Contact, str]] = Field(default_factory=list)

    @property
    def attempted(self) -> int:
        return self.succeeded + len(self.failed)

    @classmethod
    def from_outcomes(cls, outcomes: List[DeletionOutcome]) -> "DeletionSummary":
        succeeded = sum(1 for o in outcomes if o.succeeded)
        failed = [(o.contact, o.reason or "unknown error") for o in outcomes if not o.succeeded]
        return cls(succeeded=succeeded, failed=failed)
