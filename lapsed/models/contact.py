"""
Contact and classification result models.

File: models/contact.py
Author: Aidan Allchin
Created: 2026-01-04
Last Modified: 2026-01-11
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


NEVER_CONTACTED = "Never contacted"


class Contact(BaseModel):
    """A contact from the address book. Read-only within the pipeline."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    id: str = Field(..., description="Row id in the contact store (stable within a run)")
    lookup_key: str = Field(..., description="Stable cross-run identity token", min_length=1)
    display_name: str = Field("", description="Contact name as shown to the user")
    identifiers: List[str] = Field(default_factory=list, description="Phone numbers/addresses for this contact")


class ClassifiedContact(BaseModel):
    """A contact paired with its most recent interaction and staleness verdict"""
    model_config = ConfigDict(frozen=True)

    contact: Contact
    last_interaction: Optional[int] = Field(None, description="Most recent interaction (epoch millis), None if never")
    is_stale: bool = Field(..., description="True if never contacted or last contact is older than the cutoff")

    @property
    def lookup_key(self) -> str:
        return self.contact.lookup_key

    @property
    def last_interaction_at(self) -> Optional[datetime]:
        if self.last_interaction is None:
            return None
        return datetime.fromtimestamp(self.last_interaction / 1000, tz=timezone.utc)

    def last_contact_label(self, tz=timezone.utc) -> str:
        """Format the last interaction like 'Mar 04, 2025', or 'Never contacted'"""
        when = self.last_interaction_at
        if when is None:
            return NEVER_CONTACTED
        return when.astimezone(tz).strftime("%b %d, %Y")
