"""
Interaction record model.

File: models/interaction.py
Author: Aidan Allchin
Created: 2026-01-04
Last Modified: 2026-01-09
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class InteractionRecord(BaseModel):
    """A single timestamped interaction (call or message) with a counterpart"""
    model_config = ConfigDict(
        frozen=True,
        extra='ignore'
    )

    identifier: Optional[str] = Field(None, description="Counterpart phone number/address, raw or normalized")
    timestamp: Optional[int] = Field(None, description="When the interaction happened (epoch millis)")
    source: str = Field("unknown", description="Which log produced this record (call, message, ...)")

    @classmethod
    def from_db_dict(cls, data: Dict[str, Any]) -> "InteractionRecord":
        """Create InteractionRecord instance from database dictionary"""
        return cls(**data)
