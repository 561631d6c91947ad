"""
JSONL-backed interaction logs and roster.

Interaction logs hold one record per line:
    {"identifier": "+1 555 123 4567", "timestamp": 1735689600000}

Rosters hold one contact per line:
    {"id": "17", "lookup_key": "abc", "name": "Jane", "ids": ["555-123-4567"]}

File: sources/jsonl.py
Author: Aidan Allchin
Created: 2026-01-07
Last Modified: 2026-01-10
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List

from pydantic import ValidationError

from ..models import Contact, InteractionRecord

log = logging.getLogger(__name__)


def _iter_jsonl(filepath: Path) -> Iterator[Dict[str, Any]]:
    with open(filepath, "r") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                log.warning(f"Skipping malformed line {line_no} in {filepath}: {e}")
                continue
            if not isinstance(data, dict):
                log.warning(f"Skipping line {line_no} in {filepath}: expected an object, got {type(data).__name__}")
                continue
            yield data


def load_interactions(filepath: Path, source: str) -> List[InteractionRecord]:
    """Load interaction records from a JSONL file, skipping malformed lines."""
    records = []
    for data in _iter_jsonl(filepath):
        try:
            records.append(InteractionRecord(
                identifier=data.get("identifier"),
                timestamp=data.get("timestamp"),
                source=source,
            ))
        except ValidationError as e:
            log.warning(f"Skipping invalid {source} record in {filepath}: {e.errors()[0]['msg']}")

    log.info(f"Loaded {len(records)} {source} records from {filepath}")
    return records


def load_contacts(filepath: Path) -> List[Contact]:
    """
    Load contacts from a JSONL file.

    `id` defaults to the line's position and `lookup_key` to the id when
    missing, so plain {"contact": name, "ids": [...]} files still load.
    """
    contacts = []
    for position, data in enumerate(_iter_jsonl(filepath)):
        contact_id = str(data.get("id", position))
        try:
            contacts.append(Contact(
                id=contact_id,
                lookup_key=str(data.get("lookup_key") or contact_id),
                display_name=data.get("name") or data.get("contact") or "",
                identifiers=data.get("ids", []),
            ))
        except ValidationError as e:
            log.warning(f"Skipping invalid contact in {filepath}: {e.errors()[0]['msg']}")

    log.info(f"Loaded {len(contacts)} contacts from {filepath}")
    return contacts


class JsonlInteractionSource:
    """Call or message log read from a JSONL file. A missing file reads as empty."""

    def __init__(self, filepath: Path, source: str):
        self.filepath = Path(filepath)
        self.source = source

    async def read_all(self) -> List[InteractionRecord]:
        if not self.filepath.exists():
            log.warning(f"{self.source} log not found at {self.filepath}")
            return []
        return load_interactions(self.filepath, self.source)


class JsonlContactRoster:
    """Read-only roster read from a JSONL file on every call."""

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)

    async def read_all(self) -> List[Contact]:
        if not self.filepath.exists():
            log.warning(f"Contact roster not found at {self.filepath}")
            return []
        return load_contacts(self.filepath)
