from datetime import datetime, timedelta, timezone

from lapsed.models import Contact, InteractionRecord
from lapsed.staleness import datetime_to_millis

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
NOW_MS = datetime_to_millis(NOW)


def make_contact(contact_id: str, *identifiers: str, name: str = "") -> Contact:
    return Contact(
        id=contact_id,
        lookup_key=f"lk-{contact_id}",
        display_name=name or f"Contact {contact_id}",
        identifiers=list(identifiers),
    )


def record(identifier, timestamp, source: str = "call") -> InteractionRecord:
    return InteractionRecord(identifier=identifier, timestamp=timestamp, source=source)


def days_ago(days: int) -> int:
    return datetime_to_millis(NOW - timedelta(days=days))
