"""
Collaborators the pipeline reads interactions and contacts from, and
deletes contacts through.

File: sources/__init__.py
Author: Aidan Allchin
Created: 2026-01-05
Last Modified: 2026-01-10
"""

from .base import CallLogSource, ContactRoster, ContactSink, InteractionSource, MessageLogSource
from .imessage import IMessageLogSource, imessage_timestamp_to_millis
from .jsonl import JsonlContactRoster, JsonlInteractionSource, load_contacts, load_interactions
from .memory import InMemoryContactStore, StaticInteractionSource
from .sqlite import (
    SQLiteCallLogSource,
    SQLiteContactRoster,
    SQLiteContactSink,
    SQLiteMessageLogSource,
)

__all__ = [
    "CallLogSource",
    "ContactRoster",
    "ContactSink",
    "InteractionSource",
    "MessageLogSource",
    "IMessageLogSource",
    "imessage_timestamp_to_millis",
    "JsonlContactRoster",
    "JsonlInteractionSource",
    "load_contacts",
    "load_interactions",
    "InMemoryContactStore",
    "StaticInteractionSource",
    "SQLiteCallLogSource",
    "SQLiteContactRoster",
    "SQLiteContactSink",
    "SQLiteMessageLogSource",
]
