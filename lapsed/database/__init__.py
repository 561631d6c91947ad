"""
File: database/__init__.py
Author: Aidan Allchin
Created: 2026-01-05
Last Modified: 2026-01-14
"""

from .common import CALL, DATA_DIR, INTERACTION_SOURCES, LOCAL_DB_PATH, MESSAGE, open_db
from .create_tables import init_local_database
from .contacts import (
    fetch_contacts,
    import_contacts,
    delete_contact,
)
from .interactions import (
    fetch_interactions,
    import_interactions,
)

__all__ = [
    "DATA_DIR",
    "LOCAL_DB_PATH",
    "INTERACTION_SOURCES",
    "open_db",
    "init_local_database",
    "fetch_contacts",
    "import_contacts",
    "delete_contact",
    "CALL",
    "MESSAGE",
    "fetch_interactions",
    "import_interactions",
]
