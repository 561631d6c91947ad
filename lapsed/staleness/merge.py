"""
Merges interaction logs into a single latest-timestamp-per-identifier index.

File: staleness/merge.py
Author: Aidan Allchin
Created: 2026-01-05
Last Modified: 2026-01-10
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, Optional, Tuple

from ..collection import normalize_identifier
from ..models import InteractionRecord

log = logging.getLogger(__name__)

Normalizer = Callable[[Optional[str]], Optional[str]]


class InteractionIndex(Mapping):
    """
    Read-only mapping of normalized identifier -> latest timestamp (epoch millis).

    Built once per classification run and never mutated afterwards.
    """

    __slots__ = ("_latest",)

    def __init__(self, latest: Optional[Dict[str, int]] = None):
        self._latest = MappingProxyType(dict(latest or {}))

    def __getitem__(self, identifier: str) -> int:
        return self._latest[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self._latest)

    def __len__(self) -> int:
        return len(self._latest)

    def __repr__(self) -> str:
        return f"InteractionIndex({dict(self._latest)!r})"

    def latest(self) -> Optional[Tuple[str, int]]:
        """Most recent (identifier, timestamp) pair across the whole index"""
        if not self._latest:
            return None
        return max(self._latest.items(), key=lambda item: (item[1], item[0]))


def merge_interactions(
        sources: Iterable[Iterable[InteractionRecord]],
        normalizer: Normalizer = normalize_identifier,
    ) -> InteractionIndex:
    """
    Merge any number of interaction logs with a max-reduction grouped by identifier.

    Records whose identifier does not normalize, or whose timestamp is
    missing, are skipped. The result does not depend on the order of the
    sources or of the records within them.

    Args:
        sources: Interaction logs (e.g., call log records, message log records)
        normalizer: Identifier normalizer; must match the one used on the roster

    Returns:
        InteractionIndex with one entry per distinct normalized identifier
    """
    latest: Dict[str, int] = {}
    seen = 0
    skipped = 0

    for source in sources:
        for record in source:
            seen += 1
            identifier = normalizer(record.identifier)
            if identifier is None or record.timestamp is None:
                skipped += 1
                continue
            latest[identifier] = max(latest.get(identifier, 0), record.timestamp)

    log.debug(f"Merged {seen} interaction records into {len(latest)} identifiers ({skipped} skipped)")
    return InteractionIndex(latest)
