"""
Staleness pipeline entry point.

Each run reads the call log, message log and roster fresh, then merges,
joins and classifies. Reads happen concurrently; everything after the
reads is pure and synchronous.

File: pipeline.py
Author: Aidan Allchin
Created: 2026-01-06
Last Modified: 2026-01-11
"""

import asyncio
import logging
import time
from functools import partial
from typing import Any, Callable, List, Optional, Tuple

from .collection import normalize_identifier
from .config import LapsedConfig
from .models import ClassifiedContact
from .sources import CallLogSource, ContactRoster, MessageLogSource
from .staleness import classify_contacts, compute_cutoff, join_roster, merge_interactions

log = logging.getLogger(__name__)

Clock = Callable[[], int]


def now_millis() -> int:
    return int(time.time() * 1000)


class StalenessPipeline:
    """
    Classifies every contact in the roster as stale or active.

    A collaborator that fails to read is logged and treated as empty, so
    a denied call log still yields a classification from messages alone.
    """

    def __init__(
            self,
            call_log: CallLogSource,
            message_log: MessageLogSource,
            roster: ContactRoster,
            config: Optional[LapsedConfig] = None,
            clock: Clock = now_millis,
        ):
        self.call_log = call_log
        self.message_log = message_log
        self.roster = roster
        self.config = config or LapsedConfig()
        self.clock = clock
        self.normalizer = partial(
            normalize_identifier,
            mode=self.config.identifier_mode,
            default_region=self.config.default_region,
        )

    async def _read(self, name: str, collaborator: Any) -> list:
        try:
            return list(await collaborator.read_all())
        except asyncio.CancelledError:
            raise
        except Exception as e:
            log.warning(f"Could not read {name}, continuing without it: {e}")
            return []

    async def run(self) -> List[ClassifiedContact]:
        """Run the full pipeline once and return one ClassifiedContact per roster entry."""
        calls, messages, contacts = await asyncio.gather(
            self._read("call log", self.call_log),
            self._read("message log", self.message_log),
            self._read("contact roster", self.roster),
        )
        log.info(f"Read {len(calls)} calls, {len(messages)} messages, {len(contacts)} contacts")

        now = self.clock()
        cutoff = compute_cutoff(now, self.config.lookback_months, self.config.tzinfo)

        index = merge_interactions([calls, messages], self.normalizer)
        joined = join_roster(contacts, index, self.normalizer)
        return classify_contacts(joined, cutoff, now)


async def run_pipeline(
        call_log: CallLogSource,
        message_log: MessageLogSource,
        roster: ContactRoster,
        config: Optional[LapsedConfig] = None,
        clock: Clock = now_millis,
    ) -> List[ClassifiedContact]:
    """One-shot convenience wrapper around StalenessPipeline.run()."""
    return await StalenessPipeline(call_log, message_log, roster, config, clock).run()


class PipelineRunner:
    """
    Runs the pipeline as a background asyncio task.

    Starting a new run cancels the one in flight. A cancelled run publishes
    nothing; `latest` only ever holds a completed result.
    """

    def __init__(self, pipeline: StalenessPipeline):
        self.pipeline = pipeline
        self.latest: Optional[Tuple[ClassifiedContact, ...]] = None
        self._task: Optional[asyncio.Task] = None
        self._listeners: List[Callable[[Tuple[ClassifiedContact, ...]], Any]] = []

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def on_result(self, callback: Callable[[Tuple[ClassifiedContact, ...]], Any]) -> None:
        """Register a callback invoked with each completed result."""
        self._listeners.append(callback)

    def start(self) -> asyncio.Task:
        """Launch a fresh run, cancelling any run still in flight."""
        self.cancel()
        self._task = asyncio.create_task(self._run())
        return self._task

    def cancel(self) -> bool:
        if self.running:
            self._task.cancel()
            log.debug("Cancelled in-flight pipeline run")
            return True
        return False

    async def refresh(self) -> Tuple[ClassifiedContact, ...]:
        """
        Start a run and wait for it. Suitable as a recompute listener.

        If a newer run supersedes this one, waits for the newer run instead.
        """
        task = self.start()
        while True:
            try:
                return await asyncio.shield(task)
            except asyncio.CancelledError:
                # Raise if we were cancelled, or the run was cancelled outright
                if not task.cancelled() or self._task is task or self._task is None:
                    raise
                task = self._task

    async def _run(self) -> Tuple[ClassifiedContact, ...]:
        result = tuple(await self.pipeline.run())
        self.latest = result
        for callback in self._listeners:
            callback(result)
        return result
