import asyncio

import pytest

from lapsed.deletion import DeletionCoordinator, DeletionState
from lapsed.models import DeletionOutcome
from lapsed.sources import InMemoryContactStore
from lapsed.staleness import classify_contacts

from .helpers import make_contact


def classified(*contacts):
    return classify_contacts([(c, None) for c in contacts], cutoff=0, now=0)


class CountingSink:
    """Yields to the event loop before every delete and counts calls per contact."""

    def __init__(self, store):
        self.store = store
        self.calls = {}

    async def delete(self, contact):
        self.calls[contact.lookup_key] = self.calls.get(contact.lookup_key, 0) + 1
        await asyncio.sleep(0)
        return await self.store.delete(contact)


class RaisingSink:
    def __init__(self, store, raise_on):
        self.store = store
        self.raise_on = raise_on

    async def delete(self, contact):
        if contact.lookup_key == self.raise_on:
            raise RuntimeError("provider crashed")
        return await self.store.delete(contact)


@pytest.fixture
def contacts():
    return [make_contact("1", "111"), make_contact("2", "222"), make_contact("3", "333")]


@pytest.fixture
def store(contacts):
    return InMemoryContactStore(contacts)


@pytest.fixture
def coordinator(store, contacts):
    coordinator = DeletionCoordinator(store)
    coordinator.load(classified(*contacts))
    return coordinator


def test_toggle_selection_adds_and_removes(coordinator, contacts):
    assert coordinator.toggle_selection(contacts[0]) is True
    assert coordinator.is_selected(contacts[0])
    assert coordinator.toggle_selection(contacts[0]) is False
    assert coordinator.selection == []


def test_selection_is_keyed_by_lookup_key(coordinator, contacts):
    coordinator.toggle_selection(contacts[1])
    same_person = contacts[1].model_copy(update={"id": "99", "display_name": "Renamed"})

    assert coordinator.is_selected(same_person)
    assert coordinator.toggle_selection(same_person) is False


def test_unknown_contact_is_not_selectable(coordinator):
    assert coordinator.toggle_selection(make_contact("42", "4242")) is False
    assert coordinator.selection == []


def test_request_delete_requires_selection(coordinator, contacts):
    assert coordinator.request_delete() is False
    assert coordinator.state is DeletionState.IDLE

    coordinator.toggle_selection(contacts[0])
    assert coordinator.request_delete() is True
    assert coordinator.state is DeletionState.CONFIRMING
    assert coordinator.confirmation_prompt == "Delete 1 contacts?"


def test_cancel_returns_to_idle_and_keeps_selection(coordinator, contacts):
    coordinator.toggle_selection(contacts[0])
    coordinator.request_delete()

    assert coordinator.cancel() is True
    assert coordinator.state is DeletionState.IDLE
    assert coordinator.selection == [contacts[0]]


def test_selection_is_frozen_while_confirming(coordinator, contacts):
    coordinator.toggle_selection(contacts[0])
    coordinator.request_delete()

    assert coordinator.toggle_selection(contacts[1]) is False
    assert coordinator.toggle_selection(contacts[0]) is True
    assert coordinator.selection == [contacts[0]]


@pytest.mark.asyncio
async def test_confirm_deletes_selected_and_requests_recompute(coordinator, store, contacts):
    recomputes = []
    coordinator.on_recompute(lambda: recomputes.append(1))
    coordinator.toggle_selection(contacts[0])
    coordinator.toggle_selection(contacts[2])
    coordinator.request_delete()

    summary = await coordinator.confirm()

    assert summary.succeeded == 2
    assert summary.failed == []
    assert coordinator.selection == []
    assert coordinator.state is DeletionState.IDLE
    assert recomputes == [1]
    assert [c.lookup_key for c in await store.read_all()] == ["lk-2"]


@pytest.mark.asyncio
async def test_partial_failure_is_reported_and_returns_to_idle(contacts):
    store = InMemoryContactStore(contacts, fail_on=["lk-2"], failure_reason="read-only account")
    coordinator = DeletionCoordinator(store)
    coordinator.load(classified(*contacts))
    coordinator.toggle_selection(contacts[0])
    coordinator.toggle_selection(contacts[1])
    coordinator.request_delete()

    summary = await coordinator.confirm()

    assert summary.succeeded == 1
    assert summary.failed == [(contacts[1], "read-only account")]
    assert coordinator.state is DeletionState.IDLE
    assert coordinator.selection == []


@pytest.mark.asyncio
async def test_sink_exception_does_not_abort_batch(store, contacts):
    coordinator = DeletionCoordinator(RaisingSink(store, raise_on="lk-1"))
    coordinator.load(classified(*contacts))
    for contact in contacts:
        coordinator.toggle_selection(contact)
    coordinator.request_delete()

    summary = await coordinator.confirm()

    assert summary.succeeded == 2
    assert summary.failed == [(contacts[0], "provider crashed")]
    assert coordinator.state is DeletionState.IDLE


@pytest.mark.asyncio
async def test_confirm_while_idle_is_a_noop(coordinator, contacts):
    recomputes = []
    coordinator.on_recompute(lambda: recomputes.append(1))
    coordinator.toggle_selection(contacts[0])

    assert await coordinator.confirm() is None
    assert coordinator.selection == [contacts[0]]
    assert recomputes == []


@pytest.mark.asyncio
async def test_duplicate_confirm_only_deletes_once(coordinator, contacts):
    recomputes = []
    coordinator.on_recompute(lambda: recomputes.append(1))
    coordinator.toggle_selection(contacts[0])
    coordinator.request_delete()

    first = await coordinator.confirm()
    second = await coordinator.confirm()

    assert first.succeeded == 1
    assert second is None
    assert recomputes == [1]


@pytest.mark.asyncio
async def test_async_recompute_listener_reloads_results(store, contacts):
    coordinator = DeletionCoordinator(store)
    coordinator.load(classified(*contacts))

    async def recompute():
        coordinator.load(classified(*await store.read_all()))

    coordinator.on_recompute(recompute)
    coordinator.toggle_selection(contacts[1])
    coordinator.request_delete()
    await coordinator.confirm()

    assert [c.lookup_key for c in coordinator.results] == ["lk-1", "lk-3"]


def test_load_drops_previous_selection(coordinator, contacts):
    coordinator.toggle_selection(contacts[0])
    coordinator.load(classified(*contacts))

    assert coordinator.selection == []


def test_outcome_helpers(contacts):
    assert DeletionOutcome.ok(contacts[0]).succeeded is True
    failed = DeletionOutcome.failed(contacts[0], "")
    assert failed.succeeded is False
    assert failed.reason == "unknown error"


@pytest.mark.asyncio
async def test_concurrent_confirms_delete_once(store, contacts):
    sink = CountingSink(store)
    coordinator = DeletionCoordinator(sink)
    coordinator.load(classified(*contacts))
    recomputes = []
    coordinator.on_recompute(lambda: recomputes.append(1))
    coordinator.toggle_selection(contacts[0])
    coordinator.toggle_selection(contacts[1])
    coordinator.request_delete()

    results = await asyncio.gather(coordinator.confirm(), coordinator.confirm())

    summaries = [r for r in results if r is not None]
    assert len(summaries) == 1
    assert summaries[0].succeeded == 2
    assert sink.calls == {"lk-1": 1, "lk-2": 1}
    assert recomputes == [1]
    assert coordinator.state is DeletionState.IDLE


@pytest.mark.asyncio
async def test_failing_recompute_listener_still_returns_summary(coordinator, store, contacts):
    def refresh():
        raise RuntimeError("host refresh failed")

    later = []
    coordinator.on_recompute(refresh)
    coordinator.on_recompute(lambda: later.append(1))
    coordinator.toggle_selection(contacts[0])
    coordinator.request_delete()

    summary = await coordinator.confirm()

    assert summary.succeeded == 1
    assert coordinator.state is DeletionState.IDLE
    assert later == [1]
    assert "lk-1" not in store


@pytest.mark.asyncio
async def test_failing_async_recompute_listener_still_returns_summary(coordinator, contacts):
    async def refresh():
        raise OSError("roster unavailable")

    coordinator.on_recompute(refresh)
    coordinator.toggle_selection(contacts[0])
    coordinator.request_delete()

    summary = await coordinator.confirm()

    assert summary is not None
    assert summary.succeeded == 1


def test_unknown_contact_is_not_selectable_after_empty_load(store):
    coordinator = DeletionCoordinator(store)
    coordinator.load([])

    assert coordinator.toggle_selection(make_contact("42", "4242")) is False
    assert coordinator.selection == []
    assert coordinator.request_delete() is False


def test_any_contact_is_selectable_before_first_load(store, contacts):
    coordinator = DeletionCoordinator(store)

    assert coordinator.results == []
    assert coordinator.toggle_selection(contacts[0]) is True
