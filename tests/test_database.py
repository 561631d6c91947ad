import pytest
import pytest_asyncio

from lapsed.database import (
    CALL,
    MESSAGE,
    delete_contact,
    fetch_contacts,
    fetch_interactions,
    import_contacts,
    import_interactions,
    init_local_database,
    open_db,
)
from lapsed.models import Contact
from lapsed.pipeline import run_pipeline
from lapsed.sources import (
    SQLiteCallLogSource,
    SQLiteContactRoster,
    SQLiteContactSink,
    SQLiteMessageLogSource,
)

from .helpers import days_ago, make_contact, record


@pytest_asyncio.fixture
async def db_path(tmp_path):
    path = tmp_path / "contacts.db"
    await init_local_database(path)
    return path


@pytest.mark.asyncio
async def test_import_and_fetch_contacts(db_path):
    await import_contacts([
        make_contact("x", "555-1111", "555-2222", name="Zed"),
        make_contact("y", name="amy"),
    ], db_path)

    contacts = await fetch_contacts(db_path)

    assert [c.display_name for c in contacts] == ["amy", "Zed"]
    assert contacts[1].identifiers == ["555-1111", "555-2222"]
    assert contacts[1].lookup_key == "lk-x"


@pytest.mark.asyncio
async def test_reimport_replaces_identifiers(db_path):
    await import_contacts([make_contact("x", "111", "222")], db_path)
    await import_contacts([make_contact("x", "333", name="Renamed")], db_path)

    contacts = await fetch_contacts(db_path)

    assert len(contacts) == 1
    assert contacts[0].display_name == "Renamed"
    assert contacts[0].identifiers == ["333"]


@pytest.mark.asyncio
async def test_delete_contact_requires_matching_id_and_lookup_key(db_path):
    await import_contacts([make_contact("x", "111")], db_path)
    stored = (await fetch_contacts(db_path))[0]

    assert await delete_contact(stored.id, "wrong-key", db_path) is False
    assert await delete_contact(stored.id, stored.lookup_key, db_path) is True
    assert await fetch_contacts(db_path) == []
    assert await delete_contact(stored.id, stored.lookup_key, db_path) is False


@pytest.mark.asyncio
async def test_interactions_are_kept_per_source(db_path):
    await import_interactions(CALL, [record("111", 5)], db_path)
    await import_interactions(MESSAGE, [record("222", 7, "message"), record(None, 9, "message")], db_path)

    calls = await fetch_interactions(CALL, db_path)
    messages = await fetch_interactions(MESSAGE, db_path)

    assert [(r.identifier, r.timestamp, r.source) for r in calls] == [("111", 5, "call")]
    assert [(r.identifier, r.timestamp) for r in messages] == [("222", 7), (None, 9)]


@pytest.mark.asyncio
async def test_sqlite_sink_reports_missing_contact(db_path):
    sink = SQLiteContactSink(db_path)

    outcome = await sink.delete(Contact(id="404", lookup_key="gone"))

    assert outcome.succeeded is False
    assert outcome.reason == "contact not found"


@pytest.mark.asyncio
async def test_pipeline_over_local_database(db_path, clock):
    await import_contacts([
        make_contact("a", "(555) 123-4567", name="Alice"),
        make_contact("b", "555-987-6543", name="Bob"),
    ], db_path)
    await import_interactions(CALL, [record("5551234567", days_ago(200))], db_path)
    await import_interactions(MESSAGE, [record("555.987.6543", days_ago(2), "message")], db_path)

    roster = SQLiteContactRoster(db_path)
    results = await run_pipeline(SQLiteCallLogSource(db_path), SQLiteMessageLogSource(db_path), roster, clock=clock)

    assert [(c.contact.display_name, c.is_stale) for c in results] == [("Alice", True), ("Bob", False)]

    sink = SQLiteContactSink(db_path)
    outcome = await sink.delete(results[0].contact)
    assert outcome.succeeded is True
    assert [c.display_name for c in await roster.read_all()] == ["Bob"]


@pytest.mark.asyncio
async def test_deleting_contact_drops_its_identifiers(db_path):
    await import_contacts([make_contact("x", "111", "222"), make_contact("y", "333")], db_path)
    stored = {c.lookup_key: c for c in await fetch_contacts(db_path)}

    await delete_contact(stored["lk-x"].id, "lk-x", db_path)

    async with open_db(db_path) as conn:
        async with conn.execute("SELECT identifier FROM contact_identifiers ORDER BY identifier") as cursor:
            remaining = [row[0] for row in await cursor.fetchall()]
    assert remaining == ["333"]


@pytest.mark.asyncio
async def test_import_interactions_rejects_unknown_source(db_path):
    with pytest.raises(ValueError):
        await import_interactions("fax", [record("111", 5)], db_path)
