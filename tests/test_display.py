from rich.console import Console

from lapsed.display import contacts_table, summary_text
from lapsed.models import DeletionSummary
from lapsed.staleness import classify_contacts, datetime_to_millis

from .helpers import NOW, make_contact


def render(renderable) -> str:
    console = Console(record=True, width=120)
    console.print(renderable)
    return console.export_text()


def test_contacts_table_marks_selection_and_status():
    classified = classify_contacts(
        [(make_contact("1", name="Alice"), None), (make_contact("2", name="Bob"), datetime_to_millis(NOW))],
        cutoff=datetime_to_millis(NOW) - 1,
        now=datetime_to_millis(NOW),
    )

    output = render(contacts_table(classified, selected=["lk-1"]))

    assert "[x]" in output
    assert "Never contacted" in output
    assert "Jan 15, 2026" in output
    assert "stale" in output and "active" in output


def test_summary_lists_failures():
    summary = DeletionSummary(succeeded=1, failed=[(make_contact("2", name="Bob"), "read-only account")])

    output = render(summary_text(summary))

    assert "Deleted 1 contacts, 1 failed" in output
    assert "Bob: read-only account" in output
    assert summary.attempted == 2
