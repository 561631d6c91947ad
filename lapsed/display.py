"""
Rich rendering for classified contacts and deletion summaries.

File: display.py
Author: Aidan Allchin
Created: 2026-01-08
Last Modified: 2026-01-11
"""

from datetime import timezone, tzinfo
from typing import Iterable, List

from rich import box
from rich.table import Table
from rich.text import Text

from .models import ClassifiedContact, DeletionSummary


def contacts_table(
        contacts: List[ClassifiedContact],
        selected: Iterable[str] = (),
        tz: tzinfo = timezone.utc,
        title: str = "Contacts",
    ) -> Table:
    """Numbered table of contacts; `selected` holds the lookup keys to tick."""
    selected = set(selected)

    table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("#", style="cyan", justify="right", width=4)
    table.add_column("", width=3)
    table.add_column("Name", style="white")
    table.add_column("Last contact", style="dim")
    table.add_column("Status")

    for i, c in enumerate(contacts, 1):
        mark = Text("[x]", style="bold red") if c.lookup_key in selected else Text("[ ]", style="dim")
        status = Text("stale", style="yellow") if c.is_stale else Text("active", style="green")
        table.add_row(
            str(i),
            mark,
            Text(c.contact.display_name or "(no name)"),
            c.last_contact_label(tz),
            status,
        )

    return table


def summary_text(summary: DeletionSummary) -> Text:
    text = Text()
    text.append(f"Deleted {summary.succeeded} contacts", style="bold green")
    if summary.failed:
        text.append(f", {len(summary.failed)} failed", style="bold red")
        for contact, reason in summary.failed:
            text.append(f"\n  {contact.display_name or contact.lookup_key}: ", style="red")
            text.append(reason, style="dim")
    return text
