"""
Main entry point for Lapsed.

Interactive CLI for finding contacts you have not called or messaged in a
while and deleting the ones you no longer need.

File: main.py
Author: Aidan Allchin
Created: 2026-01-08
Last Modified: 2026-01-11
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt, Confirm
from rich.table import Table
from rich import box

from lapsed import DeletionCoordinator, LapsedConfig, PipelineRunner, StalenessPipeline
from lapsed.database import CALL, MESSAGE, import_contacts, import_interactions, init_local_database
from lapsed.display import contacts_table, summary_text
from lapsed.sources import (
    IMessageLogSource,
    SQLiteCallLogSource,
    SQLiteContactRoster,
    SQLiteContactSink,
    SQLiteMessageLogSource,
    load_contacts,
    load_interactions,
)
from lapsed.staleness import sort_by_last_interaction, stale_only

console = Console()

# Configure logging
LOG_DIR = Path(__file__).parent / "logs"
LOG_DIR.mkdir(exist_ok=True)

_stream_handler = logging.StreamHandler()
_stream_handler.setLevel(logging.WARNING)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(levelname)-8s | %(message)s',
    handlers=[
        logging.FileHandler(LOG_DIR / f"lapsed_{datetime.now().strftime('%Y-%m-%d')}.log"),
        _stream_handler,
    ]
)
log = logging.getLogger(__name__)

COMMANDS = {
    "1": {
        "name": "Scan contacts",
        "description": "Find contacts with no call or message in the lookback window",
    },
    "2": {
        "name": "Select contacts",
        "description": "Toggle contacts for deletion by row number (e.g. 1,3,5-7)",
    },
    "3": {
        "name": "Delete selected",
        "description": "Confirm and delete the selected contacts",
    },
    "4": {
        "name": "Import data",
        "description": "Load contacts, calls or messages from JSONL into the local database",
    },
}


def show_menu(config: LapsedConfig, coordinator: DeletionCoordinator):
    """Display the main menu."""
    console.print()
    console.print(
        Panel.fit(
            "[bold cyan]Lapsed[/] - Find contacts you've lost touch with",
            border_style="cyan",
        )
    )
    console.print(
        f"[dim]Lookback: {config.lookback_months} months | "
        f"Listed: {len(coordinator.results)} | Selected: {len(coordinator.selection)}[/]"
    )
    console.print()

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("Cmd", style="cyan", width=4)
    table.add_column("Name", style="white")
    table.add_column("Description", style="dim")

    for key, cmd in COMMANDS.items():
        table.add_row(key, cmd["name"], cmd["description"])
    table.add_row("q", "Quit", "")

    console.print(table)
    console.print()


def parse_rows(text: str, count: int) -> List[int]:
    """
    Parse a row selection like "1,3,5-7" into zero-based indexes.

    Out of range and malformed entries are skipped.
    """
    rows = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            if "-" in part:
                start, end = (int(p) for p in part.split("-", 1))
                candidates = range(min(start, end), max(start, end) + 1)
            else:
                candidates = [int(part)]
        except ValueError:
            console.print(f"[yellow]Skipping '{part}'[/]")
            continue
        for row in candidates:
            if 1 <= row <= count and row - 1 not in rows:
                rows.append(row - 1)
    return rows


def show_contacts(config: LapsedConfig, coordinator: DeletionCoordinator):
    results = coordinator.results
    if not results:
        console.print("[green]No stale contacts found.[/]")
        return
    selected = [c.lookup_key for c in coordinator.selection]
    console.print(contacts_table(results, selected, config.tzinfo, title="Stale contacts"))


async def scan(runner: PipelineRunner, config: LapsedConfig, coordinator: DeletionCoordinator):
    """Run the pipeline and show the stale contacts."""
    with console.status("[dim]Reading calls, messages and contacts...[/]"):
        await runner.refresh()
    show_contacts(config, coordinator)


def select(config: LapsedConfig, coordinator: DeletionCoordinator):
    results = coordinator.results
    if not results:
        console.print("[dim]Nothing to select. Run a scan first.[/]")
        return

    show_contacts(config, coordinator)
    rows = parse_rows(Prompt.ask("Rows to toggle", default=""), len(results))
    for row in rows:
        coordinator.toggle_selection(results[row].contact)
    console.print(f"[dim]{len(coordinator.selection)} contacts selected[/]")


async def delete_selected(coordinator: DeletionCoordinator):
    if not coordinator.request_delete():
        console.print("[dim]No contacts selected.[/]")
        return

    console.print()
    for contact in coordinator.selection:
        console.print(f"  [red]-[/] {escape(contact.display_name or contact.lookup_key)}")

    if not Confirm.ask(coordinator.confirmation_prompt, default=False):
        coordinator.cancel()
        console.print("[dim]Cancelled.[/]")
        return

    with console.status("[dim]Deleting...[/]"):
        summary = await coordinator.confirm()
    if summary is not None:
        console.print(summary_text(summary))


async def import_data(config: LapsedConfig):
    """Load JSONL files into the local database."""
    kind = Prompt.ask("What to import", choices=["contacts", "calls", "messages"], default="contacts")
    path = Path(Prompt.ask("JSONL file")).expanduser()
    if not path.exists():
        console.print(f"[red]File not found: {path}[/]")
        return

    await init_local_database(config.db_path)
    if kind == "contacts":
        count = await import_contacts(load_contacts(path), config.db_path)
    else:
        source = CALL if kind == "calls" else MESSAGE
        count = await import_interactions(source, load_interactions(path, source), config.db_path)
    console.print(f"[green]Imported {count:,} {kind}.[/]")


def build(config: LapsedConfig):
    """Wire the collaborators, pipeline runner and coordinator together."""
    if config.imessage_db_path.exists():
        message_log = IMessageLogSource(config.imessage_db_path)
    else:
        log.info(f"No iMessage database at {config.imessage_db_path}, using local message log")
        message_log = SQLiteMessageLogSource(config.db_path)

    pipeline = StalenessPipeline(
        call_log=SQLiteCallLogSource(config.db_path),
        message_log=message_log,
        roster=SQLiteContactRoster(config.db_path),
        config=config,
    )
    runner = PipelineRunner(pipeline)
    coordinator = DeletionCoordinator(SQLiteContactSink(config.db_path), config.max_concurrent_deletes)

    runner.on_result(lambda results: coordinator.load(stale_only(sort_by_last_interaction(results))))
    coordinator.on_recompute(runner.refresh)
    return runner, coordinator


async def main():
    """Main entry point with interactive menu."""
    try:
        config = LapsedConfig.from_env()
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/]")
        return

    log.info(f"Starting with config {config.to_dict()}")
    await init_local_database(config.db_path)
    runner, coordinator = build(config)

    # Non-interactive: python main.py scan
    if len(sys.argv) > 1:
        command = sys.argv[1].lower()
        if command == "scan":
            await scan(runner, config, coordinator)
        else:
            console.print(f"[red]Unknown command: {command}[/]")
            console.print("[dim]Valid commands: scan[/]")
        return

    await scan(runner, config, coordinator)
    while True:
        show_menu(config, coordinator)

        choice = Prompt.ask(
            "Select command",
            choices=list(COMMANDS.keys()) + ["q"],
            default="q",
        )

        if choice == "q":
            console.print("[dim]Goodbye![/]")
            break
        elif choice == "1":
            await scan(runner, config, coordinator)
        elif choice == "2":
            select(config, coordinator)
        elif choice == "3":
            await delete_selected(coordinator)
        elif choice == "4":
            await import_data(config)


if __name__ == "__main__":
    asyncio.run(main())
