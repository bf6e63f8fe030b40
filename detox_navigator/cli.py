"""
Terminal front end for the navigator.

Each invocation opens the session once from the configured storage file,
applies one action and renders the result:

    python -m detox_navigator add-client "J.D."
    python -m detox_navigator add-entry --bp 130/80 --hr 88 --ciwa 16
    python -m detox_navigator timeline
    python -m detox_navigator summary
"""

import argparse
import asyncio
from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from detox_navigator.adapters.clipboard import FileClipboard
from detox_navigator.config import get_config, print_config_summary
from detox_navigator.domain.models import SeverityTier
from detox_navigator.logging_setup import configure_logging
from detox_navigator.session import NavigatorSession

console = Console()

_TIER_STYLES = {
    SeverityTier.NORMAL: "green",
    SeverityTier.WATCH: "yellow",
    SeverityTier.ESCALATE: "bold red",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="detox-navigator", description="Home detox documentation notes"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("clients", help="List clients")

    add_client = sub.add_parser("add-client", help="Add a client and select it")
    add_client.add_argument("name")

    select = sub.add_parser("select", help="Select the client to document")
    select.add_argument("client_id")

    add_entry = sub.add_parser("add-entry", help="Save an auto-timestamped entry")
    for field in ("bp", "hr", "ciwa", "meds", "notes"):
        add_entry.add_argument(f"--{field}", default="")

    sub.add_parser("timeline", help="Show the selected client's timeline")
    sub.add_parser("summary", help="Print the aftercare summary")

    copy = sub.add_parser("copy", help="Write the aftercare summary to a file")
    copy.add_argument("path")

    sub.add_parser("config", help="Show the active configuration")
    return parser


def render_clients(session: NavigatorSession) -> None:
    if not session.clients:
        console.print("Start by adding a client. This stays on this device.", style="dim")
        return

    table = Table(title="Clients")
    table.add_column("", width=1)
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    table.add_column("Id", style="dim")

    selected = session.store.selected_client_id
    for client in session.clients:
        table.add_row(
            "*" if client.id == selected else "",
            client.name,
            session.client_status(client.id),
            client.id,
        )
    console.print(table)


def render_timeline(session: NavigatorSession) -> None:
    client = session.current_client()
    if client is None:
        console.print("Select or add a client to begin documenting.", style="yellow")
        return

    entries = session.timeline()
    if not entries:
        console.print(f"No entries yet for {client.name}. Start with initial assessment.")
        return

    table = Table(title=f"Timeline – {client.name}")
    table.add_column("Time", style="cyan")
    table.add_column("BP")
    table.add_column("HR")
    table.add_column("Meds")
    table.add_column("Notes")
    table.add_column("CIWA")

    for entry in entries:
        classification = session.classify(entry)
        ciwa = ""
        if classification is not None:
            ciwa = f"[{_TIER_STYLES[classification.tier]}]{classification.label}[/]"
        table.add_row(
            session.summaries.format_time(entry.timestamp),
            entry.bp or "",
            entry.hr or "",
            entry.meds or "",
            entry.notes or "",
            ciwa,
        )
    console.print(table)


def run(args: argparse.Namespace, session: NavigatorSession) -> int:
    if args.command == "clients":
        render_clients(session)
    elif args.command == "add-client":
        client = session.add_client(args.name)
        if client is None:
            console.print("Client name cannot be blank.", style="red")
            return 1
        console.print(f"Added and selected {client.name} ({client.id})", style="green")
    elif args.command == "select":
        session.select_client(args.client_id)
        render_timeline(session)
    elif args.command == "add-entry":
        for field in ("bp", "hr", "ciwa", "meds", "notes"):
            setattr(session.draft, field, getattr(args, field))
        entry = session.save_entry()
        if entry is None:
            console.print("Select or add a client before saving entries.", style="red")
            return 1
        render_timeline(session)
    elif args.command == "timeline":
        render_timeline(session)
    elif args.command == "summary":
        text = session.summary_text()
        if not text:
            console.print("No client selected.", style="yellow")
            return 1
        console.print(Panel(text, title="Aftercare Summary"))
    elif args.command == "copy":
        session.clipboard = FileClipboard(args.path)
        if not asyncio.run(session.copy_summary()):
            console.print("Nothing copied.", style="red")
            return 1
        console.print(f"Summary written to {args.path}", style="green")
    elif args.command == "config":
        print_config_summary(console)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    configure_logging(config.logging)
    session = NavigatorSession.from_config(config)
    return run(args, session)
