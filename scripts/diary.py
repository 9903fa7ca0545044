#!/usr/bin/env python3
"""
Personal diary and mentor notes.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from ficus.core.config import AppSettings, Config
from ficus.core.i18n import get_translations
from ficus.core.session import AppStatus, unlock_from_config
from ficus.core.storage import LocalStore
from ficus.core.utils import from_millis
from ficus.journal.diary import add_entry, list_entries
from ficus.journal.mentors import MentorBook

app = typer.Typer(help="Personal diary and mentor notes")
console = Console()

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _unlock(system_id: str = None, key: str = None):
    load_dotenv()
    config = Config.from_env()
    store = LocalStore(config)
    settings = AppSettings.load(store)

    session = unlock_from_config(config, settings, system_id, key)
    if session.status != AppStatus.UNLOCKED:
        console.print(f"[red]{session.error}[/red]")
        raise typer.Exit(1)

    return config, store, settings, session.system_id


@app.command()
def write(
    text: str = typer.Argument(None, help="Diary text (prompted if omitted)"),
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """Write a diary entry."""
    config, store, settings, sid = _unlock(system_id, key)

    if not text:
        text = Prompt.ask("Dear diary", console=console)

    entry = add_entry(config, sid, text)
    if entry is None:
        console.print("[yellow]Nothing to save.[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]Diary entry #{entry.id} saved.[/green]")


@app.command("list")
def list_cmd(
    limit: int = typer.Option(10, "--limit", "-l", help="Number of entries"),
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """Show recent diary entries."""
    config, store, settings, sid = _unlock(system_id, key)
    t = get_translations(settings.language)

    entries = list_entries(config, sid)[:limit]
    if not entries:
        console.print("No diary entries yet.")
        return

    console.print(f"[bold {settings.palette.primary}]{t.personal_diary}[/]\n")
    for entry in entries:
        stamp = from_millis(entry.timestamp).strftime("%Y-%m-%d %H:%M")
        console.print(Panel(entry.text, title=stamp, title_align="left"))


@app.command("mentor-add")
def mentor_add(
    name: str = typer.Option(..., "--name", "-n", help="Mentor name"),
    lesson: str = typer.Option(..., "--lesson", "-l", help="Lesson learned"),
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """Save a lesson from a mentor."""
    config, store, settings, sid = _unlock(system_id, key)

    note = MentorBook(store, sid).add(name, lesson)
    if note is None:
        console.print("[yellow]Both name and lesson are required.[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]Saved lesson from {note.name} ({note.id}).[/green]")


@app.command()
def mentors(
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """List mentor notes alongside the universal laws."""
    config, store, settings, sid = _unlock(system_id, key)
    t = get_translations(settings.language)
    accent = settings.palette.primary

    console.print(f"[bold {accent}]{t.universal_laws}[/]\n")
    for i, rule in enumerate(t.golden_rules, 1):
        console.print(f"  {i}. \"{rule.rule}\" - {rule.author}")

    notes = MentorBook(store, sid).list()
    console.print()
    if not notes:
        console.print("No mentor notes yet.")
        return

    for note in notes:
        console.print(Panel(note.lesson, title=f"{note.name} [dim]{note.id}[/dim]", title_align="left", border_style=accent))


@app.command("mentor-delete")
def mentor_delete(
    mentor_id: str = typer.Argument(..., help="Mentor note id"),
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """Delete a mentor note."""
    config, store, settings, sid = _unlock(system_id, key)

    if not MentorBook(store, sid).delete(mentor_id):
        console.print(f"[yellow]No mentor note {mentor_id}.[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]Deleted {mentor_id}.[/green]")


if __name__ == "__main__":
    app()
