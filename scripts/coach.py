#!/usr/bin/env python3
"""
Talk to the Ficus trading coach.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.prompt import Prompt

from ficus.coach.client import CoachClient, CoachMode, CoachSession
from ficus.core.config import AppSettings, Config
from ficus.core.i18n import get_translations
from ficus.core.session import AppStatus, unlock_from_config
from ficus.core.storage import LocalStore

app = typer.Typer(help="Ficus trading coach")
console = Console()

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _unlock(system_id: str = None, key: str = None):
    load_dotenv()
    config = Config.from_env()
    settings = AppSettings.load(LocalStore(config))

    session = unlock_from_config(config, settings, system_id, key)
    if session.status != AppStatus.UNLOCKED:
        console.print(f"[red]{session.error}[/red]")
        raise typer.Exit(1)

    return config, settings


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Your question"),
    thinking: bool = typer.Option(False, "--thinking", help="Use the deeper thinking model"),
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """Ask the coach one question."""
    config, settings = _unlock(system_id, key)
    mode = CoachMode.THINKING if thinking else CoachMode.FAST

    with console.status("Thinking..."):
        reply = CoachClient(config).ask(prompt, settings.language, mode)

    console.print(Markdown(reply))


@app.command()
def chat(
    thinking: bool = typer.Option(False, "--thinking", help="Use the deeper thinking model"),
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """
    Interactive chat. Empty line or 'exit' to quit.
    """
    config, settings = _unlock(system_id, key)
    t = get_translations(settings.language)
    accent = settings.palette.primary

    session = CoachSession(
        client=CoachClient(config),
        language=settings.language,
        mode=CoachMode.THINKING if thinking else CoachMode.FAST,
    )

    console.print(f"[bold {accent}]{t.ficus_coach}[/]")
    console.print(Markdown(session.history[0].text))

    while True:
        message = Prompt.ask(f"\n[{accent}]>[/]", default="", show_default=False, console=console)
        if not message.strip() or message.strip().lower() == "exit":
            break

        with console.status("Thinking..."):
            reply = session.send(message)

        console.print(Markdown(reply))


if __name__ == "__main__":
    app()
