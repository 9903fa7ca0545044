#!/usr/bin/env python3
"""
License management.

Request a key from the admin, verify a key, or (admin only)
issue keys from pasted WhatsApp requests.
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
from ficus.core.session import ADMIN_CLICKS, AppSession
from ficus.core.storage import LocalStore
from ficus.license.admin import issue_key
from ficus.license.keys import encode_request_token, normalize_system_id
from ficus.license.sharing import request_message, response_message, whatsapp_url

app = typer.Typer(help="Ficus license keys")
console = Console()

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _load():
    load_dotenv()
    config = Config.from_env()
    settings = AppSettings.load(LocalStore(config))
    return config, settings


@app.command()
def request(
    system_id: str = typer.Option(None, "--sid", "-s", help="System ID (defaults to FICUS_SYSTEM_ID)"),
):
    """
    Build a license request for the admin.

    Prints the message and a WhatsApp link with it pre-filled.
    """
    config, settings = _load()
    t = get_translations(settings.language)

    sid = normalize_system_id(system_id or config.system_id)
    if len(sid) < 2:
        console.print(f"[red]{t.id_too_short}[/red]")
        raise typer.Exit(1)

    message = request_message(sid, t)

    console.print(Panel(message, title=t.request_btn, border_style=settings.palette.primary))
    console.print(f"\n{t.admin_request}:")
    console.print(whatsapp_url(config.support_whatsapp, message), soft_wrap=True)


@app.command()
def token(
    system_id: str = typer.Argument(..., help="System ID"),
):
    """Print the request token for a System ID."""
    console.print(encode_request_token(system_id))


@app.command()
def verify(
    system_id: str = typer.Option(None, "--sid", "-s", help="System ID (defaults to FICUS_SYSTEM_ID)"),
    key: str = typer.Option(None, "--key", "-k", help="License key (defaults to FICUS_LICENSE_KEY)"),
):
    """
    Check a license key against a System ID.
    """
    config, settings = _load()

    session = AppSession(config, settings)
    error = session.unlock(system_id or config.system_id or "", key or config.license_key or "")

    if error:
        console.print(f"[red]{error}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Unlocked: {session.system_id}[/green]")


@app.command()
def generate(
    message: str = typer.Option(None, "--message", "-m", help="Pasted request message (prompted if omitted)"),
):
    """
    Admin: issue a key from a user's request message.

    Requires the admin PIN.
    """
    config, settings = _load()
    t = get_translations(settings.language)

    session = AppSession(config, settings)
    for _ in range(ADMIN_CLICKS):
        session.header_click()

    pin = Prompt.ask("Admin PIN", password=True, console=console)
    if not session.admin_login(pin):
        console.print("[red]Wrong admin PIN.[/red]")
        raise typer.Exit(1)

    if not message:
        message = Prompt.ask("Paste the user's message", console=console)

    issue = issue_key(message, config, t)

    if issue.error:
        console.print(f"[red]Validation Error:[/red] {issue.error}")
        console.print(f"Detected System ID: {issue.system_id or '---'}")
        raise typer.Exit(1)

    console.print(f"Detected System ID: [bold]{issue.system_id}[/bold]")
    console.print(f"Generated License Key: [bold {settings.palette.primary}]{issue.key}[/]\n")
    console.print(Panel(
        response_message(issue.system_id, issue.key, t),
        title="WhatsApp reply",
        border_style="green",
    ))


if __name__ == "__main__":
    app()
