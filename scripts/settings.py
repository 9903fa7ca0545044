#!/usr/bin/env python3
"""
Settings management CLI.

View configuration and switch language or theme.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
import typer

from ficus.core.config import AppSettings, Config, Language, Theme, THEME_PALETTES
from ficus.core.db import init_db
from ficus.core.storage import LocalStore

app = typer.Typer(help="Ficus settings")


def _load():
    load_dotenv()
    config = Config.from_env()
    store = LocalStore(config)
    return config, store, AppSettings.load(store)


@app.command()
def init():
    """Create the database and default settings."""
    config, store, settings = _load()
    init_db(config)
    settings.save(store)
    typer.secho(f"✓ Database ready at {config.database_path}", fg=typer.colors.GREEN)


@app.command()
def show():
    """Show current settings and configuration."""
    config, store, settings = _load()

    typer.secho("\n⚙️  Settings", bold=True)
    typer.echo("─" * 50)
    typer.echo(f"Language: {settings.language.value}")
    typer.echo(f"Theme: {settings.theme.value} ({settings.palette.name}, {settings.palette.primary})")

    typer.secho("\n🔧 Configuration", bold=True)
    typer.echo("─" * 50)
    typer.echo(config.get_summary())


@app.command()
def language(
    code: Language = typer.Argument(..., help="Language code"),
):
    """Switch UI language."""
    config, store, settings = _load()
    settings = settings.update(store, language=code)
    typer.secho(f"✓ Language: {settings.language.value}", fg=typer.colors.GREEN)


@app.command()
def theme(
    name: Theme = typer.Argument(..., help="Theme name"),
):
    """Switch accent theme."""
    config, store, settings = _load()
    settings = settings.update(store, theme=name)
    typer.secho(f"✓ Theme: {settings.theme.value} ({settings.palette.name})", fg=typer.colors.GREEN)


@app.command()
def themes():
    """List available themes."""
    for theme_id, palette in THEME_PALETTES.items():
        typer.echo(f"{theme_id.value:<8} {palette.name:<10} {palette.primary}")


if __name__ == "__main__":
    app()
