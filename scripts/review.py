#!/usr/bin/env python3
"""
Performance review script.

Shows win rate, expectancy, recent P&L and the weekday
breakdown, and suggests ONE change for next week.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.table import Table

from ficus.core.config import AppSettings, Config
from ficus.core.i18n import get_translations
from ficus.core.session import AppStatus, unlock_from_config
from ficus.core.storage import LocalStore
from ficus.core.utils import format_inr
from ficus.guardrails.rules import STREAK_GOAL_DAYS, discipline_streak, streak_percentage
from ficus.review.weekly import export_review, format_review, get_review_stats, suggest_change

app = typer.Typer(help="Performance review")
console = Console()

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@app.command()
def main(
    export: bool = typer.Option(False, "--export", "-e", help="Export to file"),
    plain: bool = typer.Option(False, "--plain", help="Plain text output"),
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """
    Generate the performance review.
    """
    load_dotenv()
    config = Config.from_env()
    store = LocalStore(config)
    settings = AppSettings.load(store)

    session = unlock_from_config(config, settings, system_id, key)
    if session.status != AppStatus.UNLOCKED:
        console.print(f"[red]{session.error}[/red]")
        raise typer.Exit(1)

    sid = session.system_id
    language = settings.language
    t = get_translations(language)

    if export:
        filepath = export_review(config, sid, language)
        console.print(f"[green]Review exported to {filepath}[/green]")
        return

    stats = get_review_stats(config, sid, language=language)

    if plain:
        print(format_review(stats, language))
        return

    accent = settings.palette.primary
    days = discipline_streak(store, sid)

    console.print(f"\n[bold {accent}]{t.performance_log}[/] - {sid}")
    console.print(f"Streak: day {days} of {STREAK_GOAL_DAYS} ({streak_percentage(days):.1f}%)\n")

    summary = Table(show_header=False, border_style=accent)
    summary.add_column()
    summary.add_column(justify="right")
    summary.add_row(t.win_rate, f"{stats.win_rate:.0f}%")
    summary.add_row(t.expectancy, format_inr(stats.expectancy))
    summary.add_row(t.today, format_inr(stats.day_return))
    summary.add_row(t.this_week, format_inr(stats.week_return))
    summary.add_row(f"{t.trades_closed} / {t.trades_open}", f"{stats.closed_count} / {stats.open_count}")
    console.print(summary)

    weekly = Table(title=t.by_weekday, show_header=False, border_style=accent)
    weekly.add_column()
    weekly.add_column(justify="right")
    weekly.add_column(justify="right")
    for day in stats.weekly_performance:
        weekly.add_row(day.day, str(day.count), f"{day.rate:.0f}%")
    console.print(weekly)

    change = suggest_change(stats, language)
    if change:
        console.print(f"\n[bold]{t.one_change}:[/bold] {change}\n")


if __name__ == "__main__":
    app()
