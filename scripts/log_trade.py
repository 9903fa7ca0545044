#!/usr/bin/env python3
"""
Log a trade manually.

Opening a trade first walks through the discipline gate:
morning routine, emotional biases and focus calibration.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging
import time

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.prompt import Prompt, Confirm, IntPrompt
from rich.table import Table

from ficus.core.config import AppSettings, Config
from ficus.core.i18n import get_translations
from ficus.core.session import AppStatus, unlock_from_config
from ficus.core.storage import LocalStore
from ficus.core.utils import format_inr, from_millis
from ficus.guardrails.rules import (
    CalibrationState,
    DisciplineGate,
    FocusCalibration,
    daily_affirmation,
    mood_label,
)
from ficus.journal.trades import (
    TradeClosedError,
    TradeNotFoundError,
    close_trade,
    list_trades,
    load_image,
    open_trade,
)

app = typer.Typer(help="Log a trade manually")
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

    return config, settings, session.system_id


def run_calibration(gate: DisciplineGate, accent: str, t) -> None:
    """Terminal version of the balloon round: Enter pops a balloon."""
    calibration = FocusCalibration()

    console.print(f"\n[bold]{t.start_calibration}[/bold]")
    console.print(f"Pop {calibration.target} balloons in {calibration.duration:.0f}s. Press Enter to pop.\n")
    Prompt.ask("Ready? Press Enter", default="", show_default=False, console=console)

    calibration.start(time.monotonic())
    while calibration.state == CalibrationState.PLAYING:
        left = calibration.time_left(time.monotonic())
        console.input(f"[{accent}]🎈 {calibration.score}/{calibration.target}  ({left:.0f}s)[/] ")
        calibration.pop(time.monotonic())

    if calibration.state == CalibrationState.SUCCESS:
        console.print(f"[green]{t.calibration_success}[/green]")
    else:
        console.print(f"[yellow]{t.calibration_fail}[/yellow]")

    gate.record_calibration(calibration)


def run_gate(settings: AppSettings) -> DisciplineGate:
    """Walk the trader through the discipline hub."""
    t = get_translations(settings.language)
    accent = settings.palette.primary
    gate = DisciplineGate.for_language(t)

    console.print(f"\n[bold {accent}]{t.discipline_hub}[/]")
    console.print(f"[italic]{daily_affirmation(t)}[/italic]\n")

    for item in gate.routine:
        gate.check(item.id, Confirm.ask(item.text, console=console))

    mood = IntPrompt.ask("Mood (0 fear - 100 greed)", default=50, console=console)
    console.print(f"State: [bold]{mood_label(mood)}[/bold]\n")

    for i, bias in enumerate(t.biases, 1):
        console.print(f"  {i}. {bias}")
    picks = Prompt.ask("Biases you feel today (numbers, comma separated)", default="", console=console)
    for pick in picks.split(","):
        pick = pick.strip()
        if pick.isdigit() and 1 <= int(pick) <= len(t.biases):
            gate.toggle_bias(t.biases[int(pick) - 1])

    if gate.routine_complete:
        run_calibration(gate, accent, t)

    return gate


@app.command("open")
def open_cmd(
    symbol: str = typer.Option(..., "--symbol", "-s", help="Symbol (e.g., NIFTY24DEC24000CE)"),
    entry_price: float = typer.Option(..., "--entry", "-e", help="Entry price"),
    sl_price: float = typer.Option(0.0, "--sl", help="Stop-loss price"),
    target_price: float = typer.Option(0.0, "--target", "-t", help="Target price"),
    segment: str = typer.Option("NIFTY", "--segment", help="Segment tag"),
    qty: float = typer.Option(50, "--qty", "-q", help="Quantity"),
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """
    Open a new trade after passing the discipline gate.
    """
    config, settings, sid = _unlock(system_id, key)
    t = get_translations(settings.language)

    gate = run_gate(settings)
    if not gate.can_journal:
        console.print(f"\n[red]{t.journal_locked}[/red]")
        for warning in gate.warnings():
            console.print(f"  {warning}")
        raise typer.Exit(1)

    trade = open_trade(
        config,
        sid,
        symbol=symbol,
        entry_price=entry_price,
        sl_price=sl_price,
        target_price=target_price,
        segment=segment,
        qty=qty,
    )

    console.print(f"\n[green]Trade #{trade.id} opened: {trade.segment} {trade.symbol} x{trade.qty:g} @ {trade.entry_price}[/green]\n")


@app.command("close")
def close_cmd(
    trade_id: int = typer.Argument(..., help="Trade ID"),
    exit_price: float = typer.Option(..., "--price", "-p", help="Exit price"),
    emotion: str = typer.Option(None, "--emotion", help="How did the trade feel?"),
    image: str = typer.Option(None, "--image", help="Screenshot file"),
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """
    Mark a trade as closed with exit price.
    """
    config, settings, sid = _unlock(system_id, key)

    if emotion is None:
        emotion = Prompt.ask("How did you feel during this trade?", default="", console=console)

    image_data = None
    if image:
        try:
            image_data = load_image(image)
        except OSError as e:
            console.print(f"[red]Cannot read image: {e}[/red]")
            raise typer.Exit(1)

    try:
        trade = close_trade(config, sid, trade_id, exit_price, emotion=emotion, image=image_data)
    except (TradeNotFoundError, TradeClosedError) as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(1)

    color = "green" if trade.pnl > 0 else "red"
    console.print(f"\n[{color}]Trade #{trade_id} closed at {exit_price}: {trade.status.value} ({format_inr(trade.pnl)})[/{color}]\n")


@app.command("list")
def list_cmd(
    closed: bool = typer.Option(None, "--closed/--open", help="Only closed or only open trades"),
    system_id: str = typer.Option(None, "--sid", help="System ID"),
    key: str = typer.Option(None, "--key", help="License key"),
):
    """
    List trades, newest first.
    """
    config, settings, sid = _unlock(system_id, key)
    t = get_translations(settings.language)

    trades = list_trades(config, sid, closed=closed)

    table = Table(title=t.performance_log, border_style=settings.palette.primary)
    table.add_column("#", justify="right")
    table.add_column("Opened")
    table.add_column("Segment")
    table.add_column("Symbol")
    table.add_column("Qty", justify="right")
    table.add_column("Entry", justify="right")
    table.add_column("SL", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Exit", justify="right")
    table.add_column("Status")
    table.add_column("P&L", justify="right")
    table.add_column("Emotion")

    for trade in trades:
        pnl = trade.pnl
        status_color = {"OPEN": "cyan", "PROFIT": "green", "LOSS": "red"}[trade.status.value]
        table.add_row(
            str(trade.id),
            from_millis(trade.timestamp).strftime("%Y-%m-%d %H:%M"),
            trade.segment,
            trade.symbol,
            f"{trade.qty:g}",
            f"{trade.entry_price:g}",
            f"{trade.sl_price:g}",
            f"{trade.target_price:g}",
            f"{trade.exit_price:g}" if trade.exit_price is not None else "",
            f"[{status_color}]{trade.status.value}[/{status_color}]",
            format_inr(pnl) if pnl is not None else "",
            trade.emotion or "",
        )

    console.print(table)


if __name__ == "__main__":
    app()
