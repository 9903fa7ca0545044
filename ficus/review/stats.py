"""
Trade statistics module.

Pure functions over a collection of trades. Anything with
status, entry_price, exit_price, qty and closed_timestamp
attributes works, ORM objects included.
"""

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Iterable, List, Optional, Sequence

from ficus.core.models import TradeStatus
from ficus.core.utils import from_millis, now_millis

logger = logging.getLogger(__name__)

DAY_MS = 24 * 3600 * 1000
WEEK_MS = 7 * DAY_MS

DEFAULT_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri")


@dataclass(frozen=True)
class DayPerformance:
    """Closed trades and win rate for one weekday."""
    day: str
    count: int
    rate: float


@dataclass(frozen=True)
class TradeStats:
    """Read-only snapshot of journal performance."""
    win_rate: float
    expectancy: float
    avg_win: float
    avg_loss: float
    closed_count: int
    open_count: int
    day_return: float
    week_return: float
    weekly_performance: tuple


def _status(trade) -> TradeStatus:
    return TradeStatus(trade.status)


def closed_trades(trades: Iterable) -> list:
    """Trades with status PROFIT or LOSS."""
    return [t for t in trades if _status(t) != TradeStatus.OPEN]


def trade_pnl(trade) -> float:
    """(exit - entry) * qty of a closed trade."""
    return (trade.exit_price - trade.entry_price) * trade.qty


def win_rate(trades: Iterable) -> float:
    """
    Percentage of closed trades that were profitable.

    0 when nothing is closed.
    """
    closed = closed_trades(trades)
    if not closed:
        return 0.0

    wins = sum(1 for t in closed if _status(t) == TradeStatus.PROFIT)
    return wins / len(closed) * 100


def average_win(trades: Iterable) -> float:
    wins = [trade_pnl(t) for t in trades if _status(t) == TradeStatus.PROFIT]
    return sum(wins) / len(wins) if wins else 0.0


def average_loss(trades: Iterable) -> float:
    """Mean absolute P&L of losing trades."""
    losses = [abs(trade_pnl(t)) for t in trades if _status(t) == TradeStatus.LOSS]
    return sum(losses) / len(losses) if losses else 0.0


def expectancy(trades: Sequence) -> float:
    """
    Probability-weighted average profit per trade.

    wr * avg_win - (1 - wr) * avg_loss
    """
    trades = list(trades)
    if not closed_trades(trades):
        return 0.0

    wr = win_rate(trades) / 100
    return wr * average_win(trades) - (1 - wr) * average_loss(trades)


def periodic_return(trades: Iterable, window_ms: int, now_ms: Optional[int] = None) -> float:
    """
    Sum of P&L for trades closed within the trailing window.

    A trade counts when closed_timestamp > now - window.
    """
    if now_ms is None:
        now_ms = now_millis()

    threshold = now_ms - window_ms
    return sum(
        trade_pnl(t)
        for t in closed_trades(trades)
        if t.closed_timestamp is not None and t.closed_timestamp > threshold
    )


def weekly_performance(
    trades: Iterable,
    tz: Optional[tzinfo] = None,
    day_names: Sequence[str] = DEFAULT_DAY_NAMES,
) -> List[DayPerformance]:
    """
    Closed-trade count and win rate per weekday, Monday to Friday.

    Weekday comes from closed_timestamp in tz (system local time
    when tz is None). Weekend closes are left out.

    Raises:
        ValueError: If day_names does not hold exactly five names
    """
    if len(day_names) != 5:
        raise ValueError(f"Expected 5 weekday names, got {len(day_names)}")

    buckets = {day: [] for day in range(5)}

    for trade in closed_trades(trades):
        if trade.closed_timestamp is None:
            continue
        weekday = from_millis(trade.closed_timestamp, tz).weekday()
        if weekday in buckets:
            buckets[weekday].append(trade)

    performance = []
    for day, name in enumerate(day_names):
        day_trades = buckets[day]
        wins = sum(1 for t in day_trades if _status(t) == TradeStatus.PROFIT)
        rate = wins / len(day_trades) * 100 if day_trades else 0.0
        performance.append(DayPerformance(day=name, count=len(day_trades), rate=rate))

    return performance


def compute_stats(
    trades: Iterable,
    now_ms: Optional[int] = None,
    tz: Optional[tzinfo] = None,
    day_names: Sequence[str] = DEFAULT_DAY_NAMES,
) -> TradeStats:
    """
    Compute the dashboard snapshot.

    Recomputed from scratch on every call.
    """
    trades = list(trades)
    if now_ms is None:
        now_ms = now_millis()

    closed = closed_trades(trades)

    stats = TradeStats(
        win_rate=win_rate(trades),
        expectancy=expectancy(trades),
        avg_win=average_win(trades),
        avg_loss=average_loss(trades),
        closed_count=len(closed),
        open_count=len(trades) - len(closed),
        day_return=periodic_return(trades, DAY_MS, now_ms),
        week_return=periodic_return(trades, WEEK_MS, now_ms),
        weekly_performance=tuple(weekly_performance(trades, tz, day_names)),
    )

    logger.debug(f"Computed stats over {len(trades)} trades: win_rate={stats.win_rate:.1f}")
    return stats
