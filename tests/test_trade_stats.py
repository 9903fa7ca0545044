"""
Unit tests for trade statistics.

Trades are plain namespaces here; the functions only read
attributes, so no database is needed.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ficus.core.models import TradeStatus
from ficus.core.utils import to_millis
from ficus.review.stats import (
    DAY_MS,
    WEEK_MS,
    average_loss,
    average_win,
    compute_stats,
    expectancy,
    periodic_return,
    weekly_performance,
    win_rate,
)

UTC = timezone.utc

# 2024-01-01 was a Monday
MONDAY = datetime(2024, 1, 1, 10, 0)
NOW_MS = to_millis(datetime(2024, 1, 5, 15, 0))


def make_trade(entry, exit_price=None, qty=10, closed_at=None, status=None):
    if status is None:
        if exit_price is None:
            status = TradeStatus.OPEN
        else:
            status = TradeStatus.PROFIT if exit_price > entry else TradeStatus.LOSS

    return SimpleNamespace(
        entry_price=entry,
        exit_price=exit_price,
        qty=qty,
        status=status,
        closed_timestamp=None if closed_at is None else to_millis(closed_at),
    )


@pytest.fixture
def win_and_loss():
    """One PROFIT (100 -> 150 x10) and one LOSS (100 -> 80 x10)."""
    return [
        make_trade(100, 150, closed_at=datetime(2024, 1, 1, 10, 0)),
        make_trade(100, 80, closed_at=datetime(2024, 1, 2, 10, 0)),
    ]


class TestEmptyCollection:
    """No trades means zeros everywhere."""

    def test_zeros(self):
        stats = compute_stats([], now_ms=NOW_MS, tz=UTC)

        assert stats.win_rate == 0
        assert stats.expectancy == 0
        assert stats.day_return == 0
        assert stats.week_return == 0
        assert stats.closed_count == 0
        assert stats.open_count == 0

    def test_weekdays_still_listed(self):
        stats = compute_stats([], now_ms=NOW_MS, tz=UTC)

        assert [d.day for d in stats.weekly_performance] == ["Mon", "Tue", "Wed", "Thu", "Fri"]
        assert all(d.count == 0 and d.rate == 0 for d in stats.weekly_performance)

    def test_only_open_trades(self):
        trades = [make_trade(100), make_trade(200)]

        assert win_rate(trades) == 0
        assert expectancy(trades) == 0
        assert compute_stats(trades, now_ms=NOW_MS).open_count == 2


class TestWinRateAndExpectancy:
    """Test win rate, averages and expectancy."""

    def test_win_rate(self, win_and_loss):
        assert win_rate(win_and_loss) == 50

    def test_averages(self, win_and_loss):
        assert average_win(win_and_loss) == 500
        assert average_loss(win_and_loss) == 200

    def test_expectancy(self, win_and_loss):
        """0.5 * 500 - 0.5 * 200 = 150"""
        assert expectancy(win_and_loss) == pytest.approx(150)

    def test_open_trades_ignored(self, win_and_loss):
        trades = win_and_loss + [make_trade(100), make_trade(300)]

        assert win_rate(trades) == 50
        assert expectancy(trades) == pytest.approx(150)

    def test_all_losses(self):
        trades = [make_trade(100, 90), make_trade(100, 70)]

        assert win_rate(trades) == 0
        assert expectancy(trades) == pytest.approx(-200)

    def test_break_even_counts_as_loss(self):
        trade = make_trade(100, 100)

        assert trade.status == TradeStatus.LOSS
        assert win_rate([trade]) == 0
        assert average_loss([trade]) == 0

    def test_string_status_accepted(self):
        """Status strings are coerced to TradeStatus."""
        trades = [make_trade(100, 150, status="PROFIT"), make_trade(100, 80, status="LOSS")]
        assert win_rate(trades) == 50


class TestPeriodicReturn:
    """Test trailing-window P&L."""

    def test_day_window(self):
        now = datetime(2024, 1, 5, 15, 0)
        trades = [
            make_trade(100, 110, closed_at=datetime(2024, 1, 5, 9, 0)),   # +100
            make_trade(100, 95, closed_at=datetime(2024, 1, 4, 16, 0)),   # -50, inside 24h
            make_trade(100, 130, closed_at=datetime(2024, 1, 3, 9, 0)),   # outside
        ]

        assert periodic_return(trades, DAY_MS, to_millis(now)) == pytest.approx(50)

    def test_week_window(self):
        now = datetime(2024, 1, 5, 15, 0)
        trades = [
            make_trade(100, 110, closed_at=datetime(2024, 1, 5, 9, 0)),
            make_trade(100, 130, closed_at=datetime(2024, 1, 1, 9, 0)),
            make_trade(100, 200, closed_at=datetime(2023, 12, 20, 9, 0)),
        ]

        assert periodic_return(trades, WEEK_MS, to_millis(now)) == pytest.approx(400)

    def test_window_start_is_exclusive(self):
        now_ms = NOW_MS
        trade = make_trade(100, 110)
        trade.closed_timestamp = now_ms - DAY_MS

        assert periodic_return([trade], DAY_MS, now_ms) == 0

        trade.closed_timestamp += 1
        assert periodic_return([trade], DAY_MS, now_ms) == pytest.approx(100)

    def test_open_trades_ignored(self):
        assert periodic_return([make_trade(100)], DAY_MS, NOW_MS) == 0


class TestWeeklyPerformance:
    """Test per-weekday buckets."""

    def test_known_dates(self):
        trades = [
            make_trade(100, 150, closed_at=datetime(2024, 1, 1, 10, 0)),   # Mon win
            make_trade(100, 80, closed_at=datetime(2024, 1, 1, 14, 0)),    # Mon loss
            make_trade(100, 150, closed_at=datetime(2024, 1, 3, 10, 0)),   # Wed win
            make_trade(100, 150, closed_at=datetime(2024, 1, 5, 10, 0)),   # Fri win
        ]

        days = weekly_performance(trades, tz=UTC)

        assert [(d.day, d.count, d.rate) for d in days] == [
            ("Mon", 2, 50.0),
            ("Tue", 0, 0.0),
            ("Wed", 1, 100.0),
            ("Thu", 0, 0.0),
            ("Fri", 1, 100.0),
        ]

    def test_weekend_excluded(self):
        trades = [
            make_trade(100, 150, closed_at=datetime(2024, 1, 6, 10, 0)),   # Sat
            make_trade(100, 80, closed_at=datetime(2024, 1, 7, 10, 0)),    # Sun
        ]

        days = weekly_performance(trades, tz=UTC)

        assert len(days) == 5
        assert sum(d.count for d in days) == 0

    def test_timezone_shifts_weekday(self):
        """Sunday 22:00 UTC is already Monday in India."""
        ist = timezone(timedelta(hours=5, minutes=30))
        trade = make_trade(100, 150, closed_at=datetime(2024, 1, 7, 22, 0))

        assert sum(d.count for d in weekly_performance([trade], tz=UTC)) == 0
        assert weekly_performance([trade], tz=ist)[0].count == 1

    def test_custom_day_names(self):
        names = ("सोम", "मंगळ", "बुध", "गुरु", "शुक्र")
        days = weekly_performance([], tz=UTC, day_names=names)
        assert [d.day for d in days] == list(names)

    @pytest.mark.parametrize("names", [
        ("Mon", "Tue", "Wed", "Thu"),
        ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
        (),
    ])
    def test_needs_five_day_names(self, names):
        """Always five buckets, so the names must match."""
        with pytest.raises(ValueError):
            weekly_performance([], tz=UTC, day_names=names)

    def test_open_trades_ignored(self):
        trade = make_trade(100)
        trade.closed_timestamp = to_millis(MONDAY)

        assert weekly_performance([trade], tz=UTC)[0].count == 0


class TestComputeStats:
    """Test the dashboard snapshot."""

    def test_snapshot(self, win_and_loss):
        stats = compute_stats(win_and_loss, now_ms=NOW_MS, tz=UTC)

        assert stats.win_rate == 50
        assert stats.expectancy == pytest.approx(150)
        assert stats.closed_count == 2
        assert stats.week_return == pytest.approx(300)
        assert stats.weekly_performance[0].count == 1
        assert stats.weekly_performance[1].count == 1

    def test_idempotent(self, win_and_loss):
        """Same input, same output."""
        first = compute_stats(win_and_loss, now_ms=NOW_MS, tz=UTC)
        second = compute_stats(win_and_loss, now_ms=NOW_MS, tz=UTC)

        assert first == second

    def test_accepts_generator(self, win_and_loss):
        stats = compute_stats((t for t in win_and_loss), now_ms=NOW_MS, tz=UTC)
        assert stats.closed_count == 2
