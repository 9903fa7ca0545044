"""
Performance review module.

Turns the statistics snapshot into a plain-text summary for
weekly reflection.
"""

import logging
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ficus.core.config import Config, Language
from ficus.core.i18n import get_translations
from ficus.core.utils import format_inr
from ficus.journal.trades import list_trades
from ficus.review.stats import TradeStats, compute_stats

logger = logging.getLogger(__name__)


def _review_timezone(config: Config) -> Optional[tzinfo]:
    """Configured time zone, system local time if unset or unknown."""
    if not config.timezone:
        return None

    try:
        return ZoneInfo(config.timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Unknown TIMEZONE {config.timezone!r}, using local time: {e}")
        return None


def get_review_stats(config: Config, system_id: str, now_ms: Optional[int] = None, language: Language = Language.ENGLISH) -> TradeStats:
    """
    Statistics over every trade of an installation.
    """
    trades = list_trades(config, system_id)
    return compute_stats(
        trades,
        now_ms=now_ms,
        tz=_review_timezone(config),
        day_names=get_translations(language).weekdays,
    )


def suggest_change(stats: TradeStats, language: Language = Language.ENGLISH) -> Optional[str]:
    """
    Pick ONE thing to change next week.

    Returns None when nothing stands out.
    """
    if stats.closed_count == 0:
        return None

    t = get_translations(language)

    if stats.expectancy < 0:
        return t.suggest_cut_losers

    if stats.win_rate < 40:
        return t.suggest_fewer_setups

    traded_days = [d for d in stats.weekly_performance if d.count > 0]
    if len(traded_days) > 1:
        weakest = min(traded_days, key=lambda d: d.rate)
        if weakest.rate < 30:
            return t.suggest_lighter_day.format(day=weakest.day)

    return None


def format_review(stats: TradeStats, language: Language = Language.ENGLISH) -> str:
    """
    Format the review as plain text.
    """
    t = get_translations(language)

    lines = [
        f"{t.app_title} - {t.performance_log}",
        "",
    ]

    if stats.closed_count == 0 and stats.open_count == 0:
        lines.extend([t.no_trades, "", f"{t.review_focus_title}:"])
        lines.extend(f"- {question}" for question in t.review_focus)
        return "\n".join(lines)

    lines.extend([
        f"{t.trades_closed}: {stats.closed_count}",
        f"{t.trades_open}: {stats.open_count}",
        "",
        f"{t.performance_heading}:",
        f"{t.win_rate}: {stats.win_rate:.0f}%",
        f"{t.expectancy}: {format_inr(stats.expectancy)}",
        f"{t.avg_win}: {format_inr(stats.avg_win)}",
        f"{t.avg_loss}: {format_inr(stats.avg_loss)}",
        f"{t.today}: {format_inr(stats.day_return)}",
        f"{t.this_week}: {format_inr(stats.week_return)}",
        "",
        f"{t.by_weekday}:",
    ])

    for day in stats.weekly_performance:
        lines.append(t.weekday_line.format(day=day.day, count=day.count, rate=f"{day.rate:.0f}"))

    lines.append("")

    change = suggest_change(stats, language)
    if change:
        lines.append(f"{t.one_change}:")
        lines.append(f"-> {change}")
        lines.append("")

    return "\n".join(lines)


def export_review(
    config: Config,
    system_id: str,
    language: Language = Language.ENGLISH,
    filepath: str = None,
) -> str:
    """
    Export the review to a file.

    Returns file path.
    """
    if not filepath:
        filepath = f"data/review_{datetime.now().strftime('%Y%m%d')}.txt"

    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    review = format_review(get_review_stats(config, system_id, language=language), language)

    with open(filepath, "w", encoding="utf-8") as f:
        f.write(review)

    logger.info(f"Review exported to {filepath}")
    return filepath
