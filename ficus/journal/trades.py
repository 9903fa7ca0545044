"""
Trade journal.

Trades are opened with a plan and closed exactly once.
"""

import base64
import logging
import mimetypes
from pathlib import Path
from typing import List, Optional

from ficus.core.config import Config
from ficus.core.db import session_scope
from ficus.core.models import Trade, TradeStatus
from ficus.core.utils import now_millis
from ficus.license.keys import normalize_system_id

logger = logging.getLogger(__name__)


class TradeNotFoundError(ValueError):
    """No trade with the given id."""


class TradeClosedError(ValueError):
    """Trade is already closed and cannot change."""


def classify_exit(entry_price: float, exit_price: float) -> TradeStatus:
    """
    PROFIT only when exit is strictly above entry.

    Break-even counts as LOSS.
    """
    return TradeStatus.PROFIT if exit_price > entry_price else TradeStatus.LOSS


def open_trade(
    config: Config,
    system_id: str,
    symbol: str,
    entry_price: float,
    sl_price: float = 0.0,
    target_price: float = 0.0,
    segment: str = "NIFTY",
    qty: float = 50,
    now_ms: Optional[int] = None,
) -> Trade:
    """
    Record a new OPEN trade.
    """
    with session_scope(config) as session:
        trade = Trade(
            system_id=normalize_system_id(system_id),
            segment=segment.upper(),
            symbol=symbol.strip().upper(),
            qty=qty,
            entry_price=entry_price,
            sl_price=sl_price,
            target_price=target_price,
            status=TradeStatus.OPEN,
            emotion="",
            timestamp=now_millis() if now_ms is None else now_ms,
        )
        session.add(trade)
        session.flush()

        logger.info(f"Opened trade: {trade}")

    return trade


def close_trade(
    config: Config,
    system_id: str,
    trade_id: int,
    exit_price: float,
    emotion: str = "",
    image: Optional[str] = None,
    now_ms: Optional[int] = None,
) -> Trade:
    """
    Close an OPEN trade owned by system_id.

    Raises:
        TradeNotFoundError: If trade_id does not exist for this installation
        TradeClosedError: If the trade was closed before
    """
    with session_scope(config) as session:
        trade = session.get(Trade, trade_id)

        if not trade or trade.system_id != normalize_system_id(system_id):
            raise TradeNotFoundError(f"Trade #{trade_id} not found")

        if not trade.is_open:
            raise TradeClosedError(
                f"Trade #{trade_id} already closed at {trade.exit_price} ({trade.status.value})"
            )

        trade.exit_price = exit_price
        trade.status = classify_exit(trade.entry_price, exit_price)
        trade.emotion = emotion
        trade.image = image
        trade.closed_timestamp = now_millis() if now_ms is None else now_ms

        logger.info(f"Closed trade #{trade_id} at {exit_price}: {trade.status.value}, pnl={trade.pnl:.2f}")

    return trade


def list_trades(
    config: Config,
    system_id: str,
    closed: Optional[bool] = None,
) -> List[Trade]:
    """
    Get trades for an installation, newest first.

    closed=False gives open trades, closed=True closed ones,
    None gives everything.
    """
    with session_scope(config) as session:
        query = session.query(Trade).filter(Trade.system_id == normalize_system_id(system_id))

        if closed is True:
            query = query.filter(Trade.status != TradeStatus.OPEN)
        elif closed is False:
            query = query.filter(Trade.status == TradeStatus.OPEN)

        return query.order_by(Trade.timestamp.desc(), Trade.id.desc()).all()


def load_image(path: str) -> str:
    """
    Encode a screenshot as a base64 data URL.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    file_path = Path(path)
    mime_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
    encoded = base64.b64encode(file_path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
