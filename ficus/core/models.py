"""
Database models for Ficus.

Models: Trade, DiaryEntry, StoredValue.

Timestamps are epoch milliseconds.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import (
    BigInteger,
    Enum as SQLEnum,
    Float,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class TradeStatus(str, Enum):
    """Lifecycle status of a trade."""
    OPEN = "OPEN"
    PROFIT = "PROFIT"
    LOSS = "LOSS"


class Trade(Base):
    """
    A single trade entry.

    Created OPEN with the plan (entry, stop-loss, target).
    Exit data stays null until the trade is closed, once.
    """

    __tablename__ = "trades"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    system_id: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    segment: Mapped[str] = mapped_column(String(50), default="NIFTY")
    symbol: Mapped[str] = mapped_column(String(100), nullable=False)
    qty: Mapped[float] = mapped_column(Float, default=50)
    entry_price: Mapped[float] = mapped_column(Float, nullable=False)
    sl_price: Mapped[float] = mapped_column(Float, default=0.0)
    target_price: Mapped[float] = mapped_column(Float, default=0.0)
    exit_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    status: Mapped[TradeStatus] = mapped_column(
        SQLEnum(TradeStatus), default=TradeStatus.OPEN
    )
    emotion: Mapped[str] = mapped_column(Text, default="")
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # base64 data URL
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    closed_timestamp: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    @property
    def is_open(self) -> bool:
        return self.status == TradeStatus.OPEN

    @property
    def pnl(self) -> Optional[float]:
        """Realized P&L, None while open."""
        if self.exit_price is None:
            return None
        return (self.exit_price - self.entry_price) * self.qty

    def __repr__(self) -> str:
        return f"<Trade {self.id}: {self.segment} {self.symbol} x{self.qty} @ {self.entry_price} {self.status.value}>"


class DiaryEntry(Base):
    """
    Free-text diary entry.

    Append-only.
    """

    __tablename__ = "diary_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    system_id: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<DiaryEntry {self.id}: {self.text[:30]!r}>"


class StoredValue(Base):
    """
    Local key-value storage.

    Holds JSON blobs such as settings and mentor notes.
    """

    __tablename__ = "stored_values"

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<StoredValue {self.key}>"
