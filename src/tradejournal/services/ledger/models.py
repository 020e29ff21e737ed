"""Data models for the trade ledger.

Defines the journal entry consumed by the analytics engine:
- Trade: One logged position (open or closed)
- AssetType / Direction / TradeStatus: Trade enumerations

Trades are owned by the external journal store; the analytics engine
treats them as read-only snapshots (frozen models).
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssetType(str, Enum):
    """Traded instrument class."""

    STOCK = "STOCK"
    OPTIONS = "OPTIONS"
    FUTURES = "FUTURES"
    CRYPTO = "CRYPTO"
    FOREX = "FOREX"


class Direction(str, Enum):
    """Side of the position."""

    LONG = "LONG"
    SHORT = "SHORT"


class TradeStatus(str, Enum):
    """Lifecycle state of a trade."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Trade(BaseModel):
    """
    A single journal entry.

    Dates are plain calendar days with no time zone. The effective date of a
    trade is its close date when present, otherwise its open date; every
    period and day-level computation keys on the effective date.

    Only CLOSED trades carry a realized `pnl` meaningful for statistics.

    Attributes:
        id: Unique identifier
        date: Calendar day the position was opened
        close_date: Calendar day the position was closed (None = same as date)
        time: Intraday time string ("HH:MM"), used only for same-day ordering
        ticker: Instrument symbol
        direction: LONG or SHORT
        asset_type: Instrument class (used by the asset filter)
        entry_price / exit_price / size: Descriptive, unused by analytics
        pnl: Signed realized profit/loss in account currency
        tags: Label identifiers (membership matters, order does not)
        status: OPEN or CLOSED
        notes: Free text

    Example:
        >>> trade = Trade(
        ...     id="t-001",
        ...     date=datetime.date(2025, 3, 3),
        ...     ticker="AAPL",
        ...     direction=Direction.LONG,
        ...     pnl=Decimal("125.50"),
        ...     tags=["breakout"],
        ... )
        >>> trade.effective_date
        datetime.date(2025, 3, 3)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    date: datetime.date
    close_date: datetime.date | None = Field(default=None, alias="closeDate")
    time: str | None = None
    ticker: str = ""
    direction: Direction = Direction.LONG
    asset_type: AssetType = Field(default=AssetType.STOCK, alias="assetType")
    entry_price: Decimal | None = Field(default=None, alias="entryPrice")
    exit_price: Decimal | None = Field(default=None, alias="exitPrice")
    size: Decimal | None = None
    pnl: Decimal = Decimal("0")
    tags: frozenset[str] = Field(default_factory=frozenset)
    status: TradeStatus = TradeStatus.CLOSED
    notes: str | None = None

    @field_validator("pnl", mode="before")
    @classmethod
    def default_missing_pnl(cls, v: Any) -> Any:
        """Open trades are often logged without a P&L."""
        return Decimal("0") if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def default_missing_tags(cls, v: Any) -> Any:
        """Accept null tag lists from the journal store."""
        return frozenset() if v is None else v

    @field_validator("time", mode="before")
    @classmethod
    def blank_time_is_none(cls, v: Any) -> Any:
        """Treat an empty time string as no time."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def effective_date(self) -> datetime.date:
        """Day the trade counts toward (close date, else open date)."""
        return self.close_date if self.close_date is not None else self.date

    @property
    def is_swing(self) -> bool:
        """Trade was held across more than one calendar day."""
        return self.close_date is not None and self.close_date != self.date

    @property
    def is_closed(self) -> bool:
        """Trade is CLOSED and contributes to statistics."""
        return self.status == TradeStatus.CLOSED

    @property
    def is_winner(self) -> bool:
        """Trade was profitable."""
        return self.pnl > Decimal("0")

    @property
    def is_loser(self) -> bool:
        """Trade lost money."""
        return self.pnl < Decimal("0")

    @property
    def sort_key(self) -> tuple[datetime.date, str]:
        """Chronological ordering key: effective date, then intraday time.

        Trades without a time sort ahead of timed trades on the same day.
        """
        return (self.effective_date, self.time or "")
