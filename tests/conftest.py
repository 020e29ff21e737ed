"""Root conftest for all tests - shared trade builders."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Sequence

import pytest

from tradejournal.services.analytics.service import AnalyticsService
from tradejournal.services.ledger.models import AssetType, Direction, Trade, TradeStatus

TradeFactory = Callable[..., Trade]


@pytest.fixture
def make_trade() -> TradeFactory:
    """
    Factory for Trade instances with sensible defaults.

    Each call gets a unique id; pnl accepts str/int/Decimal.

    Example:
        >>> trade = make_trade("2025-03-03", "125.50", tags={"breakout"})
    """
    counter = {"n": 0}

    def _make(
        day: date | str,
        pnl: Decimal | str | int = "0",
        *,
        close_date: date | str | None = None,
        time: str | None = None,
        ticker: str = "AAPL",
        direction: Direction = Direction.LONG,
        asset_type: AssetType = AssetType.STOCK,
        tags: Sequence[str] | frozenset[str] = (),
        status: TradeStatus = TradeStatus.CLOSED,
    ) -> Trade:
        counter["n"] += 1
        return Trade(
            id=f"t-{counter['n']:03d}",
            date=date.fromisoformat(day) if isinstance(day, str) else day,
            close_date=date.fromisoformat(close_date) if isinstance(close_date, str) else close_date,
            time=time,
            ticker=ticker,
            direction=direction,
            asset_type=asset_type,
            pnl=Decimal(str(pnl)),
            tags=frozenset(tags),
            status=status,
        )

    return _make


@pytest.fixture
def five_day_trades(make_trade: TradeFactory) -> list[Trade]:
    """Five consecutive days with daily net P&L +100, -50, +200, -30, -20."""
    start = date(2025, 3, 3)
    return [make_trade(start + timedelta(days=i), pnl) for i, pnl in enumerate(["100", "-50", "200", "-30", "-20"])]


@pytest.fixture(autouse=True)
def clear_analytics_cache():
    """Memoized analytics results must not leak between tests."""
    AnalyticsService.clear_cache()
    yield
    AnalyticsService.clear_cache()
