"""Unit tests for the Trade journal entry model."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from tradejournal.services.ledger.models import AssetType, Direction, Trade, TradeStatus


class TestTradeCreation:
    """Test Trade construction and defaults."""

    def test_minimal_trade_uses_defaults(self):
        """Test a trade needs only id and date."""
        # Arrange & Act
        trade = Trade(id="t-1", date=date(2025, 3, 3))

        # Assert
        assert trade.pnl == Decimal("0")
        assert trade.tags == frozenset()
        assert trade.status == TradeStatus.CLOSED
        assert trade.direction == Direction.LONG
        assert trade.asset_type == AssetType.STOCK
        assert trade.close_date is None

    def test_accepts_journal_camel_case_aliases(self):
        """Test journal export field names (closeDate, assetType, entryPrice) are accepted."""
        # Arrange
        raw = {
            "id": "t-2",
            "date": "2025-03-03",
            "closeDate": "2025-03-05",
            "ticker": "ES",
            "direction": "SHORT",
            "assetType": "FUTURES",
            "entryPrice": "5000.25",
            "exitPrice": "4990.00",
            "pnl": "512.50",
            "tags": ["swing", "breakout"],
        }

        # Act
        trade = Trade.model_validate(raw)

        # Assert
        assert trade.close_date == date(2025, 3, 5)
        assert trade.asset_type == AssetType.FUTURES
        assert trade.direction == Direction.SHORT
        assert trade.entry_price == Decimal("5000.25")
        assert trade.pnl == Decimal("512.50")
        assert trade.tags == frozenset({"swing", "breakout"})

    def test_null_pnl_and_tags_default(self):
        """Test null pnl/tags from the journal store become 0 / empty."""
        # Act
        trade = Trade.model_validate(
            {"id": "t-3", "date": "2025-03-03", "pnl": None, "tags": None, "status": "OPEN"}
        )

        # Assert
        assert trade.pnl == Decimal("0")
        assert trade.tags == frozenset()
        assert trade.status == TradeStatus.OPEN

    def test_blank_time_is_none(self):
        """Test an empty time string is treated as no time."""
        trade = Trade(id="t-4", date=date(2025, 3, 3), time="  ")

        assert trade.time is None

    def test_trade_is_immutable(self):
        """Test trades are frozen snapshots."""
        trade = Trade(id="t-5", date=date(2025, 3, 3), pnl=Decimal("10"))

        with pytest.raises(ValidationError):
            trade.pnl = Decimal("20")  # type: ignore[misc]

    def test_invalid_status_rejected(self):
        """Test unknown status values fail validation."""
        with pytest.raises(ValidationError):
            Trade.model_validate({"id": "t-6", "date": "2025-03-03", "status": "PENDING"})


class TestTradeProperties:
    """Test derived trade properties."""

    def test_effective_date_is_close_date_when_present(self, make_trade):
        """Test swing trades count toward their close date."""
        trade = make_trade("2025-03-03", "100", close_date="2025-03-07")

        assert trade.effective_date == date(2025, 3, 7)
        assert trade.is_swing

    def test_effective_date_falls_back_to_open_date(self, make_trade):
        """Test day trades count toward their open date."""
        trade = make_trade("2025-03-03", "100")

        assert trade.effective_date == date(2025, 3, 3)
        assert not trade.is_swing

    def test_same_day_close_is_not_swing(self, make_trade):
        """Test a close date equal to the open date is not a swing."""
        trade = make_trade("2025-03-03", "100", close_date="2025-03-03")

        assert not trade.is_swing

    @pytest.mark.parametrize(
        "pnl,winner,loser",
        [
            ("100", True, False),
            ("-50", False, True),
            ("0", False, False),
        ],
    )
    def test_winner_loser_classification(self, make_trade, pnl, winner, loser):
        """Test trades classify by strict P&L sign (break-even is neither)."""
        trade = make_trade("2025-03-03", pnl)

        assert trade.is_winner is winner
        assert trade.is_loser is loser

    def test_sort_key_orders_untimed_before_timed(self, make_trade):
        """Test same-day trades order by time, untimed first."""
        timed = make_trade("2025-03-03", "1", time="09:45")
        untimed = make_trade("2025-03-03", "1")
        earlier_day = make_trade("2025-03-02", "1", time="15:00")

        ordered = sorted([timed, untimed, earlier_day], key=lambda t: t.sort_key)

        assert ordered == [earlier_day, untimed, timed]

    def test_trades_are_hashable(self, make_trade):
        """Test trades can key caches (frozen, hashable fields)."""
        trade = make_trade("2025-03-03", "100", tags={"a", "b"})

        assert hash(trade) == hash(trade.model_copy())
