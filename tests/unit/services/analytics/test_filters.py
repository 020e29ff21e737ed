"""Unit tests for FilterSpec and the tag/asset multi-filters."""

from datetime import date

import pytest
from pydantic import ValidationError

from tradejournal.libraries.performance.models import DateRange
from tradejournal.services.analytics.filters import (
    FilterSpec,
    Period,
    apply_asset_filter,
    apply_filters,
    apply_tag_filter,
)
from tradejournal.services.ledger.models import AssetType


class TestFilterSpecValidation:
    """Test FilterSpec selector rules."""

    def test_defaults_to_all(self):
        """Test an empty spec selects the all-time period without filters."""
        spec = FilterSpec()

        assert spec.period == Period.ALL
        assert spec.tag_filter == frozenset()
        assert spec.asset_filter == frozenset()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"days_back": 30},
            {"trades_back": 0},
            {"date_range": DateRange(start=date(2025, 1, 1), end=date(2025, 1, 31))},
        ],
    )
    def test_custom_with_one_selector(self, kwargs):
        """Test a custom period accepts exactly one selector."""
        spec = FilterSpec(period=Period.CUSTOM, **kwargs)

        assert spec.period == Period.CUSTOM

    def test_custom_without_selector_rejected(self):
        """Test a custom period needs a selector."""
        with pytest.raises(ValidationError, match="exactly one"):
            FilterSpec(period=Period.CUSTOM)

    def test_custom_with_two_selectors_rejected(self):
        """Test selectors are mutually exclusive."""
        with pytest.raises(ValidationError, match="exactly one"):
            FilterSpec(period=Period.CUSTOM, days_back=5, trades_back=5)

    def test_selector_on_calendar_period_rejected(self):
        """Test days_back is meaningless for ytd."""
        with pytest.raises(ValidationError, match="only apply to the custom period"):
            FilterSpec(period=Period.YTD, days_back=5)

    def test_negative_days_back_rejected(self):
        """Test days_back must be >= 0."""
        with pytest.raises(ValidationError):
            FilterSpec(period=Period.CUSTOM, days_back=-1)

    def test_reversed_date_range_rejected(self):
        """Test a date range must not end before it starts."""
        with pytest.raises(ValidationError):
            DateRange(start=date(2025, 2, 1), end=date(2025, 1, 1))

    def test_period_from_string(self):
        """Test periods parse from their string values."""
        spec = FilterSpec.model_validate({"period": "mtd", "tag_filter": ["a", "b"]})

        assert spec.period == Period.MTD
        assert spec.tag_filter == frozenset({"a", "b"})

    def test_spec_is_hashable(self):
        """Test specs can key the result cache."""
        spec = FilterSpec(period=Period.CUSTOM, days_back=7, tag_filter=frozenset({"x"}))

        assert hash(spec) == hash(FilterSpec(period=Period.CUSTOM, days_back=7, tag_filter=frozenset({"x"})))


class TestTagFilter:
    """Test AND semantics of the tag filter."""

    def test_requires_every_tag(self, make_trade):
        """Test a trade must carry all selected tags."""
        both = make_trade("2025-03-03", "1", tags={"breakout", "momentum", "a+"})
        one = make_trade("2025-03-03", "1", tags={"breakout"})
        none = make_trade("2025-03-03", "1")

        result = apply_tag_filter([both, one, none], frozenset({"breakout", "momentum"}))

        assert result == [both]

    def test_empty_filter_keeps_all(self, make_trade):
        """Test no selected tags means no restriction."""
        trades = [make_trade("2025-03-03", "1"), make_trade("2025-03-04", "1", tags={"x"})]

        assert apply_tag_filter(trades, frozenset()) == trades


class TestAssetFilter:
    """Test OR semantics of the asset filter."""

    def test_matches_any_asset(self, make_trade):
        """Test a trade matches if its asset type is any selected one."""
        stock = make_trade("2025-03-03", "1", asset_type=AssetType.STOCK)
        option = make_trade("2025-03-03", "1", asset_type=AssetType.OPTIONS)
        future = make_trade("2025-03-03", "1", asset_type=AssetType.FUTURES)

        result = apply_asset_filter([stock, option, future], frozenset({AssetType.STOCK, AssetType.OPTIONS}))

        assert result == [stock, option]

    def test_empty_filter_keeps_all(self, make_trade):
        """Test no selected assets means no restriction."""
        trades = [make_trade("2025-03-03", "1", asset_type=AssetType.CRYPTO)]

        assert apply_asset_filter(trades, frozenset()) == trades


class TestApplyFilters:
    """Test the combined filter."""

    def test_asset_and_tag_combined(self, make_trade):
        """Test both filters must pass."""
        keep = make_trade("2025-03-03", "1", asset_type=AssetType.OPTIONS, tags={"breakout"})
        wrong_asset = make_trade("2025-03-03", "1", asset_type=AssetType.FOREX, tags={"breakout"})
        wrong_tag = make_trade("2025-03-03", "1", asset_type=AssetType.OPTIONS, tags={"fade"})
        spec = FilterSpec(asset_filter=frozenset({AssetType.OPTIONS}), tag_filter=frozenset({"breakout"}))

        assert apply_filters([keep, wrong_asset, wrong_tag], spec) == [keep]
