"""Filter specification and tag/asset multi-filters.

A FilterSpec selects the trades shown on the filtered equity view:

- period: all | ytd | mtd | wtd | daily | custom
- custom: exactly one of date_range, days_back, trades_back
- tag_filter: AND semantics (a trade must carry every selected tag)
- asset_filter: OR semantics (a trade matches any selected asset type)

Empty tag/asset filters place no restriction.
"""

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tradejournal.libraries.performance.models import DateRange
from tradejournal.services.ledger.models import AssetType, Trade


class Period(str, Enum):
    """Period selector of the filtered view."""

    ALL = "all"
    YTD = "ytd"
    MTD = "mtd"
    WTD = "wtd"
    DAILY = "daily"
    CUSTOM = "custom"


class FilterSpec(BaseModel):
    """
    Caller-supplied selection of trades.

    Attributes:
        period: Period selector
        date_range: Inclusive range (custom only)
        days_back: Last N calendar days; 0 selects nothing (custom only)
        trades_back: Last N trades; 0 selects nothing (custom only)
        tag_filter: Tags a trade must ALL carry
        asset_filter: Asset types a trade may have (ANY)

    Examples:
        >>> FilterSpec(period=Period.YTD)
        >>> FilterSpec(period=Period.CUSTOM, days_back=30, tag_filter={"breakout"})
        >>> FilterSpec(period=Period.CUSTOM, date_range=DateRange(start=d1, end=d2))
    """

    model_config = ConfigDict(frozen=True)

    period: Period = Period.ALL
    date_range: DateRange | None = None
    days_back: int | None = Field(default=None, ge=0)
    trades_back: int | None = Field(default=None, ge=0)
    tag_filter: frozenset[str] = Field(default_factory=frozenset)
    asset_filter: frozenset[AssetType] = Field(default_factory=frozenset)

    @model_validator(mode="after")
    def validate_custom_selector(self) -> "FilterSpec":
        """Custom periods need exactly one selector; other periods none."""
        selectors = [s for s in (self.date_range, self.days_back, self.trades_back) if s is not None]

        if self.period == Period.CUSTOM and len(selectors) != 1:
            raise ValueError(
                f"custom period requires exactly one of date_range, days_back, trades_back (got {len(selectors)})"
            )
        if self.period != Period.CUSTOM and selectors:
            raise ValueError(f"date_range/days_back/trades_back only apply to the custom period, not {self.period.value}")
        return self


def apply_asset_filter(trades: Iterable[Trade], asset_filter: frozenset[AssetType]) -> list[Trade]:
    """Keep trades whose asset type is any of `asset_filter` (all if empty)."""
    if not asset_filter:
        return list(trades)
    return [t for t in trades if t.asset_type in asset_filter]


def apply_tag_filter(trades: Iterable[Trade], tag_filter: frozenset[str]) -> list[Trade]:
    """Keep trades carrying every tag in `tag_filter` (all if empty)."""
    if not tag_filter:
        return list(trades)
    return [t for t in trades if tag_filter <= t.tags]


def apply_filters(trades: Iterable[Trade], spec: FilterSpec) -> list[Trade]:
    """Asset filter, then tag filter."""
    return apply_tag_filter(apply_asset_filter(trades, spec.asset_filter), spec.tag_filter)
