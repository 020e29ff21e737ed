"""Analytics service: period resolution, filtered views and dashboard stats."""

from tradejournal.services.analytics.filters import (
    FilterSpec,
    Period,
    apply_asset_filter,
    apply_filters,
    apply_tag_filter,
)
from tradejournal.services.analytics.interface import IAnalyticsService
from tradejournal.services.analytics.models import FilteredEquityView
from tradejournal.services.analytics.resolver import ResolvedPeriod, baseline_equity, resolve
from tradejournal.services.analytics.service import (
    AnalyticsService,
    compute_filtered_view,
    compute_trading_stats,
)

__all__ = [
    "AnalyticsService",
    "FilterSpec",
    "FilteredEquityView",
    "IAnalyticsService",
    "Period",
    "ResolvedPeriod",
    "apply_asset_filter",
    "apply_filters",
    "apply_tag_filter",
    "baseline_equity",
    "compute_filtered_view",
    "compute_trading_stats",
    "resolve",
]
