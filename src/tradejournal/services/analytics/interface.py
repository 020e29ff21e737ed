"""Analytics service interface (Protocol).

Defines the contract that analytics service implementations must satisfy.
Enables dependency injection and makes consumers (dashboards, CLI)
independently testable.
"""

from datetime import date
from typing import Iterable, Protocol

from tradejournal.libraries.performance.models import Granularity, TradingStats
from tradejournal.services.analytics.filters import FilterSpec
from tradejournal.services.analytics.models import FilteredEquityView
from tradejournal.services.ledger.models import Trade


class IAnalyticsService(Protocol):
    """Analytics service interface for the performance dashboard.

    Core responsibilities:
    - Exclude OPEN trades from every computation
    - Compute lifetime TradingStats over all closed trades
    - Resolve a FilterSpec into a filtered equity view whose curve starts
      at the account equity of the window start

    NOT responsible for:
    - Loading or persisting trades (journal store does this)
    - Rendering charts (presentation layer does this)
    - Validating configuration ranges (SystemConfig does this)

    Example:
        >>> analytics: IAnalyticsService = AnalyticsService(config)
        >>> stats = analytics.trading_stats(trades)
        >>> if stats is None:
        ...     print("No closed trades yet")
        >>> view = analytics.filtered_view(trades, FilterSpec(period=Period.MTD))
        >>> view.starting_equity, len(view.data)
    """

    def trading_stats(self, trades: Iterable[Trade], today: date | None = None) -> TradingStats | None:
        """Lifetime statistics over closed trades.

        Args:
            trades: Full journal (OPEN trades are ignored)
            today: Reference day for period summaries (default: local today)

        Returns:
            TradingStats, or None when there is no closed trade
        """
        ...

    def filtered_view(
        self,
        trades: Iterable[Trade],
        spec: FilterSpec,
        today: date | None = None,
        granularity: Granularity | None = None,
    ) -> FilteredEquityView:
        """Equity curve of the trades selected by `spec`.

        Args:
            trades: Full journal (OPEN trades are ignored)
            spec: Period and tag/asset selection
            today: Reference day for calendar periods (default: local today)
            granularity: Aggregation override (default: per-trade for
                week-to-date, per-day otherwise)

        Returns:
            FilteredEquityView (possibly with no data points)
        """
        ...
