"""Data models for the analytics service."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from tradejournal.libraries.performance.models import DateRange, EquityDataPoint, Granularity


class FilteredEquityView(BaseModel):
    """
    Filtered equity curve handed to the chart renderer.

    `starting_equity` is the reconstructed baseline at the window start, not
    the configured account starting equity (they coincide for period=all).
    Each point's `date`/`date_end`/`trade_index` identifies the trades it
    covers for the day drill-down.
    """

    model_config = ConfigDict(frozen=True)

    data: tuple[EquityDataPoint, ...]
    date_range: DateRange | None
    trade_count: int
    starting_equity: Decimal
    granularity: Granularity
    max_drawdown: Decimal = Decimal("0")
    max_drawdown_pct: Decimal = Decimal("0")

    @property
    def is_empty(self) -> bool:
        """No trade matched the filter."""
        return not self.data

    @property
    def net_pnl(self) -> Decimal:
        """Net P&L over the window (final equity minus starting equity)."""
        if not self.data:
            return Decimal("0")
        return self.data[-1].cumulative - self.starting_equity
