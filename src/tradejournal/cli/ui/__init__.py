"""CLI UI components - formatters."""

from tradejournal.cli.ui.formatters import (
    create_breakdown_table,
    create_consistency_table,
    create_equity_table,
    create_monthly_table,
    create_ratio_table,
    create_streak_table,
    create_summary_table,
)

__all__ = [
    "create_breakdown_table",
    "create_consistency_table",
    "create_equity_table",
    "create_monthly_table",
    "create_ratio_table",
    "create_streak_table",
    "create_summary_table",
]
