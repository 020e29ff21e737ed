"""Commands __init__ - exports all commands."""

from tradejournal.cli.commands.equity import equity_command
from tradejournal.cli.commands.stats import stats_command

__all__ = ["equity_command", "stats_command"]
