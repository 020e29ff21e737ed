"""
TradeJournal - Trading Performance Analytics

Public API for turning a journal of trades into equity curves, drawdown
statistics, streaks and a consistency score.
"""

from importlib.metadata import version

try:
    __version__ = version("tradejournal")
except Exception:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
]
