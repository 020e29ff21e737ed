"""Trade ledger partition.

Splits the full journal into OPEN and CLOSED trades. This is the single
point where open positions are excluded from analytics: nothing downstream
ever sees an OPEN trade.
"""

from typing import Iterable, NamedTuple

import structlog

from tradejournal.services.ledger.models import Trade, TradeStatus

logger = structlog.get_logger(__name__)


class LedgerPartition(NamedTuple):
    """OPEN and CLOSED trades, each in original input order."""

    open: tuple[Trade, ...]
    closed: tuple[Trade, ...]


def partition(trades: Iterable[Trade]) -> LedgerPartition:
    """
    Split trades by status.

    Args:
        trades: Any iterable of trades (order irrelevant)

    Returns:
        LedgerPartition with open and closed tuples (input order preserved)

    Example:
        >>> ledger = partition([open_trade, closed_trade])
        >>> ledger.open
        (Trade(id='t-1', ...),)
        >>> ledger.closed
        (Trade(id='t-2', ...),)
    """
    open_trades: list[Trade] = []
    closed_trades: list[Trade] = []

    for trade in trades:
        if trade.status == TradeStatus.CLOSED:
            closed_trades.append(trade)
        else:
            open_trades.append(trade)

    logger.debug("ledger.partitioned", open=len(open_trades), closed=len(closed_trades))
    return LedgerPartition(open=tuple(open_trades), closed=tuple(closed_trades))
