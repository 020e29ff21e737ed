"""Trade ledger models and partitioning.

Key components:
- Trade: Immutable journal entry (read-only input to analytics)
- AssetType, Direction, TradeStatus: Trade enumerations
- partition: Split trades into OPEN and CLOSED

Example:
    >>> from tradejournal.services.ledger import Trade, partition
    >>> ledger = partition(trades)
    >>> len(ledger.closed)
    42
"""

from tradejournal.services.ledger.models import AssetType, Direction, Trade, TradeStatus
from tradejournal.services.ledger.partition import LedgerPartition, partition

__all__ = [
    "AssetType",
    "Direction",
    "LedgerPartition",
    "Trade",
    "TradeStatus",
    "partition",
]
