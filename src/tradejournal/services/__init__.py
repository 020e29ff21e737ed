"""TradeJournal services package.

Each service is independently testable and exposes a Protocol interface:

- ledger: Trade records and the OPEN/CLOSED ledger partition
- analytics: Period & filter resolution and the analytics orchestrator
"""
