"""TradeJournal libraries: pure computation building blocks."""
