"""Trade file loading for CLI commands.

Accepts a JSON array of trades, or an object with a "trades" array (the
journal export format). Field names may be snake_case or the journal's
camelCase aliases (closeDate, assetType, ...).
"""

import json
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from tradejournal.services.ledger.models import Trade

logger = structlog.get_logger(__name__)

_TRADE_LIST = TypeAdapter(list[Trade])


class TradeFileError(ValueError):
    """Trade file could not be read or validated."""


def load_trades(path: Path) -> list[Trade]:
    """
    Load trades from a JSON file.

    Args:
        path: JSON file (array of trades, or {"trades": [...]})

    Returns:
        Validated trades in file order

    Raises:
        TradeFileError: If the file is not valid JSON or a trade is malformed
    """
    try:
        raw = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise TradeFileError(f"{path} is not valid JSON: {e}") from e

    if isinstance(raw, dict):
        raw = raw.get("trades", [])
    if not isinstance(raw, list):
        raise TradeFileError(f"{path} must contain a list of trades")

    try:
        trades = _TRADE_LIST.validate_python(raw)
    except ValidationError as e:
        raise TradeFileError(f"{path} contains invalid trades:\n{e}") from e

    logger.info("cli.trades.loaded", path=str(path), count=len(trades))
    return trades
