"""Options and setup shared by the analytics commands."""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Literal, Optional, cast

import click

from tradejournal.system import LoggerFactory
from tradejournal.system.config import SystemConfig, reload_system_config


def common_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach --file, --config, --today and --log-level to a command."""
    decorators = [
        click.option(
            "--file",
            "-f",
            "trade_file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            required=True,
            help="Path to trade journal export (JSON)",
        ),
        click.option(
            "--config",
            "-c",
            "config_file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Path to tradejournal.yaml (default: $TRADEJOURNAL_CONFIG or ./tradejournal.yaml)",
        ),
        click.option(
            "--today",
            type=click.DateTime(formats=["%Y-%m-%d"]),
            help="Reference day for YTD/MTD/WTD periods (YYYY-MM-DD, default: local today)",
        ),
        click.option(
            "--log-level",
            "-l",
            type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
            help="Set logging level (DEBUG shows period resolution and computations)",
        ),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


def load_system_config(config_file: Optional[Path], log_level: Optional[str]) -> SystemConfig:
    """Load system configuration and configure logging (with CLI override)."""
    system_config = reload_system_config(config_file)

    if log_level:
        # Type cast since click already validated the choice
        level = cast(Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], log_level.upper())
        system_config.logging.level = level

    LoggerFactory.configure(system_config.logging.to_logger_config())
    return system_config


def reference_day(today: Optional[datetime]) -> date:
    """CLI --today value as a date (local today if absent)."""
    return today.date() if today is not None else date.today()
