"""Tests for centralized logging configuration."""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from tradejournal.system import LoggerFactory, LoggingConfig


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before and after each test."""
    LoggerFactory.reset()
    yield
    LoggerFactory.reset()


def test_default_configuration():
    """Test logger factory with default configuration."""
    logger = LoggerFactory.get_logger()

    assert LoggerFactory.is_configured()
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")

    config = LoggerFactory.get_config()
    assert config.level == "INFO"
    assert config.format == "console"
    assert config.enable_file is False
    assert config.file_level == "WARNING"


def test_explicit_configuration():
    """Test configuring logger factory explicitly."""
    config = LoggingConfig(level="DEBUG", format="json", enable_file=False)

    LoggerFactory.configure(config)

    assert LoggerFactory.is_configured()
    assert LoggerFactory.get_config().level == "DEBUG"
    assert LoggerFactory.get_config().format == "json"


def test_auto_configure_on_first_use():
    """Test that logger auto-configures with defaults on first use."""
    assert not LoggerFactory.is_configured()

    LoggerFactory.get_logger("tradejournal.test")

    assert LoggerFactory.is_configured()


def test_console_handler_writes_to_stderr():
    """Test console output goes to stderr so stdout stays clean for reports."""
    LoggerFactory.configure(LoggingConfig(level="WARNING"))

    stream_handlers = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]

    assert len(stream_handlers) == 1
    assert stream_handlers[0].level == logging.WARNING
    assert stream_handlers[0].stream is sys.stderr


def test_file_logging_writes_json_lines(tmp_path):
    """Test file output is JSON with the event name and context."""
    log_file = tmp_path / "journal.log"
    config = LoggingConfig(
        level="INFO",
        enable_file=True,
        file_path=log_file,
        file_level="DEBUG",
        file_rotation=False,
    )

    LoggerFactory.configure(config)
    logger = LoggerFactory.get_logger()
    logger.info("analytics.stats.computed", closed_trades=42)

    record = json.loads(log_file.read_text().strip())
    assert record["event"] == "analytics.stats.computed"
    assert record["closed_trades"] == 42
    assert "log_timestamp" in record
    assert record["level"].upper() == "INFO"


def test_file_logging_default_path(tmp_path, monkeypatch):
    """Test enabling file logging without a path uses logs/tradejournal.log."""
    monkeypatch.chdir(tmp_path)

    LoggerFactory.configure(LoggingConfig(enable_file=True, file_path=None, file_rotation=False))

    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert Path(file_handlers[0].baseFilename) == tmp_path / "logs" / "tradejournal.log"


def test_file_logging_creates_directory(tmp_path):
    """Test that file logging creates parent directories."""
    log_file = tmp_path / "logs" / "subdir" / "test.log"

    LoggerFactory.configure(LoggingConfig(enable_file=True, file_path=log_file, file_rotation=False))
    LoggerFactory.get_logger().warning("ledger.row.skipped")

    assert log_file.exists()


def test_rotating_file_handler(tmp_path):
    """Test rotating file handler configuration."""
    log_file = tmp_path / "rotating.log"
    config = LoggingConfig(
        enable_file=True,
        file_path=log_file,
        file_rotation=True,
        max_file_size_mb=1,
        backup_count=3,
    )

    LoggerFactory.configure(config)

    handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
    assert len(handlers) == 1
    assert handlers[0].maxBytes == 1 * 1024 * 1024
    assert handlers[0].backupCount == 3


def test_file_level_independent_from_console_level(tmp_path):
    """Test that file log level can be lower than the console level."""
    log_file = tmp_path / "debug.log"
    config = LoggingConfig(
        level="WARNING",
        enable_file=True,
        file_path=log_file,
        file_level="DEBUG",
        file_rotation=False,
    )

    LoggerFactory.configure(config)
    logger = LoggerFactory.get_logger()
    logger.debug("equity.curve.built", points=5)
    logger.warning("system.config.not_found")

    events = [json.loads(line)["event"] for line in log_file.read_text().splitlines() if line.strip()]
    assert events == ["equity.curve.built", "system.config.not_found"]


def test_reset_clears_configuration():
    """Test that reset clears configuration."""
    LoggerFactory.configure(LoggingConfig(level="DEBUG"))

    LoggerFactory.reset()

    assert not LoggerFactory.is_configured()
    assert LoggerFactory.get_config().level == "INFO"


@pytest.mark.parametrize("timestamp_format", ["iso", "compact", "time", "short"])
def test_timestamp_formats(timestamp_format):
    """Test each timestamp format adds log_timestamp."""
    stamp = LoggerFactory._get_timestamper(timestamp_format)

    event_dict = stamp(None, "info", {"event": "x"})

    assert event_dict["log_timestamp"]


def test_console_renderer_formats_context():
    """Test the console line carries event, sorted context and location."""
    render = LoggerFactory._console_renderer()

    line = render(
        None,
        "info",
        {
            "event": "analytics.period.resolved",
            "level": "debug",
            "log_timestamp": "250314-101500.00",
            "selected": 3,
            "baseline": "10500",
            "filename": "resolver.py",
            "lineno": 42,
            "logger": "tradejournal.services.analytics.resolver",
        },
    )

    assert line.startswith("250314-101500.00")
    assert "analytics.period.resolved" in line
    assert line.index("baseline=10500") < line.index("selected=3")
    assert "resolver:42" in line
