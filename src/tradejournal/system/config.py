"""
System configuration.

One configuration for the whole application, loaded from YAML and merged
over built-in defaults.

Search order (first hit wins):
    1. Explicit path passed to SystemConfig.load()
    2. $TRADEJOURNAL_CONFIG
    3. ./tradejournal.yaml
    4. Built-in defaults

Example tradejournal.yaml:

    account:
      starting_equity: 25000

    consistency:
      win_rate_target: 55
      profit_factor_target: 2.0
      max_drawdown_limit: 20
      risk_reward_target: 1.5

    goals:
      yearly_pnl_goal: 50000
      monthly_pnl_goal: ${MONTHLY_GOAL}

    logging:
      level: INFO
      format: console

`${VAR}` placeholders are replaced by environment variables; undefined
variables keep the placeholder.
"""

import copy
import os
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Literal

import structlog
import yaml

from tradejournal.libraries.performance.models import AnalyticsConfig, ConsistencyWeights, GoalConfig
from tradejournal.system.log_system import LoggingConfig as LoggerConfig

logger = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "TRADEJOURNAL_CONFIG"
DEFAULT_CONFIG_FILE = "tradejournal.yaml"

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def _to_decimal(value: Any, name: str) -> Decimal:
    """Parse a YAML scalar (int, float, str) into Decimal."""
    if isinstance(value, Decimal):
        return value
    try:
        # str() avoids binary float artifacts (0.1 -> 0.1000000000000000055...)
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


@dataclass
class AccountConfig:
    """Trading account settings."""

    starting_equity: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        self.starting_equity = _to_decimal(self.starting_equity, "account.starting_equity")


@dataclass
class ConsistencyConfig:
    """
    Targets of the consistency score.

    Every target must be strictly positive; the analytics engine would score
    a non-positive target as 0 without complaint, so bad values are rejected
    here, at load time.
    """

    win_rate_target: Decimal = Decimal("60")
    profit_factor_target: Decimal = Decimal("2.0")
    max_drawdown_limit: Decimal = Decimal("25")
    risk_reward_target: Decimal = Decimal("1.5")

    def __post_init__(self) -> None:
        for name in ("win_rate_target", "profit_factor_target", "max_drawdown_limit", "risk_reward_target"):
            value = _to_decimal(getattr(self, name), f"consistency.{name}")
            if value <= 0:
                raise ValueError(f"consistency.{name} must be positive, got {value}")
            setattr(self, name, value)

        if self.win_rate_target > 100:
            raise ValueError(f"consistency.win_rate_target is a percentage (0-100], got {self.win_rate_target}")

    def to_weights(self) -> ConsistencyWeights:
        """Convert to the engine's ConsistencyWeights."""
        return ConsistencyWeights(
            win_rate_target=self.win_rate_target,
            profit_factor_target=self.profit_factor_target,
            max_drawdown_limit=self.max_drawdown_limit,
            risk_reward_target=self.risk_reward_target,
        )


@dataclass
class GoalsConfig:
    """P&L goals; 0 disables a goal."""

    yearly_pnl_goal: Decimal = Decimal("0")
    monthly_pnl_goal: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        for name in ("yearly_pnl_goal", "monthly_pnl_goal"):
            value = _to_decimal(getattr(self, name), f"goals.{name}")
            if value < 0:
                raise ValueError(f"goals.{name} cannot be negative, got {value}")
            setattr(self, name, value)


@dataclass
class LoggingConfig:
    """Logging section of the system configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json"] = "console"
    timestamp_format: Literal["iso", "compact", "time", "short"] = "compact"
    enable_file: bool = False
    file_path: str = "logs/tradejournal.log"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file_rotation: bool = True
    max_file_size_mb: int = 10
    backup_count: int = 3

    def to_logger_config(self) -> LoggerConfig:
        """Convert to log_system.LoggingConfig for LoggerFactory.configure()."""
        return LoggerConfig(
            level=self.level,
            format=self.format,
            timestamp_format=self.timestamp_format,
            enable_file=self.enable_file,
            file_path=Path(self.file_path),
            file_level=self.file_level,
            file_rotation=self.file_rotation,
            max_file_size_mb=self.max_file_size_mb,
            backup_count=self.backup_count,
        )


@dataclass
class SystemConfig:
    """Complete system configuration."""

    account: AccountConfig = field(default_factory=AccountConfig)
    consistency: ConsistencyConfig = field(default_factory=ConsistencyConfig)
    goals: GoalsConfig = field(default_factory=GoalsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def analytics_config(self) -> AnalyticsConfig:
        """Engine configuration: starting equity, consistency targets, goals."""
        return AnalyticsConfig(
            starting_equity=self.account.starting_equity,
            consistency=self.consistency.to_weights(),
            goals=GoalConfig(
                yearly_pnl_goal=self.goals.yearly_pnl_goal,
                monthly_pnl_goal=self.goals.monthly_pnl_goal,
            ),
        )

    @classmethod
    def load(cls, path: Path | str | None = None) -> "SystemConfig":
        """
        Load configuration from YAML, merged over defaults.

        Args:
            path: Explicit config file. If None, $TRADEJOURNAL_CONFIG then
                ./tradejournal.yaml are tried.

        Returns:
            SystemConfig (defaults if no file is found)

        Raises:
            ValueError: If a value is out of range or the file is not a mapping
            yaml.YAMLError: If the file is not valid YAML
        """
        config_path = cls._find_config_file(path)
        if config_path is None:
            logger.debug("system.config.defaults", reason="no config file found")
            return cls()

        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping, got {type(raw).__name__}")

        merged = _deep_merge(cls._defaults_dict(), _substitute_env_vars(raw))
        logger.debug("system.config.loaded", path=str(config_path))
        return cls._from_dict(merged)

    @staticmethod
    def _find_config_file(path: Path | str | None) -> Path | None:
        if path is not None:
            explicit = Path(path)
            if not explicit.exists():
                logger.warning("system.config.not_found", path=str(explicit))
                return None
            return explicit

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            candidate = Path(env_path)
            if candidate.exists():
                return candidate
            logger.warning("system.config.not_found", path=env_path, source=CONFIG_ENV_VAR)

        local = Path.cwd() / DEFAULT_CONFIG_FILE
        if local.exists():
            return local
        return None

    @staticmethod
    def _defaults_dict() -> dict[str, Any]:
        return {"account": {}, "consistency": {}, "goals": {}, "logging": {}}

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "SystemConfig":
        """Build config from a (possibly partial) dictionary."""
        return cls(
            account=AccountConfig(**(data.get("account") or {})),
            consistency=ConsistencyConfig(**(data.get("consistency") or {})),
            goals=GoalsConfig(**(data.get("goals") or {})),
            logging=LoggingConfig(**(data.get("logging") or {})),
        )


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge `override` into a copy of `base` (override wins)."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _substitute_env_vars(value: Any) -> Any:
    """Replace ${VAR} with environment values in strings, dicts and lists."""
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
    if isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]
    return value


_system_config: SystemConfig | None = None


def get_system_config(path: Path | str | None = None) -> SystemConfig:
    """
    Get the system configuration singleton.

    Args:
        path: Explicit config file; forces a load from that file

    Returns:
        Cached SystemConfig
    """
    global _system_config
    if path is not None:
        _system_config = SystemConfig.load(path)
    elif _system_config is None:
        _system_config = SystemConfig.load()
    return _system_config


def reload_system_config(path: Path | str | None = None) -> SystemConfig:
    """Force a reload of the system configuration singleton."""
    global _system_config
    _system_config = SystemConfig.load(path)
    return _system_config
