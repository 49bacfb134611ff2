"""Configuration loading for TradeJournal.

Settings live in ``~/.config/tradejournal/config.toml``; the
``TRADEJOURNAL_CONFIG`` environment variable points elsewhere. A missing
file means defaults.
"""

import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from tradejournal.analytics.eligibility import DEFAULT_REQUIRED_WINNING_DAYS, DEFAULT_WINDOW_DAYS
from tradejournal.analytics.readiness import DEFAULT_PENALTY_PER_TRADE
from tradejournal.autosave.pump import DEFAULT_DELAY
from tradejournal.models import EligibilityMode

CONFIG_ENV_VAR = "TRADEJOURNAL_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "tradejournal" / "config.toml"


class EligibilitySettings(BaseModel):
    """Payout eligibility policy."""

    mode: EligibilityMode = Field(default=EligibilityMode.CYCLE, description="cycle or rolling")
    window_days: int = Field(default=DEFAULT_WINDOW_DAYS, ge=1, description="Rolling window length")
    required_winning_days: int = Field(
        default=DEFAULT_REQUIRED_WINNING_DAYS, ge=0, description="Winning days needed"
    )


class ReadinessSettings(BaseModel):
    """Daily plan discipline limits."""

    max_trades: Optional[int] = Field(default=None, ge=0, description="Trade-count ceiling")
    penalty_per_trade: int = Field(
        default=DEFAULT_PENALTY_PER_TRADE, ge=0, description="Points lost per trade over the ceiling"
    )


class AutosaveSettings(BaseModel):
    """Autosave behaviour."""

    delay: float = Field(default=DEFAULT_DELAY, gt=0, description="Debounce delay in seconds")
    enabled: bool = Field(default=True, description="Whether autosave runs at all")


class AppConfig(BaseModel):
    """Top-level TradeJournal configuration."""

    timezone: str = Field(default="UTC", description="Timezone that defines 'today'")
    eligibility: EligibilitySettings = Field(default_factory=EligibilitySettings)
    readiness: ReadinessSettings = Field(default_factory=ReadinessSettings)
    autosave: AutosaveSettings = Field(default_factory=AutosaveSettings)


def get_config_path(path: Optional[Path] = None) -> Path:
    """Resolve the config file path from an explicit path, the env var, or the default."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration, falling back to defaults when no file exists.

    Raises:
        ValueError: If the file is not valid TOML or holds invalid values.
    """
    config_path = get_config_path(path)
    if not config_path.exists():
        return AppConfig()

    try:
        raw = toml.load(config_path)
    except toml.TomlDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

    try:
        return AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}") from e
