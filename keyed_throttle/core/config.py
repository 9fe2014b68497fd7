"""Library configuration using Pydantic Settings.

Configuration is environment-aware:
- KEYED_THROTTLE_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
KEYED_THROTTLE_ENV = os.getenv("KEYED_THROTTLE_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(KEYED_THROTTLE_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (installed packages usually rely on env vars)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ first
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_throttle_settings() -> "ThrottleSettings":
    """Build throttle settings from environment."""

    return ThrottleSettings()


def _build_memoize_settings() -> "MemoizeSettings":
    return MemoizeSettings()


def _build_log_settings() -> "LogSettings":
    return LogSettings()


class ThrottleSettings(BaseSettings):
    """Default timing policy for throttlers built from configuration.

    Only the fields relevant to the selected strategy are used: debounce and
    throttle read the wait/edge options, fixed_window reads limit/window.
    Option validation happens in the throttler factory.
    """

    strategy: str = Field(
        "debounce",
        description="Throttler strategy: debounce, throttle or fixed_window",
    )
    wait_seconds: float = Field(
        0.2,
        description="Debounce/throttle wait period in seconds",
    )
    leading: bool = Field(
        True,
        description="Invoke on the leading edge of the wait period",
    )
    trailing: bool = Field(
        False,
        description="Invoke on the trailing edge of the wait period",
    )
    max_wait_seconds: float | None = Field(
        None,
        description="Maximum time a debounced call may be delayed (None disables)",
    )
    limit: int = Field(
        10,
        description="Maximum invocations per window (fixed_window strategy)",
    )
    window_seconds: float = Field(
        60.0,
        description="Window size in seconds (fixed_window strategy)",
    )

    model_config = SettingsConfigDict(
        env_prefix="THROTTLE_",
        case_sensitive=False,
    )


class MemoizeSettings(BaseSettings):
    """Per-key registry retention policy."""

    ttl_seconds: float | None = Field(
        None,
        description="Time-to-live of a per-key entry in seconds (None keeps entries forever)",
    )
    max_entries: int | None = Field(
        None,
        description="Maximum number of per-key entries, LRU evicted (None for unlimited)",
    )

    model_config = SettingsConfigDict(
        env_prefix="MEMOIZE_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: Literal["json", "plain"] = Field(
        "json",
        description="Log line format",
    )
    output: Literal["stdout", "file"] = Field(
        "stdout",
        description="Where log lines are written",
    )
    file_path: str | None = Field(
        None,
        description="Log file path when output=file (default logs/keyed_throttle.log)",
    )
    max_bytes: int | None = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (None disables rotation)",
    )
    backup_count: int = Field(
        5,
        description="Number of rotated log files to keep",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main settings container.

    Automatically loads from the appropriate .env.{KEYED_THROTTLE_ENV} file.
    """

    keyed_throttle_env: str = KEYED_THROTTLE_ENV
    throttle: ThrottleSettings = Field(default_factory=_build_throttle_settings)
    memoize: MemoizeSettings = Field(default_factory=_build_memoize_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - nested settings are created via default_factory
# so env loading works.
settings = Settings()
