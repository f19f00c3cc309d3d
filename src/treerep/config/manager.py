# Author: PB
# Maintainer: PB
# Original date: 2026.10.12
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/config/manager.py

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Literal, Final

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from treerep.system.exceptions import ConfigError


# ---- Constants ----

USER_CFG: Final = "treerep.yml"

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def _get_user_config_search_paths() -> tuple[Path, ...]:
    """Get config file search paths (ordered by priority: lowest to highest).

    Evaluated at call time so environment overrides set by tests are honored.
    """
    return (
        Path("/etc/treerep") / USER_CFG,  # System defaults
        Path.home() / ".config" / "treerep" / USER_CFG,  # User config
        Path(os.getenv("XDG_CONFIG_HOME", "")) / "treerep" / USER_CFG,  # XDG override
        Path(os.getenv("TREEREP_CONFIG_HOME", "")) / USER_CFG,  # Explicit override (highest priority)
    )


def _load_merged_config_data(candidates: tuple[Path, ...]) -> dict:
    """Load and merge config data from candidate paths.

    Later candidates override keys from earlier ones. A candidate that exists
    but cannot be parsed is a configuration error, not a silent skip.

    Raises:
        ConfigError: If a config file is unreadable or not a YAML mapping
    """
    merged_data = {}
    found_configs = []

    for candidate in candidates:
        if candidate == Path("treerep") / USER_CFG or candidate == Path(USER_CFG):
            continue  # Unset env var
        if not candidate.is_file():
            continue
        try:
            with candidate.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {candidate}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {candidate} must contain a mapping")

        merged_data.update(data)
        found_configs.append(str(candidate))
        logger.debug(f"Loaded config from {candidate}")

    if found_configs:
        logger.debug(f"Merged config from: {', '.join(found_configs)}")
    else:
        logger.debug("No treerep.yml found, using defaults")
    return merged_data


class UserConfig(BaseModel):
    """Per-user settings for replication and logging."""

    # Optional logging configuration
    local_log: Optional[Path] = None
    log_level: LogLevel = "WARNING"

    # Absolute path length at which the extended-length prefix is applied
    long_path_threshold: int = Field(default=200, gt=0)

    # Compare source and replica digests after each copy
    verify_after_copy: bool = False

    @classmethod
    def load(cls, config_path: Path) -> "UserConfig":
        """Load user config from a single file."""
        return cls.from_data(_load_merged_config_data((config_path,)))

    @classmethod
    def from_data(cls, data: dict) -> "UserConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid user config: {e}") from e


def load_merged_user_config() -> UserConfig:
    """Load and merge user config from all locations (system defaults + user overrides)."""
    candidates = _get_user_config_search_paths()
    merged_data = _load_merged_config_data(candidates)
    return UserConfig.from_data(merged_data)
