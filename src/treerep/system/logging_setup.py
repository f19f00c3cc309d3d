# Author: PB
# Maintainer: PB
# Original date: 2026.10.12
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/system/logging_setup.py

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from treerep.config.manager import UserConfig, load_merged_user_config
from treerep.system.exceptions import ConfigError


def setup_logging(level: Optional[str] = None, user_config: Optional[UserConfig] = None) -> None:
    """Setup loguru logging for the entire application.

    Configures:
    - Console output: the configured level (WARNING by default) unless
      ``level`` overrides it
    - File output: DEBUG+ if local_log is configured in user config
    """
    logger.remove()

    config_error = None
    if user_config is None:
        try:
            user_config = load_merged_user_config()
        except ConfigError as e:
            config_error = e
            user_config = UserConfig()

    logger.add(
        sys.stderr,
        level=level or user_config.log_level,
        format="<level>{level}</level>: {message}",
        colorize=True
    )

    if config_error is not None:
        logger.warning(f"Ignoring unreadable user config: {config_error}")

    if not user_config.local_log:
        return

    try:
        log_dir = Path(user_config.local_log)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "treerep.log"

        logger.add(
            log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="10 MB",
            retention="30 days",
            compression="gz"
        )
        logger.debug(f"File logging enabled: {log_file}")

    except Exception as e:
        # Don't fail the entire application if logging setup fails
        logger.warning(f"Failed to setup file logging: {e}")
