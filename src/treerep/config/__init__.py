# Author: PB
# Maintainer: PB
# Original date: 2026.10.12
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/config/__init__.py

"""User configuration loading."""

from .manager import UserConfig, load_merged_user_config

__all__ = ['UserConfig', 'load_merged_user_config']
