# Author: PB
# Maintainer: PB
# Original date: 2026.10.12
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/data/__init__.py

"""Input validation helpers."""

from .path_validation import is_valid_absolute_path, validate_absolute_path

__all__ = ['is_valid_absolute_path', 'validate_absolute_path']
