# Author: PB
# Maintainer: PB
# Original date: 2026.10.14
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/storage/__init__.py

"""
Storage layer for treerep - single-file persistence.
"""

from .json_store import save_json, read_json

__all__ = ['save_json', 'read_json']
