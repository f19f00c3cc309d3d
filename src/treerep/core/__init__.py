# Author: PB
# Maintainer: PB
# Original date: 2026.10.13
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/core/__init__.py

"""Core replication engine and its change-tracking helpers."""

from .replicator import WorkItem, replicate, replicate_many
from .long_paths import apply_long_path_prefix, strip_long_path_prefix

__all__ = ['WorkItem', 'replicate', 'replicate_many', 'apply_long_path_prefix', 'strip_long_path_prefix']
