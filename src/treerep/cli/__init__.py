# Author: PB
# Maintainer: PB
# Original date: 2026.10.15
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/cli/__init__.py

"""Command Line Interface package for treerep."""

from .main import main, app

__all__ = ['main', 'app']
