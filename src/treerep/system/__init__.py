# Author: PB
# Maintainer: PB
# Original date: 2026.10.12
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/system/__init__.py

"""System-level concerns: exceptions and logging setup."""
