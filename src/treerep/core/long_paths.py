# Author: PB
# Maintainer: PB
# Original date: 2026.10.13
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/core/long_paths.py

"""
Extended-length path handling for platforms with a short MAX_PATH.

Pure string transformations: nothing here touches the filesystem, so the
Windows behavior can be exercised on any platform by passing ``platform``.
"""

import sys
from typing import Optional, Final

LONG_PATH_THRESHOLD: Final = 200
EXTENDED_PATH_PREFIX: Final = "\\\\?\\"
EXTENDED_UNC_PREFIX: Final = "\\\\?\\UNC\\"

_SHORT_MAX_PATH_PLATFORMS: Final = frozenset({"win32", "cygwin"})


def has_short_max_path(platform: Optional[str] = None) -> bool:
    """Whether the platform limits absolute paths to a short MAX_PATH by default."""
    return (platform or sys.platform) in _SHORT_MAX_PATH_PLATFORMS


def is_extended_path(path: str) -> bool:
    return path.startswith(EXTENDED_PATH_PREFIX)


def apply_long_path_prefix(path: str,
                           *,
                           platform: Optional[str] = None,
                           threshold: Optional[int] = None) -> str:
    """Prefix ``path`` with ``\\\\?\\`` when it is too long for the platform.

    Paths shorter than ``threshold`` (default LONG_PATH_THRESHOLD), paths on
    platforms without the limit, and already-prefixed paths are returned
    unchanged. UNC paths (``\\\\server\\share``) take the ``\\\\?\\UNC\\`` form.
    """
    if threshold is None:
        threshold = LONG_PATH_THRESHOLD

    if not has_short_max_path(platform) or is_extended_path(path) or len(path) < threshold:
        return path

    if path.startswith("\\\\"):
        return EXTENDED_UNC_PREFIX + path[2:]
    return EXTENDED_PATH_PREFIX + path


def strip_long_path_prefix(path: str) -> str:
    """Inverse of apply_long_path_prefix, for display and comparison."""
    if path.startswith(EXTENDED_UNC_PREFIX):
        return "\\\\" + path[len(EXTENDED_UNC_PREFIX):]
    if is_extended_path(path):
        return path[len(EXTENDED_PATH_PREFIX):]
    return path
