# Author: PB
# Maintainer: PB
# Original date: 2026.10.12
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/data/path_validation.py

import ntpath
import os
import re


# Global constants

_ILLEGAL_CHARS = {
    '<', '>', '"', '|', '?', '*',  # Windows-illegal
    *[chr(i) for i in range(32)]}  # Control chars, NUL included

_EXTENDED_PREFIXES = ("\\\\?\\", "//?/")

_DRIVE_ROOTED = re.compile(r"^[a-zA-Z]:[\\/]")


def _strip_extended_prefix(path_str: str) -> str:
    for prefix in _EXTENDED_PREFIXES:
        if path_str.startswith(prefix):
            rest = path_str[len(prefix):]
            if rest[:4].upper() in ("UNC\\", "UNC/"):
                return "\\\\" + rest[4:]
            return rest
    return path_str


def _is_absolute(path_str: str) -> bool:
    if os.path.isabs(path_str):
        if os.name == "nt":
            # "\foo" is rooted but drive-relative on Windows
            return bool(_DRIVE_ROOTED.match(path_str)) or ntpath.splitdrive(path_str)[0].startswith(("\\\\", "//"))
        return True
    return False


def validate_absolute_path(path) -> tuple[bool, str]:
    """
    Validate a destination path string with:
    - Type and emptiness checks
    - Illegal character checks (control chars and Windows-reserved punctuation)
    - Absoluteness on the running platform

    A leading extended-length prefix (``\\\\?\\``) is accepted and ignored.
    Never raises.
    """
    if path is None:
        return (False, "Path cannot be None")

    if isinstance(path, os.PathLike):
        path = os.fspath(path)
    if not isinstance(path, str):
        return (False, f"Path must be a string, not {type(path).__name__}")

    if not path:
        return (False, "Path cannot be empty")

    try:
        if os.name == "nt":
            path.encode('utf-8')
        else:
            # Undecodable POSIX names arrive surrogate-escaped from os.fsdecode
            os.fsencode(path)
    except UnicodeEncodeError:
        return (False, "Path must be UTF-8 encodable")

    path_str = _strip_extended_prefix(path)

    # Fast illegal character check
    if set(path_str) & _ILLEGAL_CHARS:
        return (False, f"Path '{path}' contains illegal characters")

    if not _is_absolute(path_str):
        return (False, f"Path '{path}' is not absolute")

    return (True, "Path is valid")


def is_valid_absolute_path(path) -> bool:
    """True only for absolute, well-formed paths; False (never an exception) otherwise."""
    ok, _ = validate_absolute_path(path)
    return ok


# done
