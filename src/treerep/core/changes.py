# Author: PB
# Maintainer: PB
# Original date: 2026.10.14
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/core/changes.py

"""Reversible single-path changes applied inside a repository directory."""

from pathlib import Path
from typing import Protocol

from loguru import logger

from treerep.system.exceptions import StorageIOError


class Change(Protocol):
    """A change that can be applied to, and withdrawn from, a directory."""

    def apply(self, repo_dir: Path) -> None:
        ...

    def cancel(self, repo_dir: Path) -> None:
        ...


class NewFileChange:
    """Create an empty file at ``rel_path``; cancel removes it again."""

    def __init__(self, rel_path: str):
        self.rel_path = rel_path

    def __repr__(self) -> str:
        return f"NewFileChange({self.rel_path!r})"

    def apply(self, repo_dir: Path) -> None:
        target = Path(repo_dir) / self.rel_path
        try:
            target.touch(exist_ok=False)
        except OSError as e:
            raise StorageIOError(f"failed to create file {self.rel_path}", path=str(target)) from e
        logger.debug(f"Created {target}")

    def cancel(self, repo_dir: Path) -> None:
        target = Path(repo_dir) / self.rel_path
        try:
            target.unlink(missing_ok=True)
        except OSError as e:
            raise StorageIOError(f"failed to remove file {self.rel_path}", path=str(target)) from e
        logger.debug(f"Removed {target}")
