# Author: PB
# Maintainer: PB
# Original date: 2026.10.14
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/core/snapshots.py

"""
SHA-256 change detection.

HashVerifiable lets an object remember a digest of its current state and
later answer whether that state has changed. hash_tree gives the same kind
of digest for a whole directory, which is how a replica is compared with
its source.
"""

import hashlib
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from treerep.system.exceptions import InvalidArgumentError, SnapshotStateError


def compute_hash(value: bytes) -> str:
    """Lowercase hex SHA-256 of ``value``."""
    if value is None:
        raise InvalidArgumentError("value must not be None")
    return hashlib.sha256(value).hexdigest()


def hash_file(path: Path) -> str:
    """Calculate SHA-256 for a file"""
    h = hashlib.sha256()
    with open(path, 'rb') as f:
        # Read in chunks to handle large files
        for chunk in iter(lambda: f.read(64 * 1024), b''):
            h.update(chunk)
    return h.hexdigest()


def hash_tree(root: Path) -> str:
    """Digest of a tree's structure and file contents.

    Two trees hash equal when they hold the same relative directory names,
    file names and file bytes. The root's own name is not included, so a
    replica hashes the same as its source.
    """
    root = Path(root)
    h = hashlib.sha256()
    records = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root)
        for name in dirnames:
            full = Path(dirpath) / name
            if full.is_symlink():
                continue
            records.append(f"d {(rel_dir / name).as_posix()}")
        for name in filenames:
            full = Path(dirpath) / name
            if not full.is_file():
                continue
            records.append(f"f {(rel_dir / name).as_posix()} {hash_file(full)}")

    for record in sorted(records):
        h.update(record.encode("utf-8"))
        h.update(b"\n")
    return h.hexdigest()


class HashVerifiable(ABC):
    """Base class for objects that can tell whether they changed since a snapshot.

    Subclasses implement compute_id(), usually by hashing their content with
    compute_hash(). Call set_current_id() to take the snapshot.
    """

    _current_id: Optional[str] = None

    @abstractmethod
    def compute_id(self) -> str:
        ...

    def set_current_id(self) -> None:
        self._current_id = self.compute_id()

    @property
    def current_id(self) -> Optional[str]:
        return self._current_id

    def is_not_changed(self) -> bool:
        """True if compute_id() still matches the last snapshot.

        Raises:
            SnapshotStateError: If set_current_id() was never called
        """
        if self._current_id is None:
            raise SnapshotStateError("set_current_id() must be called before checking for changes")
        return self._current_id == self.compute_id()


class TreeSnapshot(HashVerifiable):
    """Change tracker for a directory tree on disk."""

    def __init__(self, root: Path):
        self.root = Path(root)
        self.set_current_id()

    def compute_id(self) -> str:
        return hash_tree(self.root)
