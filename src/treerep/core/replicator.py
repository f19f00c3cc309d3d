# Author: PB
# Maintainer: PB
# Original date: 2026.10.13
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/core/replicator.py

"""
All-or-nothing replication of a directory tree.

replicate() copies a source directory, with every nested subdirectory and
file, to ``<destination_parent>/<source name>``. Traversal is iterative over a
call-local stack of WorkItems, so tree depth never touches the interpreter's
recursion limit. If any directory creation or file copy fails, the partially
written destination root is deleted before the error reaches the caller.

Only file bytes are copied: permissions and timestamps are not preserved.
The destination root must not exist yet; replicating twice into the same
parent fails the second time and leaves the first replica alone.
"""

import os
import shutil
from collections import deque
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Optional, Union

from loguru import logger

from treerep.core.long_paths import apply_long_path_prefix
from treerep.data.path_validation import is_valid_absolute_path
from treerep.system.exceptions import InvalidArgumentError, ReplicationIOError, RollbackError

PathArg = Union[str, os.PathLike]


class WorkItem(NamedTuple):
    """A source directory whose destination mirror already exists."""
    source_dir: Path
    dest_dir: Path


def _remove_tree(path: Path) -> None:
    shutil.rmtree(path)


@contextmanager
def rollback_on_failure(dest_root: Path) -> Iterator[None]:
    """Delete ``dest_root`` if any exception unwinds the block.

    The original exception always propagates. A failed deletion is attached
    to it as a note, and to a ReplicationIOError as ``rollback_error``, rather
    than replacing it.
    """
    try:
        yield
    except BaseException as error:
        logger.debug(f"Rolling back partial replica {dest_root}")
        try:
            _remove_tree(dest_root)
        except OSError as cleanup_error:
            rollback_error = RollbackError(
                f"failed to remove partial replica {dest_root}: {cleanup_error}",
                path=str(dest_root)
            )
            rollback_error.__cause__ = cleanup_error
            if isinstance(error, ReplicationIOError):
                error.rollback_error = rollback_error
            error.add_note(f"rollback incomplete: {rollback_error}")
            logger.warning(f"Rollback of {dest_root} failed, manual cleanup required: {cleanup_error}")
        raise


def _check_arguments(source: Optional[PathArg], destination_parent: Optional[PathArg]) -> tuple[Path, Path]:
    """Validate inputs in a fixed order; returns (source, canonical destination parent)."""
    if source is None:
        raise InvalidArgumentError("source must not be None")
    if destination_parent is None:
        raise InvalidArgumentError("destination must not be None")

    if not is_valid_absolute_path(destination_parent):
        raise InvalidArgumentError("path contains invalid characters or is not absolute")

    source_path = Path(os.path.abspath(source))
    if not source_path.is_dir():
        raise InvalidArgumentError("source directory does not exist")

    parent_path = Path(os.path.abspath(destination_parent))
    if not parent_path.is_dir():
        raise InvalidArgumentError("destination directory does not exist")

    if not source_path.name:
        raise InvalidArgumentError("source directory has no name to replicate under")

    if _is_within(parent_path, source_path):
        raise InvalidArgumentError("destination directory lies inside the source tree")

    return source_path, parent_path


def _is_within(path: Path, root: Path) -> bool:
    real_path = os.path.realpath(path)
    real_root = os.path.realpath(root)
    try:
        return os.path.commonpath([real_path, real_root]) == real_root
    except ValueError:  # different drives
        return False


def destination_root_for(source: Path, destination_parent: Path, threshold: Optional[int] = None) -> Path:
    """``<destination_parent>/<source name>``, extended-length prefixed if too long."""
    root = os.path.join(destination_parent, source.name)
    return Path(apply_long_path_prefix(root, threshold=threshold))


def _drain(work: deque) -> None:
    """Process WorkItems until the stack is empty."""
    while work:
        cur_src, cur_dst = work.pop()

        try:
            with os.scandir(cur_src) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise ReplicationIOError(
                f"failed to list directory {cur_src}", path=str(cur_src)
            ) from e

        files = []
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                # Symlink loops and similar unresolvable links
                logger.debug(f"Skipping {entry.path}: {e}")
                continue

            if is_dir:
                new_dir = cur_dst / entry.name
                try:
                    new_dir.mkdir()
                except OSError as e:
                    raise ReplicationIOError(
                        f"failed to create directory {entry.name} under {cur_dst}", path=str(new_dir)
                    ) from e
                work.append(WorkItem(Path(entry.path), new_dir))
            elif is_file:
                files.append(entry)
            else:
                logger.debug(f"Skipping {entry.path}: not a regular file or directory")

        for entry in files:
            target = cur_dst / entry.name
            try:
                shutil.copyfile(entry.path, target)
            except OSError as e:
                raise ReplicationIOError(
                    f"failed to copy file {entry.name} to {cur_dst}", path=str(target)
                ) from e


def replicate(source: PathArg, destination_parent: PathArg, *, long_path_threshold: Optional[int] = None) -> Path:
    """Copy the ``source`` tree to ``destination_parent / source.name``.

    Args:
        source: Existing directory to replicate
        destination_parent: Absolute path of an existing directory
        long_path_threshold: Path length at which the extended-length prefix
            is applied on platforms that need it

    Returns:
        The destination root that was created

    Raises:
        InvalidArgumentError: Missing, malformed, or non-existent inputs,
            raised before anything is written
        ReplicationIOError: A directory could not be created or a file could
            not be copied; the destination root has been removed
    """
    source_path, parent_path = _check_arguments(source, destination_parent)
    dest_root = destination_root_for(source_path, parent_path, long_path_threshold)

    logger.debug(f"Replicating {source_path} -> {dest_root}")

    # Nothing to roll back yet: the root may belong to someone else
    try:
        dest_root.mkdir()
    except OSError as e:
        raise ReplicationIOError(
            f"failed to create directory {source_path.name} under {parent_path}", path=str(dest_root)
        ) from e

    work: deque[WorkItem] = deque([WorkItem(source_path, dest_root)])
    try:
        with rollback_on_failure(dest_root):
            _drain(work)
    finally:
        work.clear()

    logger.debug(f"Replicated {source_path} -> {dest_root}")
    return dest_root


def replicate_many(pairs: Iterable[tuple[PathArg, PathArg]], *, long_path_threshold: Optional[int] = None) -> list[Path]:
    """Replicate each (source, destination_parent) pair in order.

    Each pair is its own all-or-nothing replication; the first failure stops
    the run and earlier replicas are kept.
    """
    return [
        replicate(source, destination_parent, long_path_threshold=long_path_threshold)
        for source, destination_parent in pairs
    ]
