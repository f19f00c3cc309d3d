# Author: PB
# Maintainer: PB
# Original date: 2026.10.14
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/storage/json_store.py

"""
Single-object JSON persistence at an absolute path.

Objects are encoded with orjson; pydantic models are dumped in JSON mode
first. Reads can be checked against a target type through a pydantic
TypeAdapter, so a file holding the wrong shape fails loudly instead of
returning a dict the caller did not expect.
"""

import os
import tempfile
from pathlib import Path
from typing import Any, Optional, TypeVar

import orjson
from pydantic import BaseModel, TypeAdapter, ValidationError

from treerep.data.path_validation import is_valid_absolute_path
from treerep.system.exceptions import InvalidArgumentError, StorageIOError

T = TypeVar("T")

_INVALID_PATH = "path contains invalid characters or is not absolute"


def _default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    if isinstance(obj, os.PathLike):
        return os.fspath(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def save_json(obj: Any, absolute_path) -> None:
    """Serialize ``obj`` to JSON and write it to ``absolute_path``.

    The file is replaced atomically: a crash mid-write leaves either the old
    content or the new, never a truncated file.

    Raises:
        InvalidArgumentError: obj or path is None, the path is not a valid
            absolute path, or obj cannot be serialized
        StorageIOError: The file could not be written
    """
    if obj is None:
        raise InvalidArgumentError("obj must not be None")
    if absolute_path is None:
        raise InvalidArgumentError("absolute_path must not be None")
    if not is_valid_absolute_path(absolute_path):
        raise InvalidArgumentError(_INVALID_PATH)

    try:
        payload = orjson.dumps(obj, default=_default)
    except TypeError as e:
        raise InvalidArgumentError(f"object cannot be serialized to JSON: {e}") from e

    final_path = Path(os.path.abspath(absolute_path))
    temp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb", dir=final_path.parent, prefix=f".{final_path.name}.", suffix=".tmp", delete=False
        ) as f:
            temp_name = f.name
            f.write(payload)
        os.replace(temp_name, final_path)
    except OSError as e:
        if temp_name is not None and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise StorageIOError(f"failed to save object to {absolute_path}", path=str(absolute_path)) from e


def read_json(absolute_path, result_type: Optional[type[T]] = None) -> T:
    """Read and decode the JSON object stored at ``absolute_path``.

    Args:
        absolute_path: Absolute path of the file to read
        result_type: Optional type the content must validate against

    Raises:
        InvalidArgumentError: Bad path, undecodable JSON, or content that
            does not match result_type
        StorageIOError: The file could not be read
    """
    if absolute_path is None:
        raise InvalidArgumentError("absolute_path must not be None")
    if not is_valid_absolute_path(absolute_path):
        raise InvalidArgumentError(_INVALID_PATH)

    try:
        raw = Path(absolute_path).read_bytes()
    except OSError as e:
        raise StorageIOError(f"failed to read file {absolute_path}", path=str(absolute_path)) from e

    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise InvalidArgumentError(f"file {absolute_path} does not contain valid JSON") from e

    if result_type is None:
        return data

    try:
        return TypeAdapter(result_type).validate_python(data)
    except ValidationError as e:
        raise InvalidArgumentError("stored content does not match the requested type") from e
