# Author: PB
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/conftest.py

"""
Shared test fixtures for treerep test suite.
"""

import sys
from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture
def source_tree(tmp_path) -> Path:
    """src/ with a.txt ("hello") and sub/b.txt ("world")."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.txt").write_text("hello")
    (src / "sub").mkdir()
    (src / "sub" / "b.txt").write_text("world")
    return src


@pytest.fixture
def dest_parent(tmp_path) -> Path:
    """Existing, empty destination parent."""
    dst = tmp_path / "dst"
    dst.mkdir()
    return dst


@pytest.fixture
def wide_tree(tmp_path) -> Path:
    """A larger tree: several levels, files at every level, one empty directory."""
    root = tmp_path / "project"
    root.mkdir()
    for i in range(3):
        level1 = root / f"dir{i}"
        level1.mkdir()
        (level1 / f"data{i}.csv").write_bytes(b"x,y\n" * (i + 1))
        for j in range(2):
            level2 = level1 / f"nested{j}"
            level2.mkdir()
            (level2 / "blob.bin").write_bytes(bytes(range(256)) * (j + 1))
    (root / "empty").mkdir()
    (root / "README").write_text("top level\n")
    return root


@pytest.fixture
def isolated_config(tmp_path, monkeypatch) -> Path:
    """Point every config search location at an empty temp directory.

    Returns the TREEREP_CONFIG_HOME directory; write treerep.yml there to
    configure a test.
    """
    home = tmp_path / "home"
    home.mkdir()
    config_home = tmp_path / "config-home"
    config_home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("TREEREP_CONFIG_HOME", str(config_home))
    return config_home



@pytest.fixture(autouse=True)
def reset_loguru():
    """Drop sinks added during a test so they never outlive captured streams."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
