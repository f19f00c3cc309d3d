# Author: PB
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/test_cli.py

"""Test suite for CLI functionality."""

import errno
import importlib
import os
import shutil
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from treerep.cli import app
from treerep.core.snapshots import hash_file, hash_tree
from treerep.storage.json_store import read_json
from treerep.storage.records import ReplicationRecord

# Setup test runner
runner = CliRunner()

_real_copyfile = shutil.copyfile


@pytest.fixture(autouse=True)
def _config(isolated_config):
    return isolated_config


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep long temp paths from wrapping messages across lines."""
    # treerep.cli re-exports the `main` function, which shadows the submodule
    # in a dotted-string lookup, so patch the module object directly.
    cli_main = importlib.import_module("treerep.cli.main")
    monkeypatch.setattr(cli_main, "console", Console(width=1000))


class TestCopyCommand:

    def test_copy_basic(self, source_tree, dest_parent):
        result = runner.invoke(app, ["copy", str(source_tree), str(dest_parent)])

        assert result.exit_code == 0, result.output
        assert "Replicated" in result.output
        assert (dest_parent / "src" / "a.txt").read_text() == "hello"
        assert (dest_parent / "src" / "sub" / "b.txt").read_text() == "world"

    def test_copy_several_sources(self, source_tree, wide_tree, dest_parent):
        result = runner.invoke(app, ["copy", str(source_tree), str(wide_tree), str(dest_parent)])

        assert result.exit_code == 0, result.output
        assert hash_tree(dest_parent / "src") == hash_tree(source_tree)
        assert hash_tree(dest_parent / "project") == hash_tree(wide_tree)

    def test_copy_quiet(self, source_tree, dest_parent):
        result = runner.invoke(app, ["copy", "--quiet", str(source_tree), str(dest_parent)])
        assert result.exit_code == 0
        assert "Replicated" not in result.output

    def test_relative_destination_uses_cwd(self, source_tree, dest_parent, monkeypatch):
        monkeypatch.chdir(dest_parent.parent)
        result = runner.invoke(app, ["copy", str(source_tree), "dst"])
        assert result.exit_code == 0, result.output
        assert (dest_parent / "src" / "a.txt").exists()

    def test_needs_source_and_destination(self, dest_parent):
        result = runner.invoke(app, ["copy", str(dest_parent)])
        assert result.exit_code == 2
        assert "Need at least one SOURCE" in result.output

    def test_missing_source_reports_error(self, tmp_path, dest_parent):
        result = runner.invoke(app, ["copy", str(tmp_path / "nope"), str(dest_parent)])
        assert result.exit_code == 1
        assert "source directory does not exist" in result.output

    def test_copy_failure_rolls_back(self, source_tree, dest_parent):
        def _copyfile(src, dst, *args, **kwargs):
            if Path(src).name == "b.txt":
                raise OSError(errno.ENOSPC, os.strerror(errno.ENOSPC))
            return _real_copyfile(src, dst, *args, **kwargs)

        with patch("treerep.core.replicator.shutil.copyfile", side_effect=_copyfile):
            result = runner.invoke(app, ["copy", str(source_tree), str(dest_parent)])

        assert result.exit_code == 1
        assert "failed to copy file b.txt" in result.output
        assert "caused by" in result.output
        assert not (dest_parent / "src").exists()

    def test_second_copy_fails(self, source_tree, dest_parent):
        assert runner.invoke(app, ["copy", str(source_tree), str(dest_parent)]).exit_code == 0
        result = runner.invoke(app, ["copy", str(source_tree), str(dest_parent)])
        assert result.exit_code == 1
        assert (dest_parent / "src" / "a.txt").exists()

    def test_verify(self, source_tree, dest_parent):
        result = runner.invoke(app, ["copy", "--verify", str(source_tree), str(dest_parent)])
        assert result.exit_code == 0, result.output
        assert "verified" in result.output

    def test_verify_detects_mismatch(self, source_tree, dest_parent):
        with patch("treerep.cli.main.hash_tree", return_value="0" * 64):
            result = runner.invoke(app, ["copy", "--verify", str(source_tree), str(dest_parent)])
        assert result.exit_code == 1
        assert "does not match" in result.output

    def test_verify_from_config(self, source_tree, dest_parent, _config):
        (_config / "treerep.yml").write_text("verify_after_copy: true\n")
        result = runner.invoke(app, ["copy", str(source_tree), str(dest_parent)])
        assert result.exit_code == 0, result.output
        assert "verified" in result.output

    def test_no_verify_overrides_config(self, source_tree, dest_parent, _config):
        (_config / "treerep.yml").write_text("verify_after_copy: true\n")
        result = runner.invoke(app, ["copy", "--no-verify", str(source_tree), str(dest_parent)])
        assert result.exit_code == 0
        assert "verified" not in result.output

    def test_record(self, source_tree, dest_parent, tmp_path):
        record_file = tmp_path / "record.json"
        result = runner.invoke(
            app, ["copy", "--verify", "--record", str(record_file), str(source_tree), str(dest_parent)]
        )
        assert result.exit_code == 0, result.output

        records = read_json(record_file, list[ReplicationRecord])
        assert len(records) == 1
        assert records[0].source == source_tree
        assert records[0].destination == dest_parent / "src"
        assert records[0].tree_hash == hash_tree(source_tree)

    def test_record_keeps_replicas_made_before_a_failure(self, source_tree, wide_tree, dest_parent, tmp_path):
        record_file = tmp_path / "record.json"
        result = runner.invoke(app, [
            "copy", "--record", str(record_file),
            str(source_tree), str(tmp_path / "missing"), str(wide_tree), str(dest_parent)
        ])

        assert result.exit_code == 1
        assert "source directory does not exist" in result.output
        records = read_json(record_file, list[ReplicationRecord])
        assert [r.destination for r in records] == [dest_parent / "src"]
        assert not (dest_parent / "project").exists()

    @pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="symlinks")
    def test_copy_with_symlink_cycle(self, source_tree, dest_parent):
        (source_tree / "a_loop").symlink_to("b_loop")
        (source_tree / "b_loop").symlink_to("a_loop")

        result = runner.invoke(app, ["copy", str(source_tree), str(dest_parent)])

        assert result.exit_code == 0, result.output
        assert result.exception is None
        assert "Replicated" in result.output
        assert (dest_parent / "src" / "sub" / "b.txt").read_text() == "world"
        assert not os.path.lexists(dest_parent / "src" / "a_loop")

    def test_bad_config_exits(self, source_tree, dest_parent, _config):
        (_config / "treerep.yml").write_text("long_path_threshold: -1\n")
        result = runner.invoke(app, ["copy", str(source_tree), str(dest_parent)])
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestCheckPath:

    def test_valid(self, tmp_path):
        result = runner.invoke(app, ["check-path", str(tmp_path)])
        assert result.exit_code == 0
        assert "Path is valid" in result.output

    def test_relative(self):
        result = runner.invoke(app, ["check-path", "rel/path"])
        assert result.exit_code == 1
        assert "not absolute" in result.output


class TestHashCommand:

    def test_hash_file(self, source_tree):
        result = runner.invoke(app, ["hash", str(source_tree / "a.txt")])
        assert result.exit_code == 0
        assert hash_file(source_tree / "a.txt") in result.output

    def test_hash_tree(self, source_tree):
        result = runner.invoke(app, ["hash", str(source_tree)])
        assert result.exit_code == 0
        assert hash_tree(source_tree) in result.output

    def test_hash_missing(self, tmp_path):
        result = runner.invoke(app, ["hash", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Error hashing" in result.output


def test_version():
    with patch("treerep.cli.main.version", return_value="9.9.9"):
        result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "treerep version 9.9.9" in result.output
