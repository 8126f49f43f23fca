"""
Unit tests for the checkpoint store
"""

import logging
from pathlib import Path

import pytest
from core.exceptions import CheckpointError
from ingestion.checkpoint import FileCheckpointStore, checkpoint_path_for


class TestCheckpointPath:

    def test_derived_from_input_name(self):
        assert checkpoint_path_for("data/places.csv") == Path("data/places_progress.txt")

    def test_custom_suffix(self):
        assert checkpoint_path_for("/srv/in/bd.csv", ".ckpt") == Path("/srv/in/bd.ckpt")

    def test_distinct_inputs_do_not_share(self):
        assert checkpoint_path_for("a.csv") != checkpoint_path_for("b.csv")


class TestFileCheckpointStore:

    def test_read_missing_returns_none(self, tmp_path):
        assert FileCheckpointStore(tmp_path / "none.txt").read() is None

    def test_write_then_read(self, tmp_path):
        store = FileCheckpointStore(tmp_path / "places_progress.txt")

        assert store.write("P42") is True
        assert store.read() == "P42"
        assert store.write("P43") is True
        assert store.read() == "P43"

    def test_read_strips_whitespace(self, tmp_path):
        path = tmp_path / "ckpt.txt"
        path.write_text("  P7\n")

        assert FileCheckpointStore(path).read() == "P7"

    def test_blank_file_means_no_checkpoint(self, tmp_path):
        path = tmp_path / "ckpt.txt"
        path.write_text("\n")

        assert FileCheckpointStore(path).read() is None

    def test_unreadable_checkpoint_raises(self, tmp_path):
        # a directory where the file should be
        path = tmp_path / "ckpt.txt"
        path.mkdir()

        with pytest.raises(CheckpointError):
            FileCheckpointStore(path).read()

    def test_write_failure_is_logged_not_raised(self, tmp_path, caplog):
        store = FileCheckpointStore(tmp_path / "missing_dir" / "ckpt.txt")

        with caplog.at_level(logging.WARNING, logger="ingestion.checkpoint"):
            assert store.write("P1") is False

        assert "Error updating progress file" in caplog.text

    def test_clear(self, tmp_path):
        store = FileCheckpointStore(tmp_path / "ckpt.txt")
        store.write("P1")

        store.clear()
        store.clear()

        assert store.read() is None
