"""Tests for atomic snapshot writes and strict/lenient reads."""

import json
import os
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from watchtower.exceptions import SnapshotCorruptError, SnapshotMissingError
from watchtower.models import Direction
from watchtower.state.snapshot import load_json, read_json, write_json_atomic


class TestWriteJsonAtomic:
    def test_writes_decimal_and_enum(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        write_json_atomic(path, {"price": Decimal("1.25"), "direction": Direction.SHORT})
        assert json.loads(path.read_text()) == {"price": 1.25, "direction": "SHORT"}

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "out.json"
        write_json_atomic(path, {"a": 1})
        assert read_json(path) == {"a": 1}

    def test_leaves_no_temp_file(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        write_json_atomic(path, {"a": 1})
        write_json_atomic(path, {"a": 2})
        assert os.listdir(tmp_path) == ["out.json"]
        assert read_json(path) == {"a": 2}

    def test_failed_replace_keeps_previous_file(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        write_json_atomic(path, {"version": 1})

        with patch("watchtower.state.snapshot.os.replace", side_effect=OSError("disk")):
            with pytest.raises(OSError):
                write_json_atomic(path, {"version": 2})

        assert read_json(path) == {"version": 1}
        assert os.listdir(tmp_path) == ["out.json"]

    def test_unserializable_value_raises(self, tmp_path: Path) -> None:
        with pytest.raises(TypeError):
            write_json_atomic(tmp_path / "out.json", {"bad": object()})
        assert not (tmp_path / "out.json").exists()


class TestReadJson:
    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(SnapshotMissingError):
            read_json(tmp_path / "nope.json")

    def test_corrupt(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotCorruptError):
            read_json(path)

    def test_non_object_is_corrupt(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(SnapshotCorruptError):
            read_json(path)

    def test_load_json_is_lenient(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("")
        assert load_json(tmp_path / "nope.json") is None
        assert load_json(bad) is None
