"""Atomic JSON snapshot files.

Every snapshot and history file has exactly one writer. Writes go to a
temporary file in the same directory and are renamed into place, so a
concurrent reader (the Health Monitor, the dashboard) sees either the old
file or the new one, never a partial write.
"""

import json
import os
import tempfile
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any

from watchtower.exceptions import SnapshotCorruptError, SnapshotMissingError
from watchtower.logging import get_logger

logger = get_logger(__name__)


def _encode(obj: Any) -> Any:
    """JSON ``default`` hook: Decimal as number, Enum as its value."""
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def write_json_atomic(path: Path, data: dict) -> None:
    """Serialize ``data`` and atomically replace ``path`` with it.

    The parent directory is created on first use. On any failure the
    temporary file is removed and the exception propagates; ``path`` is
    left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(data, indent=2, default=_encode)

    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise

    logger.debug("snapshot_written", path=str(path), bytes=len(payload))


def read_json(path: Path) -> dict:
    """Read a snapshot strictly.

    Raises:
        SnapshotMissingError: the file does not exist.
        SnapshotCorruptError: the file is unreadable, not JSON, or not an object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SnapshotMissingError(str(path)) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SnapshotCorruptError(f"{path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SnapshotCorruptError(f"{path}: {exc}") from exc

    if not isinstance(data, dict):
        raise SnapshotCorruptError(f"{path}: top-level value is not an object")
    return data


def load_json(path: Path) -> dict | None:
    """Read a worker's own prior state leniently.

    A missing or damaged state file means "start fresh", so both cases
    return None instead of raising.
    """
    try:
        return read_json(path)
    except SnapshotMissingError:
        return None
    except SnapshotCorruptError:
        logger.warning("state_file_unreadable", path=str(path), exc_info=True)
        return None
