"""Persistent state layer -- atomic snapshot files, rolling windows, run locks."""

from watchtower.state.history import PriceHistoryStore
from watchtower.state.lock import RunLock
from watchtower.state.rolling import (
    SeenTitles,
    append_and_prune,
    find_at_or_before,
    find_for_window,
    load_points,
    prune,
    samples_since,
)
from watchtower.state.snapshot import load_json, read_json, write_json_atomic

__all__ = [
    "PriceHistoryStore",
    "RunLock",
    "SeenTitles",
    "append_and_prune",
    "find_at_or_before",
    "find_for_window",
    "load_json",
    "load_points",
    "prune",
    "read_json",
    "samples_since",
    "write_json_atomic",
]
