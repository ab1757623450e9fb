"""Position Sentinel -- tight move detection on currently held positions."""

from watchtower.sentinel.analysis import (
    adverse_change,
    classify_adverse,
    evaluate_position,
    is_volume_spike,
    pnl_percent,
)
from watchtower.sentinel.models import SentinelAlert, SentinelLevel
from watchtower.sentinel.worker import PositionSentinel

__all__ = [
    "PositionSentinel",
    "SentinelAlert",
    "SentinelLevel",
    "adverse_change",
    "classify_adverse",
    "evaluate_position",
    "is_volume_spike",
    "pnl_percent",
]
