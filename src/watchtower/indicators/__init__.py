"""Technical indicator functions shared by the scanner and the price monitors."""

from watchtower.indicators.technical import (
    compute_atr,
    compute_atr_pct,
    compute_momentum_pct,
    compute_rsi,
    compute_sma,
    compute_volume_ratio,
    pct_change,
    true_range,
)

__all__ = [
    "compute_atr",
    "compute_atr_pct",
    "compute_momentum_pct",
    "compute_rsi",
    "compute_sma",
    "compute_volume_ratio",
    "pct_change",
    "true_range",
]
