"""Market Pulse -- crash and breakout detection over the watched symbols."""

from watchtower.pulse.classify import SEVERITY, MoveAlert, classify_move, strongest
from watchtower.pulse.worker import MarketPulseMonitor, analyze_symbol, watched_symbols

__all__ = [
    "SEVERITY",
    "MarketPulseMonitor",
    "MoveAlert",
    "analyze_symbol",
    "classify_move",
    "strongest",
    "watched_symbols",
]
