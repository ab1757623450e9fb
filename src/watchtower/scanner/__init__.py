"""Opportunity Scanner -- ranks every viable pair into a scored watchlist."""

from watchtower.scanner.models import CoinScore
from watchtower.scanner.scoring import (
    build_reason,
    score_momentum,
    score_pair,
    score_technical,
    score_volatility,
    score_volume,
)
from watchtower.scanner.watchlist import (
    build_watchlist,
    listed_pairs,
    quote_pairs,
    select_candidates,
)
from watchtower.scanner.worker import OpportunityScanner

__all__ = [
    "CoinScore",
    "OpportunityScanner",
    "build_reason",
    "build_watchlist",
    "listed_pairs",
    "quote_pairs",
    "score_momentum",
    "score_pair",
    "score_technical",
    "score_volatility",
    "score_volume",
    "select_candidates",
]
