"""Macro Pulse Monitor -- sentiment, dominance, market cap, safe-haven and headline alerts."""

from watchtower.macro.alerts import (
    dominance_trend,
    evaluate_dominance,
    evaluate_fear_greed,
    evaluate_gold,
    evaluate_market_cap,
    gold_correlation,
    news_alerts,
)
from watchtower.macro.models import MacroAlert, MacroHistory, MacroSnapshot
from watchtower.macro.sources import MacroSources
from watchtower.macro.worker import MacroPulseMonitor

__all__ = [
    "MacroAlert",
    "MacroHistory",
    "MacroPulseMonitor",
    "MacroSnapshot",
    "MacroSources",
    "dominance_trend",
    "evaluate_dominance",
    "evaluate_fear_greed",
    "evaluate_gold",
    "evaluate_market_cap",
    "gold_correlation",
    "news_alerts",
]
