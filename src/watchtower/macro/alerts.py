"""Macro alert classification.

Each evaluate_* function turns one source reading into its snapshot
section plus the alerts it raises. Alerts are recomputed from scratch every
run; nothing here is deduplicated across runs.
"""

from decimal import Decimal

from watchtower.config import MacroSettings
from watchtower.indicators import pct_change
from watchtower.macro.models import (
    DominanceReading,
    FearGreed,
    GlobalData,
    GoldQuote,
    GoldReading,
    MacroAlert,
    MarketCapReading,
    NewsFlag,
)
from watchtower.models import PricePoint
from watchtower.state.rolling import find_for_window, prune

_HOUR_MS = 3_600_000


def evaluate_fear_greed(reading: FearGreed, threshold: int = 8) -> list[MacroAlert]:
    """Alert when the sentiment index moved more than ``threshold`` points in 24h."""
    if abs(reading.change_24h) <= threshold:
        return []
    verb = "dropped" if reading.change_24h < 0 else "jumped"
    return [
        MacroAlert(
            type="fear_shift",
            message=(
                f"Fear & Greed {verb} {abs(reading.change_24h)} points in 24h - "
                f"now {reading.label} ({reading.value})"
            ),
        )
    ]


def dominance_trend(
    current: Decimal, previous: Decimal | None, threshold: Decimal = Decimal("0.3")
) -> str:
    """rising / falling beyond ``threshold`` points, else stable; unknown without history."""
    if previous is None:
        return "unknown"
    if current > previous + threshold:
        return "rising"
    if current < previous - threshold:
        return "falling"
    return "stable"


def evaluate_dominance(
    current: Decimal,
    previous: Decimal | None,
    settings: MacroSettings,
) -> tuple[DominanceReading, list[MacroAlert]]:
    """Dominance section plus an alert on a swing larger than the alert threshold."""
    reading = DominanceReading(
        current=current,
        trend=dominance_trend(current, previous, settings.dominance_trend_points),
    )
    if previous is None or abs(current - previous) <= settings.dominance_alert_points:
        return reading, []

    direction = "rising" if current > previous else "falling"
    implication = "alt bleed likely" if direction == "rising" else "alt season vibes"
    return reading, [
        MacroAlert(
            type=f"dominance_{direction}",
            message=f"BTC dominance {direction} to {current:.1f}% - {implication}",
        )
    ]


def evaluate_market_cap(
    data: GlobalData, drop_pct: Decimal = Decimal("-5")
) -> tuple[MarketCapReading | None, list[MacroAlert]]:
    """Market-cap section plus an alert when the 24h change is at or below ``drop_pct``."""
    if data.total_market_cap_usd is None:
        return None, []
    reading = MarketCapReading(
        usd=data.total_market_cap_usd, change_24h=data.market_cap_change_24h
    )
    change = data.market_cap_change_24h
    if change is None or change > drop_pct:
        return reading, []
    return reading, [
        MacroAlert(
            type="market_cap_drop",
            message=f"Total crypto market cap down {abs(change):.1f}% in 24h - macro event",
        )
    ]


def gold_correlation(
    paxg_change: Decimal, btc_change: Decimal, move_pct: Decimal = Decimal("2")
) -> str:
    """inverse (gold up, BTC down), correlated (both up) or neutral."""
    gold_up = paxg_change > move_pct
    if gold_up and btc_change < -move_pct:
        return "inverse"
    if gold_up and btc_change > move_pct:
        return "correlated"
    return "neutral"


def evaluate_gold(
    quote: GoldQuote,
    price_log: list[PricePoint],
    now_ms: int,
    settings: MacroSettings,
) -> tuple[GoldReading, list[MacroAlert], list[PricePoint]]:
    """Gold section, flight-to-safety alert and the updated price log.

    The 1h/4h deltas are looked up before the log is pruned, so the sample
    that sits just past the 4h mark is still available for the 4h delta.
    The returned log is pruned to the configured window.
    """
    window_ms = settings.price_log_window_hours * _HOUR_MS
    tolerance = float(settings.lookup_tolerance)
    sample = PricePoint(price=quote.paxg_price, ts=now_ms)
    log = sorted([*price_log, sample], key=lambda p: p.ts)

    changes: dict[int, Decimal | None] = {}
    for hours in (1, 4):
        reference = find_for_window(log, now_ms, hours * _HOUR_MS, tolerance)
        changes[hours] = (
            pct_change(quote.paxg_price, reference.price) if reference else None
        )

    reading = GoldReading(
        paxg_price=quote.paxg_price,
        change_1h=changes[1],
        change_4h=changes[4],
        btc_correlation=gold_correlation(
            quote.paxg_change_24h, quote.btc_change_24h, settings.gold_move_pct
        ),
    )

    alerts: list[MacroAlert] = []
    if reading.btc_correlation == "inverse":
        alerts.append(
            MacroAlert(
                type="flight_to_safety",
                message=(
                    f"Gold (PAXG) up {quote.paxg_change_24h:.1f}% while BTC down "
                    f"{abs(quote.btc_change_24h):.1f}% - flight to safety"
                ),
            )
        )

    return reading, alerts, prune(log, now_ms, window_ms)


def news_alerts(flags: list[NewsFlag]) -> list[MacroAlert]:
    """One alert per flagged headline."""
    return [
        MacroAlert(
            type="news_keyword",
            message=f'[{flag.source}] "{flag.title}" (keyword: {flag.keyword})',
        )
        for flag in flags
    ]
