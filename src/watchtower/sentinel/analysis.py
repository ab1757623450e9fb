"""Direction-aware move detection for held positions.

CRITICAL: All computations use Decimal. Percentages are in percent units
(-1.5 means -1.5%).
"""

from decimal import Decimal

from watchtower.config import SentinelSettings
from watchtower.indicators import pct_change
from watchtower.models import ActiveTrade, PricePoint, to_decimal
from watchtower.sentinel.models import SentinelAlert, SentinelLevel
from watchtower.state.rolling import find_at_or_before, samples_since

_MINUTE_MS = 60_000


def adverse_change(change: Decimal, trade: ActiveTrade) -> Decimal:
    """Change as seen by the position: negative is bad for it."""
    return change if trade.is_long else -change


def pnl_percent(current_price: Decimal, trade: ActiveTrade) -> Decimal:
    """Signed PnL % versus entry; 0 when the entry price is unknown."""
    if trade.entry_price <= 0:
        return Decimal("0")
    pnl = (current_price - trade.entry_price) / trade.entry_price * Decimal("100")
    return pnl if trade.is_long else -pnl


def classify_adverse(adverse: Decimal, settings: SentinelSettings) -> SentinelLevel | None:
    """danger at or below the danger threshold, else alert at or below the alert threshold."""
    if adverse <= settings.danger_pct:
        return SentinelLevel.DANGER
    if adverse <= settings.alert_pct:
        return SentinelLevel.ALERT
    return None


def price_range_pct(points: list[PricePoint], current_price: Decimal) -> Decimal:
    """High-low range of ``points`` as a percentage of ``current_price``."""
    if not points or current_price <= 0:
        return Decimal("0")
    prices = [p.price for p in points]
    return (max(prices) - min(prices)) / current_price * Decimal("100")


def is_volume_spike(
    recent: list[PricePoint],
    current_price: Decimal,
    ticker: dict,
    settings: SentinelSettings,
) -> bool:
    """Heuristic spike check from short-window price range and 24h ticker stats.

    Short-interval volume is not available from the ticker, so a wide
    recent price range on an active 24h market stands in for it.
    """
    if len(recent) < settings.spike_min_samples:
        return False
    if price_range_pct(recent, current_price) <= settings.spike_range_pct:
        return False
    if to_decimal(ticker.get("quoteVolume")) <= 0:
        return False
    return abs(to_decimal(ticker.get("percentage"))) > settings.spike_24h_change_pct


def evaluate_position(
    trade: ActiveTrade,
    history: list[PricePoint],
    ticker: dict,
    now_ms: int,
    settings: SentinelSettings,
) -> list[SentinelAlert]:
    """Alerts for one held position, given its updated price history.

    Needs a sample at or before the lookback target; without one the
    position is not evaluated this run.
    """
    current_price = to_decimal(ticker.get("last"))
    lookback_ms = settings.lookback_minutes * _MINUTE_MS
    reference = find_at_or_before(history, now_ms - lookback_ms)
    if reference is None or current_price <= 0:
        return []

    change = pct_change(current_price, reference.price)
    if change is None:
        return []
    pnl = pnl_percent(current_price, trade)
    coin = trade.symbol.split("/")[0]

    def build(level: SentinelLevel, message: str) -> SentinelAlert:
        return SentinelAlert(
            symbol=trade.symbol,
            direction=trade.direction,
            level=level,
            change_5m=change,
            current_price=current_price,
            entry_price=trade.entry_price,
            pnl_percent=pnl,
            message=message,
        )

    alerts: list[SentinelAlert] = []
    level = classify_adverse(adverse_change(change, trade), settings)
    if level is not None:
        move = "dropping" if trade.is_long else "pumping against short"
        sign = "+" if pnl >= 0 else ""
        alerts.append(
            build(
                level,
                f"{coin} {move} - {abs(change):.1f}% in {settings.lookback_minutes}min, "
                f"total P&L now {sign}{pnl:.1f}%",
            )
        )

    recent = samples_since(history, now_ms - lookback_ms)
    if is_volume_spike(recent, current_price, ticker, settings):
        range_pct = price_range_pct(recent, current_price)
        alerts.append(
            build(
                SentinelLevel.VOLUME_SPIKE,
                f"{coin} volume spike detected - high volatility ({range_pct:.1f}% range "
                f"in {settings.lookback_minutes}min) on active position",
            )
        )

    return alerts
