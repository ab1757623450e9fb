"""Opportunity scoring for the watchlist scanner.

Four sub-scores, each capped on its own before they are summed:

  volume      5-25   step function of 24h quote volume
  volatility  5-25   ATR % of last close, rewarding the ideal band
  technical   0-25   RSI extremes, SMA20 proximity, SMA7/SMA20 cross, volume surge
  momentum    0-25   |10-candle| and |1-candle| price change

The maximum total is bounded by the caps (100), not normalized.
"""

from decimal import Decimal

from watchtower.config import ScannerSettings
from watchtower.indicators import (
    compute_atr_pct,
    compute_momentum_pct,
    compute_rsi,
    compute_sma,
    compute_volume_ratio,
)
from watchtower.models import Candle
from watchtower.scanner.models import CoinScore

SUB_SCORE_CAP = 25

_VOLUME_TIERS: list[tuple[Decimal, int]] = [
    (Decimal("100000000"), 25),
    (Decimal("50000000"), 20),
    (Decimal("20000000"), 15),
    (Decimal("5000000"), 10),
]
_MEGA_VOLUME = Decimal("100000000")
_STRONG_VOLUME = Decimal("20000000")

_RSI_OVERSOLD = Decimal("35")
_RSI_OVERBOUGHT = Decimal("65")
_SMA20_PROXIMITY = Decimal("0.03")
_VOLUME_SURGE_RATIO = Decimal("1.3")

_MOMENTUM_STRONG = Decimal("5")
_MOMENTUM_MODERATE = Decimal("3")
_MOMENTUM_CANDLE = Decimal("3")


def score_volume(volume_24h: Decimal) -> int:
    """Step score for 24h quote volume: 25/20/15/10 by tier, 5 below $5M."""
    for floor, points in _VOLUME_TIERS:
        if volume_24h >= floor:
            return points
    return 5


def score_volatility(
    atr_pct: Decimal,
    ideal_min: Decimal = Decimal("3"),
    ideal_max: Decimal = Decimal("8"),
) -> int:
    """Reward ATR% inside the ideal band over too-quiet or too-wild pairs."""
    if ideal_min <= atr_pct <= ideal_max:
        return 25
    if Decimal("1") < atr_pct < ideal_min:
        return 15
    if atr_pct > ideal_max:
        return 10
    return 5


def score_technical(
    rsi: Decimal,
    close: Decimal,
    volume_ratio: Decimal,
    sma7: Decimal | None,
    sma20: Decimal | None,
    sma7_prev: Decimal | None,
    sma20_prev: Decimal | None,
) -> int:
    """Points for RSI extremes, SMA20 proximity, a fresh SMA cross and a volume surge.

    A cross is "fresh" when the previous candle's SMA7/SMA20 ordering differs
    from the current one. Golden and death crosses each earn points.
    """
    points = 0
    if rsi < _RSI_OVERSOLD or rsi > _RSI_OVERBOUGHT:
        points += 10
    if sma20 and abs(close - sma20) / sma20 <= _SMA20_PROXIMITY:
        points += 5
    if sma7 and sma20 and sma7_prev and sma20_prev:
        if sma7_prev <= sma20_prev and sma7 > sma20:
            points += 5
        if sma7_prev >= sma20_prev and sma7 < sma20:
            points += 5
    if volume_ratio > _VOLUME_SURGE_RATIO:
        points += 5
    return min(points, SUB_SCORE_CAP)


def score_momentum(closes: list[Decimal]) -> int:
    """Points for a large 10-candle move and a large last-candle move."""
    points = 0
    mom10 = compute_momentum_pct(closes, 10)
    if mom10 is not None:
        if abs(mom10) > _MOMENTUM_STRONG:
            points += 15
        elif abs(mom10) > _MOMENTUM_MODERATE:
            points += 10
    mom1 = compute_momentum_pct(closes, 1)
    if mom1 is not None and abs(mom1) > _MOMENTUM_CANDLE:
        points += 10
    return min(points, SUB_SCORE_CAP)


def build_reason(
    coin: CoinScore,
    ideal_min: Decimal = Decimal("3"),
    ideal_max: Decimal = Decimal("8"),
) -> str:
    """Human-readable summary of which conditions fired."""
    parts: list[str] = []
    if coin.is_core:
        parts.append("Core holding")
    if coin.is_hedge:
        parts.append("Gold hedge")
    if coin.volume_24h >= _MEGA_VOLUME:
        parts.append("mega volume")
    elif coin.volume_24h >= _STRONG_VOLUME:
        parts.append("strong volume")
    if ideal_min <= coin.atr_pct <= ideal_max:
        parts.append("ideal volatility")
    elif coin.atr_pct > ideal_max:
        parts.append("high volatility")
    if coin.rsi < _RSI_OVERSOLD:
        parts.append("oversold")
    elif coin.rsi > _RSI_OVERBOUGHT:
        parts.append("overbought momentum")
    if abs(coin.momentum_pct) > _MOMENTUM_STRONG:
        parts.append(f"{coin.momentum_pct:+.2f}% move")
    return ", ".join(parts) or "Solid technicals"


def score_pair(
    symbol: str,
    candles: list[Candle],
    volume_24h: Decimal,
    settings: ScannerSettings,
) -> CoinScore | None:
    """Compute indicators and the composite score for one pair.

    Returns None when fewer than ``settings.min_candles`` candles are
    available; such pairs are skipped, not failed.
    """
    if len(candles) < settings.min_candles:
        return None

    closes = [c.close for c in candles]
    volumes = [c.volume for c in candles]

    atr_pct = compute_atr_pct(candles)
    rsi = compute_rsi(closes)
    sma7 = compute_sma(closes, 7)
    sma20 = compute_sma(closes, 20)
    sma7_prev = compute_sma(closes[:-1], 7)
    sma20_prev = compute_sma(closes[:-1], 20)
    volume_ratio = compute_volume_ratio(volumes)
    momentum = compute_momentum_pct(closes, 10) or Decimal("0")

    score = (
        score_volume(volume_24h)
        + score_volatility(atr_pct, settings.ideal_atr_min, settings.ideal_atr_max)
        + score_technical(
            rsi, closes[-1], volume_ratio, sma7, sma20, sma7_prev, sma20_prev
        )
        + score_momentum(closes)
    )

    coin = CoinScore(
        symbol=symbol,
        score=score,
        volume_24h=volume_24h,
        atr_pct=atr_pct,
        rsi=rsi,
        momentum_pct=momentum,
        is_core=symbol in settings.core_symbols,
        is_hedge=symbol == settings.hedge_symbol,
    )
    coin.reason = build_reason(coin, settings.ideal_atr_min, settings.ideal_atr_max)
    return coin
