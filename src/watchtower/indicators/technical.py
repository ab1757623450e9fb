"""Technical indicators over OHLCV candles: ATR, RSI, SMA, volume ratio, momentum.

All computations use Decimal. Intermediate smoothed averages are quantized
to 12 decimal places to keep Decimal representations bounded.
"""

from decimal import Decimal

from watchtower.models import Candle

#: Precision limit for smoothed intermediate results (12 decimal places).
_QUANTIZE = Decimal("0.000000000001")

_HUNDRED = Decimal("100")


def true_range(candle: Candle, prev_close: Decimal) -> Decimal:
    """max(high - low, |high - prevClose|, |low - prevClose|)."""
    return max(
        candle.high - candle.low,
        abs(candle.high - prev_close),
        abs(candle.low - prev_close),
    )


def compute_atr(candles: list[Candle]) -> Decimal:
    """Average True Range: the plain mean of every candle's true range.

    The first candle only supplies a previous close. Returns 0 with fewer
    than two candles.
    """
    if len(candles) < 2:
        return Decimal("0")
    ranges = [
        true_range(candles[i], candles[i - 1].close) for i in range(1, len(candles))
    ]
    return sum(ranges, Decimal("0")) / len(ranges)


def compute_atr_pct(candles: list[Candle]) -> Decimal:
    """ATR as a percentage of the last close (0 when the close is not positive)."""
    if not candles or candles[-1].close <= 0:
        return Decimal("0")
    return compute_atr(candles) / candles[-1].close * _HUNDRED


def compute_rsi(closes: list[Decimal], period: int = 14) -> Decimal:
    """Relative Strength Index with Wilder smoothing.

    Seeds average gain/loss with the simple mean of the first ``period``
    differences, then smooths each later difference:
        avg = (avg * (period - 1) + current) / period

    Graceful degradation: returns 50 (neutral) with fewer than period + 1
    closes. Returns exactly 100 when the average loss is zero.

    Args:
        closes: Closing prices ordered oldest-first.
        period: Lookback length. Default 14.

    Returns:
        RSI in the 0-100 range.
    """
    if len(closes) < period + 1:
        return Decimal("50")

    gains = Decimal("0")
    losses = Decimal("0")
    for i in range(1, period + 1):
        diff = closes[i] - closes[i - 1]
        if diff > 0:
            gains += diff
        else:
            losses -= diff

    avg_gain = (gains / period).quantize(_QUANTIZE)
    avg_loss = (losses / period).quantize(_QUANTIZE)

    for i in range(period + 1, len(closes)):
        diff = closes[i] - closes[i - 1]
        gain = diff if diff > 0 else Decimal("0")
        loss = -diff if diff < 0 else Decimal("0")
        avg_gain = ((avg_gain * (period - 1) + gain) / period).quantize(_QUANTIZE)
        avg_loss = ((avg_loss * (period - 1) + loss) / period).quantize(_QUANTIZE)

    if avg_loss == 0:
        return Decimal("100")
    rs = avg_gain / avg_loss
    return _HUNDRED - _HUNDRED / (1 + rs)


def compute_sma(values: list[Decimal], period: int) -> Decimal | None:
    """Simple moving average of the last ``period`` values, or None if too short."""
    if period <= 0 or len(values) < period:
        return None
    return sum(values[-period:], Decimal("0")) / period


def compute_volume_ratio(volumes: list[Decimal]) -> Decimal:
    """Last volume divided by the mean of all prior volumes.

    Returns 1 (no signal) when there is no prior volume to compare against.
    """
    if len(volumes) < 2:
        return Decimal("1")
    prior = volumes[:-1]
    avg = sum(prior, Decimal("0")) / len(prior)
    if avg <= 0:
        return Decimal("1")
    return volumes[-1] / avg


def compute_momentum_pct(closes: list[Decimal], lookback: int) -> Decimal | None:
    """Percentage change of the last close against the close ``lookback`` candles earlier.

    None when there are not enough closes or the reference close is zero.
    """
    if len(closes) < lookback + 1:
        return None
    base = closes[-(lookback + 1)]
    if base == 0:
        return None
    return (closes[-1] - base) / base * _HUNDRED


def pct_change(current: Decimal, reference: Decimal) -> Decimal | None:
    """(current - reference) / reference * 100, or None for a zero reference."""
    if reference == 0:
        return None
    return (current - reference) / reference * _HUNDRED
