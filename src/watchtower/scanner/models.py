"""Opportunity Scanner data models."""

from dataclasses import dataclass
from decimal import Decimal

from watchtower.models import round2


@dataclass
class CoinScore:
    """Scored tradable pair.

    ``score`` is the sum of four independently capped sub-scores (volume,
    volatility, technical, momentum). ``is_core``/``is_hedge`` only steer
    watchlist assembly and are not part of the published snapshot.
    """

    symbol: str
    score: int
    volume_24h: Decimal
    atr_pct: Decimal
    rsi: Decimal
    momentum_pct: Decimal  # 10-candle momentum, 0 when not computable
    reason: str = ""
    is_core: bool = False
    is_hedge: bool = False

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "score": self.score,
            "volume24h": int(self.volume_24h),
            "atrPct": round2(self.atr_pct),
            "rsi": self.rsi.quantize(Decimal("0.1")),
            "momentumPct": round2(self.momentum_pct),
            "reason": self.reason,
        }
