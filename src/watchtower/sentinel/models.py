"""Position Sentinel alert types."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from watchtower.models import Direction, round2


class SentinelLevel(str, Enum):
    """Alert levels raised against a held position."""

    ALERT = "alert"
    DANGER = "danger"
    VOLUME_SPIKE = "volume_spike"


@dataclass
class SentinelAlert:
    """A fast adverse move (or abnormal activity) on a held position."""

    symbol: str
    direction: Direction
    level: SentinelLevel
    change_5m: Decimal
    current_price: Decimal
    entry_price: Decimal
    pnl_percent: Decimal
    message: str

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "direction": self.direction,
            "level": self.level,
            "change5m": round2(self.change_5m),
            "currentPrice": self.current_price,
            "entryPrice": self.entry_price,
            "pnlPercent": round2(self.pnl_percent),
            "message": self.message,
        }
