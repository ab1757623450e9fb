"""Short-window move classification for the market pulse.

The benchmark symbol gets tighter thresholds than the rest of the
watchlist, in both directions.
"""

from dataclasses import dataclass
from decimal import Decimal

from watchtower.models import round2

SEVERITY: dict[str, int] = {
    "alert": 0,
    "crash": 1,
    "breakout": 1,
    "flash_crash": 2,
    "mega_breakout": 2,
}


@dataclass
class MoveAlert:
    """A classified move on one symbol."""

    symbol: str
    level: str
    direction: str  # up | down
    change_5m: Decimal | None
    change_15m: Decimal | None
    current_price: Decimal

    @property
    def severity(self) -> int:
        return SEVERITY.get(self.level, 0)

    def describe(self) -> str:
        """``"ETH +5.21% in 15m"``; the larger of the two windows is reported."""
        coin = self.symbol.split("/")[0]
        use_15m = self.change_15m is not None and abs(self.change_15m) > abs(
            self.change_5m or 0
        )
        change = self.change_15m if use_15m else self.change_5m
        window = "15m" if use_15m else "5m"
        change = round2(change or Decimal("0"))
        sign = "+" if change > 0 else ""
        return f"{coin} {sign}{change}% in {window}"

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "change5m": round2(self.change_5m) if self.change_5m is not None else None,
            "change15m": round2(self.change_15m) if self.change_15m is not None else None,
            "currentPrice": self.current_price,
        }


def _le(value: Decimal | None, threshold: int) -> bool:
    return value is not None and value <= threshold


def _ge(value: Decimal | None, threshold: int) -> bool:
    return value is not None and value >= threshold


def classify_move(
    change_5m: Decimal | None,
    change_15m: Decimal | None,
    is_benchmark: bool = False,
) -> tuple[str, str] | None:
    """Return ``(level, direction)`` for a move, or None when it is unremarkable.

    Downside is checked first, so a symbol that somehow trips both
    directions is reported as a crash.
    """
    if is_benchmark and _le(change_5m, -5):
        return "flash_crash", "down"
    if _le(change_15m, -5) or (is_benchmark and _le(change_15m, -3)):
        return "crash", "down"
    if is_benchmark and _le(change_5m, -3):
        return "crash", "down"
    if _le(change_5m, -3) or (is_benchmark and _le(change_5m, -2)):
        return "alert", "down"

    if is_benchmark and _ge(change_5m, 5):
        return "mega_breakout", "up"
    if _ge(change_15m, 5) or (is_benchmark and _ge(change_15m, 3)):
        return "breakout", "up"
    if is_benchmark and _ge(change_5m, 3):
        return "breakout", "up"
    if _ge(change_5m, 3) or (is_benchmark and _ge(change_5m, 2)):
        return "alert", "up"

    return None


def strongest(alerts: list[MoveAlert]) -> MoveAlert:
    """Most severe alert; ties keep the first one seen. ``alerts`` must be non-empty."""
    return max(alerts, key=lambda a: a.severity)
