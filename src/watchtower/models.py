"""Shared data models for the surveillance workers.

Prices and percentages are Decimal; exchange floats are converted through
``str`` so no binary-float noise leaks into the indicator math. Timestamps
are Unix milliseconds, matching the exchange and the snapshot files.
"""

import time
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


def now_ms() -> int:
    """Current wall-clock time in Unix milliseconds."""
    return int(time.time() * 1000)


def to_decimal(value: object, default: Decimal = Decimal("0")) -> Decimal:
    """Convert an exchange/API number (float, int, str or None) to Decimal."""
    if value is None:
        return default
    try:
        return Decimal(str(value))
    except (ArithmeticError, ValueError):
        return default


def round2(value: Decimal) -> Decimal:
    """Quantize to two decimal places for snapshot output."""
    return value.quantize(Decimal("0.01"))


class Direction(str, Enum):
    """Position direction as reported by the trading board."""

    LONG = "LONG"
    SHORT = "SHORT"


@dataclass(frozen=True)
class Candle:
    """A single OHLCV candle. Immutable once fetched."""

    open_time: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal

    @classmethod
    def from_ohlcv(cls, row: list) -> "Candle":
        """Build from a ccxt OHLCV row ``[timestamp_ms, open, high, low, close, volume]``."""
        return cls(
            open_time=int(row[0]),
            open=to_decimal(row[1]),
            high=to_decimal(row[2]),
            low=to_decimal(row[3]),
            close=to_decimal(row[4]),
            volume=to_decimal(row[5]),
        )


@dataclass(frozen=True)
class PricePoint:
    """One sample of a rolling price log."""

    price: Decimal
    ts: int

    def to_dict(self) -> dict:
        return {"price": self.price, "ts": self.ts}

    @classmethod
    def from_dict(cls, data: dict) -> "PricePoint":
        return cls(price=to_decimal(data["price"]), ts=int(data["ts"]))


@dataclass
class ActiveTrade:
    """A currently held position, read from the external trading board."""

    symbol: str
    direction: Direction
    entry_price: Decimal
    position_size: Decimal

    @property
    def is_long(self) -> bool:
        return self.direction == Direction.LONG
