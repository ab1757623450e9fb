"""Macro Pulse data models: source readings, snapshot sections and rolling history."""

from dataclasses import dataclass, field
from decimal import Decimal

from watchtower.models import PricePoint, round2, to_decimal
from watchtower.state.rolling import load_points


@dataclass
class FearGreed:
    """Sentiment index reading with its 24h change in points."""

    value: int
    label: str
    change_24h: int

    def to_dict(self) -> dict:
        return {"value": self.value, "label": self.label, "change24h": self.change_24h}


@dataclass
class GlobalData:
    """Market-wide figures from the global market-data API."""

    btc_dominance: Decimal | None
    total_market_cap_usd: Decimal | None
    market_cap_change_24h: Decimal | None


@dataclass
class GoldQuote:
    """Safe-haven asset and primary asset from the same exchange."""

    paxg_price: Decimal
    paxg_change_24h: Decimal
    btc_price: Decimal | None
    btc_change_24h: Decimal


@dataclass
class NewsFlag:
    """A recent headline that matched a macro keyword."""

    source: str
    title: str
    keyword: str
    url: str = ""

    def to_dict(self) -> dict:
        return {"source": self.source, "title": self.title, "keyword": self.keyword, "url": self.url}


@dataclass
class MacroAlert:
    type: str
    message: str

    def to_dict(self) -> dict:
        return {"type": self.type, "message": self.message}


@dataclass
class DominanceReading:
    current: Decimal
    trend: str  # rising | falling | stable | unknown

    def to_dict(self) -> dict:
        return {"current": round2(self.current), "trend": self.trend}


@dataclass
class MarketCapReading:
    usd: Decimal
    change_24h: Decimal | None

    def to_dict(self) -> dict:
        return {
            "usd": int(self.usd),
            "change24h": round2(self.change_24h) if self.change_24h is not None else None,
        }


@dataclass
class GoldReading:
    paxg_price: Decimal
    change_1h: Decimal | None
    change_4h: Decimal | None
    btc_correlation: str  # inverse | correlated | neutral

    def to_dict(self) -> dict:
        return {
            "paxgPrice": round2(self.paxg_price),
            "change1h": round2(self.change_1h) if self.change_1h is not None else None,
            "change4h": round2(self.change_4h) if self.change_4h is not None else None,
            "btcCorrelation": self.btc_correlation,
        }


@dataclass
class MacroSnapshot:
    """One run's macro picture. A section is None when its source failed."""

    timestamp: int
    fear_greed: FearGreed | None = None
    btc_dominance: DominanceReading | None = None
    total_market_cap: MarketCapReading | None = None
    gold: GoldReading | None = None
    news_flags: list[NewsFlag] = field(default_factory=list)
    alerts: list[MacroAlert] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "fearGreed": self.fear_greed.to_dict() if self.fear_greed else None,
            "btcDominance": self.btc_dominance.to_dict() if self.btc_dominance else None,
            "totalMarketCap": (
                self.total_market_cap.to_dict() if self.total_market_cap else None
            ),
            "gold": self.gold.to_dict() if self.gold else None,
            "newsFlags": [f.to_dict() for f in self.news_flags],
            "alerts": [a.to_dict() for a in self.alerts],
        }


@dataclass
class MacroHistory:
    """Rolling state carried between runs.

    ``btc_dominance`` is the value seen by the previous run;
    ``paxg_price_log`` is the safe-haven price log pruned to the lookback window.
    """

    btc_dominance: Decimal | None = None
    paxg_price_log: list[PricePoint] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "MacroHistory":
        if not data:
            return cls()
        dominance = data.get("btcDominance")
        return cls(
            btc_dominance=to_decimal(dominance) if dominance is not None else None,
            paxg_price_log=load_points(data.get("paxgPriceLog")),
        )

    def to_dict(self) -> dict:
        return {
            "btcDominance": self.btc_dominance,
            "paxgPriceLog": [p.to_dict() for p in self.paxg_price_log],
        }
