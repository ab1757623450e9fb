"""Per-symbol rolling price history persisted as ``{"prices": {symbol: [...]}}``."""

from watchtower.models import PricePoint
from watchtower.state.rolling import append_and_prune, load_points, prune


class PriceHistoryStore:
    """Rolling price logs keyed by exchange symbol.

    Every log is sorted by timestamp and holds no sample older than
    ``window_ms`` relative to the last recorded sample.
    """

    def __init__(
        self,
        prices: dict[str, list[PricePoint]] | None = None,
        window_ms: int = 1_800_000,
    ) -> None:
        self._prices: dict[str, list[PricePoint]] = dict(prices or {})
        self._window_ms = window_ms

    @classmethod
    def from_dict(cls, data: dict | None, window_ms: int = 1_800_000) -> "PriceHistoryStore":
        raw = (data or {}).get("prices")
        if not isinstance(raw, dict):
            return cls(window_ms=window_ms)
        prices = {
            symbol: load_points(entries)
            for symbol, entries in raw.items()
            if isinstance(entries, list)
        }
        return cls(prices, window_ms)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._prices

    def get(self, symbol: str) -> list[PricePoint]:
        return self._prices.get(symbol, [])

    def record(self, symbol: str, price: PricePoint) -> list[PricePoint]:
        """Append a sample for ``symbol``, prune its log and return it."""
        points = append_and_prune(self.get(symbol), price, self._window_ms)
        self._prices[symbol] = points
        return points

    def to_dict(self, now_ms: int | None = None) -> dict:
        """Serialize; with ``now_ms``, symbols with no sample left in the window are dropped."""
        prices = self._prices
        if now_ms is not None:
            prices = {
                symbol: kept
                for symbol, points in prices.items()
                if (kept := prune(points, now_ms, self._window_ms))
            }
        return {
            "prices": {
                symbol: [p.to_dict() for p in points] for symbol, points in prices.items()
            }
        }
