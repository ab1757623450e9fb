"""Abstract exchange client interface.

Defines the contract for the market-data exchange. Workers depend only on
this interface, keeping Binance/ccxt details isolated in the concrete
implementation. Implementations raise FetchError for every transport,
timeout or exchange-side failure.
"""

from abc import ABC, abstractmethod


class ExchangeClient(ABC):
    """Abstract base class for read-only exchange API clients."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP session."""
        ...

    @abstractmethod
    async def load_markets(self) -> dict:
        """Load and cache market/instrument data from the exchange."""
        ...

    @abstractmethod
    def get_markets(self) -> dict:
        """Return the markets dict cached by load_markets()."""
        ...

    @abstractmethod
    async def fetch_ticker(self, symbol: str) -> dict:
        """Fetch current ticker data for a single symbol."""
        ...

    @abstractmethod
    async def fetch_tickers(self, symbols: list[str] | None = None) -> dict:
        """Fetch ticker data for multiple symbols in one batched call."""
        ...

    @abstractmethod
    async def fetch_ohlcv(
        self,
        symbol: str,
        timeframe: str = "4h",
        limit: int = 60,
    ) -> list[list]:
        """Fetch OHLCV candle data.

        Returns list of [timestamp_ms, open, high, low, close, volume],
        oldest first.
        """
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Hit the lightweight connectivity endpoint. Never raises."""
        ...
