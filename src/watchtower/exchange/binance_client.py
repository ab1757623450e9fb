"""Binance public market-data client via ccxt async.

Wraps ccxt.async_support.binance with a per-call timeout, market caching
and async cleanup. No API key is used: every call hits a public endpoint.
Client-side rate limiting is disabled; callers pace themselves (the
scanner sleeps a fixed delay between per-pair calls).
"""

import asyncio

import ccxt.async_support as ccxt_async

from watchtower.config import ExchangeSettings
from watchtower.exceptions import FetchError
from watchtower.exchange.client import ExchangeClient
from watchtower.logging import get_logger

logger = get_logger(__name__)


class BinanceClient(ExchangeClient):
    """Concrete Binance client using ccxt async."""

    def __init__(self, settings: ExchangeSettings) -> None:
        self._settings = settings
        self._exchange = ccxt_async.binance(
            {
                "enableRateLimit": False,
                "timeout": settings.timeout_ms,
            }
        )
        self._markets: dict = {}

    async def close(self) -> None:
        """Clean up ccxt async resources. Must be called to avoid unclosed-session warnings."""
        await self._exchange.close()

    async def __aenter__(self) -> "BinanceClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def load_markets(self) -> dict:
        try:
            self._markets = await self._exchange.load_markets()
        except ccxt_async.BaseError as exc:
            raise FetchError("binance:load_markets", str(exc)) from exc
        logger.debug("binance_markets_loaded", market_count=len(self._markets))
        return self._markets

    def get_markets(self) -> dict:
        return self._markets

    async def fetch_ticker(self, symbol: str) -> dict:
        try:
            return await self._exchange.fetch_ticker(symbol)
        except ccxt_async.BaseError as exc:
            raise FetchError(f"binance:ticker:{symbol}", str(exc)) from exc

    async def fetch_tickers(self, symbols: list[str] | None = None) -> dict:
        try:
            return await self._exchange.fetch_tickers(symbols)
        except ccxt_async.BaseError as exc:
            raise FetchError("binance:tickers", str(exc)) from exc

    async def fetch_ohlcv(
        self,
        symbol: str,
        timeframe: str = "4h",
        limit: int = 60,
    ) -> list[list]:
        try:
            return await self._exchange.fetch_ohlcv(symbol, timeframe, limit=limit)
        except ccxt_async.BaseError as exc:
            raise FetchError(f"binance:ohlcv:{symbol}", str(exc)) from exc

    async def ping(self) -> bool:
        """GET /api/v3/ping bounded by ``ping_timeout``."""
        try:
            await asyncio.wait_for(
                self._exchange.public_get_ping(),
                timeout=self._settings.ping_timeout,
            )
        except (ccxt_async.BaseError, asyncio.TimeoutError):
            logger.debug("binance_ping_failed", exc_info=True)
            return False
        return True
