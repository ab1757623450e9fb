"""Opportunity Scanner worker.

Scans every tradable pair quoted in the reference currency, scores each one
from a fixed OHLCV window and publishes a ranked watchlist snapshot.

Per-pair failures never abort the run: a pair that errors or returns too
few candles is skipped. Calls are paced with a fixed delay between pairs.
"""

import asyncio
import time

from watchtower.config import AppSettings, PathSettings, ScannerSettings
from watchtower.exceptions import FetchError, WorkerSkipped
from watchtower.exchange.binance_client import BinanceClient
from watchtower.exchange.client import ExchangeClient
from watchtower.logging import get_logger
from watchtower.models import Candle, now_ms
from watchtower.runtime import launch
from watchtower.scanner.models import CoinScore
from watchtower.scanner.scoring import score_pair
from watchtower.scanner.watchlist import (
    build_watchlist,
    listed_pairs,
    quote_pairs,
    quote_volume,
    select_candidates,
)
from watchtower.state.snapshot import write_json_atomic

logger = get_logger(__name__)

_PROGRESS_EVERY = 25


class OpportunityScanner:
    """Ranks all viable pairs into a scored watchlist.

    Args:
        exchange: Market-data exchange client.
        settings: Universe filters, OHLCV window and scoring bands.
        paths: Data directory for the snapshot file.
    """

    def __init__(
        self,
        exchange: ExchangeClient,
        settings: ScannerSettings,
        paths: PathSettings,
    ) -> None:
        self._exchange = exchange
        self._settings = settings
        self._paths = paths

    async def scan(self) -> dict:
        """Fetch, score and assemble the watchlist. Does not write anything.

        Raises:
            FetchError: the market list or the ticker batch is unavailable.
            WorkerSkipped: no pair could be scored.
        """
        markets = await self._exchange.load_markets()
        listed = listed_pairs(markets, self._settings)
        universe = quote_pairs(markets, self._settings)
        tickers = await self._exchange.fetch_tickers(universe) if universe else {}
        candidates = select_candidates(universe, tickers, markets, self._settings)

        logger.debug(
            "scanner_universe",
            listed_pairs=len(listed),
            quote_pairs=len(universe),
            candidates=len(candidates),
        )

        started = time.monotonic()
        results: list[CoinScore] = []
        for i, symbol in enumerate(candidates, 1):
            coin = await self._score_symbol(symbol, tickers.get(symbol))
            if coin is not None:
                results.append(coin)
            if i % _PROGRESS_EVERY == 0:
                logger.debug("scanner_progress", scanned=i, total=len(candidates))
            await asyncio.sleep(self._settings.rate_limit_seconds)

        if not results:
            raise WorkerSkipped("no viable symbols")

        watchlist = build_watchlist(results, self._settings.max_others)
        logger.debug(
            "scanner_scored",
            scored=len(results),
            duration_seconds=round(time.monotonic() - started, 1),
        )

        return {
            "timestamp": now_ms(),
            "totalScanned": len(listed),
            "filteredByVolume": len(candidates),
            "watchlist": [c.to_dict() for c in watchlist],
        }

    async def run(self) -> dict:
        """Scan and overwrite the scanner snapshot."""
        output = await self.scan()
        path = self._paths.file(self._settings.output_file)
        write_json_atomic(path, output)
        logger.info(
            "scanner_watchlist_saved",
            coins=len(output["watchlist"]),
            top=[c["symbol"] for c in output["watchlist"][:5]],
            path=str(path),
        )
        return output

    async def _score_symbol(self, symbol: str, ticker: dict | None) -> CoinScore | None:
        try:
            rows = await self._exchange.fetch_ohlcv(
                symbol,
                timeframe=self._settings.ohlcv_timeframe,
                limit=self._settings.ohlcv_limit,
            )
            candles = [Candle.from_ohlcv(row) for row in rows or []]
        except (FetchError, IndexError, TypeError, ValueError):
            logger.debug("scanner_pair_skipped", symbol=symbol, exc_info=True)
            return None
        return score_pair(symbol, candles, quote_volume(ticker), self._settings)


async def run_scanner(settings: AppSettings) -> None:
    async with BinanceClient(settings.exchange) as exchange:
        await OpportunityScanner(exchange, settings.scanner, settings.paths).run()


def main() -> None:
    """Console entry point."""
    launch("scanner", run_scanner)
