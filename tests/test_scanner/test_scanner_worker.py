"""Tests for the OpportunityScanner run against a mocked exchange."""

import json
from unittest.mock import AsyncMock

import pytest

from watchtower.exceptions import FetchError, WorkerSkipped
from watchtower.scanner.worker import OpportunityScanner


def _market(base: str) -> dict:
    return {"base": base, "quote": "USDT", "active": True, "spot": True}


MARKETS = {
    "BTC/USDT": _market("BTC"),
    "ETH/USDT": _market("ETH"),
    "SOL/USDT": _market("SOL"),
    "PAXG/USDT": _market("PAXG"),
    "XYZ/USDT": _market("XYZ"),
    "THIN/USDT": _market("THIN"),
    "TINY/USDT": _market("TINY"),
    "USDC/USDT": _market("USDC"),  # stablecoin base, counted but never scanned
}

TICKERS = {
    "BTC/USDT": {"quoteVolume": 3e9},
    "ETH/USDT": {"quoteVolume": 1e9},
    "SOL/USDT": {"quoteVolume": 4e8},
    "PAXG/USDT": {"quoteVolume": 2e7},
    "XYZ/USDT": {"quoteVolume": 6e6},
    "THIN/USDT": {"quoteVolume": 2e6},
    "TINY/USDT": {"quoteVolume": 10},  # below the floor
}


@pytest.fixture
def exchange(mock_exchange: AsyncMock, ohlcv_rows) -> AsyncMock:
    async def fetch_ohlcv(symbol: str, timeframe: str = "4h", limit: int = 60) -> list:
        if symbol == "SOL/USDT":
            raise FetchError("binance:ohlcv:SOL/USDT", "timeout")
        if symbol == "THIN/USDT":
            return ohlcv_rows([1.0] * 5)
        return ohlcv_rows([100 + i for i in range(limit)])

    mock_exchange.load_markets = AsyncMock(return_value=MARKETS)
    mock_exchange.fetch_tickers = AsyncMock(return_value=TICKERS)
    mock_exchange.fetch_ohlcv = AsyncMock(side_effect=fetch_ohlcv)
    return mock_exchange


class TestOpportunityScanner:
    @pytest.mark.asyncio
    async def test_run_writes_snapshot(self, exchange, scanner_settings, paths) -> None:
        scanner = OpportunityScanner(exchange, scanner_settings, paths)
        output = await scanner.run()

        written = json.loads(paths.file(scanner_settings.output_file).read_text())
        assert written["totalScanned"] == 8
        assert written["filteredByVolume"] == 6
        assert written == json.loads(json.dumps(output, default=float))

        symbols = [c["symbol"] for c in written["watchlist"]]
        # SOL errored, THIN has too few candles: both skipped, not failed
        assert "SOL/USDT" not in symbols
        assert "THIN/USDT" not in symbols
        assert symbols[:2] == ["BTC/USDT", "ETH/USDT"]
        assert symbols[-1] == "PAXG/USDT"
        assert "isCore" not in written["watchlist"][0]

    @pytest.mark.asyncio
    async def test_requests_fixed_window(self, exchange, scanner_settings, paths) -> None:
        await OpportunityScanner(exchange, scanner_settings, paths).scan()
        exchange.fetch_ohlcv.assert_any_await("BTC/USDT", timeframe="4h", limit=60)

    @pytest.mark.asyncio
    async def test_nothing_scored_is_skipped(
        self, mock_exchange, scanner_settings, paths
    ) -> None:
        mock_exchange.load_markets = AsyncMock(return_value={"XYZ/USDT": _market("XYZ")})
        mock_exchange.fetch_tickers = AsyncMock(return_value={"XYZ/USDT": {"quoteVolume": 5e6}})
        mock_exchange.fetch_ohlcv = AsyncMock(return_value=[])

        with pytest.raises(WorkerSkipped):
            await OpportunityScanner(mock_exchange, scanner_settings, paths).run()
        assert not paths.file(scanner_settings.output_file).exists()
