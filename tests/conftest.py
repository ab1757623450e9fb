"""Shared test fixtures for the surveillance workers."""

from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from watchtower.config import (
    AppSettings,
    HealthSettings,
    MacroSettings,
    NewsSettings,
    PathSettings,
    PulseSettings,
    ScannerSettings,
    SentinelSettings,
)
from watchtower.models import Candle

#: Fixed "now" for deterministic time-window tests (2024-01-01T00:00:00Z).
NOW_MS = 1_704_067_200_000
MINUTE_MS = 60_000


@pytest.fixture
def paths(tmp_path: Path) -> PathSettings:
    """PathSettings rooted in a per-test temporary data directory."""
    return PathSettings(data_dir=tmp_path, use_run_lock=True)


@pytest.fixture
def scanner_settings() -> ScannerSettings:
    return ScannerSettings(rate_limit_seconds=0)


@pytest.fixture
def macro_settings() -> MacroSettings:
    return MacroSettings()


@pytest.fixture
def sentinel_settings(tmp_path: Path) -> SentinelSettings:
    return SentinelSettings(credentials_file=tmp_path / ".env.test")


@pytest.fixture
def news_settings() -> NewsSettings:
    return NewsSettings()


@pytest.fixture
def pulse_settings() -> PulseSettings:
    return PulseSettings()


@pytest.fixture
def health_settings() -> HealthSettings:
    return HealthSettings()


@pytest.fixture
def app_settings(tmp_path: Path) -> AppSettings:
    """AppSettings with defaults and a temporary data directory."""
    return AppSettings(log_level="DEBUG", paths=PathSettings(data_dir=tmp_path))


@pytest.fixture
def mock_exchange() -> AsyncMock:
    """Mock ExchangeClient with empty responses; tests override per call."""
    exchange = AsyncMock()
    exchange.load_markets = AsyncMock(return_value={})
    exchange.fetch_tickers = AsyncMock(return_value={})
    exchange.fetch_ticker = AsyncMock(return_value={})
    exchange.fetch_ohlcv = AsyncMock(return_value=[])
    exchange.ping = AsyncMock(return_value=True)
    return exchange


def _make_candles(closes: list[float], spread: float = 0.01, volume: float = 1000) -> list[Candle]:
    candles = []
    for i, close in enumerate(closes):
        c = Decimal(str(close))
        s = c * Decimal(str(spread))
        candles.append(
            Candle(
                open_time=NOW_MS + i * 4 * 60 * MINUTE_MS,
                open=c,
                high=c + s,
                low=c - s,
                close=c,
                volume=Decimal(str(volume)),
            )
        )
    return candles


def _ohlcv_rows(closes: list[float], spread: float = 0.01, volume: float = 1000) -> list[list]:
    return [
        [c.open_time, float(c.open), float(c.high), float(c.low), float(c.close), float(c.volume)]
        for c in _make_candles(closes, spread, volume)
    ]


@pytest.fixture
def make_candles():
    """Factory: candles with the given closes and a fixed high/low spread around each close."""
    return _make_candles


@pytest.fixture
def ohlcv_rows():
    """Factory: raw ccxt OHLCV rows for the given closes."""
    return _ohlcv_rows
