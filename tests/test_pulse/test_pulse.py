"""Tests for crash/breakout classification and the MarketPulseMonitor run."""

import json
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from watchtower.pulse.classify import MoveAlert, classify_move, strongest
from watchtower.pulse.worker import MarketPulseMonitor, watched_symbols

MINUTE = 60_000
NOW = 1_704_067_200_000


def _d(value: str | None) -> Decimal | None:
    return Decimal(value) if value is not None else None


class TestClassifyMove:
    @pytest.mark.parametrize(
        ("c5", "c15", "benchmark", "expected"),
        [
            ("-5", None, True, ("flash_crash", "down")),
            ("-5", None, False, ("alert", "down")),
            (None, "-5", False, ("crash", "down")),
            (None, "-3", True, ("crash", "down")),
            (None, "-3", False, None),
            ("-3", None, True, ("crash", "down")),
            ("-2", None, True, ("alert", "down")),
            ("-2", None, False, None),
            ("5", None, True, ("mega_breakout", "up")),
            (None, "5", False, ("breakout", "up")),
            (None, "3", True, ("breakout", "up")),
            ("3", None, True, ("breakout", "up")),
            ("3", None, False, ("alert", "up")),
            ("2", None, True, ("alert", "up")),
            ("1", "1", True, None),
            (None, None, True, None),
        ],
    )
    def test_levels(self, c5, c15, benchmark, expected) -> None:
        assert classify_move(_d(c5), _d(c15), is_benchmark=benchmark) == expected


class TestMoveAlert:
    def _alert(self, level: str, direction: str, c5: str | None, c15: str | None) -> MoveAlert:
        return MoveAlert("ETH/USDT", level, direction, _d(c5), _d(c15), Decimal("2000"))

    def test_describe_prefers_larger_window(self) -> None:
        assert self._alert("breakout", "up", "1", "5.214").describe() == "ETH +5.21% in 15m"
        assert self._alert("alert", "down", "-3.5", "-1").describe() == "ETH -3.50% in 5m"

    def test_strongest(self) -> None:
        alerts = [
            self._alert("alert", "up", "3", None),
            self._alert("crash", "down", None, "-6"),
            self._alert("breakout", "up", None, "6"),
        ]
        top = strongest(alerts)
        assert (top.level, top.direction, top.severity) == ("crash", "down", 1)


class TestWatchedSymbols:
    def test_core_plus_watchlist_without_duplicates(self) -> None:
        snapshot = {"watchlist": [{"symbol": "ETH/USDT"}, {"symbol": "XYZ/USDT"}, {}]}
        assert watched_symbols(snapshot, ["BTC/USDT", "ETH/USDT"]) == [
            "BTC/USDT",
            "ETH/USDT",
            "XYZ/USDT",
        ]

    def test_no_scanner_snapshot(self) -> None:
        assert watched_symbols(None, ["BTC/USDT"]) == ["BTC/USDT"]


class TestMarketPulseMonitor:
    def _seed(self, paths, pulse_settings, prices: dict) -> None:
        paths.file(pulse_settings.prices_file).write_text(json.dumps({"prices": prices}))

    @pytest.mark.asyncio
    async def test_crash_writes_alert_file(
        self, mock_exchange, pulse_settings, scanner_settings, paths
    ) -> None:
        self._seed(paths, pulse_settings, {"BTC/USDT": [{"price": 100, "ts": NOW - 5 * MINUTE}]})
        mock_exchange.fetch_tickers = AsyncMock(return_value={"BTC/USDT": {"last": 96}})

        monitor = MarketPulseMonitor(mock_exchange, pulse_settings, scanner_settings, paths)
        alerts = await monitor.run(now=NOW)

        assert [a.level for a in alerts] == ["crash"]
        written = json.loads(paths.file(pulse_settings.alert_file).read_text())
        assert written["level"] == "crash"
        assert written["direction"] == "down"
        assert written["timestamp"] == NOW
        assert written["coins"] == [
            {"symbol": "BTC/USDT", "change5m": -4.0, "change15m": None, "currentPrice": 96.0}
        ]
        assert written["message"] == "BTC -4.00% in 5m."

    @pytest.mark.asyncio
    async def test_yellow_alert_is_log_only(
        self, mock_exchange, pulse_settings, scanner_settings, paths
    ) -> None:
        self._seed(paths, pulse_settings, {"ETH/USDT": [{"price": 100, "ts": NOW - 6 * MINUTE}]})
        mock_exchange.fetch_tickers = AsyncMock(return_value={"ETH/USDT": {"last": 103.5}})

        monitor = MarketPulseMonitor(mock_exchange, pulse_settings, scanner_settings, paths)
        alerts = await monitor.run(now=NOW)

        assert [(a.level, a.direction) for a in alerts] == [("alert", "up")]
        assert not paths.file(pulse_settings.alert_file).exists()
        prices = json.loads(paths.file(pulse_settings.prices_file).read_text())
        assert len(prices["prices"]["ETH/USDT"]) == 2

    @pytest.mark.asyncio
    async def test_reads_scanner_watchlist(
        self, mock_exchange, pulse_settings, scanner_settings, paths
    ) -> None:
        paths.file(scanner_settings.output_file).write_text(
            json.dumps({"timestamp": NOW, "watchlist": [{"symbol": "XYZ/USDT"}]})
        )
        await MarketPulseMonitor(
            mock_exchange, pulse_settings, scanner_settings, paths
        ).run(now=NOW)
        mock_exchange.fetch_tickers.assert_awaited_once_with(
            ["BTC/USDT", "ETH/USDT", "SOL/USDT", "XYZ/USDT"]
        )
        assert not paths.file(pulse_settings.alert_file).exists()
