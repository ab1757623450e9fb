"""Tests for settings defaults and environment overrides."""

from decimal import Decimal
from pathlib import Path

from watchtower.config import (
    AppSettings,
    HealthSettings,
    MacroSettings,
    NewsSettings,
    PathSettings,
    ScannerSettings,
    SentinelSettings,
)


class TestDefaults:
    def test_scanner(self) -> None:
        s = ScannerSettings()
        assert s.min_volume_usd == Decimal("1000000")
        assert s.ohlcv_timeframe == "4h"
        assert s.ohlcv_limit == 60
        assert s.core_symbols == ["BTC/USDT", "ETH/USDT", "SOL/USDT"]
        assert s.hedge_symbol == "PAXG/USDT"
        assert s.max_others == 21

    def test_sentinel_thresholds(self) -> None:
        s = SentinelSettings()
        assert s.alert_pct == Decimal("-1.5")
        assert s.danger_pct == Decimal("-3")
        assert s.quote_priority == ["USDT", "USDC", "BUSD", "BTC", "ETH"]
        assert s.credentials_file.name == ".env.openclaw"

    def test_news_and_health(self) -> None:
        assert NewsSettings().max_seen == 200
        assert len(NewsSettings().keywords) == 19
        assert HealthSettings().critical_api_failures == 3

    def test_macro_keywords(self) -> None:
        assert MacroSettings().news_keywords[:3] == ["war", "regulation", "hack"]

    def test_path_file(self, tmp_path: Path) -> None:
        assert PathSettings(data_dir=tmp_path).file("x.json") == tmp_path / "x.json"


class TestEnvironmentOverrides:
    def test_prefixed_group(self, monkeypatch) -> None:
        monkeypatch.setenv("SENTINEL_DANGER_PCT", "-4.5")
        monkeypatch.setenv("WATCHTOWER_USE_RUN_LOCK", "false")
        assert SentinelSettings().danger_pct == Decimal("-4.5")
        assert PathSettings().use_run_lock is False

    def test_nested_on_app_settings(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("PATHS__DATA_DIR", str(tmp_path))
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = AppSettings()
        assert settings.paths.data_dir == tmp_path
        assert settings.log_level == "DEBUG"
