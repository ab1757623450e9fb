"""Configuration system using pydantic-settings with environment variable loading.

Every threshold the workers use is a compiled-in default here; each group can
be overridden through its own environment variable prefix (or a ``.env`` file).
"""

from decimal import Decimal
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class PathSettings(BaseSettings):
    """Filesystem layout shared by every worker."""

    model_config = SettingsConfigDict(env_prefix="WATCHTOWER_")

    data_dir: Path = Path("data")
    use_run_lock: bool = True
    lock_stale_seconds: int = 3600  # break a lock left behind by a killed run

    def file(self, name: str) -> Path:
        return self.data_dir / name


class ExchangeSettings(BaseSettings):
    """Binance public market-data connection settings."""

    model_config = SettingsConfigDict(env_prefix="BINANCE_")

    timeout_ms: int = 5000  # per-call timeout applied by ccxt
    ping_timeout: float = 5.0


class ScannerSettings(BaseSettings):
    """Opportunity Scanner universe filters and scoring bands."""

    model_config = SettingsConfigDict(env_prefix="SCANNER_")

    output_file: str = "scanner-results.json"
    quote_currency: str = "USDT"
    min_volume_usd: Decimal = Decimal("1000000")
    ohlcv_timeframe: str = "4h"
    ohlcv_limit: int = 60
    min_candles: int = 20
    rate_limit_seconds: float = 0.1
    stablecoins: list[str] = [
        "USDC", "BUSD", "DAI", "TUSD", "FDUSD", "USDP", "USDD", "PYUSD", "EURI", "AEUR", "EUR",
    ]
    core_symbols: list[str] = ["BTC/USDT", "ETH/USDT", "SOL/USDT"]
    hedge_symbol: str = "PAXG/USDT"
    max_others: int = 21  # non-core, non-hedge slots in the watchlist

    # Volatility sweet spot as ATR % of last close
    ideal_atr_min: Decimal = Decimal("3")
    ideal_atr_max: Decimal = Decimal("8")


class MacroSettings(BaseSettings):
    """Macro Pulse data sources and alert thresholds."""

    model_config = SettingsConfigDict(env_prefix="MACRO_")

    output_file: str = "macro-pulse.json"
    history_file: str = "macro-pulse-history.json"
    http_timeout: float = 8.0

    fear_greed_url: str = "https://api.alternative.me/fng/?limit=2"
    global_url: str = "https://api.coingecko.com/api/v3/global"
    gold_symbol: str = "PAXG/USDT"
    primary_symbol: str = "BTC/USDT"
    news_feeds: dict[str, str] = {
        "CoinDesk": "https://www.coindesk.com/arc/outboundfeeds/rss/",
        "CoinTelegraph": "https://cointelegraph.com/rss",
    }
    news_keywords: list[str] = [
        "war", "regulation", "hack", "sec", "ban", "crash", "rally", "fed",
        "rate", "etf", "lawsuit", "sanctions", "inflation", "recession",
    ]
    news_window_hours: int = 2

    fear_shift_points: int = 8
    dominance_alert_points: Decimal = Decimal("1")
    dominance_trend_points: Decimal = Decimal("0.3")
    market_cap_drop_pct: Decimal = Decimal("-5")
    gold_move_pct: Decimal = Decimal("2")
    price_log_window_hours: int = 4
    lookup_tolerance: Decimal = Decimal("1.25")  # accept samples within 125% of the window


class SentinelSettings(BaseSettings):
    """Position Sentinel credentials, trading-board endpoint and thresholds."""

    model_config = SettingsConfigDict(env_prefix="SENTINEL_")

    credentials_file: Path = Path.home() / ".env.openclaw"
    api_key_name: str = "KANBAN_API_KEY"
    board_url: str = "https://clawdesk.ai"
    board_id: int = 15
    active_column: str = "Active"
    http_timeout: float = 5.0

    prices_file: str = "position-sentinel-prices.json"
    alert_file: str = "position-sentinel-alert.json"
    history_minutes: int = 30
    lookback_minutes: int = 5
    quote_priority: list[str] = ["USDT", "USDC", "BUSD", "BTC", "ETH"]

    alert_pct: Decimal = Decimal("-1.5")
    danger_pct: Decimal = Decimal("-3")
    spike_min_samples: int = 3
    spike_range_pct: Decimal = Decimal("1.5")
    spike_24h_change_pct: Decimal = Decimal("5")


class NewsSettings(BaseSettings):
    """News Scanner feeds and keyword list."""

    model_config = SettingsConfigDict(env_prefix="NEWS_")

    output_file: str = "news.json"
    seen_file: str = "news-seen.json"
    http_timeout: float = 8.0
    max_seen: int = 200
    feeds: dict[str, str] = {
        "coindesk": "https://www.coindesk.com/arc/outboundfeeds/rss/",
        "cointelegraph": "https://cointelegraph.com/rss",
    }
    keywords: list[str] = [
        "hack", "exploit", "ban", "regulation", "SEC", "ETF", "crash", "surge",
        "halving", "approval", "blackrock", "fed", "rates", "liquidation",
        "war", "sanctions", "lawsuit", "exchange", "adoption",
    ]


class PulseSettings(BaseSettings):
    """Market Pulse (crash/breakout) monitor thresholds."""

    model_config = SettingsConfigDict(env_prefix="PULSE_")

    prices_file: str = "crash-monitor-prices.json"
    alert_file: str = "crash-alert.json"
    history_minutes: int = 30
    benchmark_symbol: str = "BTC/USDT"


class HealthSettings(BaseSettings):
    """Health Monitor state files and escalation threshold."""

    model_config = SettingsConfigDict(env_prefix="HEALTH_")

    output_file: str = "health.json"
    state_file: str = "health-state.json"
    critical_api_failures: int = 3
    critical_unhealthy_modules: int = 2  # strictly more than this is critical


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    paths: PathSettings = PathSettings()
    exchange: ExchangeSettings = ExchangeSettings()
    scanner: ScannerSettings = ScannerSettings()
    macro: MacroSettings = MacroSettings()
    sentinel: SentinelSettings = SentinelSettings()
    news: NewsSettings = NewsSettings()
    pulse: PulseSettings = PulseSettings()
    health: HealthSettings = HealthSettings()
