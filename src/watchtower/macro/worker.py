"""Macro Pulse Monitor worker.

Tracks the sentiment index, BTC dominance, total market cap, a safe-haven
asset against BTC, and macro keywords in recent headlines. The four sources
are fetched concurrently; a failed source leaves its section null without
failing the run. Silent unless alerts fired.
"""

import asyncio

from watchtower.config import AppSettings, MacroSettings, PathSettings
from watchtower.exchange.binance_client import BinanceClient
from watchtower.feeds.extractor import RssItemExtractor
from watchtower.feeds.http import HttpFetcher
from watchtower.logging import get_logger
from watchtower.macro.alerts import (
    evaluate_dominance,
    evaluate_fear_greed,
    evaluate_gold,
    evaluate_market_cap,
    news_alerts,
)
from watchtower.macro.models import MacroHistory, MacroSnapshot
from watchtower.macro.sources import MacroSources
from watchtower.models import now_ms
from watchtower.runtime import launch
from watchtower.state.rolling import prune
from watchtower.state.snapshot import load_json, write_json_atomic

logger = get_logger(__name__)


class MacroPulseMonitor:
    """One macro pulse run: fetch, classify, merge history, persist.

    Args:
        sources: The four macro data sources.
        settings: Alert thresholds and file names.
        paths: Data directory for the snapshot and history files.
    """

    def __init__(
        self,
        sources: MacroSources,
        settings: MacroSettings,
        paths: PathSettings,
    ) -> None:
        self._sources = sources
        self._settings = settings
        self._paths = paths

    async def run(self, now: int | None = None) -> MacroSnapshot:
        now = now if now is not None else now_ms()
        history_path = self._paths.file(self._settings.history_file)
        history = MacroHistory.from_dict(load_json(history_path))

        fear_greed, global_data, gold_quote, news_flags = await asyncio.gather(
            self._sources.fetch_fear_greed(),
            self._sources.fetch_global_data(),
            self._sources.fetch_gold_and_btc(),
            self._sources.fetch_news_flags(now),
        )

        snapshot = MacroSnapshot(timestamp=now)

        if fear_greed is not None:
            snapshot.fear_greed = fear_greed
            snapshot.alerts += evaluate_fear_greed(fear_greed, self._settings.fear_shift_points)

        if global_data is not None and global_data.btc_dominance is not None:
            snapshot.btc_dominance, alerts = evaluate_dominance(
                global_data.btc_dominance, history.btc_dominance, self._settings
            )
            snapshot.alerts += alerts
            history.btc_dominance = global_data.btc_dominance

        if global_data is not None:
            snapshot.total_market_cap, alerts = evaluate_market_cap(
                global_data, self._settings.market_cap_drop_pct
            )
            snapshot.alerts += alerts

        if gold_quote is not None:
            snapshot.gold, alerts, history.paxg_price_log = evaluate_gold(
                gold_quote, history.paxg_price_log, now, self._settings
            )
            snapshot.alerts += alerts

        snapshot.news_flags = news_flags
        snapshot.alerts += news_alerts(news_flags)

        # Also covers runs where the gold fetch failed and the log was not touched
        history.paxg_price_log = prune(
            history.paxg_price_log, now, self._settings.price_log_window_hours * 3_600_000
        )

        write_json_atomic(self._paths.file(self._settings.output_file), snapshot.to_dict())
        write_json_atomic(history_path, history.to_dict())

        for alert in snapshot.alerts:
            logger.info("macro_alert", type=alert.type, message=alert.message)

        return snapshot


async def run_macro_pulse(settings: AppSettings) -> None:
    async with (
        BinanceClient(settings.exchange) as exchange,
        HttpFetcher(timeout=settings.macro.http_timeout) as fetcher,
    ):
        sources = MacroSources(fetcher, exchange, RssItemExtractor(), settings.macro)
        await MacroPulseMonitor(sources, settings.macro, settings.paths).run()


def main() -> None:
    """Console entry point."""
    launch("macro_pulse", run_macro_pulse)
