"""Macro data sources.

Four independent fetches, each fault-tolerant on its own: any failure
(network, timeout, HTTP status, unexpected payload) is logged at DEBUG and
yields None (or an empty list for headlines) for that section only.
"""

import asyncio

from watchtower.config import MacroSettings
from watchtower.exceptions import FetchError
from watchtower.exchange.client import ExchangeClient
from watchtower.feeds.extractor import FeedItem, FeedItemExtractor
from watchtower.feeds.http import HttpFetcher
from watchtower.logging import get_logger
from watchtower.macro.models import FearGreed, GlobalData, GoldQuote, NewsFlag
from watchtower.models import to_decimal

logger = get_logger(__name__)

#: Payload shape problems are treated like any other source failure.
_SOURCE_ERRORS = (FetchError, KeyError, IndexError, TypeError, ValueError, AttributeError)


class MacroSources:
    """Fetches the four macro inputs.

    Args:
        fetcher: HTTP fetcher for the sentiment, global-data and RSS endpoints.
        exchange: Exchange client for the safe-haven and primary tickers.
        extractor: Feed item extractor for RSS markup.
        settings: Endpoint URLs, symbols, feeds and keyword list.
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        exchange: ExchangeClient,
        extractor: FeedItemExtractor,
        settings: MacroSettings,
    ) -> None:
        self._fetcher = fetcher
        self._exchange = exchange
        self._extractor = extractor
        self._settings = settings

    async def fetch_fear_greed(self) -> FearGreed | None:
        """Current sentiment index and its change versus the previous day."""
        try:
            data = await self._fetcher.fetch_json(
                self._settings.fear_greed_url, timeout=self._settings.http_timeout
            )
            entries = data["data"]
            if len(entries) < 2:
                return None
            current = int(entries[0]["value"])
            previous = int(entries[1]["value"])
            return FearGreed(
                value=current,
                label=str(entries[0].get("value_classification", "")),
                change_24h=current - previous,
            )
        except _SOURCE_ERRORS:
            logger.debug("fear_greed_unavailable", exc_info=True)
            return None

    async def fetch_global_data(self) -> GlobalData | None:
        """BTC dominance, total market cap and its 24h change."""
        try:
            data = await self._fetcher.fetch_json(
                self._settings.global_url, timeout=self._settings.http_timeout
            )
            g = data["data"]
            dominance = (g.get("market_cap_percentage") or {}).get("btc")
            total = (g.get("total_market_cap") or {}).get("usd")
            change = g.get("market_cap_change_percentage_24h_usd")
            return GlobalData(
                btc_dominance=to_decimal(dominance) if dominance is not None else None,
                total_market_cap_usd=to_decimal(total) if total is not None else None,
                market_cap_change_24h=to_decimal(change) if change is not None else None,
            )
        except _SOURCE_ERRORS:
            logger.debug("global_data_unavailable", exc_info=True)
            return None

    async def fetch_gold_and_btc(self) -> GoldQuote | None:
        """Safe-haven and primary tickers, fetched concurrently."""
        try:
            gold, btc = await asyncio.gather(
                self._exchange.fetch_ticker(self._settings.gold_symbol),
                self._exchange.fetch_ticker(self._settings.primary_symbol),
            )
        except _SOURCE_ERRORS:
            logger.debug("gold_btc_unavailable", exc_info=True)
            return None

        if not gold or gold.get("last") is None:
            return None
        return GoldQuote(
            paxg_price=to_decimal(gold["last"]),
            paxg_change_24h=to_decimal(gold.get("percentage")),
            btc_price=to_decimal(btc["last"]) if btc and btc.get("last") is not None else None,
            btc_change_24h=to_decimal((btc or {}).get("percentage")),
        )

    async def fetch_news_flags(self, now_ms: int) -> list[NewsFlag]:
        """Recent headlines that contain a macro keyword (first match per headline)."""
        cutoff = now_ms - self._settings.news_window_hours * 3_600_000
        keywords = [kw.lower() for kw in self._settings.news_keywords]

        results = await asyncio.gather(
            *(self._fetch_feed(source, url) for source, url in self._settings.news_feeds.items())
        )

        flags: list[NewsFlag] = []
        for source, items in results:
            for item in items:
                published = item.published_ms()
                if published is not None and published < cutoff:
                    continue
                title_lower = item.title.lower()
                keyword = next((kw for kw in keywords if kw in title_lower), None)
                if keyword is None:
                    continue
                flags.append(
                    NewsFlag(source=source, title=item.title, keyword=keyword.upper(), url=item.link)
                )
        return flags

    async def _fetch_feed(self, source: str, url: str) -> tuple[str, list[FeedItem]]:
        try:
            markup = await self._fetcher.fetch_text(url, timeout=self._settings.http_timeout)
        except FetchError:
            logger.debug("macro_feed_unavailable", source=source, exc_info=True)
            return source, []
        return source, self._extractor.extract(markup)
