"""News Scanner worker.

Fetches the configured RSS feeds, flags new headlines that mention a
keyword and rewrites the news snapshot every run, even when nothing
matched, so its freshness reflects the last successful scan.
"""

import asyncio

from watchtower.config import AppSettings, NewsSettings, PathSettings
from watchtower.exceptions import FetchError
from watchtower.feeds.extractor import FeedItem, FeedItemExtractor, RssItemExtractor
from watchtower.feeds.http import HttpFetcher
from watchtower.logging import get_logger
from watchtower.models import now_ms
from watchtower.news.classifier import scan_items
from watchtower.news.models import NewsReport
from watchtower.runtime import launch
from watchtower.state.rolling import SeenTitles
from watchtower.state.snapshot import load_json, write_json_atomic

logger = get_logger(__name__)


class NewsScanner:
    """Scans feeds for new keyword headlines.

    Args:
        fetcher: HTTP fetcher for the feeds.
        settings: Feed URLs, keywords and file names.
        paths: Data directory for the snapshot and seen-title files.
        extractor: Item extractor for the feed markup.
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        settings: NewsSettings,
        paths: PathSettings,
        extractor: FeedItemExtractor | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings
        self._paths = paths
        self._extractor = extractor or RssItemExtractor()

    async def run(self) -> NewsReport:
        seen_path = self._paths.file(self._settings.seen_file)
        stored = (load_json(seen_path) or {}).get("titles")
        titles = [t for t in stored if isinstance(t, str)] if isinstance(stored, list) else []
        seen = SeenTitles(titles, max_size=self._settings.max_seen)

        feeds = list(self._settings.feeds.items())
        results = await asyncio.gather(*(self._fetch_items(url) for _, url in feeds))

        articles = []
        for (source, _), items in zip(feeds, results):
            articles += scan_items(items, source, seen, self._settings.keywords)

        report = NewsReport(timestamp=now_ms(), articles=articles)
        write_json_atomic(seen_path, {"titles": seen.to_list()})
        write_json_atomic(self._paths.file(self._settings.output_file), report.to_dict())

        if articles:
            logger.info("news_headlines_detected", summary=report.summary)
            for article in articles:
                logger.info(
                    "news_headline",
                    source=article.source,
                    title=article.title,
                    keyword=article.keyword,
                    severity=article.severity.value,
                )
        return report

    async def _fetch_items(self, url: str) -> list[FeedItem]:
        try:
            markup = await self._fetcher.fetch_text(url, timeout=self._settings.http_timeout)
        except FetchError:
            logger.debug("news_feed_unavailable", url=url, exc_info=True)
            return []
        return self._extractor.extract(markup)


async def run_news(settings: AppSettings) -> None:
    async with HttpFetcher(timeout=settings.news.http_timeout) as fetcher:
        await NewsScanner(fetcher, settings.news, settings.paths).run()


def main() -> None:
    """Console entry point."""
    launch("news_scanner", run_news)

