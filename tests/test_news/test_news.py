"""Tests for headline classification and the NewsScanner run."""

import json

import httpx
import pytest

from watchtower.feeds.extractor import FeedItem
from watchtower.feeds.http import HttpFetcher
from watchtower.news.classifier import classify_severity, match_keyword, scan_items
from watchtower.news.models import Severity
from watchtower.news.worker import NewsScanner
from watchtower.state.rolling import SeenTitles

KEYWORDS = [
    "hack", "exploit", "ban", "regulation", "SEC", "ETF", "crash", "surge",
    "halving", "approval", "blackrock", "fed", "rates", "liquidation",
    "war", "sanctions", "lawsuit", "exchange", "adoption",
]


class TestClassifySeverity:
    @pytest.mark.parametrize("keyword", ["hack", "exploit", "ban", "crash", "sanctions", "lawsuit", "war"])
    def test_high(self, keyword: str) -> None:
        assert classify_severity(keyword) == Severity.HIGH

    @pytest.mark.parametrize("keyword", ["SEC", "regulation", "fed", "rates"])
    def test_medium(self, keyword: str) -> None:
        assert classify_severity(keyword) == Severity.MEDIUM

    @pytest.mark.parametrize("keyword", ["ETF", "surge", "halving", "adoption", "exchange"])
    def test_low(self, keyword: str) -> None:
        assert classify_severity(keyword) == Severity.LOW


class TestScanItems:
    def test_first_keyword_wins(self) -> None:
        assert match_keyword("SEC files lawsuit over ETF", KEYWORDS) == "SEC"

    def test_case_insensitive(self) -> None:
        assert match_keyword("BLACKROCK buys more", KEYWORDS) == "blackrock"
        assert match_keyword("quiet day", KEYWORDS) is None

    def test_marks_everything_seen_and_dedupes(self) -> None:
        seen = SeenTitles()
        items = [
            FeedItem("Bridge hack drains funds"),
            FeedItem("Markets quiet"),
            FeedItem("Bridge hack drains funds"),
        ]
        articles = scan_items(items, "coindesk", seen, KEYWORDS)

        assert [a.title for a in articles] == ["Bridge hack drains funds"]
        assert articles[0].severity == Severity.HIGH
        assert "Markets quiet" in seen
        assert len(seen) == 2

    def test_seen_titles_not_reemitted(self) -> None:
        seen = SeenTitles(["Bridge hack drains funds"])
        assert scan_items([FeedItem("Bridge hack drains funds")], "coindesk", seen, KEYWORDS) == []


def _rss(*titles: str) -> str:
    items = "".join(
        f"<item><title>{t}</title><pubDate>Mon, 01 Jan 2024 00:00:00 +0000</pubDate></item>"
        for t in titles
    )
    return f"<rss><channel>{items}</channel></rss>"


def _fetcher(feeds: dict[str, str | None]) -> HttpFetcher:
    def handler(request: httpx.Request) -> httpx.Response:
        body = feeds.get(request.url.host)
        if body is None:
            return httpx.Response(500)
        return httpx.Response(200, text=body)

    return HttpFetcher(transport=httpx.MockTransport(handler))


class TestNewsScanner:
    @pytest.mark.asyncio
    async def test_run_writes_snapshot_and_seen(self, news_settings, paths) -> None:
        feeds = {
            "www.coindesk.com": _rss("Exchange hack drains wallet", "SEC delays ETF"),
            "cointelegraph.com": _rss("Exchange hack drains wallet", "Bitcoin adoption grows"),
        }
        async with _fetcher(feeds) as fetcher:
            report = await NewsScanner(fetcher, news_settings, paths).run()

        written = json.loads(paths.file(news_settings.output_file).read_text())
        assert [a["title"] for a in written["articles"]] == [
            "Exchange hack drains wallet",
            "SEC delays ETF",
            "Bitcoin adoption grows",
        ]
        assert written["articles"][0]["keyword"] == "hack"
        assert written["articles"][0]["source"] == "coindesk"
        assert written["articles"][0]["severity"] == "high"
        assert written["highRiskCount"] == 1
        assert written["summary"] == "1 high-risk, 3 total headlines detected"
        assert report.high_risk_count == 1

        seen = json.loads(paths.file(news_settings.seen_file).read_text())
        assert len(seen["titles"]) == 3

    @pytest.mark.asyncio
    async def test_second_run_is_empty_but_written(self, news_settings, paths) -> None:
        feeds = {"www.coindesk.com": _rss("Exchange hack drains wallet"), "cointelegraph.com": None}
        async with _fetcher(feeds) as fetcher:
            scanner = NewsScanner(fetcher, news_settings, paths)
            await scanner.run()
            report = await scanner.run()

        assert report.articles == []
        written = json.loads(paths.file(news_settings.output_file).read_text())
        assert written["articles"] == []
        assert written["highRiskCount"] == 0
        assert written["summary"] == "No new relevant headlines"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "titles",
        ["Exchange hack drains wallet", ["Markets quiet", ["nested"], {"a": 1}, 7]],
    )
    async def test_malformed_seen_file(self, news_settings, paths, titles) -> None:
        paths.file(news_settings.seen_file).write_text(json.dumps({"titles": titles}))
        feeds = {"www.coindesk.com": _rss("Exchange hack drains wallet"), "cointelegraph.com": None}
        async with _fetcher(feeds) as fetcher:
            report = await NewsScanner(fetcher, news_settings, paths).run()

        assert [a.title for a in report.articles] == ["Exchange hack drains wallet"]
        seen = json.loads(paths.file(news_settings.seen_file).read_text())["titles"]
        assert all(isinstance(t, str) for t in seen)
        assert seen[-1] == "Exchange hack drains wallet"

    @pytest.mark.asyncio
    async def test_seen_set_bounded(self, news_settings, paths) -> None:
        paths.file(news_settings.seen_file).write_text(
            json.dumps({"titles": [f"old {i}" for i in range(200)]})
        )
        feeds = {"www.coindesk.com": _rss("New one", "New two"), "cointelegraph.com": None}
        async with _fetcher(feeds) as fetcher:
            await NewsScanner(fetcher, news_settings, paths).run()

        titles = json.loads(paths.file(news_settings.seen_file).read_text())["titles"]
        assert len(titles) == 200
        assert titles[-2:] == ["New one", "New two"]
        assert "old 0" not in titles
