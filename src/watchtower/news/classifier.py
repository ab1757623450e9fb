"""Headline keyword matching and severity tiers."""

import re
from collections.abc import Iterable

from watchtower.feeds.extractor import FeedItem
from watchtower.news.models import NewsArticle, Severity
from watchtower.state.rolling import SeenTitles

_HIGH = re.compile(r"hack|exploit|ban|crash|sanctions|lawsuit|war", re.IGNORECASE)
_MEDIUM = re.compile(r"SEC|regulation|fed|rates", re.IGNORECASE)


def classify_severity(keyword: str) -> Severity:
    if _HIGH.search(keyword):
        return Severity.HIGH
    if _MEDIUM.search(keyword):
        return Severity.MEDIUM
    return Severity.LOW


def match_keyword(title: str, keywords: Iterable[str]) -> str | None:
    """First keyword (in list order) contained in ``title``, case-insensitive."""
    lowered = title.lower()
    return next((kw for kw in keywords if kw.lower() in lowered), None)


def scan_items(
    items: Iterable[FeedItem],
    source: str,
    seen: SeenTitles,
    keywords: list[str],
) -> list[NewsArticle]:
    """Match unseen headlines against ``keywords``.

    Every unseen title is added to ``seen`` whether it matched or not, so a
    headline repeated within the same run (or across feeds) is reported once.
    """
    articles: list[NewsArticle] = []
    for item in items:
        if item.title in seen:
            continue
        keyword = match_keyword(item.title, keywords)
        if keyword is not None:
            articles.append(
                NewsArticle(
                    title=item.title,
                    keyword=keyword,
                    source=source,
                    published_at=item.published_at,
                    severity=classify_severity(keyword),
                )
            )
        seen.add(item.title)
    return articles
