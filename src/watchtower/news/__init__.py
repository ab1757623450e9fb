"""News Scanner -- keyword headlines from crypto RSS feeds."""

from watchtower.news.classifier import classify_severity, match_keyword, scan_items
from watchtower.news.models import NewsArticle, NewsReport, Severity
from watchtower.news.worker import NewsScanner

__all__ = [
    "NewsArticle",
    "NewsReport",
    "NewsScanner",
    "Severity",
    "classify_severity",
    "match_keyword",
    "scan_items",
]
