"""Non-exchange data sources -- JSON APIs, RSS feeds and the trading board."""

from watchtower.feeds.extractor import FeedItem, FeedItemExtractor, RssItemExtractor
from watchtower.feeds.http import HttpFetcher
from watchtower.feeds.trading_board import TradingBoardClient, load_api_key, normalize_pair

__all__ = [
    "FeedItem",
    "FeedItemExtractor",
    "HttpFetcher",
    "RssItemExtractor",
    "TradingBoardClient",
    "load_api_key",
    "normalize_pair",
]
