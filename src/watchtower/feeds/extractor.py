"""Feed item extraction from raw RSS markup.

Feeds are parsed with regular expressions rather than an XML parser: the
providers serve markup that is not always well-formed, and only three
fields are needed. The brittle part is isolated behind FeedItemExtractor
so it can be exercised against fixture payloads.
"""

import html
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime


@dataclass(frozen=True)
class FeedItem:
    """One headline pulled from a feed."""

    title: str
    link: str = ""
    published_at: str = ""  # raw pubDate text, as the feed provides it

    def published_ms(self) -> int | None:
        """Publish time in Unix milliseconds, or None if absent/unparseable."""
        return parse_pub_date(self.published_at)


class FeedItemExtractor(ABC):
    """Turns raw feed markup into a list of FeedItem."""

    @abstractmethod
    def extract(self, raw_markup: str) -> list[FeedItem]:
        ...


_ITEM_RE = re.compile(r"<item\b[^>]*>(.*?)</item>", re.IGNORECASE | re.DOTALL)


def _field_re(tag: str) -> re.Pattern[str]:
    return re.compile(
        rf"<{tag}\b[^>]*>\s*(?:<!\[CDATA\[)?(.*?)(?:\]\]>)?\s*</{tag}>",
        re.IGNORECASE | re.DOTALL,
    )


_TITLE_RE = _field_re("title")
_LINK_RE = _field_re("link")
_PUBDATE_RE = _field_re("pubDate")


class RssItemExtractor(FeedItemExtractor):
    """Regex extractor for RSS 2.0 ``<item>`` blocks.

    Titles and links may be wrapped in CDATA; entities are unescaped.
    Items without a title are dropped.
    """

    def extract(self, raw_markup: str) -> list[FeedItem]:
        items: list[FeedItem] = []
        for block in _ITEM_RE.findall(raw_markup or ""):
            title = _first(_TITLE_RE, block)
            if not title:
                continue
            items.append(
                FeedItem(
                    title=title,
                    link=_first(_LINK_RE, block),
                    published_at=_first(_PUBDATE_RE, block),
                )
            )
        return items


def _first(pattern: re.Pattern[str], block: str) -> str:
    match = pattern.search(block)
    if match is None:
        return ""
    return html.unescape(match.group(1)).strip()


def parse_pub_date(value: str) -> int | None:
    """Parse an RFC 822 (or ISO 8601) date into Unix milliseconds."""
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)
