"""News Scanner data models."""

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class NewsArticle:
    """A new headline that matched a keyword."""

    title: str
    keyword: str
    source: str
    published_at: str
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "keyword": self.keyword,
            "source": self.source,
            "publishedAt": self.published_at,
            "severity": self.severity,
        }


@dataclass
class NewsReport:
    """One scan's output snapshot."""

    timestamp: int
    articles: list[NewsArticle]

    @property
    def high_risk_count(self) -> int:
        return sum(1 for a in self.articles if a.severity == Severity.HIGH)

    @property
    def summary(self) -> str:
        if not self.articles:
            return "No new relevant headlines"
        return f"{self.high_risk_count} high-risk, {len(self.articles)} total headlines detected"

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "articles": [a.to_dict() for a in self.articles],
            "highRiskCount": self.high_risk_count,
            "summary": self.summary,
        }
