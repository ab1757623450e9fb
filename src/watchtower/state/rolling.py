"""Bounded rolling windows carried between worker runs.

Pruning and lookup are separate operations so each can be exercised on its
own. Price logs are kept sorted by timestamp (oldest first); every lookup
relies on that ordering.
"""

from bisect import bisect_right
from collections.abc import Iterable

from watchtower.models import PricePoint


def append_and_prune(
    points: list[PricePoint], sample: PricePoint, window_ms: int
) -> list[PricePoint]:
    """Append ``sample`` and drop everything older than ``window_ms`` before it.

    Out-of-order input (a hand-edited or clock-skewed file) is re-sorted so
    the result always satisfies the ordering invariant.
    """
    merged = sorted([*points, sample], key=lambda p: p.ts)
    return prune(merged, sample.ts, window_ms)


def prune(points: list[PricePoint], now_ms: int, window_ms: int) -> list[PricePoint]:
    """Keep only samples with ``now_ms - ts <= window_ms``."""
    return [p for p in points if now_ms - p.ts <= window_ms]


def find_at_or_before(points: list[PricePoint], target_ms: int) -> PricePoint | None:
    """Return the latest sample with ``ts <= target_ms``, or None.

    ``points`` must be sorted by timestamp ascending.
    """
    timestamps = [p.ts for p in points]
    idx = bisect_right(timestamps, target_ms)
    if idx == 0:
        return None  # No sample at or before the target
    return points[idx - 1]


def find_for_window(
    points: list[PricePoint],
    now_ms: int,
    window_ms: int,
    tolerance: float = 1.25,
) -> PricePoint | None:
    """Sample approximating "``window_ms`` ago", or None if none is close enough.

    Picks the latest sample at or before ``now_ms - window_ms`` and accepts it
    only when its age is within ``tolerance`` times the window.
    """
    sample = find_at_or_before(points, now_ms - window_ms)
    if sample is None:
        return None
    if now_ms - sample.ts > window_ms * tolerance:
        return None
    return sample


def samples_since(points: list[PricePoint], since_ms: int) -> list[PricePoint]:
    """Samples with ``ts >= since_ms``."""
    return [p for p in points if p.ts >= since_ms]


def load_points(raw: Iterable[dict] | None) -> list[PricePoint]:
    """Parse a persisted price log, skipping malformed entries."""
    points: list[PricePoint] = []
    for entry in raw or []:
        try:
            points.append(PricePoint.from_dict(entry))
        except (KeyError, TypeError, ValueError):
            continue
    points.sort(key=lambda p: p.ts)
    return points


class SeenTitles:
    """Insertion-ordered set of headlines, bounded to ``max_size`` entries.

    When the bound is exceeded the oldest titles are evicted first. Eviction
    happens on load and on export, never mid-run, so a title added during a
    run stays visible for the rest of that run.
    """

    def __init__(self, titles: Iterable[str] = (), max_size: int = 200) -> None:
        self._max_size = max_size
        self._titles: dict[str, None] = dict.fromkeys(titles)
        self._trim()

    def __contains__(self, title: object) -> bool:
        return title in self._titles

    def __len__(self) -> int:
        return len(self._titles)

    def add(self, title: str) -> None:
        if title in self._titles:
            return
        self._titles[title] = None

    def to_list(self) -> list[str]:
        self._trim()
        return list(self._titles)

    def _trim(self) -> None:
        overflow = len(self._titles) - self._max_size
        if overflow <= 0:
            return
        for title in list(self._titles)[:overflow]:
            del self._titles[title]
