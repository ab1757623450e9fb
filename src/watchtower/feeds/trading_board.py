"""Client for the external trading board that owns the active-trade list.

The board is a separate, database-backed service. This worker only reads
from it: one authenticated GET listing the trades on a board, filtered
locally to those in the "Active" column.
"""

import re
from pathlib import Path

from pydantic import SecretStr

from watchtower.config import SentinelSettings
from watchtower.exceptions import CredentialMissingError, FetchError
from watchtower.feeds.http import HttpFetcher
from watchtower.logging import get_logger
from watchtower.models import ActiveTrade, Direction, to_decimal

logger = get_logger(__name__)


def load_api_key(path: Path, name: str) -> SecretStr:
    """Read ``name`` from a ``KEY=value`` credential file.

    Raises:
        CredentialMissingError: the file is unreadable or has no such key.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CredentialMissingError(f"{path} unreadable") from exc

    match = re.search(rf"^{re.escape(name)}=(.+)$", content, re.MULTILINE)
    if match is None or not match.group(1).strip():
        raise CredentialMissingError(f"{name} not set in {path}")
    return SecretStr(match.group(1).strip())


def normalize_pair(raw: str | None, quotes: list[str]) -> str:
    """Turn a board coin identifier into an exchange pair symbol.

    ``"btc-usdt"`` -> ``"BTC/USDT"``, ``"ETHBTC"`` -> ``"ETH/BTC"``,
    ``"SOL"`` -> ``"SOL/USDT"``. Quotes are tried in priority order; the
    first one the identifier ends with (and is longer than) wins.
    """
    if not raw:
        return ""
    pair = re.sub(r"[^A-Z0-9]", "", raw.upper())
    if not pair:
        return ""
    for quote in quotes:
        if pair.endswith(quote) and len(pair) > len(quote):
            return f"{pair[: -len(quote)]}/{quote}"
    return f"{pair}/USDT"


class TradingBoardClient:
    """Reads currently held positions from the trading board API.

    Args:
        fetcher: Shared HTTP fetcher for this run.
        api_key: Value sent in the ``X-API-Key`` header.
        settings: Board URL, board id, column name and quote priority.
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        api_key: SecretStr,
        settings: SentinelSettings,
    ) -> None:
        self._fetcher = fetcher
        self._api_key = api_key
        self._settings = settings

    @property
    def trades_url(self) -> str:
        base = self._settings.board_url.rstrip("/")
        return f"{base}/api/trading/trades?boardId={self._settings.board_id}"

    async def fetch_active_trades(self) -> list[ActiveTrade]:
        """Return trades in the active column, one per normalized symbol.

        Raises:
            FetchError: the board is unreachable or answers with an error.
        """
        data = await self._fetcher.fetch_json(
            self.trades_url,
            headers={"X-API-Key": self._api_key.get_secret_value()},
            timeout=self._settings.http_timeout,
        )
        if not isinstance(data, dict):
            raise FetchError(self.trades_url, "unexpected response shape")

        trades: dict[str, ActiveTrade] = {}
        for row in data.get("trades") or []:
            if row.get("column_name") != self._settings.active_column:
                continue
            symbol = normalize_pair(row.get("coin_pair"), self._settings.quote_priority)
            if not symbol:
                continue
            # Later rows for the same symbol replace earlier ones
            trades[symbol] = ActiveTrade(
                symbol=symbol,
                direction=_parse_direction(row.get("direction")),
                entry_price=to_decimal(row.get("entry_price")),
                position_size=to_decimal(row.get("position_size")),
            )

        logger.debug("active_trades_loaded", count=len(trades))
        return list(trades.values())


def _parse_direction(raw: object) -> Direction:
    if isinstance(raw, str) and raw.strip().upper() == Direction.SHORT.value:
        return Direction.SHORT
    return Direction.LONG
