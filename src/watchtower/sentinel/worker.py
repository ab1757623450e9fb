"""Position Sentinel worker.

Watches only positions currently held on the trading board, with tighter
thresholds than the market-wide pulse. Silent when nothing fired: the
alert file is written only when at least one alert was raised.
"""

from watchtower.config import AppSettings, PathSettings, SentinelSettings
from watchtower.exceptions import WorkerSkipped
from watchtower.exchange.binance_client import BinanceClient
from watchtower.exchange.client import ExchangeClient
from watchtower.feeds.http import HttpFetcher
from watchtower.feeds.trading_board import TradingBoardClient, load_api_key
from watchtower.logging import get_logger
from watchtower.models import PricePoint, now_ms, to_decimal
from watchtower.runtime import launch
from watchtower.sentinel.analysis import evaluate_position
from watchtower.sentinel.models import SentinelAlert, SentinelLevel
from watchtower.state.history import PriceHistoryStore
from watchtower.state.snapshot import load_json, write_json_atomic

logger = get_logger(__name__)


class PositionSentinel:
    """One sentinel run over the currently active trades.

    Args:
        board: Trading board client listing active trades.
        exchange: Market-data exchange client.
        settings: Thresholds, lookback and file names.
        paths: Data directory for the price history and alert files.
    """

    def __init__(
        self,
        board: TradingBoardClient,
        exchange: ExchangeClient,
        settings: SentinelSettings,
        paths: PathSettings,
    ) -> None:
        self._board = board
        self._exchange = exchange
        self._settings = settings
        self._paths = paths

    async def run(self, now: int | None = None) -> list[SentinelAlert]:
        """Check every active position once.

        Raises:
            FetchError: the board or the exchange is unavailable. Nothing is
                written in that case.
            WorkerSkipped: no active trades.
        """
        trades = await self._board.fetch_active_trades()
        if not trades:
            raise WorkerSkipped("no active trades")

        tickers = await self._exchange.fetch_tickers([t.symbol for t in trades])
        now = now if now is not None else now_ms()

        prices_path = self._paths.file(self._settings.prices_file)
        store = PriceHistoryStore.from_dict(
            load_json(prices_path), window_ms=self._settings.history_minutes * 60_000
        )

        alerts: list[SentinelAlert] = []
        for trade in trades:
            ticker = tickers.get(trade.symbol)
            if not ticker or not ticker.get("last"):
                logger.debug("sentinel_ticker_missing", symbol=trade.symbol)
                continue
            history = store.record(
                trade.symbol, PricePoint(price=to_decimal(ticker["last"]), ts=now)
            )
            alerts += evaluate_position(trade, history, ticker, now, self._settings)

        write_json_atomic(prices_path, store.to_dict(now))

        if not alerts:
            return alerts

        write_json_atomic(
            self._paths.file(self._settings.alert_file),
            {"timestamp": now, "alerts": [a.to_dict() for a in alerts]},
        )
        for alert in alerts:
            log = logger.warning if alert.level == SentinelLevel.DANGER else logger.info
            log(
                "position_alert",
                symbol=alert.symbol,
                level=alert.level.value,
                message=alert.message,
            )
        return alerts


async def run_sentinel(settings: AppSettings) -> None:
    api_key = load_api_key(settings.sentinel.credentials_file, settings.sentinel.api_key_name)
    async with (
        HttpFetcher(timeout=settings.sentinel.http_timeout) as fetcher,
        BinanceClient(settings.exchange) as exchange,
    ):
        board = TradingBoardClient(fetcher, api_key, settings.sentinel)
        await PositionSentinel(board, exchange, settings.sentinel, settings.paths).run()


def main() -> None:
    """Console entry point."""
    launch("position_sentinel", run_sentinel)
