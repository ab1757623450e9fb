"""Market Pulse worker.

Watches the core symbols plus the scanner's current watchlist for crashes
and breakouts over 5 and 15 minutes. Yellow alerts are only logged; the
alert file is written when at least one move reached crash or breakout
level. Silent otherwise.
"""

from decimal import Decimal

from watchtower.config import AppSettings, PathSettings, PulseSettings, ScannerSettings
from watchtower.exchange.binance_client import BinanceClient
from watchtower.exchange.client import ExchangeClient
from watchtower.indicators import pct_change
from watchtower.logging import get_logger
from watchtower.models import PricePoint, now_ms, to_decimal
from watchtower.pulse.classify import MoveAlert, classify_move, strongest
from watchtower.runtime import launch
from watchtower.state.history import PriceHistoryStore
from watchtower.state.rolling import find_at_or_before
from watchtower.state.snapshot import load_json, write_json_atomic

logger = get_logger(__name__)

_MINUTE_MS = 60_000


def watched_symbols(scanner_snapshot: dict | None, core_symbols: list[str]) -> list[str]:
    """Core symbols first, then watchlist symbols, without duplicates."""
    symbols = dict.fromkeys(core_symbols)
    for coin in (scanner_snapshot or {}).get("watchlist") or []:
        if isinstance(coin, dict) and coin.get("symbol"):
            symbols[coin["symbol"]] = None
    return list(symbols)


def analyze_symbol(
    symbol: str,
    history: list[PricePoint],
    now: int,
    benchmark: str,
) -> MoveAlert | None:
    if len(history) < 2:
        return None
    current = history[-1].price

    changes: dict[int, Decimal | None] = {}
    for minutes in (5, 15):
        reference = find_at_or_before(history, now - minutes * _MINUTE_MS)
        changes[minutes] = pct_change(current, reference.price) if reference else None

    classified = classify_move(changes[5], changes[15], is_benchmark=symbol == benchmark)
    if classified is None:
        return None
    level, direction = classified
    return MoveAlert(
        symbol=symbol,
        level=level,
        direction=direction,
        change_5m=changes[5],
        change_15m=changes[15],
        current_price=current,
    )


class MarketPulseMonitor:
    """One market pulse run.

    Args:
        exchange: Market-data exchange client.
        settings: History window, benchmark symbol and file names.
        scanner: Scanner settings, for the core symbols and the watchlist file.
        paths: Data directory.
    """

    def __init__(
        self,
        exchange: ExchangeClient,
        settings: PulseSettings,
        scanner: ScannerSettings,
        paths: PathSettings,
    ) -> None:
        self._exchange = exchange
        self._settings = settings
        self._scanner = scanner
        self._paths = paths

    async def run(self, now: int | None = None) -> list[MoveAlert]:
        """Record prices and classify moves.

        Raises:
            FetchError: the ticker batch is unavailable; nothing is written.
        """
        symbols = watched_symbols(
            load_json(self._paths.file(self._scanner.output_file)),
            self._scanner.core_symbols,
        )
        tickers = await self._exchange.fetch_tickers(symbols)
        now = now if now is not None else now_ms()

        prices_path = self._paths.file(self._settings.prices_file)
        store = PriceHistoryStore.from_dict(
            load_json(prices_path), window_ms=self._settings.history_minutes * _MINUTE_MS
        )
        for symbol in symbols:
            last = (tickers.get(symbol) or {}).get("last")
            if last:
                store.record(symbol, PricePoint(price=to_decimal(last), ts=now))
        write_json_atomic(prices_path, store.to_dict(now))

        alerts: list[MoveAlert] = []
        for symbol in symbols:
            alert = analyze_symbol(
                symbol, store.get(symbol), now, self._settings.benchmark_symbol
            )
            if alert is not None:
                alerts.append(alert)
        if not alerts:
            return alerts

        top = strongest(alerts)
        message = ". ".join(a.describe() for a in alerts) + "."

        if top.severity == 0:
            logger.info("market_pulse_alert", direction=top.direction, message=message)
            return alerts

        write_json_atomic(
            self._paths.file(self._settings.alert_file),
            {
                "level": top.level,
                "direction": top.direction,
                "timestamp": now,
                "coins": [a.to_dict() for a in alerts if a.severity >= 1],
                "message": message,
            },
        )
        logger.warning(
            "market_pulse_event", level=top.level, direction=top.direction, message=message
        )
        return alerts


async def run_pulse(settings: AppSettings) -> None:
    async with BinanceClient(settings.exchange) as exchange:
        await MarketPulseMonitor(
            exchange, settings.pulse, settings.scanner, settings.paths
        ).run()


def main() -> None:
    """Console entry point."""
    launch("market_pulse", run_pulse)
