"""Scan universe selection and watchlist assembly."""

from decimal import Decimal

from watchtower.config import ScannerSettings
from watchtower.models import to_decimal
from watchtower.scanner.models import CoinScore


def listed_pairs(markets: dict, settings: ScannerSettings) -> list[str]:
    """Active spot pairs quoted in the reference currency."""
    return [
        symbol
        for symbol, market in markets.items()
        if market.get("quote") == settings.quote_currency
        and market.get("spot")
        and market.get("active")
    ]


def quote_pairs(markets: dict, settings: ScannerSettings) -> list[str]:
    """Listed pairs with stablecoin bases excluded."""
    return [
        symbol
        for symbol in listed_pairs(markets, settings)
        if markets[symbol].get("base") not in settings.stablecoins
    ]


def quote_volume(ticker: dict | None) -> Decimal:
    """24h quote volume from a ccxt ticker (0 when missing)."""
    if not ticker:
        return Decimal("0")
    return to_decimal(ticker.get("quoteVolume"))


def select_candidates(
    symbols: list[str],
    tickers: dict,
    markets: dict,
    settings: ScannerSettings,
) -> list[str]:
    """Filter by the 24h volume floor, then pin core and hedge symbols.

    Core and hedge symbols are added even below the floor, provided the
    exchange lists them.
    """
    selected = [
        s for s in symbols if quote_volume(tickers.get(s)) >= settings.min_volume_usd
    ]
    present = set(selected)
    for symbol in [*settings.core_symbols, settings.hedge_symbol]:
        if symbol not in present and symbol in markets:
            selected.append(symbol)
            present.add(symbol)
    return selected


def build_watchlist(results: list[CoinScore], max_others: int = 21) -> list[CoinScore]:
    """Core first (by score), then the top ``max_others`` remaining, then the hedge.

    A symbol appears at most once; the first result seen for a symbol wins.
    """
    unique: dict[str, CoinScore] = {}
    for coin in results:
        unique.setdefault(coin.symbol, coin)

    by_score = sorted(unique.values(), key=lambda c: c.score, reverse=True)
    core = [c for c in by_score if c.is_core]
    rest = [c for c in by_score if not c.is_core and not c.is_hedge][:max_others]
    hedge = next((c for c in by_score if c.is_hedge and not c.is_core), None)

    watchlist = [*core, *rest]
    if hedge is not None:
        watchlist.append(hedge)
    return watchlist
