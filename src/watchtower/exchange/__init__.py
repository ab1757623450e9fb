"""Exchange client layer -- Binance public market data via ccxt."""

from watchtower.exchange.binance_client import BinanceClient
from watchtower.exchange.client import ExchangeClient

__all__ = ["BinanceClient", "ExchangeClient"]
