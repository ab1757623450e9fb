"""Watchtower -- scheduled market-surveillance workers and their health monitor."""

__version__ = "1.0.0"
