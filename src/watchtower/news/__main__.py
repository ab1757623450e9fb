"""Allow running the news scanner as ``python -m watchtower.news``."""

from watchtower.news.worker import main

main()
