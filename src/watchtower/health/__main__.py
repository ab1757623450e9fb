"""Allow running the health monitor as ``python -m watchtower.health``."""

from watchtower.health.worker import main

main()
