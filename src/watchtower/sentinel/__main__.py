"""Allow running the sentinel as ``python -m watchtower.sentinel``."""

from watchtower.sentinel.worker import main

main()
