"""Allow running the scanner as ``python -m watchtower.scanner``."""

from watchtower.scanner.worker import main

main()
