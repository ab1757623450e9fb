"""Allow running the macro monitor as ``python -m watchtower.macro``."""

from watchtower.macro.worker import main

main()
