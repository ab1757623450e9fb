"""Allow running the market pulse as ``python -m watchtower.pulse``."""

from watchtower.pulse.worker import main

main()
