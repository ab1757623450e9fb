"""Custom exceptions for the surveillance workers.

All client-layer and state-layer exceptions live here to avoid circular
imports between the worker packages.
"""


class WatchtowerError(Exception):
    """Base exception for all watchtower errors."""


class FetchError(WatchtowerError):
    """Raised when an HTTP or exchange call fails, times out, or returns a non-2xx status."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class SnapshotMissingError(WatchtowerError):
    """Raised when a snapshot file does not exist."""


class SnapshotCorruptError(WatchtowerError):
    """Raised when a snapshot file exists but does not hold a JSON object."""


class WorkerSkipped(WatchtowerError):
    """Raised by a worker to end its run early without producing output.

    Used for structural conditions (no credential, no active trades, no
    viable symbols) that are expected and must stay silent.
    """


class CredentialMissingError(WorkerSkipped):
    """Raised when the local credential file or the expected key is absent."""


class RunLockedError(WorkerSkipped):
    """Raised when another run of the same worker still holds its lock file."""
