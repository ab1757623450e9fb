"""Per-worker run lock.

The scheduler fires each worker on a fixed cadence and nothing else stops a
slow run from overlapping the next one. The lock file makes the second run
skip instead of racing the first on the same snapshot files. A lock older
than ``stale_after`` seconds belongs to a run that was killed and is broken.
"""

import json
import os
import time
from pathlib import Path

from watchtower.exceptions import RunLockedError
from watchtower.logging import get_logger

logger = get_logger(__name__)


class RunLock:
    """Exclusive lock file held for the duration of one worker run.

    Usage:
        with RunLock(data_dir / ".scanner.lock"):
            await scanner.run()
    """

    def __init__(self, path: Path, stale_after: float = 3600.0) -> None:
        self._path = path
        self._stale_after = stale_after
        self._held = False

    @property
    def path(self) -> Path:
        return self._path

    def acquire(self) -> None:
        """Create the lock file or raise RunLockedError if a live run holds it."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._create()
        except FileExistsError:
            if not self._is_stale():
                raise RunLockedError(str(self._path)) from None
            logger.warning("breaking_stale_lock", path=str(self._path))
            self._path.unlink(missing_ok=True)
            try:
                self._create()
            except FileExistsError:
                # Another run broke the same stale lock first
                raise RunLockedError(str(self._path)) from None
        self._held = True

    def release(self) -> None:
        if self._held:
            self._path.unlink(missing_ok=True)
            self._held = False

    def __enter__(self) -> "RunLock":
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def _create(self) -> None:
        fd = os.open(self._path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump({"pid": os.getpid(), "acquiredAt": time.time()}, fh)

    def _is_stale(self) -> bool:
        try:
            age = time.time() - self._path.stat().st_mtime
        except FileNotFoundError:
            return True
        return age > self._stale_after
