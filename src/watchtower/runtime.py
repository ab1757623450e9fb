"""Top-level run boundary shared by every worker entry point.

Each worker is a run-to-completion process started by an external
scheduler. Whatever happens inside a run, the process must exit cleanly:
the absence or staleness of a worker's output file is the only failure
signal, and the Health Monitor is the component that reads it. This
module is the single place where worker exceptions are caught.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from watchtower.config import AppSettings, PathSettings
from watchtower.exceptions import WorkerSkipped
from watchtower.logging import bind_worker, get_logger, setup_logging
from watchtower.state.lock import RunLock

logger = get_logger(__name__)

WorkerJob = Callable[[AppSettings], Awaitable[None]]


class RunStatus(str, Enum):
    """How a worker run ended."""

    COMPLETED = "completed"
    SKIPPED = "skipped"  # structural early return, no output this cycle
    FAILED = "failed"  # unexpected error, captured at the boundary


@dataclass
class RunOutcome:
    """Result of one worker run. Produced instead of raising."""

    worker: str
    status: RunStatus
    detail: str = ""


async def run_worker(
    name: str,
    job: Callable[[], Awaitable[None]],
    paths: PathSettings,
) -> RunOutcome:
    """Run ``job`` under the worker's run lock and fold every error into a RunOutcome."""
    bind_worker(name)
    lock = (
        RunLock(paths.file(f".{name}.lock"), stale_after=paths.lock_stale_seconds)
        if paths.use_run_lock
        else None
    )

    try:
        if lock is not None:
            lock.acquire()
        try:
            await job()
        finally:
            if lock is not None:
                lock.release()
    except WorkerSkipped as exc:
        logger.debug("worker_skipped", reason=str(exc) or type(exc).__name__)
        return RunOutcome(name, RunStatus.SKIPPED, str(exc))
    except Exception as exc:
        logger.debug("worker_failed", error=repr(exc), exc_info=True)
        return RunOutcome(name, RunStatus.FAILED, repr(exc))

    logger.debug("worker_completed")
    return RunOutcome(name, RunStatus.COMPLETED)


def launch(name: str, job: WorkerJob) -> RunOutcome:
    """Synchronous entry point: load settings, configure logging, run once.

    Never raises, including for invalid settings.
    """
    try:
        settings = AppSettings()
        setup_logging(settings.log_level)
    except Exception as exc:
        return RunOutcome(name, RunStatus.FAILED, repr(exc))

    return asyncio.run(run_worker(name, lambda: job(settings), settings.paths))
