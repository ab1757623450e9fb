"""Per-module freshness checks and aggregate status."""

import math
from datetime import datetime, timezone
from pathlib import Path

from watchtower.config import AppSettings
from watchtower.exceptions import SnapshotCorruptError, SnapshotMissingError
from watchtower.health.models import HealthStatus, ModuleHealth, ModuleSpec, ModuleStatus
from watchtower.state.snapshot import read_json


def default_modules(settings: AppSettings) -> list[ModuleSpec]:
    """The monitored worker outputs, with their maximum acceptable age."""
    return [
        ModuleSpec("scanner", "Scanner", settings.scanner.output_file, 45),
        ModuleSpec(
            "marketPulse", "Market Pulse", settings.pulse.alert_file, 5, alert_only=True
        ),
        ModuleSpec(
            "positionSentinel",
            "Position Sentinel",
            settings.sentinel.alert_file,
            5,
            alert_only=True,
        ),
        ModuleSpec("macroPulse", "Macro Pulse", settings.macro.output_file, 30),
        ModuleSpec("newsScanner", "News Scanner", settings.news.output_file, 15),
    ]


def check_module(path: Path, spec: ModuleSpec, now_ms: int) -> ModuleHealth:
    """Cascade: missing, then corrupt, then stale, else ok.

    Alert-only modules resolve absence and staleness to ``ok`` with a note.
    """
    try:
        data = read_json(path)
    except SnapshotMissingError:
        if spec.alert_only:
            return ModuleHealth(note="No recent alerts (normal)")
        return ModuleHealth(
            status=ModuleStatus.MISSING, problem=f"{spec.label}: output file missing"
        )
    except SnapshotCorruptError:
        return ModuleHealth(
            status=ModuleStatus.CORRUPT, problem=f"{spec.label}: JSON parse failed"
        )

    ts = data.get("timestamp")
    try:
        ts = int(ts) if isinstance(ts, (int, float)) else 0
        last_run = datetime.fromtimestamp(ts / 1000, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return ModuleHealth(
            status=ModuleStatus.CORRUPT, problem=f"{spec.label}: invalid timestamp"
        )
    # Halves round up, not to even
    age_minutes = math.floor((now_ms - ts) / 60_000 + 0.5)
    health = ModuleHealth(last_run=last_run, age_minutes=age_minutes)

    if age_minutes <= spec.max_age_minutes:
        return health
    if spec.alert_only:
        health.note = "No recent alerts"
        return health
    health.status = ModuleStatus.STALE
    health.problem = f"{spec.label}: {age_minutes}min old (max {spec.max_age_minutes}min)"
    return health


def aggregate_status(
    unhealthy_count: int,
    api_failures: int,
    critical_api_failures: int = 3,
    critical_unhealthy_modules: int = 2,
) -> HealthStatus:
    """critical on repeated API failure or too many unhealthy modules, degraded on any issue.

    ``api_failures`` is the consecutive-failure counter after this run's ping,
    so it is 0 whenever the ping just succeeded.
    """
    if api_failures >= critical_api_failures:
        return HealthStatus.CRITICAL
    if unhealthy_count > critical_unhealthy_modules:
        return HealthStatus.CRITICAL
    if unhealthy_count > 0 or api_failures >= 1:
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY
