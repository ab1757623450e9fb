"""Health Monitor data models."""

from dataclasses import dataclass, field
from enum import Enum


class ModuleStatus(str, Enum):
    OK = "ok"
    MISSING = "missing"
    CORRUPT = "corrupt"
    STALE = "stale"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ModuleSpec:
    """A monitored worker output.

    ``alert_only`` modules write their file only when they have something to
    report, so a missing or old file is their normal state.
    """

    key: str
    label: str
    file: str
    max_age_minutes: int
    alert_only: bool = False


@dataclass
class ModuleHealth:
    status: ModuleStatus = ModuleStatus.OK
    last_run: str | None = None  # ISO-8601 UTC of the snapshot timestamp
    age_minutes: int | None = None
    note: str | None = None
    problem: str | None = None  # human-readable alert line, set when unhealthy

    @property
    def is_unhealthy(self) -> bool:
        return self.status != ModuleStatus.OK

    def to_dict(self) -> dict:
        data = {
            "status": self.status,
            "lastRun": self.last_run,
            "ageMinutes": self.age_minutes,
        }
        if self.note:
            data["note"] = self.note
        return data


@dataclass
class HealthReport:
    timestamp: int
    status: HealthStatus
    modules: dict[str, ModuleHealth]
    api_ok: bool
    api_failures: int
    alerts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "status": self.status,
            "modules": {key: m.to_dict() for key, m in self.modules.items()},
            "api": {
                "binance": "ok" if self.api_ok else "down",
                "consecutiveFailures": self.api_failures,
            },
            "alerts": self.alerts,
        }
