"""Health Monitor -- freshness and integrity of every worker's output."""

from watchtower.health.checks import aggregate_status, check_module, default_modules
from watchtower.health.models import (
    HealthReport,
    HealthStatus,
    ModuleHealth,
    ModuleSpec,
    ModuleStatus,
)
from watchtower.health.worker import HealthMonitor

__all__ = [
    "HealthMonitor",
    "HealthReport",
    "HealthStatus",
    "ModuleHealth",
    "ModuleSpec",
    "ModuleStatus",
    "aggregate_status",
    "check_module",
    "default_modules",
]
