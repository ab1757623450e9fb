"""Health Monitor worker.

Reads every other worker's output file (read-only), pings the exchange and
publishes an aggregate health snapshot. The only worker that speaks up on
its own: one summary line whenever the aggregate is not healthy.
"""

from watchtower.config import AppSettings, HealthSettings, PathSettings
from watchtower.exchange.binance_client import BinanceClient
from watchtower.exchange.client import ExchangeClient
from watchtower.health.checks import aggregate_status, check_module, default_modules
from watchtower.health.models import HealthReport, HealthStatus, ModuleSpec
from watchtower.logging import get_logger
from watchtower.models import now_ms
from watchtower.runtime import launch
from watchtower.state.snapshot import load_json, write_json_atomic

logger = get_logger(__name__)


class HealthMonitor:
    """One health check pass.

    Args:
        exchange: Exchange client used only for its connectivity ping.
        modules: Monitored worker outputs.
        settings: Escalation thresholds and own file names.
        paths: Data directory shared with the other workers.
    """

    def __init__(
        self,
        exchange: ExchangeClient,
        modules: list[ModuleSpec],
        settings: HealthSettings,
        paths: PathSettings,
    ) -> None:
        self._exchange = exchange
        self._modules = modules
        self._settings = settings
        self._paths = paths

    async def run(self, now: int | None = None) -> HealthReport:
        now = now if now is not None else now_ms()
        state_path = self._paths.file(self._settings.state_file)
        state = load_json(state_path) or {}

        modules = {
            spec.key: check_module(self._paths.file(spec.file), spec, now)
            for spec in self._modules
        }
        alerts = [m.problem for m in modules.values() if m.problem]
        unhealthy = sum(1 for m in modules.values() if m.is_unhealthy)

        api_ok = await self._exchange.ping()
        failures = state.get("apiFailures")
        failures = failures if isinstance(failures, int) else 0
        failures = 0 if api_ok else failures + 1
        if failures >= self._settings.critical_api_failures:
            alerts.append(f"Binance API: {failures} consecutive failures")
        write_json_atomic(state_path, {"apiFailures": failures})

        report = HealthReport(
            timestamp=now,
            status=aggregate_status(
                unhealthy,
                failures,
                self._settings.critical_api_failures,
                self._settings.critical_unhealthy_modules,
            ),
            modules=modules,
            api_ok=api_ok,
            api_failures=failures,
            alerts=alerts,
        )
        write_json_atomic(self._paths.file(self._settings.output_file), report.to_dict())

        if report.status != HealthStatus.HEALTHY:
            log = logger.error if report.status == HealthStatus.CRITICAL else logger.warning
            log("health_" + report.status.value, alerts="; ".join(alerts))
        return report


async def run_health(settings: AppSettings) -> None:
    async with BinanceClient(settings.exchange) as exchange:
        await HealthMonitor(
            exchange, default_modules(settings), settings.health, settings.paths
        ).run()


def main() -> None:
    """Console entry point."""
    launch("health", run_health)
