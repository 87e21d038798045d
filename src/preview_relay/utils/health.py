"""Health check utilities for the server."""

import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from preview_relay import __version__
from preview_relay.config import Settings
from preview_relay.exceptions import InvalidURLError
from preview_relay.utils.links import validate_url


@dataclass
class HealthStatus:
    """Health status of a component."""

    name: str
    healthy: bool
    message: str = ""
    latency_ms: float = 0.0
    details: dict[str, Any] = field(default_factory=dict)


class HealthChecker:
    """
    Health checker for the application.

    Checks configuration and, optionally, upstream reachability.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def check_upstream(self) -> HealthStatus:
        """Check that the upstream site answers."""
        start = time.monotonic()
        url = self._settings.get_upstream_base_url()
        try:
            async with httpx.AsyncClient(
                timeout=5.0,
                verify=self._settings.get_ssl_context(),
            ) as client:
                response = await client.head(url)
                latency_ms = (time.monotonic() - start) * 1000

                return HealthStatus(
                    name="upstream",
                    healthy=response.status_code < 500,
                    message=f"Upstream reachable, status {response.status_code}",
                    latency_ms=latency_ms,
                )
        except httpx.HTTPError as e:
            latency_ms = (time.monotonic() - start) * 1000
            return HealthStatus(
                name="upstream",
                healthy=False,
                message=f"Upstream error: {e!s}",
                latency_ms=latency_ms,
            )

    async def check_configuration(self) -> HealthStatus:
        """Check that the configured base URLs are usable."""
        problems: list[str] = []
        for name in ("base_url", "upstream_base_url"):
            try:
                validate_url(getattr(self._settings, name))
            except InvalidURLError as e:
                problems.append(f"{name}: {e.message}")

        return HealthStatus(
            name="configuration",
            healthy=not problems,
            message="; ".join(problems) or "Configuration valid",
            details={
                "base_url": self._settings.get_base_url(),
                "upstream": self._settings.get_upstream_base_url(),
            },
        )

    async def check_all(self) -> dict[str, Any]:
        """
        Run all health checks and return overall status.

        Returns:
            Dictionary with health status information
        """
        checks = [await self.check_configuration()]
        if self._settings.health_check_upstream:
            checks.append(await self.check_upstream())

        all_healthy = all(check.healthy for check in checks)

        return {
            "healthy": all_healthy,
            "status": "healthy" if all_healthy else "unhealthy",
            "checks": {
                check.name: {
                    "healthy": check.healthy,
                    "message": check.message,
                    "latency_ms": check.latency_ms,
                    "details": check.details,
                }
                for check in checks
            },
            "version": __version__,
        }

    async def check_readiness(self) -> dict[str, Any]:
        """
        Check if the server is ready to accept requests.

        Returns:
            Dictionary with readiness status
        """
        config_check = await self.check_configuration()

        return {
            "ready": config_check.healthy,
            "status": "ready" if config_check.healthy else "not_ready",
            "upstream": config_check.details.get("upstream"),
        }

    async def check_liveness(self) -> dict[str, Any]:
        """
        Check if the server is alive.

        Returns:
            Dictionary with liveness status
        """
        return {
            "alive": True,
            "status": "alive",
        }
