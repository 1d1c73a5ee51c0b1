"""Service health reporting."""

import logging
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime

from food_api.adapters.fdc_client import FdcClient
from food_api.errors import NetworkError

_logger = logging.getLogger(__name__)


@dataclass
class HealthService:
    """Builds the health envelope and optionally probes FDC."""

    fdc_client: FdcClient | None
    environment: str
    version: str
    probe_upstream: bool = True
    probe_timeout_seconds: float = 5
    started_at: float = field(default_factory=time.monotonic)

    async def report(self) -> dict[str, object]:
        """Return the composite health status.

        A failed probe only changes ``services.usda_api``.
        """
        services: dict[str, str] = {
            "api": "healthy",
            "usda_api_key": (
                "configured" if self.fdc_client is not None else "missing"
            ),
        }
        if self.fdc_client is None:
            services["usda_api"] = "not_configured"
        elif self.probe_upstream:
            services["usda_api"] = await self._probe(self.fdc_client)

        return {
            "status": "healthy",
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "uptime": round(time.monotonic() - self.started_at, 3),
            "environment": self.environment,
            "version": self.version,
            "services": services,
        }

    async def _probe(self, client: FdcClient) -> str:
        try:
            ok = await client.probe(timeout=self.probe_timeout_seconds)
        except NetworkError as exc:
            _logger.warning("USDA API unreachable: %s", exc.original_error)
            return "unreachable"
        except Exception:
            _logger.exception("USDA API probe failed")
            return "unreachable"
        return "healthy" if ok else "unhealthy"
