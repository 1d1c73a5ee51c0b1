"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_api.adapters.fdc_client import HttpxFdcClient
from food_api.api.rate_limit import RequestRateLimiter
from food_api.config import Settings, parse_term_list
from food_api.services.foods import FoodSearchService
from food_api.services.health import HealthService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_search_service: FoodSearchService
    health_service: HealthService
    rate_limiter: RequestRateLimiter
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    The FDC client is only created when an API key is configured.
    """
    resolved_settings = settings or Settings()
    fdc_client = None
    if resolved_settings.usda_api_key:
        fdc_client = HttpxFdcClient.create(
            api_key=resolved_settings.usda_api_key,
            base_url=resolved_settings.fdc_base_url,
        )
    food_search_service = FoodSearchService(
        fdc_client=fdc_client,
        blocked_terms=parse_term_list(resolved_settings.blocked_food_terms),
        timeout_seconds=resolved_settings.search_timeout_seconds,
    )
    health_service = HealthService(
        fdc_client=fdc_client,
        environment=resolved_settings.environment,
        version=resolved_settings.app_version,
        probe_upstream=resolved_settings.health_probe_upstream,
        probe_timeout_seconds=resolved_settings.health_timeout_seconds,
    )

    async def close_resources() -> None:
        if fdc_client is not None:
            await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_search_service=food_search_service,
        health_service=health_service,
        rate_limiter=RequestRateLimiter.from_string(resolved_settings.rate_limit),
        close_resources=close_resources,
    )
