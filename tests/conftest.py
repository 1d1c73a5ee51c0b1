"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from food_api.adapters.fdc_client import FdcClient
from food_api.api.rate_limit import RequestRateLimiter
from food_api.config import Settings
from food_api.containers import AppContainer
from food_api.services.foods import FoodSearchService
from food_api.services.health import HealthService


def nutrient(number: str, name: str, value: object, unit: str) -> dict[str, object]:
    return {
        "nutrientNumber": number,
        "nutrientName": name,
        "value": value,
        "unitName": unit,
    }


def apple_item() -> dict[str, object]:
    return {
        "fdcId": 171688,
        "description": "Apples, raw, with skin",
        "brandOwner": "Orchard Co",
        "servingSize": 182,
        "servingSizeUnit": "g",
        "foodNutrients": [
            nutrient("1008", "Energy", 52, "KCAL"),
            nutrient("1003", "Protein", 0.26, "G"),
            nutrient("1004", "Total lipid (fat)", 170, "MG"),
            nutrient("1005", "Carbohydrate, by difference", 13.81, "G"),
        ],
    }


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {"foods": [apple_item()]}
    )
    search_error: Exception | None = None
    probe_ok: bool = True
    probe_error: Exception | None = None
    searches: list[tuple[str, int, float]] = field(default_factory=list)

    async def search_foods(
        self, query: str, page_size: int = 10, timeout: float = 10
    ) -> dict[str, object]:
        self.searches.append((query, page_size, timeout))
        if self.search_error is not None:
            raise self.search_error
        return self.search_payload

    async def probe(self, timeout: float = 5) -> bool:
        if self.probe_error is not None:
            raise self.probe_error
        return self.probe_ok


@pytest.fixture
def settings() -> Settings:
    return Settings(usda_api_key="fdc-key", environment="test")


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


def make_container(
    settings: Settings,
    fdc_client: FdcClient | None,
    rate_limit: str = "100 per 15 minutes",
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_search_service=FoodSearchService(fdc_client=fdc_client),
        health_service=HealthService(
            fdc_client=fdc_client,
            environment=settings.environment,
            version=settings.app_version,
        ),
        rate_limiter=RequestRateLimiter.from_string(rate_limit),
        close_resources=close_resources,
    )


@pytest.fixture
def container(settings: Settings, fdc_client: FakeFdcClient) -> AppContainer:
    return make_container(settings, fdc_client)
