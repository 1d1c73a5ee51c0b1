"""USDA FoodData Central API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from food_api.errors import NetworkError, ParsingError, UpstreamAPIError

_logger = logging.getLogger(__name__)


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    async def search_foods(
        self, query: str, page_size: int = 10, timeout: float = 10
    ) -> dict[str, object]:
        """Search foods by query and return the raw JSON object."""

    async def probe(self, timeout: float = 5) -> bool:
        """Return whether the search endpoint answers with a success status."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_foods(
        self, query: str, page_size: int = 10, timeout: float = 10
    ) -> dict[str, object]:
        """Search foods by query.

        Raises NetworkError when the API cannot be reached, UpstreamAPIError
        on a non-success status and ParsingError when the body is not a JSON
        object.
        """
        response = await self._get_search(query, page_size, timeout)
        if not response.is_success:
            raise UpstreamAPIError.from_status(
                response.status_code, _error_body(response)
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise ParsingError(
                "Failed to parse response from USDA API. "
                "The response format is invalid.",
                str(exc),
            ) from exc
        if not isinstance(data, dict):
            raise ParsingError(
                "Invalid response format from USDA API. "
                "Expected an object but received invalid data."
            )
        return data

    async def probe(self, timeout: float = 5) -> bool:
        """Run a one-result search to check the API is reachable."""
        response = await self._get_search("test", 1, timeout)
        return response.is_success

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get_search(
        self, query: str, page_size: int, timeout: float
    ) -> httpx.Response:
        url = f"{self.base_url}/foods/search"
        try:
            return await self.http_client.get(
                url,
                params={
                    "api_key": self.api_key,
                    "query": query,
                    "pageSize": str(page_size),
                },
                headers={"Accept": "application/json"},
                timeout=timeout,
            )
        except httpx.TimeoutException as exc:
            raise NetworkError(
                "Request to USDA API timed out. Please try again later.",
                str(exc) or type(exc).__name__,
            ) from exc
        except httpx.ConnectError as exc:
            raise NetworkError(
                "Failed to connect to USDA API. "
                "Please check your internet connection and try again.",
                str(exc) or type(exc).__name__,
            ) from exc
        except httpx.RequestError as exc:
            raise NetworkError(
                "Network error occurred while fetching food data. "
                "Please try again later.",
                str(exc) or type(exc).__name__,
            ) from exc


def _error_body(response: httpx.Response) -> object:
    """Return the upstream error body, or a placeholder when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        _logger.debug(
            "Upstream error body is not JSON: status=%s", response.status_code
        )
        return {"message": "Unknown upstream error"}
