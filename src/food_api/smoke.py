"""Smoke test a running deployment of the food API.

Usage: ``food-api-smoke [base-url]`` (default ``http://localhost:3000``).
"""

import json
import sys
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

DEFAULT_BASE_URL = "http://localhost:3000"


@dataclass(frozen=True)
class SmokeCheck:
    """One endpoint to request and the status class that counts as a pass."""

    endpoint: str
    description: str
    expected_status: int | None = None

    def passed(self, status_code: int) -> bool:
        if self.expected_status is not None:
            return status_code == self.expected_status
        return 200 <= status_code < 300


SMOKE_CHECKS = (
    SmokeCheck("/health", "Health Check"),
    SmokeCheck("/foods?type=apple&limit=2", "Food Search"),
    SmokeCheck("/nonexistent", "404 Handler", expected_status=404),
)


def run_check(client: httpx.Client, base_url: str, check: SmokeCheck) -> bool:
    """Request one endpoint and print what came back."""
    url = f"{base_url}{check.endpoint}"
    print(f"\nTesting: {check.description}")
    print(f"   URL: {url}")
    try:
        response = client.get(url)
        body = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        print(f"   Error: {exc}")
        return False
    print(f"   Status: {response.status_code}")
    print(f"   Response: {json.dumps(body, indent=2)}")
    return check.passed(response.status_code)


def main(argv: Sequence[str] | None = None, client: httpx.Client | None = None) -> int:
    """Run every smoke check and return a process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    base_url = (args[0] if args else DEFAULT_BASE_URL).rstrip("/")
    print(f"Testing API deployment at: {base_url}")

    http_client = client or httpx.Client(timeout=15)
    try:
        passed = sum(
            run_check(http_client, base_url, check) for check in SMOKE_CHECKS
        )
    finally:
        if client is None:
            http_client.close()

    total = len(SMOKE_CHECKS)
    print(f"\nTest Results: {passed}/{total} tests passed")
    if passed == total:
        print("All tests passed! Your API is working correctly.")
        return 0
    print("Some tests failed. Please check your deployment.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
