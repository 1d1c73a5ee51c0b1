"""Typed errors surfaced to API callers."""

from __future__ import annotations

UPSTREAM_STATUS_MESSAGES: dict[int, str] = {
    400: "Invalid request sent to USDA API",
    401: "USDA API authentication failed",
    403: "Access to USDA API denied",
    404: "USDA API endpoint not found",
    429: "USDA API rate limit exceeded",
    500: "USDA API internal server error",
    502: "USDA API gateway error",
    503: "USDA API service unavailable",
    504: "USDA API gateway timeout",
}
DEFAULT_UPSTREAM_MESSAGE = "USDA API error occurred"


class FoodApiError(Exception):
    """Base error rendered as a structured JSON response."""

    status_code: int = 500
    error_type: str = "FoodApiError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, object]:
        """Return the error body without the timestamp."""
        return {"error": self.message, "type": self.error_type}


class ValidationError(FoodApiError):
    """Request parameters failed syntactic validation."""

    status_code = 400
    error_type = "ValidationError"


class FoodTypeError(FoodApiError):
    """Food term is well formed but not a meaningful search."""

    status_code = 400
    error_type = "FoodTypeError"


class ConfigurationError(FoodApiError):
    """Server is missing required configuration."""

    status_code = 500
    error_type = "ConfigurationError"


class _WrappedError(FoodApiError):
    def __init__(self, message: str, original_error: str | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error

    def to_payload(self) -> dict[str, object]:
        payload = super().to_payload()
        if self.original_error:
            payload["original_error"] = self.original_error
        return payload


class NetworkError(_WrappedError):
    """Upstream could not be reached or timed out."""

    status_code = 503
    error_type = "NetworkError"


class ParsingError(_WrappedError):
    """Upstream answered with a body we cannot use."""

    status_code = 422
    error_type = "ParsingError"


class UpstreamAPIError(FoodApiError):
    """Upstream answered with a non-success status.

    Upstream 5xx statuses are reported as 503 so they are not mistaken for
    failures of this service.
    """

    error_type = "UpstreamAPIError"

    def __init__(
        self,
        message: str,
        upstream_status: int,
        upstream_response: object | None = None,
    ) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status
        self.upstream_response = upstream_response
        self.status_code = 503 if upstream_status >= 500 else upstream_status

    @classmethod
    def from_status(
        cls, upstream_status: int, upstream_response: object | None = None
    ) -> UpstreamAPIError:
        """Build an error using the fixed status message table."""
        message = UPSTREAM_STATUS_MESSAGES.get(
            upstream_status, DEFAULT_UPSTREAM_MESSAGE
        )
        return cls(message, upstream_status, upstream_response)

    def to_payload(self) -> dict[str, object]:
        payload = super().to_payload()
        payload["upstream_status"] = self.upstream_status
        if self.upstream_response is not None:
            payload["upstream_details"] = self.upstream_response
        return payload
