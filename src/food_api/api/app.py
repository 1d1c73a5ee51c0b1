"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from food_api.api.docs import router as docs_router
from food_api.api.rate_limit import RATE_LIMIT_MESSAGE
from food_api.app_logging import configure_logging
from food_api.config import parse_origins
from food_api.containers import AppContainer
from food_api.errors import FoodApiError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(
        title="Food API",
        version=container.settings.app_version,
        lifespan=lifespan,
    )
    app.state.container = container

    @app.middleware("http")
    async def rate_limit(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        state_container: AppContainer = request.app.state.container
        limiter = state_container.rate_limiter
        decision = limiter.hit(_client_key(request))
        if not decision.allowed:
            logger.warning("Rate limit exceeded: client=%s", _client_key(request))
            return JSONResponse(
                status_code=429,
                content={
                    "error": RATE_LIMIT_MESSAGE,
                    "retryAfter": limiter.window_description,
                },
                headers=decision.headers(),
            )
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("Unexpected error: path=%s", request.url.path)
            response = _internal_error_response(exc)
        response.headers.update(decision.headers())
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_origins(container.settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(docs_router)

    @app.get("/health")
    async def health(request: Request) -> JSONResponse:
        """Health check with an optional FDC connectivity probe."""
        state_container: AppContainer = request.app.state.container
        try:
            report = await state_container.health_service.report()
        except Exception as exc:
            logger.exception("Health check failed")
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "timestamp": _timestamp(),
                    "error": str(exc) or "Unknown error",
                },
            )
        return JSONResponse(status_code=200, content=report)

    @app.get("/foods")
    async def foods(
        request: Request,
        food_type: str | None = Query(default=None, alias="type"),
        limit: str | None = Query(default=None),
    ) -> dict[str, object]:
        """Search FDC foods and return normalized calories and macros."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.food_search_service.search(food_type, limit)
        return result.to_dict()

    @app.exception_handler(FoodApiError)
    async def food_api_error_handler(
        request: Request, exc: FoodApiError
    ) -> JSONResponse:
        logger.error(
            "Request failed: path=%s type=%s status=%s: %s",
            request.url.path,
            exc.error_type,
            exc.status_code,
            exc.message,
        )
        payload = exc.to_payload()
        payload["timestamp"] = _timestamp()
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code not in {404, 405}:
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": exc.detail, "timestamp": _timestamp()},
                headers=getattr(exc, "headers", None),
            )
        return JSONResponse(
            status_code=404,
            content={
                "error": "Endpoint not found",
                "type": "NotFoundError",
                "path": _original_url(request),
                "timestamp": _timestamp(),
                "message": (
                    "The requested endpoint does not exist. "
                    "Please check the URL and try again."
                ),
            },
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unexpected error: path=%s", request.url.path)
        return _internal_error_response(exc)

    return app


def _internal_error_response(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc) or "An unexpected error occurred",
            "type": "InternalServerError",
            "timestamp": _timestamp(),
            "message": (
                "Please try again later or contact support "
                "if the problem persists."
            ),
        },
    )


def _client_key(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return request.client.host


def _original_url(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def _timestamp() -> str:
    return datetime.now(tz=UTC).isoformat()
