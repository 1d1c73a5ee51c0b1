"""Static API description served at the root endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

if TYPE_CHECKING:
    from food_api.containers import AppContainer

router = APIRouter(tags=["docs"])


@router.get("/")
async def api_info(request: Request) -> dict[str, object]:
    """Describe the API surface."""
    container: AppContainer = request.app.state.container
    settings = container.settings
    limiter = container.rate_limiter
    return {
        "name": "Food API",
        "version": settings.app_version,
        "description": (
            "A RESTful API to fetch food information from the "
            "USDA FoodData Central database"
        ),
        "baseUrl": settings.base_url,
        "endpoints": _ENDPOINTS,
        "rateLimiting": {
            "windowMs": limiter.window_description,
            "maxRequests": limiter.item.amount,
            "description": (
                f"Rate limited to {limiter.item.amount} requests per IP address "
                f"per {limiter.window_description} window"
            ),
        },
        "usdaDisclaimer": _USDA_DISCLAIMER,
        "contact": {
            "message": (
                "For API support or questions, please refer to the project "
                "documentation or contact the development team."
            )
        },
    }


_ENDPOINTS: dict[str, object] = {
    "root": {
        "path": "/",
        "method": "GET",
        "description": "API documentation and welcome message",
    },
    "health": {
        "path": "/health",
        "method": "GET",
        "description": (
            "Health check endpoint to verify API status and service connectivity"
        ),
    },
    "foods": {
        "path": "/foods",
        "method": "GET",
        "description": "Search for food items in the USDA database",
        "queryParameters": {
            "type": {
                "required": True,
                "type": "string",
                "description": (
                    'Food type to search for (e.g., "apple", "chicken breast")'
                ),
                "example": "apple",
            },
            "limit": {
                "required": False,
                "type": "number",
                "description": (
                    "Maximum number of results to return (1-50, default: 10)"
                ),
                "example": 10,
            },
        },
        "example": "/foods?type=apple&limit=5",
    },
}

_USDA_DISCLAIMER: dict[str, str] = {
    "important": "USDA Data Disclaimer",
    "message": (
        "This API provides access to data from the USDA FoodData Central "
        "database. The USDA requires the following disclaimer for all uses "
        "of their data:"
    ),
    "disclaimer": (
        "The U.S. Department of Agriculture (USDA) prohibits discrimination "
        "against its customers, employees, and applicants for employment on "
        "the basis of race, color, national origin, age, disability, sex, "
        "gender identity, religion, reprisal, and where applicable, political "
        "beliefs, marital status, familial or parental status, sexual "
        "orientation, or all or part of an individual's income is derived "
        "from any public assistance program, or protected genetic information "
        "in employment or in any program or activity conducted or funded by "
        "the Department. (Not all prohibited bases apply to all programs "
        "and/or employment activities.)"
    ),
    "additionalInfo": (
        "For more information about USDA data usage and policies, please "
        "visit: https://www.nal.usda.gov/fnic/fooddata-central"
    ),
}
