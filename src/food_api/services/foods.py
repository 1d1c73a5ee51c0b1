"""Food search: request validation, upstream call and normalization."""

import logging
import re
from collections.abc import Collection
from dataclasses import dataclass, field

from food_api.adapters.fdc_client import FdcClient
from food_api.domain.nutrition import FoodSearchResult
from food_api.errors import ConfigurationError, FoodTypeError, ValidationError
from food_api.services.nutrients import normalize_foods

DEFAULT_LIMIT = 10
MAX_LIMIT = 50
MAX_TYPE_LENGTH = 100
MIN_TERM_LENGTH = 2
DEFAULT_BLOCKED_TERMS = frozenset({"test", "debug", "admin", "system"})

_TYPE_PATTERN = re.compile(r"[a-zA-Z0-9\s\-_]+")
_INT_PATTERN = re.compile(r"[+-]?\d+")
_DIGITS_ONLY = re.compile(r"\d+")
_WORD_CHAR = re.compile(r"\w")

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FoodQuery:
    """Validated search parameters."""

    term: str
    limit: int = DEFAULT_LIMIT


def parse_food_query(type_raw: str | None, limit_raw: str | None) -> FoodQuery:
    """Validate raw query parameters.

    All failing rules are reported together in a single ValidationError.
    """
    problems: list[str] = []
    term = (type_raw or "").strip()
    if not term:
        problems.append("Missing required query parameter 'type'")
    if not 1 <= len(term) <= MAX_TYPE_LENGTH:
        problems.append("Food type must be between 1 and 100 characters")
    if not _TYPE_PATTERN.fullmatch(term):
        problems.append(
            "Food type can only contain letters, numbers, spaces, "
            "hyphens, and underscores"
        )

    limit = DEFAULT_LIMIT
    if limit_raw is not None:
        if _INT_PATTERN.fullmatch(limit_raw.strip()) and (
            1 <= int(limit_raw) <= MAX_LIMIT
        ):
            limit = min(int(limit_raw), MAX_LIMIT)
        else:
            problems.append("Limit must be a number between 1 and 50")

    if problems:
        raise ValidationError(f"Invalid request parameters: {', '.join(problems)}")
    return FoodQuery(term=term, limit=limit)


def check_food_term(term: str, blocked_terms: Collection[str]) -> None:
    """Reject terms that are syntactically valid but useless as a food search."""
    if len(term) < MIN_TERM_LENGTH:
        raise FoodTypeError(
            "Food type must be at least 2 characters long "
            "for meaningful search results."
        )
    if (
        _DIGITS_ONLY.fullmatch(term)
        or not _WORD_CHAR.search(term)
        or term.lower() in blocked_terms
    ):
        raise FoodTypeError(
            f"Invalid food type: '{term}'. Please provide a valid food name."
        )


@dataclass
class FoodSearchService:
    """Searches FDC and returns normalized foods.

    ``fdc_client`` is ``None`` when no API key is configured; searches then
    fail with a ConfigurationError once the parameters are known to be valid.
    """

    fdc_client: FdcClient | None
    blocked_terms: Collection[str] = field(default=DEFAULT_BLOCKED_TERMS)
    timeout_seconds: float = 10

    async def search(
        self, type_raw: str | None, limit_raw: str | None = None
    ) -> FoodSearchResult:
        """Validate the request, query FDC and normalize the results."""
        query = parse_food_query(type_raw, limit_raw)
        if self.fdc_client is None:
            raise ConfigurationError(
                "Server misconfiguration: USDA API key is not configured. "
                "Please contact the administrator."
            )
        check_food_term(query.term, self.blocked_terms)

        payload = await self.fdc_client.search_foods(
            query.term, page_size=query.limit, timeout=self.timeout_seconds
        )
        raw_foods = payload.get("foods")
        foods = normalize_foods(raw_foods) if isinstance(raw_foods, list) else []
        _logger.info(
            "Food search: query=%s limit=%s results=%s",
            query.term,
            query.limit,
            len(foods),
        )
        return FoodSearchResult(query=query.term, limit=query.limit, foods=foods)
