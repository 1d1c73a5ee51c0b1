"""Nutrient lookup and unit normalization for FDC food items."""

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal, localcontext

from food_api.domain.nutrition import MacroBreakdown, NormalizedFood

ENERGY_IDS = ("1008", "Energy")
PROTEIN_IDS = ("1003", "Protein")
FAT_IDS = ("1004", "Total lipid (fat)", "Total Fat")
CARBS_IDS = ("1005", "Carbohydrate, by difference", "Carbohydrate")

KJ_PER_KCAL = 4.184
MG_PER_G = 1000

_logger = logging.getLogger(__name__)


def find_nutrient(
    nutrients: Iterable[object], identifiers: Sequence[str]
) -> Mapping[str, object] | None:
    """Return the first nutrient whose number or name matches an identifier.

    Numbers must match exactly after trimming; names match case-insensitively.
    """
    keys = [str(key) for key in identifiers]
    lowered = {key.lower() for key in keys}
    try:
        for nutrient in nutrients:
            if not isinstance(nutrient, Mapping):
                continue
            number = _text(nutrient, "nutrientNumber", "number")
            name = _text(nutrient, "nutrientName", "name")
            if number in keys or name.lower() in lowered:
                return nutrient
    except Exception:
        _logger.warning("Error finding nutrient %s", keys, exc_info=True)
    return None


def energy_kcal(nutrients: Iterable[object]) -> float | None:
    """Return energy in kcal, converting from kJ, rounded to 1 decimal."""
    try:
        match = find_nutrient(nutrients, ENERGY_IDS)
        if match is None:
            return None
        value = _numeric_value(match)
        if value is None:
            return None
        if _unit(match) == "kj":
            value = value / KJ_PER_KCAL
        return _round(value, 1)
    except Exception:
        _logger.warning("Error parsing energy value", exc_info=True)
        return None


def nutrient_grams(
    nutrients: Iterable[object], identifiers: Sequence[str]
) -> float | None:
    """Return a mass nutrient in grams, converting from mg, rounded to 2 decimals."""
    try:
        match = find_nutrient(nutrients, identifiers)
        if match is None:
            return None
        value = _numeric_value(match)
        if value is None:
            return None
        if _unit(match) == "mg":
            value = value / MG_PER_G
        return _round(value, 2)
    except Exception:
        _logger.warning("Error parsing nutrient value %s", identifiers, exc_info=True)
        return None


def normalize_food(item: Mapping[str, object]) -> NormalizedFood:
    """Build a canonical food record from a raw FDC search item."""
    raw_nutrients = item.get("foodNutrients")
    nutrients = raw_nutrients if isinstance(raw_nutrients, list) else []
    brand_name = item.get("brandName")
    if brand_name is None:
        brand_name = item.get("brandOwner")
    return NormalizedFood(
        fdc_id=item.get("fdcId"),
        description=item.get("description"),
        brand_name=brand_name,
        serving_size=item.get("servingSize"),
        serving_size_unit=item.get("servingSizeUnit"),
        calories=energy_kcal(nutrients),
        macros=MacroBreakdown(
            protein_g=nutrient_grams(nutrients, PROTEIN_IDS),
            carbs_g=nutrient_grams(nutrients, CARBS_IDS),
            fat_g=nutrient_grams(nutrients, FAT_IDS),
        ),
    )


def normalize_foods(items: Iterable[object]) -> list[NormalizedFood]:
    """Normalize a batch of items, dropping the ones that fail."""
    foods: list[NormalizedFood] = []
    for index, item in enumerate(items):
        try:
            if not isinstance(item, Mapping):
                msg = f"expected an object, got {type(item).__name__}"
                raise TypeError(msg)
            foods.append(normalize_food(item))
        except Exception:
            _logger.warning(
                "Error processing food item at index %s", index, exc_info=True
            )
    return foods


def _text(nutrient: Mapping[str, object], *keys: str) -> str:
    for key in keys:
        value = nutrient.get(key)
        if value is not None:
            return str(value).strip()
    return ""


def _unit(nutrient: Mapping[str, object]) -> str:
    unit = nutrient.get("unitName") or nutrient.get("unit") or ""
    return str(unit).lower()


def _numeric_value(nutrient: Mapping[str, object]) -> float | None:
    raw = nutrient.get("value")
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def _round(value: float, places: int) -> float:
    # Half-up on the exact binary value, so 0.125 rounds to 0.13.
    with localcontext() as context:
        # Enough digits for any finite double plus the requested places.
        context.prec = 400
        quantum = Decimal(1).scaleb(-places)
        return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
