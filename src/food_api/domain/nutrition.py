"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroBreakdown:
    """Macronutrients in grams, ``None`` when the upstream lacks a value."""

    protein_g: float | None
    carbs_g: float | None
    fat_g: float | None

    def to_dict(self) -> dict[str, float | None]:
        return {
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fat_g": self.fat_g,
        }


@dataclass(frozen=True)
class NormalizedFood:
    """Canonical food record returned by the foods endpoint."""

    fdc_id: object | None
    description: str | None
    brand_name: str | None
    serving_size: object | None
    serving_size_unit: str | None
    calories: float | None
    macros: MacroBreakdown

    def to_dict(self) -> dict[str, object]:
        """Serialize using the upstream field names."""
        return {
            "fdcId": self.fdc_id,
            "description": self.description,
            "brandName": self.brand_name,
            "servingSize": self.serving_size,
            "servingSizeUnit": self.serving_size_unit,
            "calories": self.calories,
            "macros": self.macros.to_dict(),
        }


@dataclass(frozen=True)
class FoodSearchResult:
    """Envelope for a successful food search."""

    query: str
    limit: int
    foods: list[NormalizedFood]

    @property
    def count(self) -> int:
        return len(self.foods)

    def to_dict(self) -> dict[str, object]:
        return {
            "query": self.query,
            "limit": self.limit,
            "count": self.count,
            "foods": [food.to_dict() for food in self.foods],
        }
