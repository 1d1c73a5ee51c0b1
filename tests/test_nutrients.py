"""Tests for nutrient lookup and normalization."""

import math

from food_api.services.nutrients import (
    CARBS_IDS,
    FAT_IDS,
    PROTEIN_IDS,
    energy_kcal,
    find_nutrient,
    normalize_food,
    normalize_foods,
    nutrient_grams,
)
from tests.conftest import apple_item, nutrient


def test_find_nutrient_matches_code_or_name() -> None:
    record = nutrient("1003", "Protein", 31, "G")
    nutrients = [nutrient("1008", "Energy", 165, "KCAL"), record]

    assert find_nutrient(nutrients, ["1003"]) is record
    assert find_nutrient(nutrients, ["Protein"]) is record
    assert find_nutrient(nutrients, ["protein"]) is record


def test_find_nutrient_trims_and_reads_alternate_keys() -> None:
    record = {"number": " 1004 ", "name": "  Total Fat ", "value": 3, "unit": "g"}

    assert find_nutrient([record], ["1004"]) is record
    assert find_nutrient([record], ["total fat"]) is record


def test_find_nutrient_code_match_is_exact() -> None:
    nutrients = [nutrient("10030", "Something else", 1, "G")]

    assert find_nutrient(nutrients, ["1003"]) is None


def test_find_nutrient_skips_non_mapping_entries() -> None:
    record = nutrient("1005", "Carbohydrate", 12, "G")

    assert find_nutrient([None, "junk", 7, record], CARBS_IDS) is record
    assert find_nutrient([], CARBS_IDS) is None


def test_energy_converts_kilojoules() -> None:
    assert energy_kcal([nutrient("1008", "Energy", 100, "kJ")]) == 23.9


def test_energy_rounds_kcal_to_one_decimal() -> None:
    assert energy_kcal([nutrient("1008", "Energy", 52.46, "KCAL")]) == 52.5


def test_energy_uses_first_match() -> None:
    nutrients = [
        nutrient("1008", "Energy", 418.4, "KJ"),
        nutrient("1008", "Energy", 52, "KCAL"),
    ]

    assert energy_kcal(nutrients) == 100.0


def test_grams_converts_milligrams() -> None:
    assert nutrient_grams([nutrient("1004", "Total Fat", 500, "mg")], FAT_IDS) == 0.5


def test_grams_rounds_to_two_decimals() -> None:
    nutrients = [nutrient("1003", "Protein", 31.456, "G")]

    assert nutrient_grams(nutrients, PROTEIN_IDS) == 31.46


def test_numeric_strings_are_accepted() -> None:
    nutrients = [nutrient("1003", "Protein", " 12.5 ", "G")]

    assert nutrient_grams(nutrients, PROTEIN_IDS) == 12.5


def test_unusable_values_become_none() -> None:
    for value in [None, "", "abc", float("nan"), float("inf"), True, [1]]:
        nutrients = [
            nutrient("1008", "Energy", value, "KCAL"),
            nutrient("1003", "Protein", value, "G"),
        ]
        assert energy_kcal(nutrients) is None
        assert nutrient_grams(nutrients, PROTEIN_IDS) is None


def test_normalize_food_maps_fields() -> None:
    food = normalize_food(apple_item())

    assert food.to_dict() == {
        "fdcId": 171688,
        "description": "Apples, raw, with skin",
        "brandName": "Orchard Co",
        "servingSize": 182,
        "servingSizeUnit": "g",
        "calories": 52.0,
        "macros": {"protein_g": 0.26, "carbs_g": 13.81, "fat_g": 0.17},
    }


def test_normalize_food_prefers_brand_name() -> None:
    item = {"brandName": "Kirkland", "brandOwner": "Costco"}

    assert normalize_food(item).brand_name == "Kirkland"


def test_normalize_food_without_nutrients_yields_nulls() -> None:
    food = normalize_food({"fdcId": 1, "foodNutrients": "not-a-list"})

    assert food.calories is None
    assert food.macros.to_dict() == {
        "protein_g": None,
        "carbs_g": None,
        "fat_g": None,
    }
    assert food.description is None
    assert food.brand_name is None


def test_normalize_foods_drops_bad_items() -> None:
    foods = normalize_foods([apple_item(), "not-an-object", None, {"fdcId": 2}])

    assert [food.fdc_id for food in foods] == [171688, 2]


def test_normalized_numbers_are_finite_or_none() -> None:
    item = apple_item()
    item["foodNutrients"].append(nutrient("1005", "Carbohydrate", "NaN", "G"))
    food = normalize_food(item)

    values = [food.calories, *food.macros.to_dict().values()]
    assert all(value is None or math.isfinite(value) for value in values)


def test_very_large_values_are_kept() -> None:
    nutrients = [
        nutrient("1008", "Energy", 1e30, "KCAL"),
        nutrient("1003", "Protein", 1e300, "G"),
    ]

    assert energy_kcal(nutrients) == 1e30
    assert nutrient_grams(nutrients, PROTEIN_IDS) == 1e300
