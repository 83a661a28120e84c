"""Nutrition domain models."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class MacroTotals:
    """Aggregated macronutrients for an item, a meal or a day."""

    kcal: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    simple_carbs: float = 0.0


@dataclass(frozen=True)
class UserSettings:
    """Daily macro targets and meal cadence."""

    id: UUID
    daily_kcal: float
    daily_protein: float
    daily_fat: float
    daily_carbs: float
    simple_carb_limit_percent: float
    meals_per_day: int


DEFAULT_SETTINGS: dict[str, float | int] = {
    "daily_kcal": 2000,
    "daily_protein": 150,
    "daily_fat": 70,
    "daily_carbs": 200,
    "simple_carb_limit_percent": 5,
    "meals_per_day": 4,
}
