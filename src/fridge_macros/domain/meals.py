"""Domain models for meals and meal suggestions."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from fridge_macros.domain.catalog import Unit
from fridge_macros.domain.inventory import InventorySource
from fridge_macros.domain.nutrition import MacroTotals


class MealTier(str, Enum):
    """Qualitative fit of a meal against its ideal macros."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


@dataclass(frozen=True)
class MealItem:
    """A line item inside a meal."""

    product_id: UUID
    quantity: float
    unit: Unit


@dataclass(frozen=True)
class Meal:
    """A logged meal with totals fixed at logging time."""

    id: UUID
    date: date
    items: list[MealItem]
    total_kcal: float
    total_protein: float
    total_fat: float
    total_carbs: float
    total_simple_carbs: float
    created_at: datetime
    sources: list[InventorySource] | None = None

    @property
    def totals(self) -> MacroTotals:
        """Return the stored totals as a macro profile."""
        return MacroTotals(
            kcal=self.total_kcal,
            protein=self.total_protein,
            fat=self.total_fat,
            carbs=self.total_carbs,
            simple_carbs=self.total_simple_carbs,
        )


@dataclass(frozen=True)
class MealCandidate:
    """A scored meal suggestion that has not been logged."""

    items: list[MealItem]
    total_kcal: float
    total_protein: float
    total_fat: float
    total_carbs: float
    total_simple_carbs: float
    tier: MealTier
    score: float
    deviation: float

    @property
    def totals(self) -> MacroTotals:
        """Return the candidate totals as a macro profile."""
        return MacroTotals(
            kcal=self.total_kcal,
            protein=self.total_protein,
            fat=self.total_fat,
            carbs=self.total_carbs,
            simple_carbs=self.total_simple_carbs,
        )


@dataclass(frozen=True)
class ShoppingSuggestion:
    """Advice produced by the forecast."""

    reason: str
    message: str


@dataclass(frozen=True)
class ForecastStatus:
    """Outcome of simulating tomorrow's meals."""

    tier: MealTier
    meals: list[MealCandidate]
    shopping_needed: list[ShoppingSuggestion]


@dataclass(frozen=True)
class TodayOverview:
    """Progress against today's targets."""

    day: date
    consumed: MacroTotals
    remaining: MacroTotals
    ideal: MacroTotals
    meals_logged: int
    meals_left: int
    simple_carb_percent: float
    simple_carb_over_limit: bool
    eggs_remaining: float | None
