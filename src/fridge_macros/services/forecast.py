"""Tomorrow forecast: can three meals be composed from what will be left?"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from uuid import UUID

from fridge_macros.domain.catalog import Product
from fridge_macros.domain.inventory import InventoryLot
from fridge_macros.domain.meals import (
    ForecastStatus,
    MealCandidate,
    MealTier,
    ShoppingSuggestion,
)
from fridge_macros.domain.nutrition import MacroTotals, UserSettings
from fridge_macros.services.expiration import (
    is_due_today_or_expired,
    is_expiring_for_tomorrow,
)
from fridge_macros.services.macros import (
    ideal_meal_macros,
    round_half_up,
    subtract_floored,
)
from fridge_macros.services.meal_generator import generate_candidates

FORECAST_MEALS = 3
SHORTFALL_RATIO = 0.3

_logger = logging.getLogger(__name__)


def generate_forecast(
    inventory: Iterable[InventoryLot],
    products: Mapping[UUID, Product],
    settings: UserSettings,
    today: date | None = None,
) -> ForecastStatus:
    """Simulate tomorrow's meals and suggest what to buy."""
    today = today or date.today()
    lots = list(inventory)
    tomorrow_lots = [
        lot for lot in lots if not is_due_today_or_expired(lot.expiration_date, today)
    ]

    remaining = MacroTotals(
        kcal=settings.daily_kcal,
        protein=settings.daily_protein,
        fat=settings.daily_fat,
        carbs=settings.daily_carbs,
        simple_carbs=0,
    )
    meals_left = settings.meals_per_day
    meals: list[MealCandidate] = []
    for _ in range(FORECAST_MEALS):
        candidates = generate_candidates(
            tomorrow_lots,
            products,
            ideal_meal_macros(remaining, meals_left),
            today=today,
            exclude_due_today=True,
        )
        if not candidates:
            break
        best = candidates[0]
        meals.append(best)
        remaining = subtract_floored(remaining, best.totals)
        meals_left -= 1

    expiring_count = sum(
        1 for lot in lots if is_expiring_for_tomorrow(lot.expiration_date, today)
    )
    status = ForecastStatus(
        tier=_overall_tier(meals),
        meals=meals,
        shopping_needed=_shopping_suggestions(
            meals, remaining, settings, expiring_count
        ),
    )
    _logger.info(
        "Forecast: tier=%s meals=%s suggestions=%s",
        status.tier.value,
        len(meals),
        len(status.shopping_needed),
    )
    return status


def _overall_tier(meals: list[MealCandidate]) -> MealTier:
    if len(meals) < FORECAST_MEALS:
        return MealTier.RED
    if any(meal.tier == MealTier.RED for meal in meals):
        return MealTier.RED
    if any(meal.tier == MealTier.YELLOW for meal in meals):
        return MealTier.YELLOW
    return MealTier.GREEN


def _shopping_suggestions(
    meals: list[MealCandidate],
    remaining: MacroTotals,
    settings: UserSettings,
    expiring_count: int,
) -> list[ShoppingSuggestion]:
    suggestions: list[ShoppingSuggestion] = []
    if len(meals) < FORECAST_MEALS:
        suggestions.append(
            ShoppingSuggestion(
                reason="no-items",
                message=(
                    "Not enough inventory items to compose 3 meals. "
                    "Stock up on variety."
                ),
            )
        )
    if remaining.protein > settings.daily_protein * SHORTFALL_RATIO:
        suggestions.append(
            ShoppingSuggestion(
                reason="low-protein",
                message=(
                    f"Need ~{round_half_up(remaining.protein):.0f}g more protein. "
                    "Consider chicken, fish, or eggs."
                ),
            )
        )
    if remaining.carbs > settings.daily_carbs * SHORTFALL_RATIO:
        suggestions.append(
            ShoppingSuggestion(
                reason="low-carbs",
                message=(
                    f"Need ~{round_half_up(remaining.carbs):.0f}g more carbs. "
                    "Consider rice, oats, or sweet potato."
                ),
            )
        )
    if remaining.fat > settings.daily_fat * SHORTFALL_RATIO:
        suggestions.append(
            ShoppingSuggestion(
                reason="low-fat",
                message=(
                    f"Need ~{round_half_up(remaining.fat):.0f}g more fat. "
                    "Consider avocado, nuts, or olive oil."
                ),
            )
        )
    if expiring_count > 0:
        suggestions.append(
            ShoppingSuggestion(
                reason="expiring",
                message=(
                    f"{expiring_count} item(s) expiring soon. "
                    "Plan to use them or replace."
                ),
            )
        )
    return suggestions
