"""Day planning: progress, suggestions, forecast and spoken input."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from fridge_macros.domain.meals import (
    ForecastStatus,
    Meal,
    MealCandidate,
    MealItem,
    MealTier,
    TodayOverview,
)
from fridge_macros.domain.nutrition import MacroTotals
from fridge_macros.domain.speech import SpeechEntry
from fridge_macros.services.catalog import ProductCatalogService
from fridge_macros.services.dates import local_today
from fridge_macros.services.egg_rules import (
    EGG_MAX_PER_DAY,
    EggLimit,
    count_eggs,
    get_egg_product_id,
)
from fridge_macros.services.forecast import generate_forecast
from fridge_macros.services.inventory import InventoryService
from fridge_macros.services.macros import (
    consumed_totals,
    ideal_meal_macros,
    meal_macros,
    remaining_macros,
)
from fridge_macros.services.meal_generator import generate_candidates, score_meal
from fridge_macros.services.meals import MealLogService
from fridge_macros.services.speech import parse_speech_utterance
from fridge_macros.services.speech_vocabulary import Language
from fridge_macros.services.user_settings import UserSettingsService

_logger = logging.getLogger(__name__)


@dataclass
class PlannerService:
    """Composes settings, catalog, inventory and meals into day-level views."""

    settings_service: UserSettingsService
    catalog_service: ProductCatalogService
    inventory_service: InventoryService
    meal_service: MealLogService
    timezone: str = "UTC"
    max_candidates: int = 3
    egg_max_per_day: int = EGG_MAX_PER_DAY

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return local_today(self.timezone)

    def today_overview(self, day: date | None = None) -> TodayOverview:
        """Summarize what was eaten on ``day`` and what is left."""
        day = day or self.today()
        settings = self.settings_service.get()
        meals = self.meal_service.list_meals(day)
        consumed = consumed_totals(meals)
        remaining = remaining_macros(settings, consumed)
        meals_left = max(1, settings.meals_per_day - len(meals))
        simple_carb_percent = (
            consumed.simple_carbs * 4 / consumed.kcal * 100 if consumed.kcal > 0 else 0.0
        )
        egg_limit = self._egg_limit(meals)
        return TodayOverview(
            day=day,
            consumed=consumed,
            remaining=remaining,
            ideal=ideal_meal_macros(remaining, meals_left),
            meals_logged=len(meals),
            meals_left=meals_left,
            simple_carb_percent=simple_carb_percent,
            simple_carb_over_limit=(
                simple_carb_percent > settings.simple_carb_limit_percent
            ),
            eggs_remaining=egg_limit.eggs_remaining if egg_limit else None,
        )

    def suggest_meals(self, day: date | None = None) -> list[MealCandidate]:
        """Return the best meals that fit the rest of the day."""
        day = day or self.today()
        overview = self.today_overview(day)
        meals = self.meal_service.list_meals(day)
        candidates = generate_candidates(
            self.inventory_service.list_lots(),
            self.catalog_service.lookup(),
            overview.ideal,
            self.max_candidates,
            today=day,
            egg_limit=self._egg_limit(meals),
        )
        _logger.info(
            "Suggestions: day=%s candidates=%s meals_left=%s",
            day.isoformat(),
            len(candidates),
            overview.meals_left,
        )
        return candidates

    def accept_meal(self, items: Iterable[MealItem], day: date | None = None) -> Meal:
        """Score ``items`` against today's ideal and log them from inventory."""
        day = day or self.today()
        items = list(items)
        ideal = self.today_overview(day).ideal
        totals = meal_macros(items, self.catalog_service.lookup())
        score, tier, deviation = score_meal(totals, ideal)
        candidate = _candidate(items, totals, score, tier, deviation)
        return self.meal_service.accept_candidate(candidate, day)

    def forecast(self, day: date | None = None) -> ForecastStatus:
        """Simulate tomorrow from the current inventory."""
        return generate_forecast(
            self.inventory_service.list_lots(),
            self.catalog_service.lookup(),
            self.settings_service.get(),
            today=day or self.today(),
        )

    def parse_speech(self, text: str, language: Language | str) -> list[SpeechEntry]:
        """Recognize product amounts in a spoken sentence."""
        return parse_speech_utterance(
            text, language, self.catalog_service.list_products()
        )

    def _egg_limit(self, meals: list[Meal]) -> EggLimit | None:
        products = self.catalog_service.lookup()
        egg_product_id = get_egg_product_id(products)
        if egg_product_id is None:
            return None
        eaten = sum(count_eggs(meal.items, products, egg_product_id) for meal in meals)
        return EggLimit(
            egg_product_id=egg_product_id,
            eggs_remaining=max(0, self.egg_max_per_day - eaten),
        )


def _candidate(
    items: list[MealItem],
    totals: MacroTotals,
    score: float,
    tier: MealTier,
    deviation: float,
) -> MealCandidate:
    return MealCandidate(
        items=items,
        total_kcal=totals.kcal,
        total_protein=totals.protein,
        total_fat=totals.fat,
        total_carbs=totals.carbs,
        total_simple_carbs=totals.simple_carbs,
        tier=tier,
        score=score,
        deviation=deviation,
    )
