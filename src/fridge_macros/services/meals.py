"""Meal logging service."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from fridge_macros.domain.inventory import DeductionRequest, InventorySource
from fridge_macros.domain.meals import Meal, MealCandidate, MealItem
from fridge_macros.domain.nutrition import MacroTotals
from fridge_macros.services.catalog import ProductCatalogService
from fridge_macros.services.inventory import InventoryService
from fridge_macros.services.macros import meal_macros

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for logged meals."""

    def create_meal(self, meal: Meal) -> Meal:
        """Insert a meal and return it."""

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id, if present."""

    def list_meals_for_date(self, day: date) -> list[Meal]:
        """Return the meals logged for a date, oldest first."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal."""

    def delete_meals_not_on_date(self, day: date) -> int:
        """Delete every meal not dated ``day`` and return how many went."""


@dataclass
class MealLogService:
    """Service that logs meals and keeps inventory in step with them."""

    repository: MealRepository
    inventory_service: InventoryService
    catalog_service: ProductCatalogService

    def list_meals(self, day: date) -> list[Meal]:
        """Return the meals logged on ``day``."""
        return self.repository.list_meals_for_date(day)

    def accept_candidate(self, candidate: MealCandidate, day: date) -> Meal:
        """Log a suggested meal, deducting its items from inventory."""
        products = self.catalog_service.lookup()
        sources = self.inventory_service.deduct(
            [
                DeductionRequest(
                    product_id=item.product_id, quantity=item.quantity, unit=item.unit
                )
                for item in candidate.items
            ],
            products,
        )
        try:
            meal = self.repository.create_meal(
                _new_meal(day, candidate.items, candidate.totals, sources)
            )
        except Exception:
            _logger.exception("Failed to log meal; restoring inventory")
            self.inventory_service.restore(sources)
            raise
        _logger.info(
            "Meal accepted: meal_id=%s items=%s sources=%s",
            meal.id,
            len(meal.items),
            len(sources),
        )
        return meal

    def log_manual(self, items: Iterable[MealItem], day: date) -> Meal:
        """Log a meal typed in by hand; inventory is left untouched."""
        items = list(items)
        totals = meal_macros(items, self.catalog_service.lookup())
        meal = self.repository.create_meal(_new_meal(day, items, totals, None))
        _logger.info("Manual meal logged: meal_id=%s items=%s", meal.id, len(items))
        return meal

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal and return anything it consumed to inventory.

        If the meal row cannot be deleted, the restoration is reverted so a
        retry does not put the same stock back twice.
        """
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise LookupError(f"Meal {meal_id} not found")
        restored = self.inventory_service.restore(meal.sources) if meal.sources else []
        try:
            self.repository.delete_meal(meal_id)
        except Exception:
            _logger.exception("Failed to delete meal; reverting inventory")
            self.inventory_service.revert(restored)
            raise
        _logger.info("Meal deleted: meal_id=%s", meal_id)

    def purge_meals_not_on(self, day: date) -> int:
        """Drop meals from any day other than ``day``."""
        return self.repository.delete_meals_not_on_date(day)


def _new_meal(
    day: date,
    items: list[MealItem],
    totals: MacroTotals,
    sources: list[InventorySource] | None,
) -> Meal:
    return Meal(
        id=uuid4(),
        date=day,
        items=list(items),
        total_kcal=totals.kcal,
        total_protein=totals.protein,
        total_fat=totals.fat,
        total_carbs=totals.carbs,
        total_simple_carbs=totals.simple_carbs,
        created_at=datetime.now(tz=UTC),
        sources=sources,
    )
