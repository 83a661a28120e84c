"""Macro calculations for items, meals and daily budgets."""

import math
from collections.abc import Iterable, Mapping
from uuid import UUID

from fridge_macros.domain.catalog import Product, Unit
from fridge_macros.domain.meals import Meal, MealItem
from fridge_macros.domain.nutrition import MacroTotals, UserSettings


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upward (``Math.round`` semantics), not to even."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def weight_in_grams(quantity: float, unit: Unit, product: Product) -> float:
    """Convert a quantity to grams; g and ml are treated as mass-equivalent."""
    if unit == Unit.PIECES and product.piece_weight_g:
        return quantity * product.piece_weight_g
    return quantity


def item_macros(item: MealItem, product: Product) -> MacroTotals:
    """Scale a product's per-100 values to the item's quantity."""
    factor = weight_in_grams(item.quantity, item.unit, product) / 100
    return MacroTotals(
        kcal=round_half_up(product.kcal_per_100 * factor),
        protein=round_half_up(product.protein_per_100 * factor, 1),
        fat=round_half_up(product.fat_per_100 * factor, 1),
        carbs=round_half_up(product.carbs_per_100 * factor, 1),
        simple_carbs=round_half_up(product.simple_carbs_per_100 * factor, 1),
    )


def meal_macros(
    items: Iterable[MealItem], products: Mapping[UUID, Product]
) -> MacroTotals:
    """Sum rounded item macros; items with unknown products are skipped."""
    kcal = protein = fat = carbs = simple_carbs = 0.0
    for item in items:
        product = products.get(item.product_id)
        if product is None:
            continue
        macros = item_macros(item, product)
        kcal += macros.kcal
        protein += macros.protein
        fat += macros.fat
        carbs += macros.carbs
        simple_carbs += macros.simple_carbs
    return MacroTotals(
        kcal=round_half_up(kcal),
        protein=round_half_up(protein, 1),
        fat=round_half_up(fat, 1),
        carbs=round_half_up(carbs, 1),
        simple_carbs=round_half_up(simple_carbs, 1),
    )


def consumed_totals(meals: Iterable[Meal]) -> MacroTotals:
    """Sum the stored totals of logged meals."""
    kcal = protein = fat = carbs = simple_carbs = 0.0
    for meal in meals:
        kcal += meal.total_kcal
        protein += meal.total_protein
        fat += meal.total_fat
        carbs += meal.total_carbs
        simple_carbs += meal.total_simple_carbs
    return MacroTotals(
        kcal=kcal,
        protein=protein,
        fat=fat,
        carbs=carbs,
        simple_carbs=simple_carbs,
    )


def remaining_macros(settings: UserSettings, consumed: MacroTotals) -> MacroTotals:
    """Return what is left of the daily targets, never negative."""
    return MacroTotals(
        kcal=max(0, settings.daily_kcal - consumed.kcal),
        protein=max(0, settings.daily_protein - consumed.protein),
        fat=max(0, settings.daily_fat - consumed.fat),
        carbs=max(0, settings.daily_carbs - consumed.carbs),
        simple_carbs=0,
    )


def ideal_meal_macros(remaining: MacroTotals, meals_left: int) -> MacroTotals:
    """Split the remaining budget evenly over the meals left."""
    meals_left = max(1, meals_left)
    return MacroTotals(
        kcal=round_half_up(remaining.kcal / meals_left),
        protein=round_half_up(remaining.protein / meals_left, 1),
        fat=round_half_up(remaining.fat / meals_left, 1),
        carbs=round_half_up(remaining.carbs / meals_left, 1),
        simple_carbs=0,
    )


def subtract_floored(budget: MacroTotals, used: MacroTotals) -> MacroTotals:
    """Subtract ``used`` from ``budget`` per macro, flooring at zero."""
    return MacroTotals(
        kcal=max(0, budget.kcal - used.kcal),
        protein=max(0, budget.protein - used.protein),
        fat=max(0, budget.fat - used.fat),
        carbs=max(0, budget.carbs - used.carbs),
        simple_carbs=0,
    )
