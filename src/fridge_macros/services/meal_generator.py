"""Meal candidate generation from available inventory.

Pairs of lots, and triples from the first ten lots, are combined at discrete
portion sizes; every combination is scored against the ideal macros and the
best few are returned.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import date
from itertools import combinations, islice, product as cartesian
from uuid import UUID

from fridge_macros.domain.catalog import Product, Unit
from fridge_macros.domain.inventory import InventoryLot
from fridge_macros.domain.meals import MealCandidate, MealItem, MealTier
from fridge_macros.domain.nutrition import MacroTotals
from fridge_macros.services.egg_rules import EggLimit, count_eggs
from fridge_macros.services.expiration import is_due_today_or_expired, is_expired
from fridge_macros.services.macros import meal_macros, weight_in_grams

PORTION_LADDER_G = (50, 100, 150, 200, 300)
MAX_PIECES = 3
FALLBACK_PORTION_G = 100
TRIPLE_LOT_LIMIT = 10
MAX_COMBINATIONS_PER_SET = 200
NO_TARGET_SCORE = 1000.0
GREEN_MAX_DEVIATION = 0.10
YELLOW_MAX_DEVIATION = 0.20
SIMPLE_CARB_PENALTY = 0.5


@dataclass(frozen=True)
class AvailableLot:
    """A usable lot with its product and usable mass."""

    product: Product
    max_grams: float
    lot: InventoryLot


def score_meal(meal: MacroTotals, ideal: MacroTotals) -> tuple[float, MealTier, float]:
    """Return ``(score, tier, average deviation)``; lower scores fit better."""
    if ideal.kcal == 0:
        return NO_TARGET_SCORE, MealTier.RED, NO_TARGET_SCORE / 100
    deviations = (
        abs(meal.kcal - ideal.kcal) / max(ideal.kcal, 1),
        abs(meal.protein - ideal.protein) / max(ideal.protein, 1),
        abs(meal.fat - ideal.fat) / max(ideal.fat, 1),
        abs(meal.carbs - ideal.carbs) / max(ideal.carbs, 1),
    )
    avg_dev = sum(deviations) / 4
    if avg_dev <= GREEN_MAX_DEVIATION:
        tier = MealTier.GREEN
    elif avg_dev <= YELLOW_MAX_DEVIATION:
        tier = MealTier.YELLOW
    else:
        tier = MealTier.RED
    score = avg_dev * 100 + meal.simple_carbs * SIMPLE_CARB_PENALTY
    return score, tier, avg_dev


def available_lots(
    inventory: Iterable[InventoryLot],
    products: Mapping[UUID, Product],
    today: date | None = None,
    exclude_due_today: bool = False,
) -> list[AvailableLot]:
    """Return lots that can be eaten, in inventory order."""
    available: list[AvailableLot] = []
    for lot in inventory:
        if is_expired(lot.expiration_date, today):
            continue
        if exclude_due_today and is_due_today_or_expired(lot.expiration_date, today):
            continue
        product = products.get(lot.product_id)
        if product is None:
            continue
        max_grams = weight_in_grams(lot.quantity, lot.unit, product)
        if max_grams <= 0:
            continue
        available.append(AvailableLot(product=product, max_grams=max_grams, lot=lot))
    return available


def portion_sizes(max_grams: float, product: Product) -> list[float]:
    """Return the portion sizes in grams offered for a lot."""
    portions: list[float] = []
    if product.default_unit == Unit.PIECES and product.piece_weight_g:
        for pieces in range(1, MAX_PIECES + 1):
            grams = pieces * product.piece_weight_g
            if grams <= max_grams:
                portions.append(grams)
    else:
        portions.extend(size for size in PORTION_LADDER_G if size <= max_grams)
    if not portions and max_grams > 0:
        portions.append(min(max_grams, FALLBACK_PORTION_G))
    return portions


def portion_combinations(
    options: list[list[float]], limit: int = MAX_COMBINATIONS_PER_SET
) -> Iterator[tuple[float, ...]]:
    """Lazily walk the Cartesian product of portion options, at most ``limit``."""
    return islice(cartesian(*options), limit)


def generate_candidates(  # noqa: PLR0913
    inventory: Iterable[InventoryLot],
    products: Mapping[UUID, Product],
    ideal: MacroTotals,
    max_candidates: int = 3,
    *,
    today: date | None = None,
    exclude_due_today: bool = False,
    egg_limit: EggLimit | None = None,
) -> list[MealCandidate]:
    """Return the best-scoring two- and three-item meals from inventory."""
    available = available_lots(inventory, products, today, exclude_due_today)
    if not available:
        return []

    candidates: list[MealCandidate] = []
    for pair in combinations(available, 2):
        candidates.extend(_candidates_for(pair, ideal, products, egg_limit))
    for triple in combinations(available[:TRIPLE_LOT_LIMIT], 3):
        candidates.extend(_candidates_for(triple, ideal, products, egg_limit))

    candidates.sort(key=lambda candidate: candidate.score)
    return candidates[:max_candidates]


def _candidates_for(
    lots: tuple[AvailableLot, ...],
    ideal: MacroTotals,
    products: Mapping[UUID, Product],
    egg_limit: EggLimit | None,
) -> Iterator[MealCandidate]:
    options = [portion_sizes(entry.max_grams, entry.product) for entry in lots]
    for portions in portion_combinations(options):
        items = [
            _meal_item(entry.product, grams)
            for entry, grams in zip(lots, portions, strict=True)
        ]
        if egg_limit is not None and (
            count_eggs(items, products, egg_limit.egg_product_id)
            > egg_limit.eggs_remaining
        ):
            continue
        macros = meal_macros(items, products)
        score, tier, deviation = score_meal(macros, ideal)
        yield MealCandidate(
            items=items,
            total_kcal=macros.kcal,
            total_protein=macros.protein,
            total_fat=macros.fat,
            total_carbs=macros.carbs,
            total_simple_carbs=macros.simple_carbs,
            tier=tier,
            score=score,
            deviation=deviation,
        )


def _meal_item(product: Product, grams: float) -> MealItem:
    if product.default_unit == Unit.PIECES and product.piece_weight_g:
        quantity = grams / product.piece_weight_g
    else:
        quantity = grams
    return MealItem(product_id=product.id, quantity=quantity, unit=product.default_unit)
