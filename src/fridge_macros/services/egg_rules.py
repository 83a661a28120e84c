"""Daily egg allowance."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from uuid import UUID

from fridge_macros.domain.catalog import Product, Unit
from fridge_macros.domain.meals import MealItem

EGG_MAX_PER_DAY = 3
_EGG_NAMES = {"egg", "eggs"}


@dataclass(frozen=True)
class EggLimit:
    """Eggs still allowed today for a given egg product."""

    egg_product_id: UUID
    eggs_remaining: float


def get_egg_product_id(products: Mapping[UUID, Product]) -> UUID | None:
    """Return the id of the catalog product named egg(s), if any."""
    for product_id, product in products.items():
        if product.name.strip().lower() in _EGG_NAMES:
            return product_id
    return None


def count_eggs(
    items: Iterable[MealItem],
    products: Mapping[UUID, Product],
    egg_product_id: UUID | None,
) -> float:
    """Count eggs in items, converting grams through the piece weight."""
    if egg_product_id is None:
        return 0
    total = 0.0
    for item in items:
        if item.product_id != egg_product_id:
            continue
        if item.unit == Unit.PIECES:
            total += item.quantity
            continue
        product = products.get(item.product_id)
        if product and product.piece_weight_g and item.unit == Unit.GRAMS:
            total += item.quantity / product.piece_weight_g
    return total
