"""Product catalog service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fridge_macros.domain.catalog import Product, Unit
from fridge_macros.services.fuzzy import rank_products

_logger = logging.getLogger(__name__)


def _seed(  # noqa: PLR0913
    name: str,
    kcal: float,
    protein: float,
    fat: float,
    carbs: float,
    simple_carbs: float,
    unit: Unit = Unit.GRAMS,
    piece_weight_g: float | None = None,
) -> dict[str, object]:
    return {
        "name": name,
        "kcal_per_100": kcal,
        "protein_per_100": protein,
        "fat_per_100": fat,
        "carbs_per_100": carbs,
        "simple_carbs_per_100": simple_carbs,
        "default_unit": unit,
        "piece_weight_g": piece_weight_g,
    }


DEFAULT_PRODUCTS: tuple[dict[str, object], ...] = (
    _seed("Chicken Breast", 165, 31, 3.6, 0, 0),
    _seed("Rice (white)", 130, 2.7, 0.3, 28, 0.1),
    _seed("Eggs", 155, 13, 11, 1.1, 1.1, Unit.PIECES, 60),
    _seed("Broccoli", 34, 2.8, 0.4, 7, 1.7),
    _seed("Salmon", 208, 20, 13, 0, 0),
    _seed("Greek Yogurt", 59, 10, 0.7, 3.6, 3.6),
    _seed("Oats", 389, 16.9, 6.9, 66, 1),
    _seed("Banana", 89, 1.1, 0.3, 23, 12, Unit.PIECES, 120),
    _seed("Olive Oil", 884, 0, 100, 0, 0, Unit.MILLILITRES),
    _seed("Sweet Potato", 86, 1.6, 0.1, 20, 4.2),
    _seed("Cottage Cheese", 98, 11, 4.3, 3.4, 2.7),
    _seed("Almonds", 579, 21, 50, 22, 4),
    _seed("Ground Beef (lean)", 250, 26, 15, 0, 0),
    _seed("Pasta", 131, 5, 1.1, 25, 0.6),
    _seed("Tomatoes", 18, 0.9, 0.2, 3.9, 2.6),
    _seed("Avocado", 160, 2, 15, 9, 0.7, Unit.PIECES, 200),
    _seed("Milk (2%)", 50, 3.4, 2, 5, 5, Unit.MILLILITRES),
    _seed("Bread (whole wheat)", 247, 13, 3.4, 41, 6),
    _seed("Turkey Breast", 135, 30, 1, 0, 0),
    _seed("Spinach", 23, 2.9, 0.4, 3.6, 0.4),
)


class ProductRepository(Protocol):
    """Persistence interface for catalog products."""

    def list_products(self) -> list[Product]:
        """Return every product ordered by name."""

    def get_product(self, product_id: UUID) -> Product | None:
        """Return a product by id, if present."""

    def create_products(self, payloads: list[dict[str, object]]) -> list[Product]:
        """Insert products and return them."""

    def update_product(self, product_id: UUID, payload: dict[str, object]) -> Product:
        """Update a product and return it."""

    def delete_product(self, product_id: UUID) -> None:
        """Delete a product."""


@dataclass
class ProductCatalogService:
    """Application service for catalog operations."""

    repository: ProductRepository

    def list_products(self) -> list[Product]:
        """Return the whole catalog."""
        return self.repository.list_products()

    def get_product(self, product_id: UUID) -> Product:
        """Return a product or raise ``LookupError``."""
        product = self.repository.get_product(product_id)
        if product is None:
            raise LookupError(f"Product {product_id} not found")
        return product

    def create_product(self, payload: dict[str, object]) -> Product:
        """Add a product to the catalog."""
        return self.repository.create_products([payload])[0]

    def update_product(self, product_id: UUID, payload: dict[str, object]) -> Product:
        """Update a product in place."""
        self.get_product(product_id)
        return self.repository.update_product(product_id, payload)

    def delete_product(self, product_id: UUID) -> None:
        """Remove a product from the catalog."""
        self.repository.delete_product(product_id)

    def lookup(self) -> dict[UUID, Product]:
        """Return the catalog keyed by product id."""
        return {product.id: product for product in self.repository.list_products()}

    def search(self, query: str | None, limit: int = 10) -> list[Product]:
        """Return products ranked by fuzzy match, or the catalog when empty."""
        products = self.repository.list_products()
        if not query or not query.strip():
            return products[:limit]
        return rank_products(products, query)[:limit]

    def seed_defaults(self) -> int:
        """Seed the default products into an empty catalog."""
        if self.repository.list_products():
            return 0
        created = self.repository.create_products([dict(row) for row in DEFAULT_PRODUCTS])
        _logger.info("Seeded default products: count=%s", len(created))
        return len(created)
