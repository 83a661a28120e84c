"""Supabase repository for catalog products."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from supabase import Client

from fridge_macros.domain.catalog import Product, Unit
from fridge_macros.services.catalog import ProductRepository


@dataclass
class SupabaseProductRepository(ProductRepository):
    """Supabase implementation for the product catalog."""

    client: Client

    def list_products(self) -> list[Product]:
        """Return every product ordered by name."""
        response = self.client.table("products").select("*").order("name").execute()
        return [_parse_product(row) for row in response.data or []]

    def get_product(self, product_id: UUID) -> Product | None:
        """Return a product by id, if present."""
        response = (
            self.client.table("products")
            .select("*")
            .eq("id", str(product_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_product(response.data[0])

    def create_products(self, payloads: list[dict[str, object]]) -> list[Product]:
        """Insert products and return them."""
        response = (
            self.client.table("products")
            .insert([_serialize(payload) for payload in payloads])
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create products")
        return [_parse_product(row) for row in response.data]

    def update_product(self, product_id: UUID, payload: dict[str, object]) -> Product:
        """Update a product and return it."""
        response = (
            self.client.table("products")
            .update(_serialize(payload))
            .eq("id", str(product_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update product")
        return _parse_product(response.data[0])

    def delete_product(self, product_id: UUID) -> None:
        """Delete a product."""
        self.client.table("products").delete().eq("id", str(product_id)).execute()


def _serialize(payload: dict[str, object]) -> dict[str, object]:
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in payload.items()
    }


def _parse_product(row: dict[str, object]) -> Product:
    """Parse a product row into a domain model."""
    piece_weight = row.get("piece_weight_g")
    return Product(
        id=UUID(row["id"]),
        name=str(row.get("name", "")),
        kcal_per_100=float(row.get("kcal_per_100", 0.0)),
        protein_per_100=float(row.get("protein_per_100", 0.0)),
        fat_per_100=float(row.get("fat_per_100", 0.0)),
        carbs_per_100=float(row.get("carbs_per_100", 0.0)),
        simple_carbs_per_100=float(row.get("simple_carbs_per_100", 0.0)),
        default_unit=Unit(row.get("default_unit", Unit.GRAMS.value)),
        piece_weight_g=float(piece_weight) if piece_weight is not None else None,
    )
