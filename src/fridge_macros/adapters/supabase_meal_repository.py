"""Supabase repository for logged meals."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from fridge_macros.domain.catalog import Unit
from fridge_macros.domain.inventory import InventorySource, StorageLocation
from fridge_macros.domain.meals import Meal, MealItem
from fridge_macros.services.meals import MealRepository


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals; items and sources are jsonb columns."""

    client: Client

    def create_meal(self, meal: Meal) -> Meal:
        """Insert a meal row and return it."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "id": str(meal.id),
                    "date": meal.date.isoformat(),
                    "items": [_item_row(item) for item in meal.items],
                    "total_kcal": meal.total_kcal,
                    "total_protein": meal.total_protein,
                    "total_fat": meal.total_fat,
                    "total_carbs": meal.total_carbs,
                    "total_simple_carbs": meal.total_simple_carbs,
                    "created_at": meal.created_at.isoformat(),
                    "sources": (
                        [_source_row(source) for source in meal.sources]
                        if meal.sources is not None
                        else None
                    ),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_meal(response.data[0])

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id, if present."""
        response = (
            self.client.table("meals")
            .select("*")
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals_for_date(self, day: date) -> list[Meal]:
        """Return the meals logged for a date, oldest first."""
        response = (
            self.client.table("meals")
            .select("*")
            .eq("date", day.isoformat())
            .order("created_at")
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal."""
        self.client.table("meals").delete().eq("id", str(meal_id)).execute()

    def delete_meals_not_on_date(self, day: date) -> int:
        """Delete every meal not dated ``day``."""
        response = (
            self.client.table("meals").delete().neq("date", day.isoformat()).execute()
        )
        return len(response.data or [])


def _item_row(item: MealItem) -> dict[str, object]:
    return {
        "product_id": str(item.product_id),
        "quantity": item.quantity,
        "unit": item.unit.value,
    }


def _source_row(source: InventorySource) -> dict[str, object]:
    return {
        "inventory_id": str(source.inventory_id) if source.inventory_id else None,
        "product_id": str(source.product_id),
        "quantity": source.quantity,
        "unit": source.unit.value,
        "storage_location": source.storage_location.value,
        "expiration_date": source.expiration_date.isoformat(),
    }


def _parse_item(row: dict[str, object]) -> MealItem:
    return MealItem(
        product_id=UUID(row["product_id"]),
        quantity=float(row.get("quantity", 0.0)),
        unit=Unit(row["unit"]),
    )


def _parse_source(row: dict[str, object]) -> InventorySource:
    return InventorySource(
        inventory_id=UUID(row["inventory_id"]) if row.get("inventory_id") else None,
        product_id=UUID(row["product_id"]),
        quantity=float(row.get("quantity", 0.0)),
        unit=Unit(row["unit"]),
        storage_location=StorageLocation(row["storage_location"]),
        expiration_date=date.fromisoformat(str(row["expiration_date"])),
    )


def _parse_meal(row: dict[str, object]) -> Meal:
    """Parse a meal row into a domain model."""
    sources = row.get("sources")
    return Meal(
        id=UUID(row["id"]),
        date=date.fromisoformat(str(row["date"])),
        items=[_parse_item(item) for item in row.get("items") or []],
        total_kcal=float(row.get("total_kcal", 0.0)),
        total_protein=float(row.get("total_protein", 0.0)),
        total_fat=float(row.get("total_fat", 0.0)),
        total_carbs=float(row.get("total_carbs", 0.0)),
        total_simple_carbs=float(row.get("total_simple_carbs", 0.0)),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        sources=(
            [_parse_source(source) for source in sources]
            if isinstance(sources, list)
            else None
        ),
    )
