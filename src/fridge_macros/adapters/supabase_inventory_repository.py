"""Supabase repository for inventory lots."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from supabase import Client

from fridge_macros.domain.catalog import Unit
from fridge_macros.domain.inventory import (
    InventoryLot,
    LotMutation,
    StorageLocation,
)
from fridge_macros.services.inventory import InventoryRepository


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase implementation for inventory lots.

    Mutation batches run inside the ``apply_inventory_mutations`` Postgres
    function so they commit or roll back as one transaction.
    """

    client: Client

    def list_lots(self) -> list[InventoryLot]:
        """Return every lot, soonest expiring first."""
        response = (
            self.client.table("inventory")
            .select("*")
            .order("expiration_date")
            .order("added_at")
            .execute()
        )
        return [_parse_lot(row) for row in response.data or []]

    def get_lot(self, lot_id: UUID) -> InventoryLot | None:
        """Return a lot by id, if present."""
        response = (
            self.client.table("inventory")
            .select("*")
            .eq("id", str(lot_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_lot(response.data[0])

    def list_lots_for_product(self, product_id: UUID) -> list[InventoryLot]:
        """Return a product's lots ordered by expiration date ascending."""
        response = (
            self.client.table("inventory")
            .select("*")
            .eq("product_id", str(product_id))
            .order("expiration_date")
            .order("added_at")
            .execute()
        )
        return [_parse_lot(row) for row in response.data or []]

    def create_lot(self, lot: InventoryLot) -> InventoryLot:
        """Insert a lot and return it."""
        response = self.client.table("inventory").insert(_lot_row(lot)).execute()
        if not response.data:
            raise RuntimeError("Failed to create inventory lot")
        return _parse_lot(response.data[0])

    def update_lot(self, lot_id: UUID, changes: dict[str, object]) -> InventoryLot:
        """Update lot fields and return the lot."""
        response = (
            self.client.table("inventory")
            .update({key: _to_json(value) for key, value in changes.items()})
            .eq("id", str(lot_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update inventory lot")
        return _parse_lot(response.data[0])

    def delete_lot(self, lot_id: UUID) -> None:
        """Delete a lot."""
        self.client.table("inventory").delete().eq("id", str(lot_id)).execute()

    def apply_mutations(self, mutations: list[LotMutation]) -> None:
        """Apply a mutation batch in a single database transaction."""
        self.client.rpc(
            "apply_inventory_mutations",
            {"mutations": [_mutation_row(mutation) for mutation in mutations]},
        ).execute()


def _to_json(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date | datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


def _lot_row(lot: InventoryLot) -> dict[str, object]:
    return {
        "id": str(lot.id),
        "product_id": str(lot.product_id),
        "quantity": lot.quantity,
        "unit": lot.unit.value,
        "storage_location": lot.storage_location.value,
        "expiration_date": lot.expiration_date.isoformat(),
        "added_at": lot.added_at.isoformat(),
    }


def _mutation_row(mutation: LotMutation) -> dict[str, object]:
    return {
        "kind": mutation.kind.value,
        "lot_id": str(mutation.lot_id),
        "quantity": mutation.quantity,
        "lot": _lot_row(mutation.lot) if mutation.lot else None,
    }


def _parse_lot(row: dict[str, object]) -> InventoryLot:
    """Parse an inventory row into a domain model."""
    return InventoryLot(
        id=UUID(row["id"]),
        product_id=UUID(row["product_id"]),
        quantity=float(row.get("quantity", 0.0)),
        unit=Unit(row["unit"]),
        storage_location=StorageLocation(row["storage_location"]),
        expiration_date=date.fromisoformat(str(row["expiration_date"])),
        added_at=datetime.fromisoformat(str(row["added_at"])),
    )
