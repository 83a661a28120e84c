"""Domain models for inventory lots and their provenance."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from fridge_macros.domain.catalog import Unit


class StorageLocation(str, Enum):
    """Where a lot is kept."""

    FRIDGE = "fridge"
    FREEZER = "freezer"
    PANTRY = "pantry"


class ExpirationStatus(str, Enum):
    """Expiration bucket relative to a reference day."""

    EXPIRED = "expired"
    DUE_TODAY = "due_today"
    EXPIRING_SOON = "expiring_soon"
    OK = "ok"


@dataclass(frozen=True)
class InventoryLot:
    """One inventory record of a product."""

    id: UUID
    product_id: UUID
    quantity: float
    unit: Unit
    storage_location: StorageLocation
    expiration_date: date
    added_at: datetime


@dataclass(frozen=True)
class InventorySource:
    """Record of how much a meal consumed from one lot."""

    inventory_id: UUID | None
    product_id: UUID
    quantity: float
    unit: Unit
    storage_location: StorageLocation
    expiration_date: date


@dataclass(frozen=True)
class DeductionRequest:
    """Amount of a product to take out of inventory."""

    product_id: UUID
    quantity: float
    unit: Unit


class MutationKind(str, Enum):
    """Kinds of lot mutation intents."""

    ADJUST = "adjust"
    DELETE = "delete"
    CREATE = "create"


@dataclass(frozen=True)
class LotMutation:
    """A planned change to a single lot, committed as part of a batch.

    ``ADJUST`` adds ``quantity`` (signed) to an existing lot, ``DELETE`` removes
    the lot and ``CREATE`` inserts ``lot`` as a new record.
    """

    kind: MutationKind
    lot_id: UUID
    quantity: float = 0.0
    lot: InventoryLot | None = None
