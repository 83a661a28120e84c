"""Inventory lots: direct edits, FIFO-by-expiration deduction and restoration.

Deduction and restoration are planned as lists of :class:`LotMutation` intents
and committed through :meth:`InventoryRepository.apply_mutations`, which applies
a whole batch or nothing. A single lock serializes every write so a batch never
interleaves with another batch or with a direct edit.
"""

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from fridge_macros.domain.catalog import Product, Unit
from fridge_macros.domain.inventory import (
    DeductionRequest,
    InventoryLot,
    InventorySource,
    LotMutation,
    MutationKind,
    StorageLocation,
)
from fridge_macros.services.macros import weight_in_grams

_logger = logging.getLogger(__name__)


class InventoryRepository(Protocol):
    """Persistence interface for inventory lots."""

    def list_lots(self) -> list[InventoryLot]:
        """Return every lot."""

    def get_lot(self, lot_id: UUID) -> InventoryLot | None:
        """Return a lot by id, if present."""

    def list_lots_for_product(self, product_id: UUID) -> list[InventoryLot]:
        """Return a product's lots ordered by expiration date ascending."""

    def create_lot(self, lot: InventoryLot) -> InventoryLot:
        """Insert a lot and return it."""

    def update_lot(self, lot_id: UUID, changes: dict[str, object]) -> InventoryLot:
        """Update lot fields and return the lot."""

    def delete_lot(self, lot_id: UUID) -> None:
        """Delete a lot."""

    def apply_mutations(self, mutations: list[LotMutation]) -> None:
        """Apply every mutation in one transaction, or none on failure."""


@dataclass
class InventoryService:
    """Service for inventory edits and meal-driven stock movements."""

    repository: InventoryRepository
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def list_lots(self) -> list[InventoryLot]:
        """Return a snapshot of the inventory."""
        return self.repository.list_lots()

    def add_lot(  # noqa: PLR0913
        self,
        product_id: UUID,
        quantity: float,
        unit: Unit,
        storage_location: StorageLocation,
        expiration_date: date,
    ) -> InventoryLot:
        """Add a new lot stamped with the current time."""
        lot = InventoryLot(
            id=uuid4(),
            product_id=product_id,
            quantity=quantity,
            unit=unit,
            storage_location=storage_location,
            expiration_date=expiration_date,
            added_at=datetime.now(tz=UTC),
        )
        with self._lock:
            return self.repository.create_lot(lot)

    def update_lot(self, lot_id: UUID, changes: dict[str, object]) -> InventoryLot:
        """Update an existing lot."""
        with self._lock:
            if self.repository.get_lot(lot_id) is None:
                raise LookupError(f"Inventory lot {lot_id} not found")
            return self.repository.update_lot(lot_id, changes)

    def remove_lot(self, lot_id: UUID) -> None:
        """Delete a lot."""
        with self._lock:
            self.repository.delete_lot(lot_id)

    def deduct(
        self,
        requests: Iterable[DeductionRequest],
        products: Mapping[UUID, Product] | None = None,
    ) -> list[InventorySource]:
        """Consume stock soonest-expiring first and return the provenance.

        Short stock is consumed as far as it goes; nothing is raised.
        """
        with self._lock:
            mutations, sources = self._plan_deduction(list(requests), products or {})
            if mutations:
                self.repository.apply_mutations(mutations)
        _logger.info(
            "Inventory deducted: lots_touched=%s mutations=%s",
            len(sources),
            len(mutations),
        )
        return sources

    def restore(self, sources: Iterable[InventorySource]) -> list[LotMutation]:
        """Put consumed quantities back, recreating lots that were removed.

        Returns the committed batch so callers can :meth:`revert` it.
        """
        with self._lock:
            mutations = self._plan_restoration(list(sources))
            if mutations:
                self.repository.apply_mutations(mutations)
        _logger.info("Inventory restored: mutations=%s", len(mutations))
        return mutations

    def revert(self, mutations: Iterable[LotMutation]) -> None:
        """Undo a restoration batch returned by :meth:`restore`."""
        inverse = [_inverse(mutation) for mutation in reversed(list(mutations))]
        if not inverse:
            return
        with self._lock:
            self.repository.apply_mutations(inverse)
        _logger.info("Inventory restoration reverted: mutations=%s", len(inverse))

    def _plan_deduction(
        self, requests: list[DeductionRequest], products: Mapping[UUID, Product]
    ) -> tuple[list[LotMutation], list[InventorySource]]:
        mutations: list[LotMutation] = []
        sources: list[InventorySource] = []
        planned: dict[UUID, float] = {}
        removed: set[UUID] = set()
        for request in requests:
            product = products.get(request.product_id)
            needed = request.quantity
            for lot in self.repository.list_lots_for_product(request.product_id):
                if needed <= 0:
                    break
                if lot.id in removed:
                    continue
                lot_quantity = planned.get(lot.id, lot.quantity)
                available = _convert(lot_quantity, lot.unit, request.unit, product)
                if available <= needed:
                    needed -= available
                    removed.add(lot.id)
                    mutations.append(LotMutation(MutationKind.DELETE, lot.id))
                    sources.append(_source_from_lot(lot, lot_quantity))
                    continue
                taken = _convert(needed, request.unit, lot.unit, product)
                planned[lot.id] = lot_quantity - taken
                mutations.append(LotMutation(MutationKind.ADJUST, lot.id, -taken))
                sources.append(_source_from_lot(lot, taken))
                needed = 0
            if needed > 0:
                _logger.info(
                    "Inventory short: product_id=%s missing=%s %s",
                    request.product_id,
                    needed,
                    request.unit.value,
                )
        return mutations, sources

    def _plan_restoration(self, sources: list[InventorySource]) -> list[LotMutation]:
        mutations: list[LotMutation] = []
        recreated: dict[UUID, InventoryLot] = {}
        added_at = datetime.now(tz=UTC)
        for source in sources:
            original_id = source.inventory_id
            if original_id is not None and original_id in recreated:
                lot = recreated[original_id]
                recreated[original_id] = replace(
                    lot, quantity=lot.quantity + source.quantity
                )
                continue
            if original_id is not None and self.repository.get_lot(original_id):
                mutations.append(
                    LotMutation(MutationKind.ADJUST, original_id, source.quantity)
                )
                continue
            lot = InventoryLot(
                id=uuid4(),
                product_id=source.product_id,
                quantity=source.quantity,
                unit=source.unit,
                storage_location=source.storage_location,
                expiration_date=source.expiration_date,
                added_at=added_at,
            )
            if original_id is None:
                mutations.append(LotMutation(MutationKind.CREATE, lot.id, lot=lot))
            else:
                recreated[original_id] = lot
        mutations.extend(
            LotMutation(MutationKind.CREATE, lot.id, lot=lot)
            for lot in recreated.values()
        )
        return mutations


def _convert(
    quantity: float, from_unit: Unit, to_unit: Unit, product: Product | None
) -> float:
    if from_unit == to_unit or product is None:
        return quantity
    grams = weight_in_grams(quantity, from_unit, product)
    if to_unit == Unit.PIECES and product.piece_weight_g:
        return grams / product.piece_weight_g
    return grams


def _source_from_lot(lot: InventoryLot, quantity: float) -> InventorySource:
    return InventorySource(
        inventory_id=lot.id,
        product_id=lot.product_id,
        quantity=quantity,
        unit=lot.unit,
        storage_location=lot.storage_location,
        expiration_date=lot.expiration_date,
    )


def _inverse(mutation: LotMutation) -> LotMutation:
    # Restoration batches only adjust and create lots.
    if mutation.kind == MutationKind.ADJUST:
        return LotMutation(MutationKind.ADJUST, mutation.lot_id, -mutation.quantity)
    if mutation.kind == MutationKind.CREATE:
        return LotMutation(MutationKind.DELETE, mutation.lot_id)
    raise ValueError(f"Cannot invert {mutation.kind.value} mutation")
