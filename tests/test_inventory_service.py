"""Tests for inventory deduction and restoration."""

from datetime import timedelta
from uuid import uuid4

import pytest

from fridge_macros.domain.catalog import Unit
from fridge_macros.domain.inventory import (
    DeductionRequest,
    InventorySource,
    MutationKind,
    StorageLocation,
)
from fridge_macros.services.inventory import InventoryService
from tests.conftest import (
    TODAY,
    InMemoryInventoryRepository,
    make_lot,
    make_product,
)


def _service_with_two_rice_lots():
    rice = make_product("Rice (white)", 130, 2.7, 0.3, 28, 0.1)
    repository = InMemoryInventoryRepository()
    soon = repository.create_lot(make_lot(rice, 100, TODAY + timedelta(days=1)))
    later = repository.create_lot(make_lot(rice, 200, TODAY + timedelta(days=5)))
    return InventoryService(repository), repository, rice, soon, later


def test_deduct_consumes_soonest_expiring_first() -> None:
    service, repository, rice, soon, later = _service_with_two_rice_lots()

    sources = service.deduct([DeductionRequest(rice.id, 150, Unit.GRAMS)])

    assert soon.id not in repository.lots
    assert repository.lots[later.id].quantity == 150
    assert [(source.inventory_id, source.quantity) for source in sources] == [
        (soon.id, 100),
        (later.id, 50),
    ]
    assert [mutation.kind for mutation in repository.batches[0]] == [
        MutationKind.DELETE,
        MutationKind.ADJUST,
    ]


def test_deduct_with_short_stock_consumes_everything() -> None:
    service, repository, rice, _, _ = _service_with_two_rice_lots()

    sources = service.deduct([DeductionRequest(rice.id, 500, Unit.GRAMS)])

    assert repository.lots == {}
    assert sum(source.quantity for source in sources) == 300


def test_deduct_of_missing_product_is_a_no_op() -> None:
    service, repository, _, _, _ = _service_with_two_rice_lots()

    sources = service.deduct([DeductionRequest(uuid4(), 100, Unit.GRAMS)])

    assert sources == []
    assert repository.batches == []
    assert len(repository.lots) == 2


def test_deduct_then_restore_reproduces_quantities() -> None:
    service, repository, rice, soon, later = _service_with_two_rice_lots()

    sources = service.deduct([DeductionRequest(rice.id, 150, Unit.GRAMS)])
    service.restore(sources)

    lots = repository.list_lots()
    assert [(lot.quantity, lot.expiration_date) for lot in lots] == [
        (100, soon.expiration_date),
        (200, later.expiration_date),
    ]
    assert repository.lots[later.id].quantity == 200
    assert soon.id not in repository.lots


def test_later_requests_see_earlier_planned_consumption() -> None:
    service, repository, rice, soon, later = _service_with_two_rice_lots()

    sources = service.deduct(
        [
            DeductionRequest(rice.id, 60, Unit.GRAMS),
            DeductionRequest(rice.id, 60, Unit.GRAMS),
        ]
    )

    assert [(source.inventory_id, source.quantity) for source in sources] == [
        (soon.id, 60),
        (soon.id, 40),
        (later.id, 20),
    ]
    assert soon.id not in repository.lots
    assert repository.lots[later.id].quantity == 180


def test_failed_batch_leaves_inventory_untouched() -> None:
    service, repository, rice, soon, later = _service_with_two_rice_lots()
    repository.fail_after = 1

    with pytest.raises(RuntimeError):
        service.deduct([DeductionRequest(rice.id, 150, Unit.GRAMS)])

    assert repository.lots[soon.id].quantity == 100
    assert repository.lots[later.id].quantity == 200


def test_deduct_converts_grams_to_pieces() -> None:
    eggs = make_product("Eggs", 155, 13, 11, 1.1, 1.1, Unit.PIECES, 60)
    repository = InMemoryInventoryRepository()
    lot = repository.create_lot(make_lot(eggs, 6, TODAY + timedelta(days=7)))
    service = InventoryService(repository)

    sources = service.deduct(
        [DeductionRequest(eggs.id, 120, Unit.GRAMS)], {eggs.id: eggs}
    )

    assert repository.lots[lot.id].quantity == pytest.approx(4)
    assert sources[0].quantity == pytest.approx(2)
    assert sources[0].unit == Unit.PIECES


def test_restore_merges_sources_of_a_vanished_lot() -> None:
    rice = make_product("Rice (white)", 130, 2.7, 0.3, 28, 0.1)
    repository = InMemoryInventoryRepository()
    service = InventoryService(repository)
    vanished_id = uuid4()
    expiration = TODAY + timedelta(days=2)
    sources = [
        InventorySource(
            vanished_id, rice.id, 60, Unit.GRAMS, StorageLocation.PANTRY, expiration
        ),
        InventorySource(
            vanished_id, rice.id, 40, Unit.GRAMS, StorageLocation.PANTRY, expiration
        ),
    ]

    service.restore(sources)

    lots = repository.list_lots()
    assert len(lots) == 1
    assert lots[0].quantity == 100
    assert lots[0].storage_location == StorageLocation.PANTRY
    assert lots[0].expiration_date == expiration


def test_add_update_and_remove_lot() -> None:
    rice = make_product("Rice (white)", 130, 2.7, 0.3, 28, 0.1)
    repository = InMemoryInventoryRepository()
    service = InventoryService(repository)

    lot = service.add_lot(
        rice.id, 500, Unit.GRAMS, StorageLocation.PANTRY, TODAY + timedelta(days=30)
    )
    updated = service.update_lot(lot.id, {"quantity": 450})
    service.remove_lot(lot.id)

    assert updated.quantity == 450
    assert service.list_lots() == []


def test_update_missing_lot_raises_lookup_error() -> None:
    service = InventoryService(InMemoryInventoryRepository())

    with pytest.raises(LookupError):
        service.update_lot(uuid4(), {"quantity": 1})


def test_failed_restore_batch_leaves_inventory_untouched() -> None:
    service, repository, rice, soon, later = _service_with_two_rice_lots()
    sources = service.deduct([DeductionRequest(rice.id, 150, Unit.GRAMS)])
    repository.fail_after = 1

    with pytest.raises(RuntimeError):
        service.restore(sources)

    assert soon.id not in repository.lots
    assert [lot.quantity for lot in repository.list_lots()] == [150]


def test_revert_undoes_adjusted_and_recreated_lots() -> None:
    service, repository, rice, soon, later = _service_with_two_rice_lots()
    sources = service.deduct([DeductionRequest(rice.id, 150, Unit.GRAMS)])
    restored = service.restore(sources)
    assert sorted(lot.quantity for lot in repository.list_lots()) == [100, 200]

    service.revert(restored)

    assert [lot.quantity for lot in repository.list_lots()] == [150]
    assert repository.lots[later.id].quantity == 150
