"""Tests for the meal log service."""

from datetime import timedelta
from uuid import uuid4

import pytest

from fridge_macros.domain.catalog import Unit
from fridge_macros.domain.meals import MealCandidate, MealItem
from fridge_macros.domain.nutrition import MacroTotals
from fridge_macros.services.macros import meal_macros
from fridge_macros.services.meal_generator import score_meal
from tests.conftest import TODAY, make_lot


def _candidate(items, products) -> MealCandidate:
    totals = meal_macros(items, products)
    score, tier, deviation = score_meal(
        totals, MacroTotals(kcal=500, protein=40, fat=10, carbs=60)
    )
    return MealCandidate(
        items=items,
        total_kcal=totals.kcal,
        total_protein=totals.protein,
        total_fat=totals.fat,
        total_carbs=totals.carbs,
        total_simple_carbs=totals.simple_carbs,
        tier=tier,
        score=score,
        deviation=deviation,
    )


def test_accept_candidate_deducts_inventory_and_records_sources(
    meal_service, inventory_repository, products_by_name, catalog_service
) -> None:
    chicken = products_by_name["Chicken Breast"]
    rice = products_by_name["Rice (white)"]
    chicken_lot = inventory_repository.create_lot(
        make_lot(chicken, 300, TODAY + timedelta(days=2))
    )
    rice_lot = inventory_repository.create_lot(
        make_lot(rice, 200, TODAY + timedelta(days=9))
    )
    items = [
        MealItem(chicken.id, 150, Unit.GRAMS),
        MealItem(rice.id, 200, Unit.GRAMS),
    ]

    meal = meal_service.accept_candidate(
        _candidate(items, catalog_service.lookup()), TODAY
    )

    assert meal.total_kcal == 508
    assert meal.date == TODAY
    assert inventory_repository.lots[chicken_lot.id].quantity == 150
    assert rice_lot.id not in inventory_repository.lots
    assert [(source.inventory_id, source.quantity) for source in meal.sources] == [
        (chicken_lot.id, 150),
        (rice_lot.id, 200),
    ]
    assert meal_service.list_meals(TODAY) == [meal]


def test_delete_meal_restores_inventory(
    meal_service, inventory_repository, products_by_name, catalog_service
) -> None:
    chicken = products_by_name["Chicken Breast"]
    rice = products_by_name["Rice (white)"]
    chicken_lot = inventory_repository.create_lot(
        make_lot(chicken, 300, TODAY + timedelta(days=2))
    )
    inventory_repository.create_lot(make_lot(rice, 200, TODAY + timedelta(days=9)))
    items = [
        MealItem(chicken.id, 150, Unit.GRAMS),
        MealItem(rice.id, 200, Unit.GRAMS),
    ]
    meal = meal_service.accept_candidate(
        _candidate(items, catalog_service.lookup()), TODAY
    )

    meal_service.delete_meal(meal.id)

    assert meal_service.list_meals(TODAY) == []
    assert inventory_repository.lots[chicken_lot.id].quantity == 300
    restored_rice = inventory_repository.list_lots_for_product(rice.id)
    assert [lot.quantity for lot in restored_rice] == [200]


def test_failed_meal_insert_restores_inventory(
    meal_service,
    meal_repository,
    inventory_repository,
    products_by_name,
    catalog_service,
) -> None:
    chicken = products_by_name["Chicken Breast"]
    lot = inventory_repository.create_lot(
        make_lot(chicken, 300, TODAY + timedelta(days=2))
    )
    meal_repository.fail_on_create = True
    items = [MealItem(chicken.id, 100, Unit.GRAMS)]

    with pytest.raises(RuntimeError):
        meal_service.accept_candidate(
            _candidate(items, catalog_service.lookup()), TODAY
        )

    assert inventory_repository.lots[lot.id].quantity == 300


def test_log_manual_leaves_inventory_alone(
    meal_service, inventory_repository, products_by_name
) -> None:
    eggs = products_by_name["Eggs"]
    lot = inventory_repository.create_lot(make_lot(eggs, 6, TODAY + timedelta(days=5)))

    meal = meal_service.log_manual([MealItem(eggs.id, 2, Unit.PIECES)], TODAY)

    assert meal.total_kcal == 186
    assert meal.sources is None
    assert inventory_repository.lots[lot.id].quantity == 6


def test_delete_unknown_meal_raises_lookup_error(meal_service) -> None:
    with pytest.raises(LookupError):
        meal_service.delete_meal(uuid4())


def test_purge_meals_not_on_keeps_only_that_day(meal_service, products_by_name) -> None:
    oats = products_by_name["Oats"]
    meal_service.log_manual([MealItem(oats.id, 50, Unit.GRAMS)], TODAY)
    meal_service.log_manual(
        [MealItem(oats.id, 50, Unit.GRAMS)], TODAY - timedelta(days=1)
    )

    purged = meal_service.purge_meals_not_on(TODAY)

    assert purged == 1
    assert len(meal_service.list_meals(TODAY)) == 1


def test_failed_meal_delete_reverts_restoration_and_can_be_retried(
    meal_service,
    meal_repository,
    inventory_repository,
    products_by_name,
    catalog_service,
) -> None:
    chicken = products_by_name["Chicken Breast"]
    rice = products_by_name["Rice (white)"]
    chicken_lot = inventory_repository.create_lot(
        make_lot(chicken, 300, TODAY + timedelta(days=2))
    )
    inventory_repository.create_lot(make_lot(rice, 200, TODAY + timedelta(days=9)))
    items = [
        MealItem(chicken.id, 100, Unit.GRAMS),
        MealItem(rice.id, 200, Unit.GRAMS),
    ]
    meal = meal_service.accept_candidate(
        _candidate(items, catalog_service.lookup()), TODAY
    )
    meal_repository.fail_on_delete = True

    with pytest.raises(RuntimeError):
        meal_service.delete_meal(meal.id)

    assert inventory_repository.lots[chicken_lot.id].quantity == 200
    assert inventory_repository.list_lots_for_product(rice.id) == []
    assert meal_service.list_meals(TODAY) == [meal]

    meal_repository.fail_on_delete = False
    meal_service.delete_meal(meal.id)

    assert inventory_repository.lots[chicken_lot.id].quantity == 300
    assert [lot.quantity for lot in inventory_repository.list_lots_for_product(rice.id)] == [200]
    assert meal_service.list_meals(TODAY) == []
