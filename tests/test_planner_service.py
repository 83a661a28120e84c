"""Tests for day planning."""

from datetime import timedelta

import pytest

from fridge_macros.domain.catalog import Unit
from fridge_macros.domain.meals import MealItem, MealTier
from fridge_macros.domain.nutrition import MacroTotals
from fridge_macros.services.egg_rules import count_eggs
from tests.conftest import TODAY, make_lot


def test_today_overview_without_meals(container) -> None:
    overview = container.planner_service.today_overview(TODAY)

    assert overview.day == TODAY
    assert overview.consumed == MacroTotals()
    assert overview.remaining == MacroTotals(
        kcal=2000, protein=150, fat=70, carbs=200
    )
    assert overview.ideal == MacroTotals(kcal=500, protein=37.5, fat=17.5, carbs=50)
    assert overview.meals_left == 4
    assert overview.simple_carb_percent == 0
    assert overview.eggs_remaining == 3


def test_today_overview_tracks_meals_simple_carbs_and_eggs(
    container, products_by_name
) -> None:
    eggs = products_by_name["Eggs"]
    banana = products_by_name["Banana"]
    container.meal_service.log_manual(
        [MealItem(eggs.id, 2, Unit.PIECES), MealItem(banana.id, 1, Unit.PIECES)],
        TODAY,
    )

    overview = container.planner_service.today_overview(TODAY)

    assert overview.meals_logged == 1
    assert overview.meals_left == 3
    assert overview.consumed.kcal == 293
    assert overview.eggs_remaining == 1
    assert overview.consumed.simple_carbs == pytest.approx(15.7)
    assert overview.simple_carb_percent == pytest.approx(15.7 * 4 / 293 * 100)
    assert overview.simple_carb_over_limit


def test_suggest_meals_respects_remaining_eggs(
    container, inventory_repository, products_by_name
) -> None:
    eggs = products_by_name["Eggs"]
    chicken = products_by_name["Chicken Breast"]
    inventory_repository.create_lot(make_lot(eggs, 10, TODAY + timedelta(days=7)))
    inventory_repository.create_lot(make_lot(chicken, 500, TODAY + timedelta(days=3)))
    container.meal_service.log_manual([MealItem(eggs.id, 2, Unit.PIECES)], TODAY)

    candidates = container.planner_service.suggest_meals(TODAY)

    products = container.catalog_service.lookup()
    assert candidates
    assert all(
        count_eggs(candidate.items, products, eggs.id) <= 1
        for candidate in candidates
    )


def test_accept_meal_scores_and_deducts(
    container, inventory_repository, products_by_name
) -> None:
    chicken = products_by_name["Chicken Breast"]
    rice = products_by_name["Rice (white)"]
    lot = inventory_repository.create_lot(
        make_lot(chicken, 300, TODAY + timedelta(days=3))
    )
    inventory_repository.create_lot(make_lot(rice, 500, TODAY + timedelta(days=9)))

    meal = container.planner_service.accept_meal(
        [MealItem(chicken.id, 150, Unit.GRAMS), MealItem(rice.id, 200, Unit.GRAMS)],
        TODAY,
    )

    assert meal.total_kcal == 508
    assert inventory_repository.lots[lot.id].quantity == 150
    assert len(meal.sources) == 2


def test_forecast_and_speech_use_catalog(container) -> None:
    forecast = container.planner_service.forecast(TODAY)
    entries = container.planner_service.parse_speech("100 g oats", "en")

    assert forecast.tier == MealTier.RED
    assert len(entries) == 1
    assert entries[0].quantity == 100
