"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from fridge_macros.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from fridge_macros.adapters.supabase_meal_repository import SupabaseMealRepository
from fridge_macros.adapters.supabase_product_repository import (
    SupabaseProductRepository,
)
from fridge_macros.adapters.supabase_settings_repository import (
    SupabaseSettingsRepository,
)
from fridge_macros.config import Settings
from fridge_macros.services.catalog import ProductCatalogService
from fridge_macros.services.inventory import InventoryService
from fridge_macros.services.meals import MealLogService
from fridge_macros.services.planner import PlannerService
from fridge_macros.services.rollover import DailyRolloverService
from fridge_macros.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_settings_service: UserSettingsService
    catalog_service: ProductCatalogService
    inventory_service: InventoryService
    meal_service: MealLogService
    planner_service: PlannerService
    rollover_service: DailyRolloverService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_settings_service = UserSettingsService(
        SupabaseSettingsRepository(supabase_client)
    )
    catalog_service = ProductCatalogService(SupabaseProductRepository(supabase_client))
    inventory_service = InventoryService(SupabaseInventoryRepository(supabase_client))
    meal_service = MealLogService(
        repository=SupabaseMealRepository(supabase_client),
        inventory_service=inventory_service,
        catalog_service=catalog_service,
    )
    return wire_container(
        resolved_settings,
        user_settings_service=user_settings_service,
        catalog_service=catalog_service,
        inventory_service=inventory_service,
        meal_service=meal_service,
    )


def wire_container(
    settings: Settings,
    *,
    user_settings_service: UserSettingsService,
    catalog_service: ProductCatalogService,
    inventory_service: InventoryService,
    meal_service: MealLogService,
) -> AppContainer:
    """Assemble the container around already-built core services."""
    planner_service = PlannerService(
        settings_service=user_settings_service,
        catalog_service=catalog_service,
        inventory_service=inventory_service,
        meal_service=meal_service,
        timezone=settings.timezone,
        max_candidates=settings.max_candidates,
        egg_max_per_day=settings.egg_max_per_day,
    )
    rollover_service = DailyRolloverService(
        meal_service=meal_service, timezone=settings.timezone
    )
    return AppContainer(
        settings=settings,
        user_settings_service=user_settings_service,
        catalog_service=catalog_service,
        inventory_service=inventory_service,
        meal_service=meal_service,
        planner_service=planner_service,
        rollover_service=rollover_service,
    )
