"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from fridge_macros.config import Settings
from fridge_macros.containers import AppContainer, wire_container
from fridge_macros.domain.catalog import Product, Unit
from fridge_macros.domain.inventory import (
    InventoryLot,
    LotMutation,
    MutationKind,
    StorageLocation,
)
from fridge_macros.domain.meals import Meal
from fridge_macros.domain.nutrition import UserSettings
from fridge_macros.services.catalog import (
    DEFAULT_PRODUCTS,
    ProductCatalogService,
    ProductRepository,
)
from fridge_macros.services.inventory import InventoryRepository, InventoryService
from fridge_macros.services.meals import MealLogService, MealRepository
from fridge_macros.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)

TODAY = date(2026, 3, 10)


@dataclass
class InMemoryProductRepository(ProductRepository):
    """In-memory product repository for tests."""

    products: dict[UUID, Product] = field(default_factory=dict)

    def list_products(self) -> list[Product]:
        return sorted(self.products.values(), key=lambda product: product.name)

    def get_product(self, product_id: UUID) -> Product | None:
        return self.products.get(product_id)

    def create_products(self, payloads: list[dict[str, object]]) -> list[Product]:
        created = []
        for payload in payloads:
            product = Product(
                id=uuid4(),
                **{**payload, "default_unit": Unit(payload["default_unit"])},
            )
            self.products[product.id] = product
            created.append(product)
        return created

    def update_product(self, product_id: UUID, payload: dict[str, object]) -> Product:
        product = replace(self.products[product_id], **payload)
        self.products[product_id] = product
        return product

    def delete_product(self, product_id: UUID) -> None:
        self.products.pop(product_id, None)


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory inventory with all-or-nothing mutation batches."""

    lots: dict[UUID, InventoryLot] = field(default_factory=dict)
    batches: list[list[LotMutation]] = field(default_factory=list)
    fail_after: int | None = None

    def list_lots(self) -> list[InventoryLot]:
        return sorted(
            self.lots.values(), key=lambda lot: (lot.expiration_date, lot.added_at)
        )

    def get_lot(self, lot_id: UUID) -> InventoryLot | None:
        return self.lots.get(lot_id)

    def list_lots_for_product(self, product_id: UUID) -> list[InventoryLot]:
        return [lot for lot in self.list_lots() if lot.product_id == product_id]

    def create_lot(self, lot: InventoryLot) -> InventoryLot:
        self.lots[lot.id] = lot
        return lot

    def update_lot(self, lot_id: UUID, changes: dict[str, object]) -> InventoryLot:
        lot = replace(self.lots[lot_id], **changes)
        self.lots[lot_id] = lot
        return lot

    def delete_lot(self, lot_id: UUID) -> None:
        self.lots.pop(lot_id, None)

    def apply_mutations(self, mutations: list[LotMutation]) -> None:
        snapshot = dict(self.lots)
        try:
            for index, mutation in enumerate(mutations):
                if self.fail_after is not None and index >= self.fail_after:
                    raise RuntimeError("Simulated storage failure")
                self._apply(mutation)
        except Exception:
            self.lots = snapshot
            raise
        self.batches.append(list(mutations))

    def _apply(self, mutation: LotMutation) -> None:
        if mutation.kind == MutationKind.ADJUST:
            lot = self.lots[mutation.lot_id]
            self.lots[lot.id] = replace(lot, quantity=lot.quantity + mutation.quantity)
        elif mutation.kind == MutationKind.DELETE:
            self.lots.pop(mutation.lot_id, None)
        elif mutation.lot is not None:
            self.lots[mutation.lot.id] = mutation.lot


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, Meal] = field(default_factory=dict)
    fail_on_create: bool = False
    fail_on_purge: bool = False
    fail_on_delete: bool = False

    def create_meal(self, meal: Meal) -> Meal:
        if self.fail_on_create:
            raise RuntimeError("Failed to create meal")
        self.meals[meal.id] = meal
        return meal

    def get_meal(self, meal_id: UUID) -> Meal | None:
        return self.meals.get(meal_id)

    def list_meals_for_date(self, day: date) -> list[Meal]:
        return sorted(
            (meal for meal in self.meals.values() if meal.date == day),
            key=lambda meal: meal.created_at,
        )

    def delete_meal(self, meal_id: UUID) -> None:
        if self.fail_on_delete:
            raise RuntimeError("Failed to delete meal")
        self.meals.pop(meal_id, None)

    def delete_meals_not_on_date(self, day: date) -> int:
        if self.fail_on_purge:
            raise RuntimeError("Failed to purge meals")
        stale = [meal_id for meal_id, meal in self.meals.items() if meal.date != day]
        for meal_id in stale:
            del self.meals[meal_id]
        return len(stale)


@dataclass
class InMemorySettingsRepository(UserSettingsRepository):
    """In-memory settings repository for tests."""

    settings: UserSettings | None = None
    creates: int = 0

    def get_settings(self) -> UserSettings | None:
        return self.settings

    def create_settings(self, payload: dict[str, object]) -> UserSettings:
        self.creates += 1
        self.settings = UserSettings(id=uuid4(), **payload)
        return self.settings

    def update_settings(self, payload: dict[str, object]) -> UserSettings:
        assert self.settings is not None
        self.settings = replace(self.settings, **payload)
        return self.settings


def make_product(  # noqa: PLR0913
    name: str,
    kcal: float,
    protein: float,
    fat: float,
    carbs: float,
    simple_carbs: float = 0,
    unit: Unit = Unit.GRAMS,
    piece_weight_g: float | None = None,
) -> Product:
    return Product(
        id=uuid4(),
        name=name,
        kcal_per_100=kcal,
        protein_per_100=protein,
        fat_per_100=fat,
        carbs_per_100=carbs,
        simple_carbs_per_100=simple_carbs,
        default_unit=unit,
        piece_weight_g=piece_weight_g,
    )


def make_lot(
    product: Product,
    quantity: float,
    expiration_date: date,
    unit: Unit | None = None,
    added_at: datetime | None = None,
) -> InventoryLot:
    return InventoryLot(
        id=uuid4(),
        product_id=product.id,
        quantity=quantity,
        unit=unit or product.default_unit,
        storage_location=StorageLocation.FRIDGE,
        expiration_date=expiration_date,
        added_at=added_at or datetime(2026, 3, 1, tzinfo=UTC),
    )


def default_catalog() -> dict[str, Product]:
    repository = InMemoryProductRepository()
    products = repository.create_products([dict(row) for row in DEFAULT_PRODUCTS])
    return {product.name: product for product in products}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        timezone="UTC",
    )


@pytest.fixture
def product_repository() -> InMemoryProductRepository:
    repository = InMemoryProductRepository()
    repository.create_products([dict(row) for row in DEFAULT_PRODUCTS])
    return repository


@pytest.fixture
def products_by_name(product_repository: InMemoryProductRepository) -> dict[str, Product]:
    return {product.name: product for product in product_repository.list_products()}


@pytest.fixture
def inventory_repository() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def settings_repository() -> InMemorySettingsRepository:
    return InMemorySettingsRepository()


@pytest.fixture
def catalog_service(
    product_repository: InMemoryProductRepository,
) -> ProductCatalogService:
    return ProductCatalogService(product_repository)


@pytest.fixture
def inventory_service(
    inventory_repository: InMemoryInventoryRepository,
) -> InventoryService:
    return InventoryService(inventory_repository)


@pytest.fixture
def meal_service(
    meal_repository: InMemoryMealRepository,
    inventory_service: InventoryService,
    catalog_service: ProductCatalogService,
) -> MealLogService:
    return MealLogService(
        repository=meal_repository,
        inventory_service=inventory_service,
        catalog_service=catalog_service,
    )


@pytest.fixture
def container(
    settings: Settings,
    settings_repository: InMemorySettingsRepository,
    catalog_service: ProductCatalogService,
    inventory_service: InventoryService,
    meal_service: MealLogService,
) -> AppContainer:
    return wire_container(
        settings,
        user_settings_service=UserSettingsService(settings_repository),
        catalog_service=catalog_service,
        inventory_service=inventory_service,
        meal_service=meal_service,
    )
