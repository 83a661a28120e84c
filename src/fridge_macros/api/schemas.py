"""Pydantic models for API request bodies."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from fridge_macros.domain.catalog import Unit
from fridge_macros.domain.inventory import StorageLocation
from fridge_macros.domain.meals import MealItem
from fridge_macros.services.speech_vocabulary import Language


class SettingsUpdate(BaseModel):
    """Partial update of daily targets."""

    daily_kcal: float | None = Field(default=None, ge=0)
    daily_protein: float | None = Field(default=None, ge=0)
    daily_fat: float | None = Field(default=None, ge=0)
    daily_carbs: float | None = Field(default=None, ge=0)
    simple_carb_limit_percent: float | None = Field(default=None, ge=0, le=100)
    meals_per_day: int | None = Field(default=None, ge=1)


class ProductCreate(BaseModel):
    """New catalog product."""

    name: str = Field(min_length=1)
    kcal_per_100: float = Field(ge=0)
    protein_per_100: float = Field(ge=0)
    fat_per_100: float = Field(ge=0)
    carbs_per_100: float = Field(ge=0)
    simple_carbs_per_100: float = Field(default=0, ge=0)
    default_unit: Unit = Unit.GRAMS
    piece_weight_g: float | None = Field(default=None, gt=0)


class ProductUpdate(BaseModel):
    """Partial product update."""

    name: str | None = Field(default=None, min_length=1)
    kcal_per_100: float | None = Field(default=None, ge=0)
    protein_per_100: float | None = Field(default=None, ge=0)
    fat_per_100: float | None = Field(default=None, ge=0)
    carbs_per_100: float | None = Field(default=None, ge=0)
    simple_carbs_per_100: float | None = Field(default=None, ge=0)
    default_unit: Unit | None = None
    piece_weight_g: float | None = Field(default=None, gt=0)


class LotCreate(BaseModel):
    """New inventory lot."""

    product_id: UUID
    quantity: float = Field(gt=0)
    unit: Unit
    storage_location: StorageLocation = StorageLocation.FRIDGE
    expiration_date: date


class LotUpdate(BaseModel):
    """Partial inventory lot update."""

    quantity: float | None = Field(default=None, ge=0)
    unit: Unit | None = None
    storage_location: StorageLocation | None = None
    expiration_date: date | None = None


class MealItemPayload(BaseModel):
    """One item of a meal."""

    product_id: UUID
    quantity: float = Field(gt=0)
    unit: Unit

    def to_domain(self) -> MealItem:
        """Convert to the domain item."""
        return MealItem(
            product_id=self.product_id, quantity=self.quantity, unit=self.unit
        )


class MealPayload(BaseModel):
    """A meal to log."""

    items: list[MealItemPayload] = Field(min_length=1)


class SpeechRequest(BaseModel):
    """A transcribed utterance to parse."""

    text: str
    language: Language
