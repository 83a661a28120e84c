"""Domain models for the product catalog."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class Unit(str, Enum):
    """Units a quantity can be expressed in."""

    GRAMS = "g"
    MILLILITRES = "ml"
    PIECES = "pieces"


@dataclass(frozen=True)
class Product:
    """Product template with macros per 100 g (or 100 ml)."""

    id: UUID
    name: str
    kcal_per_100: float
    protein_per_100: float
    fat_per_100: float
    carbs_per_100: float
    simple_carbs_per_100: float
    default_unit: Unit
    piece_weight_g: float | None = None
