"""Models for speech parsing results."""

from dataclasses import dataclass
from uuid import UUID

from fridge_macros.domain.catalog import Unit


@dataclass(frozen=True)
class SpeechEntry:
    """A product amount recognized in an utterance."""

    product_id: UUID
    quantity: float
    unit: Unit
