"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fridge_macros.domain.nutrition import UserSettings
from fridge_macros.services.user_settings import UserSettingsRepository


@dataclass
class SupabaseSettingsRepository(UserSettingsRepository):
    """Supabase implementation for the single settings row."""

    client: Client

    def get_settings(self) -> UserSettings | None:
        """Return the settings row if it exists."""
        response = (
            self.client.table("settings")
            .select("*")
            .order("created_at")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_settings(response.data[0])

    def create_settings(self, payload: dict[str, object]) -> UserSettings:
        """Create the settings row and return it."""
        response = self.client.table("settings").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create settings")
        return _parse_settings(response.data[0])

    def update_settings(self, payload: dict[str, object]) -> UserSettings:
        """Update the settings row and return it."""
        current = self.get_settings()
        if current is None:
            raise RuntimeError("Failed to update settings: no settings row")
        response = (
            self.client.table("settings")
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(current.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update settings")
        return _parse_settings(response.data[0])


def _parse_settings(row: dict[str, object]) -> UserSettings:
    """Parse a settings row into a domain model."""
    return UserSettings(
        id=UUID(row["id"]),
        daily_kcal=float(row.get("daily_kcal", 0.0)),
        daily_protein=float(row.get("daily_protein", 0.0)),
        daily_fat=float(row.get("daily_fat", 0.0)),
        daily_carbs=float(row.get("daily_carbs", 0.0)),
        simple_carb_limit_percent=float(row.get("simple_carb_limit_percent", 0.0)),
        meals_per_day=int(row.get("meals_per_day", 1)),
    )
