"""User settings service."""

from dataclasses import dataclass
from typing import Protocol

from fridge_macros.domain.nutrition import DEFAULT_SETTINGS, UserSettings


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_settings(self) -> UserSettings | None:
        """Return the settings record if it exists."""

    def create_settings(self, payload: dict[str, object]) -> UserSettings:
        """Create the settings record and return it."""

    def update_settings(self, payload: dict[str, object]) -> UserSettings:
        """Update the settings record and return it."""


@dataclass
class UserSettingsService:
    """Service for daily targets and meal cadence."""

    repository: UserSettingsRepository

    def ensure_defaults(self) -> UserSettings:
        """Create the default settings when none exist yet."""
        existing = self.repository.get_settings()
        if existing is not None:
            return existing
        return self.repository.create_settings(dict(DEFAULT_SETTINGS))

    def get(self) -> UserSettings:
        """Return the current settings, creating defaults if needed."""
        return self.ensure_defaults()

    def update(self, changes: dict[str, object]) -> UserSettings:
        """Apply a partial update to the settings."""
        self.ensure_defaults()
        payload = {key: value for key, value in changes.items() if value is not None}
        if not payload:
            return self.get()
        return self.repository.update_settings(payload)
