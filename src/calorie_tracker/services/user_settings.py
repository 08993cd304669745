"""User settings service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.settings import (
    DEFAULT_METABOLIC_RATE,
    DEFAULT_TIMEZONE,
    UserSettings,
)

logger = logging.getLogger(__name__)


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_settings(self, user_id: str) -> UserSettings | None:
        """Return the settings row for a user, if present."""

    def create_settings(
        self, user_id: str, timezone: str, metabolic_rate: int
    ) -> UserSettings:
        """Create a settings row and return it."""

    def update_settings(
        self, user_id: str, timezone: str | None, metabolic_rate: int | None
    ) -> UserSettings:
        """Update the provided fields and return the settings row."""


@dataclass
class UserSettingsService:
    """Service for user settings."""

    repository: UserSettingsRepository

    def get_or_create(self, user_id: str) -> UserSettings:
        """Return the user's settings, creating defaults on first use."""
        existing = self.repository.get_settings(user_id)
        if existing is not None:
            return existing
        logger.info("Creating default settings", extra={"user_id": user_id})
        return self.repository.create_settings(
            user_id, timezone=DEFAULT_TIMEZONE, metabolic_rate=DEFAULT_METABOLIC_RATE
        )

    def update(
        self,
        user_id: str,
        timezone: str | None = None,
        metabolic_rate: int | None = None,
    ) -> UserSettings:
        """Update timezone and/or metabolic rate for a user."""
        self.get_or_create(user_id)
        return self.repository.update_settings(
            user_id, timezone=timezone, metabolic_rate=metabolic_rate
        )
