"""Weight logging service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.calendar import round_half_away
from calorie_tracker.domain.weights import WeightEntry, WeightHistory, WeightRecord
from calorie_tracker.services.user_settings import UserSettingsService

logger = logging.getLogger(__name__)


class WeightRepository(Protocol):
    """Persistence interface for weights."""

    def upsert_weights(
        self, user_id: str, entries: list[WeightEntry]
    ) -> list[WeightRecord]:
        """Insert or overwrite one weight per (user, date) and return the rows."""

    def list_recent_weights(self, user_id: str, limit: int) -> list[WeightRecord]:
        """Return the most recent weights, newest date first."""


@dataclass
class WeightService:
    """Service for logging weights and reading weight history."""

    repository: WeightRepository
    user_settings_service: UserSettingsService

    def add_weights(
        self, user_id: str, entries: list[WeightEntry]
    ) -> list[WeightRecord]:
        """Upsert weights by date; the last entry for a repeated date wins."""
        if not entries:
            raise ValueError("At least one weight entry is required")
        self.user_settings_service.get_or_create(user_id)
        by_date: dict[str, WeightEntry] = {}
        for entry in entries:
            by_date[entry.logged_on] = entry
        stored = self.repository.upsert_weights(user_id, list(by_date.values()))
        logger.info(
            "Weights upserted", extra={"user_id": user_id, "count": len(stored)}
        )
        return stored

    def get_history(self, user_id: str, limit: int = 7) -> WeightHistory:
        """Return recent weights with the change between the latest two."""
        self.user_settings_service.get_or_create(user_id)
        entries = self.repository.list_recent_weights(user_id, max(1, limit))
        change = None
        if len(entries) > 1:
            change = round_half_away(entries[0].weight_kg - entries[1].weight_kg, 1)
        return WeightHistory(entries=entries, change_kg=change)
