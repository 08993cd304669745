"""Meal logging service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from calorie_tracker.domain.calendar import day_end, day_start, today_label
from calorie_tracker.domain.meals import DaySummary, MealRecord, NewMeal
from calorie_tracker.services.user_settings import UserSettingsService

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 100


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def create_meals(self, user_id: str, meals: list[NewMeal]) -> list[MealRecord]:
        """Insert meals and return the stored rows."""

    def list_meals(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals logged within an inclusive time range, oldest first."""

    def list_recent_meals(self, user_id: str, limit: int) -> list[MealRecord]:
        """Return the most recent meals, newest first."""

    def delete_meal(self, user_id: str, meal_id: str) -> bool:
        """Delete a meal owned by the user, returning whether one was removed."""


@dataclass
class MealService:
    """Service for logging and reading meals."""

    repository: MealRepository
    user_settings_service: UserSettingsService

    def add_meals(self, user_id: str, meals: list[NewMeal]) -> list[MealRecord]:
        """Persist one or more meals, defaulting missing timestamps to now."""
        if not meals:
            raise ValueError("At least one meal is required")
        self.user_settings_service.get_or_create(user_id)
        now = datetime.now(tz=UTC)
        stamped = [
            meal if meal.logged_at is not None else replace(meal, logged_at=now)
            for meal in meals
        ]
        created = self.repository.create_meals(user_id, stamped)
        logger.info("Meals added", extra={"user_id": user_id, "count": len(created)})
        return created

    def list_recent(self, user_id: str, limit: int = 10) -> list[MealRecord]:
        """Return recent meals, newest first."""
        self.user_settings_service.get_or_create(user_id)
        return self.repository.list_recent_meals(
            user_id, max(1, min(limit, MAX_LIST_LIMIT))
        )

    def delete(self, user_id: str, meal_id: str) -> bool:
        """Delete a meal by id."""
        deleted = self.repository.delete_meal(user_id, meal_id)
        logger.info(
            "Meal delete requested",
            extra={"user_id": user_id, "meal_id": meal_id, "deleted": deleted},
        )
        return deleted

    def get_day_summary(
        self, user_id: str, date_label: str | None = None
    ) -> DaySummary:
        """Return meals and totals for a calendar date (today when omitted)."""
        self.user_settings_service.get_or_create(user_id)
        label = date_label or today_label()
        meals = self.repository.list_meals(user_id, day_start(label), day_end(label))
        return DaySummary(
            date=label,
            meals=meals,
            calories=sum(meal.calories for meal in meals),
            protein_g=sum(meal.protein_g or 0.0 for meal in meals),
            carbs_g=sum(meal.carbs_g or 0.0 for meal in meals),
            fat_g=sum(meal.fat_g or 0.0 for meal in meals),
        )
