"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer, wire_services
from calorie_tracker.domain.meals import DailyMealTotals, MealRecord, NewMeal
from calorie_tracker.domain.settings import UserSettings
from calorie_tracker.domain.weights import DatedWeight, WeightEntry, WeightRecord
from calorie_tracker.services.meals import MealRepository
from calorie_tracker.services.stats import StatsRepository, group_meals_by_day
from calorie_tracker.services.user_settings import UserSettingsRepository
from calorie_tracker.services.weights import WeightRepository


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    rows: dict[str, UserSettings] = field(default_factory=dict)

    def get_settings(self, user_id: str) -> UserSettings | None:
        return self.rows.get(user_id)

    def create_settings(
        self, user_id: str, timezone: str, metabolic_rate: int
    ) -> UserSettings:
        now = datetime.now(tz=UTC)
        settings = UserSettings(
            user_id=user_id,
            timezone=timezone,
            metabolic_rate=metabolic_rate,
            created_at=now,
            updated_at=now,
        )
        return self.rows.setdefault(user_id, settings)

    def update_settings(
        self, user_id: str, timezone: str | None, metabolic_rate: int | None
    ) -> UserSettings:
        current = self.rows[user_id]
        updated = replace(
            current,
            timezone=timezone if timezone is not None else current.timezone,
            metabolic_rate=(
                metabolic_rate if metabolic_rate is not None else current.metabolic_rate
            ),
            updated_at=datetime.now(tz=UTC),
        )
        self.rows[user_id] = updated
        return updated


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[str, MealRecord] = field(default_factory=dict)

    def create_meals(self, user_id: str, meals: list[NewMeal]) -> list[MealRecord]:
        now = datetime.now(tz=UTC)
        created = []
        for meal in meals:
            record = MealRecord(
                id=str(uuid4()),
                user_id=user_id,
                name=meal.name,
                calories=meal.calories,
                protein_g=meal.protein_g,
                carbs_g=meal.carbs_g,
                fat_g=meal.fat_g,
                logged_at=meal.logged_at or now,
                created_at=now,
                updated_at=now,
            )
            self.meals[record.id] = record
            created.append(record)
        return created

    def list_meals(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[MealRecord]:
        return sorted(
            (
                meal
                for meal in self.meals.values()
                if meal.user_id == user_id and start <= meal.logged_at <= end
            ),
            key=lambda meal: meal.logged_at,
        )

    def list_recent_meals(self, user_id: str, limit: int) -> list[MealRecord]:
        owned = [meal for meal in self.meals.values() if meal.user_id == user_id]
        return sorted(owned, key=lambda meal: meal.logged_at, reverse=True)[:limit]

    def delete_meal(self, user_id: str, meal_id: str) -> bool:
        meal = self.meals.get(meal_id)
        if meal is None or meal.user_id != user_id:
            return False
        del self.meals[meal_id]
        return True


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight repository keyed by (user, date)."""

    weights: dict[tuple[str, str], WeightRecord] = field(default_factory=dict)

    def upsert_weights(
        self, user_id: str, entries: list[WeightEntry]
    ) -> list[WeightRecord]:
        stored = []
        for entry in entries:
            key = (user_id, entry.logged_on)
            existing = self.weights.get(key)
            record = WeightRecord(
                id=existing.id if existing else str(uuid4()),
                user_id=user_id,
                weight_kg=entry.weight_kg,
                logged_on=entry.logged_on,
                created_at=datetime.now(tz=UTC),
            )
            self.weights[key] = record
            stored.append(record)
        return stored

    def list_recent_weights(self, user_id: str, limit: int) -> list[WeightRecord]:
        owned = [w for (owner, _), w in self.weights.items() if owner == user_id]
        return sorted(owned, key=lambda w: w.logged_on, reverse=True)[:limit]


@dataclass
class InMemoryStatsRepository(StatsRepository):
    """Stats queries over the in-memory meal and weight repositories."""

    meal_repository: InMemoryMealRepository
    weight_repository: InMemoryWeightRepository
    calls: list[tuple[str, object, object]] = field(default_factory=list)

    def list_daily_meal_totals(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[DailyMealTotals]:
        self.calls.append(("meals", start, end))
        meals = self.meal_repository.list_meals(user_id, start, end)
        return list(group_meals_by_day(meals))

    def list_weights_in_range(
        self, user_id: str, start_date: str, end_date: str
    ) -> list[DatedWeight]:
        self.calls.append(("weights", start_date, end_date))
        rows = sorted(self.weight_repository.weights.items())
        return [
            DatedWeight(date=record.logged_on, weight_kg=record.weight_kg)
            for (owner, logged_on), record in rows
            if owner == user_id and start_date <= logged_on <= end_date
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def settings_repository() -> InMemoryUserSettingsRepository:
    return InMemoryUserSettingsRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def weight_repository() -> InMemoryWeightRepository:
    return InMemoryWeightRepository()


@pytest.fixture
def stats_repository(
    meal_repository: InMemoryMealRepository,
    weight_repository: InMemoryWeightRepository,
) -> InMemoryStatsRepository:
    return InMemoryStatsRepository(meal_repository, weight_repository)


@pytest.fixture
def container(
    settings: Settings,
    settings_repository: InMemoryUserSettingsRepository,
    meal_repository: InMemoryMealRepository,
    weight_repository: InMemoryWeightRepository,
    stats_repository: InMemoryStatsRepository,
) -> AppContainer:
    return wire_services(
        settings,
        user_settings_repository=settings_repository,
        meal_repository=meal_repository,
        weight_repository=weight_repository,
        stats_repository=stats_repository,
    )


def meal_at(calories: float, logged_at: str, name: str = "Meal", **macros) -> NewMeal:
    """Build a meal logged at an ISO timestamp."""
    return NewMeal(
        name=name,
        calories=calories,
        logged_at=datetime.fromisoformat(logged_at),
        **macros,
    )
