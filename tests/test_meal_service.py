"""Tests for meal service."""

from datetime import UTC, datetime

import pytest

from calorie_tracker.domain.meals import NewMeal
from calorie_tracker.services.meals import MealService
from calorie_tracker.services.user_settings import UserSettingsService
from tests.conftest import (
    InMemoryMealRepository,
    InMemoryUserSettingsRepository,
    meal_at,
)


@pytest.fixture
def service(
    meal_repository: InMemoryMealRepository,
    settings_repository: InMemoryUserSettingsRepository,
) -> MealService:
    return MealService(meal_repository, UserSettingsService(settings_repository))


def test_add_meals_batch(
    service: MealService, settings_repository: InMemoryUserSettingsRepository
) -> None:
    created = service.add_meals(
        "user-1",
        [
            meal_at(450, "2024-01-01T08:00:00Z", name="Oats", protein_g=15),
            meal_at(700, "2024-01-01T13:00:00Z", name="Pasta"),
        ],
    )

    assert [meal.name for meal in created] == ["Oats", "Pasta"]
    assert created[0].protein_g == 15
    assert created[1].protein_g is None
    assert "user-1" in settings_repository.rows


def test_add_meals_defaults_timestamp_to_now(service: MealService) -> None:
    before = datetime.now(tz=UTC)

    created = service.add_meals("user-1", [NewMeal(name="Apple", calories=95)])

    assert created[0].logged_at >= before


def test_add_meals_requires_entries(service: MealService) -> None:
    with pytest.raises(ValueError):
        service.add_meals("user-1", [])


def test_list_recent_newest_first_and_clamped(service: MealService) -> None:
    service.add_meals(
        "user-1",
        [meal_at(100 + day, f"2024-01-{day:02d}T12:00:00Z") for day in range(1, 6)],
    )

    recent = service.list_recent("user-1", limit=2)
    everything = service.list_recent("user-1", limit=500)

    assert [meal.calories for meal in recent] == [105, 104]
    assert len(everything) == 5
    assert len(service.list_recent("user-1", limit=0)) == 1


def test_delete_only_own_meal(service: MealService) -> None:
    (meal,) = service.add_meals("user-1", [meal_at(300, "2024-01-01T12:00:00Z")])

    assert service.delete("user-2", meal.id) is False
    assert service.delete("user-1", meal.id) is True
    assert service.delete("user-1", meal.id) is False


def test_get_day_summary_totals(service: MealService) -> None:
    service.add_meals(
        "user-1",
        [
            meal_at(400, "2024-01-02T07:00:00Z", protein_g=20, carbs_g=40),
            meal_at(600, "2024-01-02T19:00:00Z", fat_g=25),
            meal_at(900, "2024-01-03T00:30:00Z"),
        ],
    )

    summary = service.get_day_summary("user-1", "2024-01-02")

    assert summary.meal_count == 2
    assert summary.calories == 1000
    assert summary.protein_g == 20
    assert summary.carbs_g == 40
    assert summary.fat_g == 25


def test_get_day_summary_defaults_to_today(service: MealService) -> None:
    service.add_meals("user-1", [NewMeal(name="Toast", calories=180)])

    summary = service.get_day_summary("user-1")

    assert summary.date == datetime.now(tz=UTC).strftime("%Y-%m-%d")
    assert summary.calories == 180
