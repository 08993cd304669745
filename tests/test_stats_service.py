"""Tests for daily aggregation and moving averages."""

from datetime import UTC, datetime

import pytest

from calorie_tracker.domain.calendar import day_end, day_start
from calorie_tracker.domain.errors import InvalidRangeError
from calorie_tracker.domain.meals import MealRecord
from calorie_tracker.domain.weights import WeightEntry
from calorie_tracker.services.stats import (
    StatsService,
    group_meals_by_day,
    moving_average,
)
from tests.conftest import (
    InMemoryMealRepository,
    InMemoryStatsRepository,
    InMemoryWeightRepository,
    meal_at,
)


def _record(calories: float, logged_at: datetime, **macros) -> MealRecord:
    return MealRecord(
        id=f"meal-{logged_at.isoformat()}",
        user_id="user-1",
        name="Meal",
        calories=calories,
        protein_g=macros.get("protein_g"),
        carbs_g=macros.get("carbs_g"),
        fat_g=macros.get("fat_g"),
        logged_at=logged_at,
    )


def test_group_meals_by_day_sums_and_skips_empty_days() -> None:
    meals = [
        _record(300, datetime(2024, 1, 3, 19, tzinfo=UTC), protein_g=20),
        _record(500, datetime(2024, 1, 1, 8, tzinfo=UTC), protein_g=30, fat_g=10),
        _record(700, datetime(2024, 1, 1, 20, tzinfo=UTC), carbs_g=80),
    ]

    totals = list(group_meals_by_day(meals))

    assert [day.date for day in totals] == ["2024-01-01", "2024-01-03"]
    assert totals[0].calories == 1200
    assert totals[0].protein_g == 30
    assert totals[0].carbs_g == 80
    assert totals[0].fat_g == 10
    assert totals[1].calories == 300
    assert totals[1].carbs_g == 0


def test_group_meals_by_day_empty() -> None:
    assert list(group_meals_by_day([])) == []


def test_moving_average_uses_lookback_days() -> None:
    weights = {"2023-12-31": 80.0, "2024-01-01": 79.0}

    assert moving_average(weights, "2024-01-01", 3) == 79.5


def test_moving_average_skips_missing_days() -> None:
    weights = {"2024-01-01": 75.2, "2024-01-03": 75.0}

    assert moving_average(weights, "2024-01-03", 3) == 75.1


def test_moving_average_none_without_weights() -> None:
    weights = {"2024-01-01": 75.2}

    assert moving_average(weights, "2024-01-10", 3) is None


def test_moving_average_averages_full_window() -> None:
    weights = {
        "2023-12-29": 90.0,
        "2023-12-30": 80.0,
        "2023-12-31": 79.0,
        "2024-01-01": 78.3,
        "2024-01-02": 70.0,
    }

    assert moving_average(weights, "2024-01-01", 3) == 79.1


def test_moving_average_rejects_empty_window() -> None:
    with pytest.raises(ValueError):
        moving_average({}, "2024-01-01", 0)


def test_daily_stats_attaches_same_day_weight(
    meal_repository: InMemoryMealRepository,
    weight_repository: InMemoryWeightRepository,
    stats_repository: InMemoryStatsRepository,
) -> None:
    meal_repository.create_meals(
        "user-1",
        [
            meal_at(1800, "2024-01-02T12:00:00+00:00"),
            meal_at(2100, "2024-01-01T12:00:00+00:00"),
        ],
    )
    service = StatsService(stats_repository)

    rows = list(
        service.daily_stats(
            "user-1",
            day_start("2024-01-01"),
            day_end("2024-01-02"),
            {"2024-01-01": 80.0},
            2000,
        )
    )

    assert [row.date for row in rows] == ["2024-01-01", "2024-01-02"]
    assert rows[0].weight == 80.0
    assert rows[1].weight is None
    assert rows[0].deficit == -100
    assert rows[1].deficit == 200


def test_daily_stats_rejects_reversed_range(
    stats_repository: InMemoryStatsRepository,
) -> None:
    service = StatsService(stats_repository)

    with pytest.raises(InvalidRangeError):
        service.daily_stats(
            "user-1", day_start("2024-01-05"), day_end("2024-01-01"), {}, 2000
        )
    assert stats_repository.calls == []


def test_weights_by_date_is_scoped_to_user(
    weight_repository: InMemoryWeightRepository,
    stats_repository: InMemoryStatsRepository,
) -> None:
    weight_repository.upsert_weights("user-1", [WeightEntry(80.0, "2024-01-01")])
    weight_repository.upsert_weights("user-2", [WeightEntry(60.0, "2024-01-01")])
    service = StatsService(stats_repository)

    assert service.weights_by_date("user-1", "2024-01-01", "2024-01-01") == {
        "2024-01-01": 80.0
    }
