"""Daily aggregation and weight moving averages."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from itertools import groupby
from typing import Protocol

from calorie_tracker.domain.calendar import (
    add_calendar_days,
    round_half_away,
    to_calendar_date_label,
)
from calorie_tracker.domain.errors import InvalidRangeError
from calorie_tracker.domain.meals import DailyMealTotals, MealRecord
from calorie_tracker.domain.stats import DailyStat
from calorie_tracker.domain.weights import DatedWeight

DEFAULT_MOVING_AVERAGE_WINDOW = 3
MAX_MOVING_AVERAGE_WINDOW = 365


class StatsRepository(Protocol):
    """Read-only range queries used by the analytics services."""

    def list_daily_meal_totals(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[DailyMealTotals]:
        """Return per-day meal totals in the inclusive range, oldest first."""

    def list_weights_in_range(
        self, user_id: str, start_date: str, end_date: str
    ) -> list[DatedWeight]:
        """Return weights dated within the inclusive label range."""


@dataclass
class StatsService:
    """Builds daily rows from stored meals and weights."""

    repository: StatsRepository

    def weights_by_date(
        self, user_id: str, start_date: str, end_date: str
    ) -> dict[str, float]:
        """Return a date to weight mapping for the label range."""
        weights = self.repository.list_weights_in_range(user_id, start_date, end_date)
        return {weight.date: weight.weight_kg for weight in weights}

    def daily_stats(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
        weights: Mapping[str, float],
        metabolic_rate: int,
    ) -> Iterator[DailyStat]:
        """Yield one row per date with meals, oldest first.

        Each row carries its deficit against ``metabolic_rate``.
        """
        if start > end:
            raise InvalidRangeError("Start date must be before or equal to end date")
        totals = self.repository.list_daily_meal_totals(user_id, start, end)
        return (
            DailyStat(
                date=day.date,
                total_calories=day.calories,
                protein_g=day.protein_g,
                carbs_g=day.carbs_g,
                fat_g=day.fat_g,
                weight=weights.get(day.date),
                deficit=metabolic_rate - day.calories,
            )
            for day in sorted(totals, key=lambda day: day.date)
        )


def group_meals_by_day(meals: Iterable[MealRecord]) -> Iterator[DailyMealTotals]:
    """Sum meals per calendar date, treating missing macros as zero."""
    labelled = sorted(
        ((to_calendar_date_label(meal.logged_at), meal) for meal in meals),
        key=lambda pair: (pair[0], pair[1].logged_at),
    )
    for label, pairs in groupby(labelled, key=lambda pair: pair[0]):
        calories = protein = carbs = fat = 0.0
        for _, meal in pairs:
            calories += meal.calories
            protein += meal.protein_g or 0.0
            carbs += meal.carbs_g or 0.0
            fat += meal.fat_g or 0.0
        yield DailyMealTotals(
            date=label, calories=calories, protein_g=protein, carbs_g=carbs, fat_g=fat
        )


def moving_average(
    weights: Mapping[str, float],
    target_date: str,
    window: int = DEFAULT_MOVING_AVERAGE_WINDOW,
) -> float | None:
    """Average the weights found in the ``window`` days ending at ``target_date``.

    Days without a weight are skipped rather than counted as zero. Returns
    ``None`` when no day in the window has a weight.
    """
    if window < 1:
        raise ValueError("Moving average window must be at least 1 day")
    first_date = add_calendar_days(target_date, 1 - window)
    found = [
        weight
        for label, weight in weights.items()
        if first_date <= label <= target_date
    ]
    if not found:
        return None
    return round_half_away(sum(found) / len(found), 1)
