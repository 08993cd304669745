"""Supabase repository for summary statistics."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from calorie_tracker.adapters.supabase_meal_repository import (
    MEAL_COLUMNS,
    parse_meal_row,
)
from calorie_tracker.domain.meals import DailyMealTotals
from calorie_tracker.domain.weights import DatedWeight
from calorie_tracker.services.stats import StatsRepository, group_meals_by_day


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for stats queries."""

    client: Client

    def list_daily_meal_totals(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[DailyMealTotals]:
        """Return per-day totals of the meals in the time range."""
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("user_id", user_id)
            .gte("logged_at", start.isoformat())
            .lte("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        meals = [parse_meal_row(row) for row in response.data or []]
        return list(group_meals_by_day(meals))

    def list_weights_in_range(
        self, user_id: str, start_date: str, end_date: str
    ) -> list[DatedWeight]:
        """Return weights dated within the label range."""
        response = (
            self.client.table("weights")
            .select("logged_on, weight_kg")
            .eq("user_id", user_id)
            .gte("logged_on", start_date)
            .lte("logged_on", end_date)
            .order("logged_on", desc=False)
            .execute()
        )
        return [_parse_weight(row) for row in response.data or []]


def _parse_weight(row: dict[str, object]) -> DatedWeight:
    return DatedWeight(
        date=str(row["logged_on"])[:10], weight_kg=float(row["weight_kg"])
    )
