"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class NewMeal:
    """Meal payload accepted for logging."""

    name: str
    calories: float
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    logged_at: datetime | None = None


@dataclass(frozen=True)
class MealRecord:
    """Stored meal row."""

    id: str
    user_id: str
    name: str
    calories: float
    protein_g: float | None
    carbs_g: float | None
    fat_g: float | None
    logged_at: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class DailyMealTotals:
    """Meal totals for a single calendar date."""

    date: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class DaySummary:
    """Meals and totals for one calendar date."""

    date: str
    meals: list[MealRecord]
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    @property
    def meal_count(self) -> int:
        return len(self.meals)
