"""Pydantic models for tool call arguments."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from calorie_tracker.domain.calendar import parse_date_label
from calorie_tracker.services.stats import (
    DEFAULT_MOVING_AVERAGE_WINDOW,
    MAX_MOVING_AVERAGE_WINDOW,
)


class ToolArguments(BaseModel):
    """Base for tool arguments; accepts snake_case or camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


def _check_date_label(value: str) -> str:
    try:
        parse_date_label(value)
    except ValueError as exc:
        raise ValueError("Date must be a valid date in YYYY-MM-DD format") from exc
    return value


DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class MealInput(ToolArguments):
    """A single meal to log."""

    meal_name: str = Field(min_length=1, description="Name of the meal")
    calories: float = Field(ge=0, description="Total calories in the meal")
    protein_grams: float | None = Field(default=None, ge=0)
    carbs_grams: float | None = Field(default=None, ge=0)
    fat_grams: float | None = Field(default=None, ge=0)
    logged_at: datetime | None = Field(
        default=None,
        description="When the meal was eaten (defaults to now, naive means UTC)",
    )

    @field_validator("logged_at")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class AddMealsArgs(ToolArguments):
    """Arguments for ``add_meals``."""

    meals: list[MealInput] = Field(min_length=1)


class ListMealsArgs(ToolArguments):
    """Arguments for ``list_meals``."""

    limit: int = Field(default=10, ge=1, le=100)


class DeleteMealArgs(ToolArguments):
    """Arguments for ``delete_meal``."""

    meal_id: str = Field(min_length=1)


class DaySummaryArgs(ToolArguments):
    """Arguments for ``get_day_summary``."""

    date: str | None = Field(default=None, pattern=DATE_PATTERN)

    @field_validator("date")
    @classmethod
    def _valid_date(cls, value: str | None) -> str | None:
        return _check_date_label(value) if value is not None else None


class WeightInput(ToolArguments):
    """A single weight to log."""

    weight_kg: float = Field(ge=0, description="Weight in kilograms")
    logged_at: str = Field(pattern=DATE_PATTERN, description="Date (YYYY-MM-DD)")

    @field_validator("logged_at")
    @classmethod
    def _valid_date(cls, value: str) -> str:
        return _check_date_label(value)


class AddWeightsArgs(ToolArguments):
    """Arguments for ``add_weights``."""

    weights: list[WeightInput] = Field(min_length=1)


class RecentWeightsArgs(ToolArguments):
    """Arguments for ``get_recent_weights``."""

    limit: int = Field(default=7, ge=1, le=100)


class UpdateSettingsArgs(ToolArguments):
    """Arguments for ``update_user_settings``."""

    timezone: str | None = None
    metabolic_rate: int | None = Field(default=None, gt=0)

    @field_validator("timezone")
    @classmethod
    def _valid_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            ZoneInfo(value)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @model_validator(mode="after")
    def _require_field(self) -> "UpdateSettingsArgs":
        if self.timezone is None and self.metabolic_rate is None:
            raise ValueError("Provide a timezone and/or a metabolic rate")
        return self


class SummaryArgs(ToolArguments):
    """Arguments for ``get_summary``."""

    start_date: str = Field(pattern=DATE_PATTERN)
    end_date: str = Field(pattern=DATE_PATTERN)
    weight_moving_avg_days: int = Field(
        default=DEFAULT_MOVING_AVERAGE_WINDOW, ge=1, le=MAX_MOVING_AVERAGE_WINDOW
    )

    @field_validator("start_date", "end_date")
    @classmethod
    def _valid_date(cls, value: str) -> str:
        return _check_date_label(value)


class MetabolicRateArgs(ToolArguments):
    """Arguments for ``calculate_metabolic_rate``."""

    start_date: str = Field(pattern=DATE_PATTERN)

    @field_validator("start_date")
    @classmethod
    def _valid_date(cls, value: str) -> str:
        return _check_date_label(value)
