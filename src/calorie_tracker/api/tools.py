"""Tool definitions exposed to agent callers."""

from collections.abc import Callable
from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel

from calorie_tracker.api.tool_models import (
    AddMealsArgs,
    AddWeightsArgs,
    DaySummaryArgs,
    DeleteMealArgs,
    ListMealsArgs,
    MetabolicRateArgs,
    RecentWeightsArgs,
    SummaryArgs,
    UpdateSettingsArgs,
)
from calorie_tracker.domain.meals import MealRecord, NewMeal
from calorie_tracker.domain.settings import UserSettings
from calorie_tracker.domain.stats import DailyStat
from calorie_tracker.domain.weights import WeightEntry, WeightRecord

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

ToolHandler = Callable[["AppContainer", str, BaseModel], dict[str, object]]


@dataclass(frozen=True)
class ToolDefinition:
    """Declarative tool definition."""

    name: str
    description: str
    arguments: type[BaseModel]
    handler: ToolHandler

    def describe(self) -> dict[str, object]:
        """Return the descriptor published to callers."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.arguments.model_json_schema(by_alias=True),
        }


def _add_meals(
    container: "AppContainer", user_id: str, args: AddMealsArgs
) -> dict[str, object]:
    meals = container.meal_service.add_meals(
        user_id,
        [
            NewMeal(
                name=meal.meal_name,
                calories=meal.calories,
                protein_g=meal.protein_grams,
                carbs_g=meal.carbs_grams,
                fat_g=meal.fat_grams,
                logged_at=meal.logged_at,
            )
            for meal in args.meals
        ],
    )
    return {"meals": [_serialize_meal(meal) for meal in meals], "count": len(meals)}


def _list_meals(
    container: "AppContainer", user_id: str, args: ListMealsArgs
) -> dict[str, object]:
    meals = container.meal_service.list_recent(user_id, args.limit)
    return {"meals": [_serialize_meal(meal) for meal in meals], "limit": args.limit}


def _delete_meal(
    container: "AppContainer", user_id: str, args: DeleteMealArgs
) -> dict[str, object]:
    deleted = container.meal_service.delete(user_id, args.meal_id)
    return {"meal_id": args.meal_id, "deleted": deleted}


def _get_day_summary(
    container: "AppContainer", user_id: str, args: DaySummaryArgs
) -> dict[str, object]:
    summary = container.meal_service.get_day_summary(user_id, args.date)
    return {
        "date": summary.date,
        "meal_count": summary.meal_count,
        "total_calories": summary.calories,
        "macros": {
            "protein": summary.protein_g,
            "carbs": summary.carbs_g,
            "fat": summary.fat_g,
        },
        "meals": [_serialize_meal(meal) for meal in summary.meals],
    }


def _add_weights(
    container: "AppContainer", user_id: str, args: AddWeightsArgs
) -> dict[str, object]:
    weights = container.weight_service.add_weights(
        user_id,
        [
            WeightEntry(weight_kg=weight.weight_kg, logged_on=weight.logged_at)
            for weight in args.weights
        ],
    )
    return {
        "weights": [_serialize_weight(weight) for weight in weights],
        "count": len(weights),
    }


def _get_recent_weights(
    container: "AppContainer", user_id: str, args: RecentWeightsArgs
) -> dict[str, object]:
    history = container.weight_service.get_history(user_id, args.limit)
    return {
        "weights": [_serialize_weight(weight) for weight in history.entries],
        "change_kg": history.change_kg,
    }


def _update_user_settings(
    container: "AppContainer", user_id: str, args: UpdateSettingsArgs
) -> dict[str, object]:
    settings = container.user_settings_service.update(
        user_id, timezone=args.timezone, metabolic_rate=args.metabolic_rate
    )
    return _serialize_settings(settings)


def _get_summary(
    container: "AppContainer", user_id: str, args: SummaryArgs
) -> dict[str, object]:
    summary = container.summary_service.build_summary(
        user_id, args.start_date, args.end_date, args.weight_moving_avg_days
    )
    return {
        "daily_stats": [_serialize_daily_stat(row) for row in summary.daily_stats],
        "total_stats": asdict(summary.total_stats),
    }


def _calculate_metabolic_rate(
    container: "AppContainer", user_id: str, args: MetabolicRateArgs
) -> dict[str, object]:
    estimate = container.metabolic_rate_service.estimate(user_id, args.start_date)
    return {
        "calculated_metabolic_rate": estimate.calculated_metabolic_rate,
        "analysis_window": asdict(estimate.analysis_window),
        "current_setting_rate": estimate.current_setting_rate,
        "weight_change_factor": estimate.weight_change_factor,
        "difference_from_setting": estimate.difference_from_setting,
    }


class Tool(Enum):
    """Enum of tools (single source of truth)."""

    ADD_MEALS = ToolDefinition(
        "add_meals",
        "Add one or more meal entries to the calorie tracker",
        AddMealsArgs,
        _add_meals,
    )
    LIST_MEALS = ToolDefinition(
        "list_meals",
        "List recent meal entries with their IDs",
        ListMealsArgs,
        _list_meals,
    )
    DELETE_MEAL = ToolDefinition(
        "delete_meal",
        "Delete a meal entry by ID",
        DeleteMealArgs,
        _delete_meal,
    )
    GET_DAY_SUMMARY = ToolDefinition(
        "get_day_summary",
        "Get calories, macros and meals for one day (defaults to today)",
        DaySummaryArgs,
        _get_day_summary,
    )
    ADD_WEIGHTS = ToolDefinition(
        "add_weights",
        "Add one or more weight entries; updates existing entries for the same date",
        AddWeightsArgs,
        _add_weights,
    )
    GET_RECENT_WEIGHTS = ToolDefinition(
        "get_recent_weights",
        "Show recent weight history with the latest change",
        RecentWeightsArgs,
        _get_recent_weights,
    )
    UPDATE_USER_SETTINGS = ToolDefinition(
        "update_user_settings",
        "Update user timezone and/or metabolic rate settings",
        UpdateSettingsArgs,
        _update_user_settings,
    )
    GET_SUMMARY = ToolDefinition(
        "get_summary",
        "Get a multi-day summary with daily statistics and totals",
        SummaryArgs,
        _get_summary,
    )
    CALCULATE_METABOLIC_RATE = ToolDefinition(
        "calculate_metabolic_rate",
        "Calculate metabolic rate from historical data using a 7-day window",
        MetabolicRateArgs,
        _calculate_metabolic_rate,
    )


def find_tool(name: str) -> ToolDefinition | None:
    """Return the tool registered under ``name``."""
    for entry in Tool:
        if entry.value.name == name:
            return entry.value
    return None


def tool_descriptors() -> list[dict[str, object]]:
    """Return descriptors for every tool."""
    return [entry.value.describe() for entry in Tool]


def _serialize_meal(meal: MealRecord) -> dict[str, object]:
    return {
        "id": meal.id,
        "meal_name": meal.name,
        "calories": meal.calories,
        "protein_grams": meal.protein_g,
        "carbs_grams": meal.carbs_g,
        "fat_grams": meal.fat_g,
        "logged_at": meal.logged_at.isoformat(),
    }


def _serialize_weight(weight: WeightRecord) -> dict[str, object]:
    return {"id": weight.id, "weight_kg": weight.weight_kg, "date": weight.logged_on}


def _serialize_settings(settings: UserSettings) -> dict[str, object]:
    return {
        "user_id": settings.user_id,
        "timezone": settings.timezone,
        "metabolic_rate": settings.metabolic_rate,
        "updated_at": settings.updated_at.isoformat() if settings.updated_at else None,
    }


def _serialize_daily_stat(row: DailyStat) -> dict[str, object]:
    return {
        "date": row.date,
        "total_calories": row.total_calories,
        "deficit": row.deficit,
        "macros": {"protein": row.protein_g, "carbs": row.carbs_g, "fat": row.fat_g},
        "weight": row.weight,
        "weight_moving_avg": row.weight_moving_avg,
    }
