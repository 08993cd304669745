"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.domain.meals import MealRecord, NewMeal
from calorie_tracker.services.meals import MealRepository

MEAL_COLUMNS = (
    "id, user_id, meal_name, calories, protein_grams, carbs_grams, fat_grams, "
    "logged_at, created_at, updated_at"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def create_meals(self, user_id: str, meals: list[NewMeal]) -> list[MealRecord]:
        """Insert meals in a single request and return the stored rows."""
        if not meals:
            return []
        now = datetime.now(tz=UTC).isoformat()
        payload = [
            {
                "user_id": user_id,
                "meal_name": meal.name,
                "calories": meal.calories,
                "protein_grams": meal.protein_g,
                "carbs_grams": meal.carbs_g,
                "fat_grams": meal.fat_g,
                "logged_at": (meal.logged_at or datetime.now(tz=UTC)).isoformat(),
                "created_at": now,
                "updated_at": now,
            }
            for meal in meals
        ]
        response = self.client.table("meals").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create meals")
        return [parse_meal_row(row) for row in response.data]

    def list_meals(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals logged within the inclusive range."""
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("user_id", user_id)
            .gte("logged_at", start.isoformat())
            .lte("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [parse_meal_row(row) for row in response.data or []]

    def list_recent_meals(self, user_id: str, limit: int) -> list[MealRecord]:
        """Return the latest meals for a user."""
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("user_id", user_id)
            .order("logged_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [parse_meal_row(row) for row in response.data or []]

    def delete_meal(self, user_id: str, meal_id: str) -> bool:
        """Delete a meal owned by the user."""
        response = (
            self.client.table("meals")
            .delete()
            .eq("id", meal_id)
            .eq("user_id", user_id)
            .execute()
        )
        return bool(response.data)


def parse_meal_row(row: dict[str, object]) -> MealRecord:
    """Convert a raw meals row into a record."""
    return MealRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        name=str(row.get("meal_name", "")),
        calories=float(row.get("calories") or 0.0),
        protein_g=_optional_float(row.get("protein_grams")),
        carbs_g=_optional_float(row.get("carbs_grams")),
        fat_g=_optional_float(row.get("fat_grams")),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
        created_at=_optional_datetime(row.get("created_at")),
        updated_at=_optional_datetime(row.get("updated_at")),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)


def _optional_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
