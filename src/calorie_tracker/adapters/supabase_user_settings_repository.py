"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.domain.settings import (
    DEFAULT_METABOLIC_RATE,
    DEFAULT_TIMEZONE,
    UserSettings,
)
from calorie_tracker.services.user_settings import UserSettingsRepository

SETTINGS_COLUMNS = "user_id, timezone, metabolic_rate, created_at, updated_at"


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_settings(self, user_id: str) -> UserSettings | None:
        """Return the stored settings for a user."""
        response = (
            self.client.table("user_settings")
            .select(SETTINGS_COLUMNS)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_settings(
        self, user_id: str, timezone: str, metabolic_rate: int
    ) -> UserSettings:
        """Create the settings row, keeping an existing one on conflict."""
        now = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("user_settings")
            .upsert(
                {
                    "user_id": user_id,
                    "timezone": timezone,
                    "metabolic_rate": metabolic_rate,
                    "created_at": now,
                    "updated_at": now,
                },
                on_conflict="user_id",
                ignore_duplicates=True,
            )
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        existing = self.get_settings(user_id)
        if existing is None:
            raise RuntimeError("Failed to create user settings")
        return existing

    def update_settings(
        self, user_id: str, timezone: str | None, metabolic_rate: int | None
    ) -> UserSettings:
        """Update the provided settings fields."""
        payload: dict[str, object] = {"updated_at": datetime.now(tz=UTC).isoformat()}
        if timezone is not None:
            payload["timezone"] = timezone
        if metabolic_rate is not None:
            payload["metabolic_rate"] = metabolic_rate
        response = (
            self.client.table("user_settings")
            .update(payload)
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user settings")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> UserSettings:
    created_at = row.get("created_at")
    updated_at = row.get("updated_at")
    return UserSettings(
        user_id=str(row["user_id"]),
        timezone=str(row.get("timezone") or DEFAULT_TIMEZONE),
        metabolic_rate=int(row.get("metabolic_rate") or DEFAULT_METABOLIC_RATE),
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
        updated_at=(
            datetime.fromisoformat(updated_at)
            if isinstance(updated_at, str) and updated_at
            else None
        ),
    )
