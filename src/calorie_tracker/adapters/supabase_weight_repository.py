"""Supabase repository for weights."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.domain.weights import WeightEntry, WeightRecord
from calorie_tracker.services.weights import WeightRepository

WEIGHT_COLUMNS = "id, user_id, weight_kg, logged_on, created_at"


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weights.

    Writes go through ``upsert`` on the ``(user_id, logged_on)`` unique key, so
    Postgres resolves concurrent writes for the same date to a single row.
    """

    client: Client

    def upsert_weights(
        self, user_id: str, entries: list[WeightEntry]
    ) -> list[WeightRecord]:
        """Insert or overwrite weights keyed by user and date."""
        if not entries:
            return []
        now = datetime.now(tz=UTC).isoformat()
        payload = [
            {
                "user_id": user_id,
                "weight_kg": entry.weight_kg,
                "logged_on": entry.logged_on,
                "created_at": now,
            }
            for entry in entries
        ]
        response = (
            self.client.table("weights")
            .upsert(payload, on_conflict="user_id,logged_on")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to upsert weights")
        return [parse_weight_row(row) for row in response.data]

    def list_recent_weights(self, user_id: str, limit: int) -> list[WeightRecord]:
        """Return the latest weights for a user."""
        response = (
            self.client.table("weights")
            .select(WEIGHT_COLUMNS)
            .eq("user_id", user_id)
            .order("logged_on", desc=True)
            .limit(limit)
            .execute()
        )
        return [parse_weight_row(row) for row in response.data or []]


def parse_weight_row(row: dict[str, object]) -> WeightRecord:
    """Convert a raw weights row into a record."""
    created_at = row.get("created_at")
    return WeightRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        weight_kg=float(row["weight_kg"]),
        logged_on=str(row["logged_on"])[:10],
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
    )
