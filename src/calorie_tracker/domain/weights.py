"""Domain models for weight tracking."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WeightEntry:
    """Weight payload accepted for logging."""

    weight_kg: float
    logged_on: str


@dataclass(frozen=True)
class WeightRecord:
    """Stored weight row, unique per user and date."""

    id: str
    user_id: str
    weight_kg: float
    logged_on: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class DatedWeight:
    """Weight observation keyed by calendar date."""

    date: str
    weight_kg: float


@dataclass(frozen=True)
class WeightHistory:
    """Most recent weights, newest first."""

    entries: list[WeightRecord]
    change_kg: float | None

    @property
    def latest(self) -> WeightRecord | None:
        return self.entries[0] if self.entries else None
