"""User settings domain model."""

from dataclasses import dataclass
from datetime import datetime

DEFAULT_TIMEZONE = "UTC"
DEFAULT_METABOLIC_RATE = 2000


@dataclass(frozen=True)
class UserSettings:
    """Per-user settings row."""

    user_id: str
    timezone: str = DEFAULT_TIMEZONE
    metabolic_rate: int = DEFAULT_METABOLIC_RATE
    created_at: datetime | None = None
    updated_at: datetime | None = None
