"""Calendar date helpers.

Date labels are canonical ``YYYY-MM-DD`` strings anchored at UTC midnight, so
lexicographic order matches chronological order and they can be used directly
as dictionary keys.
"""

from datetime import UTC, date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from calorie_tracker.domain.errors import InvalidRangeError

DATE_LABEL_FORMAT = "%Y-%m-%d"
_NEUTRAL_TIME = time(hour=12)


def parse_date_label(label: str) -> date:
    """Parse a ``YYYY-MM-DD`` label, rejecting malformed or impossible dates."""
    return datetime.strptime(label, DATE_LABEL_FORMAT).date()


def add_calendar_days(label: str, days: int) -> str:
    """Return the label ``days`` calendar days after ``label``."""
    anchor = datetime.combine(parse_date_label(label), _NEUTRAL_TIME, tzinfo=UTC)
    try:
        shifted = anchor + timedelta(days=days)
    except OverflowError as exc:
        raise InvalidRangeError(
            f"{label} shifted by {days} days is outside the supported calendar"
        ) from exc
    return shifted.strftime(DATE_LABEL_FORMAT)


def to_calendar_date_label(instant: datetime) -> str:
    """Project an instant onto its own calendar date."""
    return instant.strftime(DATE_LABEL_FORMAT)


def day_start(label: str) -> datetime:
    """Return the first instant of the labelled day."""
    return datetime.combine(parse_date_label(label), time.min, tzinfo=UTC)


def day_end(label: str) -> datetime:
    """Return the last instant of the labelled day."""
    return datetime.combine(parse_date_label(label), time.max, tzinfo=UTC)


def today_label() -> str:
    """Return today's label in UTC."""
    return to_calendar_date_label(datetime.now(tz=UTC))


def round_half_away(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with ties going away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_calories(value: float) -> int:
    """Round a calorie figure to a whole number."""
    return int(round_half_away(value))
