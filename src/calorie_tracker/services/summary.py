"""Multi-day summaries with deficits and weight trends."""

import logging
from dataclasses import dataclass, replace

from calorie_tracker.domain.calendar import (
    add_calendar_days,
    day_end,
    day_start,
    parse_date_label,
    round_half_away,
)
from calorie_tracker.domain.errors import InvalidRangeError
from calorie_tracker.domain.stats import DailyStat, SummaryResult, TotalStats
from calorie_tracker.services.stats import (
    DEFAULT_MOVING_AVERAGE_WINDOW,
    MAX_MOVING_AVERAGE_WINDOW,
    StatsService,
    moving_average,
)
from calorie_tracker.services.user_settings import UserSettingsService

logger = logging.getLogger(__name__)


@dataclass
class SummaryService:
    """Builds daily stats and range totals for a user."""

    stats_service: StatsService
    user_settings_service: UserSettingsService

    def build_summary(
        self,
        user_id: str,
        start_date: str,
        end_date: str,
        moving_average_window: int = DEFAULT_MOVING_AVERAGE_WINDOW,
    ) -> SummaryResult:
        """Summarize meals and weights between two dates, both inclusive.

        Weights are read from ``moving_average_window`` days before
        ``start_date`` so the first day still averages over a full window.
        """
        if parse_date_label(start_date) > parse_date_label(end_date):
            raise InvalidRangeError("Start date must be before or equal to end date")
        if not 1 <= moving_average_window <= MAX_MOVING_AVERAGE_WINDOW:
            raise InvalidRangeError(
                "Moving average window must be between 1 and "
                f"{MAX_MOVING_AVERAGE_WINDOW} days"
            )

        settings = self.user_settings_service.get_or_create(user_id)
        weights = self.stats_service.weights_by_date(
            user_id, add_calendar_days(start_date, -moving_average_window), end_date
        )
        daily_stats = [
            replace(
                row,
                weight_moving_avg=moving_average(
                    weights, row.date, moving_average_window
                ),
            )
            for row in self.stats_service.daily_stats(
                user_id,
                day_start(start_date),
                day_end(end_date),
                weights,
                settings.metabolic_rate,
            )
        ]
        total_stats = TotalStats(
            total_calories=sum(row.total_calories for row in daily_stats),
            total_deficit=sum(row.deficit for row in daily_stats),
            weight_difference=_weight_difference(daily_stats),
        )
        logger.info(
            "Built summary",
            extra={
                "user_id": user_id,
                "start_date": start_date,
                "end_date": end_date,
                "days": len(daily_stats),
            },
        )
        return SummaryResult(daily_stats=daily_stats, total_stats=total_stats)


def _weight_difference(daily_stats: list[DailyStat]) -> float | None:
    averages = [
        row.weight_moving_avg
        for row in daily_stats
        if row.weight_moving_avg is not None
    ]
    if not averages:
        return None
    return round_half_away(averages[-1] - averages[0], 1)
