"""Metabolic rate estimation from a week of intake and weight."""

import logging
from dataclasses import dataclass

from calorie_tracker.domain.calendar import (
    add_calendar_days,
    day_end,
    day_start,
    round_calories,
    round_half_away,
)
from calorie_tracker.domain.errors import InsufficientDataError
from calorie_tracker.domain.stats import AnalysisWindow, MetabolicRateEstimate
from calorie_tracker.services.stats import StatsService, moving_average
from calorie_tracker.services.user_settings import UserSettingsService

logger = logging.getLogger(__name__)

WINDOW_DAYS = 7
WEIGHT_AVERAGE_DAYS = 3
KCAL_PER_KG = 7700


@dataclass
class MetabolicRateService:
    """Estimates a daily metabolic rate over a fixed seven day window."""

    stats_service: StatsService
    user_settings_service: UserSettingsService

    def estimate(self, user_id: str, start_date: str) -> MetabolicRateEstimate:
        """Estimate the rate for the week starting at ``start_date``.

        Average intake over days with meals is corrected by the weekly weight
        change: each kilogram lost adds 7700 kcal spread over the seven days,
        each kilogram gained subtracts it.
        """
        end_date = add_calendar_days(start_date, WINDOW_DAYS - 1)
        logger.info(
            "Calculating metabolic rate",
            extra={"user_id": user_id, "start_date": start_date, "end_date": end_date},
        )
        settings = self.user_settings_service.get_or_create(user_id)
        weights = self.stats_service.weights_by_date(
            user_id, add_calendar_days(start_date, -WEIGHT_AVERAGE_DAYS), end_date
        )
        days = list(
            self.stats_service.daily_stats(
                user_id,
                day_start(start_date),
                day_end(end_date),
                weights,
                settings.metabolic_rate,
            )
        )
        if not days:
            raise InsufficientDataError(
                f"No meal data found for the 7-day period {start_date} to {end_date}"
            )

        first_average = moving_average(weights, start_date, WEIGHT_AVERAGE_DAYS)
        last_average = moving_average(weights, end_date, WEIGHT_AVERAGE_DAYS)
        weight_change = 0.0
        if first_average is not None and last_average is not None:
            weight_change = round_half_away(last_average - first_average, 1)

        total_calories = sum(day.total_calories for day in days)
        average_daily_calories = round_calories(total_calories / len(days))
        weight_change_factor = round_calories(
            weight_change * KCAL_PER_KG / WINDOW_DAYS
        )
        return MetabolicRateEstimate(
            calculated_metabolic_rate=average_daily_calories - weight_change_factor,
            analysis_window=AnalysisWindow(
                start_date=start_date,
                end_date=end_date,
                average_daily_calories=average_daily_calories,
                weight_change=weight_change,
                days_with_data=len(days),
            ),
            current_setting_rate=settings.metabolic_rate,
            weight_change_factor=weight_change_factor,
        )
