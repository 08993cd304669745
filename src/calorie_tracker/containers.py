"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from calorie_tracker.adapters.supabase_stats_repository import (
    SupabaseStatsRepository,
)
from calorie_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from calorie_tracker.adapters.supabase_weight_repository import (
    SupabaseWeightRepository,
)
from calorie_tracker.config import Settings
from calorie_tracker.services.meals import MealRepository, MealService
from calorie_tracker.services.metabolic_rate import MetabolicRateService
from calorie_tracker.services.stats import StatsRepository, StatsService
from calorie_tracker.services.summary import SummaryService
from calorie_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)
from calorie_tracker.services.weights import WeightRepository, WeightService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_settings_service: UserSettingsService
    meal_service: MealService
    weight_service: WeightService
    stats_service: StatsService
    summary_service: SummaryService
    metabolic_rate_service: MetabolicRateService
    close_resources: Callable[[], Awaitable[None]]


def wire_services(  # noqa: PLR0913
    settings: Settings,
    *,
    user_settings_repository: UserSettingsRepository,
    meal_repository: MealRepository,
    weight_repository: WeightRepository,
    stats_repository: StatsRepository,
    close_resources: Callable[[], Awaitable[None]] | None = None,
) -> AppContainer:
    """Build services on top of the given repositories."""
    user_settings_service = UserSettingsService(user_settings_repository)
    stats_service = StatsService(stats_repository)

    async def _noop() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_settings_service=user_settings_service,
        meal_service=MealService(meal_repository, user_settings_service),
        weight_service=WeightService(weight_repository, user_settings_service),
        stats_service=stats_service,
        summary_service=SummaryService(stats_service, user_settings_service),
        metabolic_rate_service=MetabolicRateService(
            stats_service, user_settings_service
        ),
        close_resources=close_resources or _noop,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return wire_services(
        resolved_settings,
        user_settings_repository=SupabaseUserSettingsRepository(supabase_client),
        meal_repository=SupabaseMealRepository(supabase_client),
        weight_repository=SupabaseWeightRepository(supabase_client),
        stats_repository=SupabaseStatsRepository(supabase_client),
    )
