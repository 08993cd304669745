"""Domain models for summaries and metabolic rate estimates."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyStat:
    """Computed totals for one calendar date with meals."""

    date: str
    total_calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    weight: float | None
    deficit: float
    weight_moving_avg: float | None = None


@dataclass(frozen=True)
class TotalStats:
    """Range-level totals."""

    total_calories: float
    total_deficit: float
    weight_difference: float | None


@dataclass(frozen=True)
class SummaryResult:
    """Multi-day summary."""

    daily_stats: list[DailyStat]
    total_stats: TotalStats


@dataclass(frozen=True)
class AnalysisWindow:
    """The window used for a metabolic rate estimate."""

    start_date: str
    end_date: str
    average_daily_calories: int
    weight_change: float
    days_with_data: int


@dataclass(frozen=True)
class MetabolicRateEstimate:
    """Estimated daily metabolic rate."""

    calculated_metabolic_rate: int
    analysis_window: AnalysisWindow
    current_setting_rate: int
    weight_change_factor: int

    @property
    def difference_from_setting(self) -> int:
        return self.calculated_metabolic_rate - self.current_setting_rate
