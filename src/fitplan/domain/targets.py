"""Calorie and macro target models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie budget with macro gram targets and calorie shares."""

    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int
    protein_pct: int
    carbs_pct: int
    fat_pct: int


@dataclass(frozen=True)
class ToleranceReport:
    """Deviation of a plan's totals from its targets."""

    calories_delta: float
    protein_delta: float
    carbs_delta: float
    fat_delta: float
    within_tolerance: bool
