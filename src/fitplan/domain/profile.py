"""Physiology profile models."""

from dataclasses import dataclass
from enum import StrEnum


class Sex(StrEnum):
    """Sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class FitnessGoal(StrEnum):
    """Training and nutrition goal."""

    LOSE_WEIGHT = "lose_weight"
    MAINTAIN = "maintain"
    GAIN_MUSCLE = "gain_muscle"
    IMPROVE_ENDURANCE = "improve_endurance"


@dataclass(frozen=True)
class PhysiologyProfile:
    """Snapshot of the physiology fields needed for target calculation."""

    age_years: int | None
    sex: str | None
    height_cm: float | None
    current_weight_kg: float | None
    activity_level: str | None
    fitness_goal: str | None = FitnessGoal.MAINTAIN
    target_weight_kg: float | None = None
    dietary_preferences: tuple[str, ...] = ()
