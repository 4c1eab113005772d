"""Workout plan models."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class RecentWorkout:
    """Short description of a logged workout."""

    workout_type: str
    exercise_count: int


@dataclass(frozen=True)
class PersonalRecord:
    """Best lift for an exercise."""

    weight_kg: float
    reps: int


@dataclass(frozen=True)
class WorkoutProfile:
    """Profile fields used to generate a weekly workout plan."""

    age_years: int | None
    sex: str | None
    weight_kg: float | None
    height_cm: float | None
    fitness_goal: str | None
    experience_level: str = "beginner"
    workout_frequency: int = 3
    equipment: tuple[str, ...] = ("none",)
    injuries: tuple[str, ...] = ()
    recent_workouts: tuple[RecentWorkout, ...] = ()
    personal_records: dict[str, PersonalRecord] = field(default_factory=dict)
    streak_current: int = 0
    streak_longest: int = 0


class Exercise(BaseModel):
    """Exercise prescription; reps are descriptive, not budgeted."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: str
    sets: int
    reps: str
    rest_seconds: int = Field(default=60, alias="restSeconds")
    notes: str = ""


class DailyWorkout(BaseModel):
    """Workout for a single day of the week."""

    day: str
    goal: str
    exercises: list[Exercise] = Field(min_length=1)
    warmup: str = ""
    cooldown: str = ""
    notes: str = ""


class WorkoutPlan(BaseModel):
    """Weekly workout plan."""

    model_config = ConfigDict(populate_by_name=True)

    weekly_goal: str = Field(alias="weeklyGoal")
    daily_workouts: list[DailyWorkout] = Field(alias="dailyWorkouts", min_length=1)
    motivation: str = ""
