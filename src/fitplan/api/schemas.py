"""Pydantic models for plan request payloads."""

from pydantic import BaseModel, ConfigDict, Field

from fitplan.domain.profile import PhysiologyProfile
from fitplan.domain.workouts import PersonalRecord, RecentWorkout, WorkoutProfile


class ProfilePayload(BaseModel):
    """User profile fields sent with a meal plan request."""

    model_config = ConfigDict(populate_by_name=True)

    age: int | None = None
    gender: str | None = None
    height: float | None = None
    weight: float | None = None
    activity_level: str | None = Field(default="moderate", alias="activityLevel")
    fitness_goal: str = Field(default="maintain", alias="fitnessGoal")
    target_weight: float | None = Field(default=None, alias="targetWeight")
    dietary_preferences: list[str] = Field(
        default_factory=list, alias="dietaryPreferences"
    )

    def to_domain(self) -> PhysiologyProfile:
        """Convert to the physiology snapshot used by the calculator."""
        return PhysiologyProfile(
            age_years=self.age,
            sex=self.gender,
            height_cm=self.height,
            current_weight_kg=self.weight,
            activity_level=self.activity_level,
            fitness_goal=self.fitness_goal,
            target_weight_kg=self.target_weight,
            dietary_preferences=tuple(self.dietary_preferences),
        )


class MealPlanRequest(BaseModel):
    """Body of a meal plan request."""

    profile: ProfilePayload
    dietary: list[str] = Field(default_factory=list)


class RecentWorkoutPayload(BaseModel):
    """Recent workout summary."""

    type: str
    exercise_count: int = Field(default=0, alias="exerciseCount")


class PersonalRecordPayload(BaseModel):
    """Personal record for one exercise."""

    weight: float
    reps: int


class StreakPayload(BaseModel):
    """Workout streak counters."""

    current: int = 0
    longest: int = 0


class WorkoutProfilePayload(BaseModel):
    """Profile and preference fields sent with a workout plan request."""

    model_config = ConfigDict(populate_by_name=True)

    age: int | None = None
    gender: str | None = None
    weight: float | None = None
    height: float | None = None
    fitness_goal: str | None = Field(default=None, alias="fitnessGoal")
    experience_level: str = Field(default="beginner", alias="experienceLevel")
    workout_frequency: int = Field(default=3, ge=1, alias="workoutFrequency")
    equipment_available: list[str] = Field(
        default_factory=lambda: ["none"], alias="equipmentAvailable"
    )
    injuries: list[str] = Field(default_factory=list)
    previous_workouts: list[RecentWorkoutPayload] = Field(
        default_factory=list, alias="previousWorkouts"
    )
    personal_records: dict[str, PersonalRecordPayload] = Field(
        default_factory=dict, alias="personalRecords"
    )
    streak: StreakPayload = Field(default_factory=StreakPayload)

    def to_domain(self) -> WorkoutProfile:
        """Convert to the workout generator profile."""
        return WorkoutProfile(
            age_years=self.age,
            sex=self.gender,
            weight_kg=self.weight,
            height_cm=self.height,
            fitness_goal=self.fitness_goal,
            experience_level=self.experience_level,
            workout_frequency=self.workout_frequency,
            equipment=tuple(self.equipment_available),
            injuries=tuple(self.injuries),
            recent_workouts=tuple(
                RecentWorkout(
                    workout_type=item.type, exercise_count=item.exercise_count
                )
                for item in self.previous_workouts
            ),
            personal_records={
                exercise: PersonalRecord(weight_kg=record.weight, reps=record.reps)
                for exercise, record in self.personal_records.items()
            },
            streak_current=self.streak.current,
            streak_longest=self.streak.longest,
        )


class WorkoutPlanRequest(BaseModel):
    """Body of a workout plan request."""

    profile: WorkoutProfilePayload
