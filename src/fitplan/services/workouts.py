"""Weekly workout plan generation with a template fallback."""

import logging
from dataclasses import dataclass, field

from fitplan.domain.errors import (
    ExternalServiceError,
    IncompleteProfileError,
    UnparsableResponseError,
)
from fitplan.domain.workouts import DailyWorkout, Exercise, WorkoutPlan, WorkoutProfile
from fitplan.services.completion import (
    CompletionClient,
    GenerationConfig,
    request_completion,
)
from fitplan.services.parsing import parse_workout_plan
from fitplan.services.prompts import build_workout_prompt

_logger = logging.getLogger(__name__)

WEEK_DAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
DAYS_BY_FREQUENCY: dict[int, tuple[str, ...]] = {
    3: ("Monday", "Wednesday", "Friday"),
    4: ("Monday", "Tuesday", "Thursday", "Friday"),
    5: WEEK_DAYS[:5],
    6: WEEK_DAYS[:6],
    7: WEEK_DAYS,
}
DUMBBELL_EQUIPMENT = {"dumbbells", "gym_access"}

ExerciseRow = tuple[str, int, str, int, str]


def _exercises(*rows: ExerciseRow) -> list[Exercise]:
    return [
        Exercise(name=name, sets=sets, reps=reps, rest_seconds=rest, notes=notes)
        for name, sets, reps, rest, notes in rows
    ]


UPPER_DUMBBELL = _exercises(
    ("Push-ups", 3, "10-15", 60, "Keep core tight"),
    ("Dumbbell Rows", 3, "10-12", 60, "Pull to hip"),
    ("Shoulder Press", 3, "8-10", 90, "Control the descent"),
    ("Bicep Curls", 3, "12-15", 45, "No swinging"),
    ("Tricep Dips", 3, "10-12", 60, "Keep elbows close"),
)
UPPER_BODYWEIGHT = _exercises(
    ("Push-ups", 3, "10-15", 60, "Keep core tight"),
    ("Pike Push-ups", 3, "8-10", 60, "For shoulders"),
    ("Diamond Push-ups", 3, "8-12", 60, "For triceps"),
    ("Plank", 3, "30-45 sec", 45, "Hold steady"),
)
LOWER_BODY = _exercises(
    ("Squats", 4, "12-15", 90, "Depth is key"),
    ("Lunges", 3, "10 each leg", 60, "Control balance"),
    ("Glute Bridges", 3, "15-20", 45, "Squeeze at top"),
    ("Plank", 3, "45-60 sec", 45, "Keep hips level"),
    ("Russian Twists", 3, "20 total", 45, "Core control"),
)
FULL_BODY = _exercises(
    ("Burpees", 3, "10-12", 60, "Explosive movement"),
    ("Mountain Climbers", 3, "20 total", 45, "Fast pace"),
    ("Jump Squats", 3, "10-12", 60, "Land softly"),
    ("Plank to Downdog", 3, "12-15", 45, "Fluid motion"),
    ("High Knees", 3, "30 sec", 30, "Cardio burst"),
)
RECOVERY = _exercises(
    ("Light Jogging", 1, "20 min", 0, "Moderate pace"),
    ("Walking Lunges", 2, "15 each leg", 45, "Focus on form"),
    ("Yoga Flow", 1, "15 min", 0, "Stretch and relax"),
    ("Foam Rolling", 1, "10 min", 0, "Target sore areas"),
)


def training_days(frequency: int) -> tuple[str, ...]:
    """Return the weekday names used for a weekly frequency."""
    if frequency <= 3:
        return DAYS_BY_FREQUENCY[3][: max(frequency, 1)]
    return DAYS_BY_FREQUENCY.get(frequency, WEEK_DAYS)


def _day_template(index: int, has_dumbbells: bool) -> tuple[str, list[Exercise]]:
    """Return the goal and exercises for a day position in the rotation."""
    slot = index % 7
    if slot in (0, 3):
        exercises = UPPER_DUMBBELL if has_dumbbells else UPPER_BODYWEIGHT
        return "Upper Body Strength", exercises
    if slot in (1, 4):
        return "Lower Body & Core", LOWER_BODY
    if slot in (2, 5):
        return "Full Body Circuit", FULL_BODY
    return "Active Recovery & Cardio", RECOVERY


def fallback_workout_plan(profile: WorkoutProfile) -> WorkoutPlan:
    """Build a weekly plan from fixed templates."""
    has_dumbbells = bool(DUMBBELL_EQUIPMENT.intersection(profile.equipment))
    notes = (
        "Take your time learning form."
        if profile.experience_level == "beginner"
        else "Push yourself but maintain form."
    )
    daily_workouts = []
    for index, day in enumerate(training_days(profile.workout_frequency)):
        goal, exercises = _day_template(index, has_dumbbells)
        daily_workouts.append(
            DailyWorkout(
                day=day,
                goal=goal,
                exercises=[exercise.model_copy() for exercise in exercises],
                warmup=(
                    "5-10 minutes light cardio (jogging, jumping jacks) "
                    "+ dynamic stretching"
                ),
                cooldown="5-10 minutes static stretching focusing on worked muscles",
                notes=notes,
            )
        )
    goal_text = str(profile.fitness_goal or "").replace("_", " ", 1)
    return WorkoutPlan(
        weekly_goal=f"{goal_text} - {profile.workout_frequency} days/week",
        daily_workouts=daily_workouts,
        motivation="Every workout brings you closer to your goals. Stay consistent!",
    )


@dataclass
class WorkoutPlanService:
    """Generates weekly workout plans with a template fallback."""

    client: CompletionClient | None
    config: GenerationConfig = field(
        default_factory=lambda: GenerationConfig(max_output_tokens=2000)
    )

    async def generate(self, profile: WorkoutProfile) -> WorkoutPlan:
        """Return a workout plan for a profile."""
        _require_complete(profile)
        prompt = build_workout_prompt(profile)
        try:
            raw = await request_completion(self.client, self.config, prompt)
            return parse_workout_plan(raw)
        except (ExternalServiceError, UnparsableResponseError) as exc:
            _logger.info("Using fallback workout plan: %s", exc)
        except Exception:
            _logger.exception("Unexpected workout plan completion error")
        return fallback_workout_plan(profile)


def _require_complete(profile: WorkoutProfile) -> None:
    required: dict[str, object] = {
        "age_years": profile.age_years,
        "sex": profile.sex,
        "weight_kg": profile.weight_kg,
        "height_cm": profile.height_cm,
        "fitness_goal": profile.fitness_goal,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise IncompleteProfileError(missing)
