"""Prompt construction for the completion service."""

import itertools
import json
import random
from dataclasses import dataclass, field

from fitplan.domain.errors import InvalidTargetError
from fitplan.domain.targets import MacroTargets
from fitplan.domain.workouts import WorkoutProfile

CALORIE_TOLERANCE = 50
PROTEIN_TOLERANCE_G = 5
CARBS_TOLERANCE_G = 10
FAT_TOLERANCE_G = 5

SYSTEM_INSTRUCTIONS = (
    "You are a helpful nutrition assistant that outputs structured JSON only."
)

_EXAMPLE_FOOD: dict[str, object] = {
    "name": "Food item name",
    "calories": 200,
    "protein": 15,
    "carbs": 25,
    "fat": 8,
    "servingSize": "1 cup",
    "quantity": 1,
}

_EXAMPLE_WORKOUT_DAY: dict[str, object] = {
    "day": "Monday",
    "goal": "Upper Body Strength",
    "exercises": [
        {
            "name": "Bench Press",
            "sets": 4,
            "reps": "8-10",
            "restSeconds": 90,
            "notes": "Focus on controlled movement",
        }
    ],
    "warmup": "5 min light cardio + dynamic stretches",
    "cooldown": "5 min stretching focusing on chest and shoulders",
    "notes": "Keep rest periods strict",
}


def build_meal_plan_prompt(  # noqa: PLR0913
    *,
    goal: str,
    calories: int | None,
    protein_g: int | None,
    carbs_g: int | None,
    fat_g: int | None,
    dietary: list[str],
    seed: int,
    call_number: int,
) -> str:
    """Build the meal plan instructions for a generative model."""
    if calories is None or calories <= 0:
        raise InvalidTargetError("A positive calorie target is required")

    has_macros = None not in (protein_g, carbs_g, fat_g)
    restrictions = ", ".join(dietary) or "none"
    macro_block = ""
    if has_macros:
        macro_block = (
            "STRICT TARGETS - Total daily must hit these exactly:\n"
            f"  - Protein: {protein_g}g (±{PROTEIN_TOLERANCE_G}g acceptable)\n"
            f"  - Carbs: {carbs_g}g (±{CARBS_TOLERANCE_G}g acceptable)\n"
            f"  - Fat: {fat_g}g (±{FAT_TOLERANCE_G}g acceptable)\n"
        )
    protein_text = f"{protein_g}g" if has_macros else "balanced"
    carbs_text = f"{carbs_g}g" if has_macros else "balanced"
    fat_text = f"{fat_g}g" if has_macros else "balanced"

    example = {
        "goal": goal,
        "dietary": dietary,
        "calories": calories,
        "meals": [
            {"mealType": meal_type, "name": "Meal name", "foods": [_EXAMPLE_FOOD]}
            for meal_type in ("breakfast", "lunch", "dinner")
        ],
    }

    return (
        "You are a nutrition expert. Generate 3 UNIQUE and VARIED meal "
        "recommendations (breakfast, lunch, dinner) for a user with:\n"
        f"- Goal: {goal}\n"
        f"- TOTAL daily calories: {calories} "
        "(all 3 meals combined must equal this)\n"
        f"- Dietary restrictions: {restrictions}\n"
        f"{macro_block}\n"
        "CRITICAL REQUIREMENTS:\n"
        f"1. The SUM of all foods across all 3 meals MUST equal {calories} "
        f"calories (±{CALORIE_TOLERANCE} calories)\n"
        f"2. The SUM of protein across all meals MUST equal {protein_text}\n"
        f"3. The SUM of carbs across all meals MUST equal {carbs_text}\n"
        f"4. The SUM of fat across all meals MUST equal {fat_text}\n"
        "5. Use realistic portion sizes and accurate nutrition values\n"
        "6. Distribute calories roughly: breakfast 25-30%, lunch 35-40%, "
        "dinner 30-35%\n\n"
        "VARIETY REQUIREMENTS:\n"
        "- Generate DIFFERENT meals each time - avoid repeating the same foods\n"
        "- Use diverse protein sources (fish, poultry, legumes, tofu, eggs, etc.)\n"
        "- Include variety in grains (rice, quinoa, pasta, bread, oats, etc.)\n"
        "- Mix different vegetables and fruits\n"
        "- Try different cuisines (Mediterranean, Asian, Mexican, etc.)\n"
        f"- Random seed for variety: {seed}\n"
        f"- Request number: {call_number}\n\n"
        "IMPORTANT: Calculate and verify that your meal plan totals hit the "
        "targets before responding.\n\n"
        "Respond only with valid JSON in this exact format:\n"
        f"{json.dumps(example, indent=2, ensure_ascii=False)}"
    )


@dataclass
class MealPlanPromptBuilder:
    """Adds variety markers to meal plan prompts."""

    rng: random.Random = field(default_factory=random.Random)
    _counter: itertools.count = field(default_factory=lambda: itertools.count(1))

    def build(self, goal: str, targets: MacroTargets, dietary: list[str]) -> str:
        """Build a prompt for the given targets."""
        return build_meal_plan_prompt(
            goal=goal,
            calories=targets.calories,
            protein_g=targets.protein_g,
            carbs_g=targets.carbs_g,
            fat_g=targets.fat_g,
            dietary=dietary,
            seed=self.rng.randrange(1000),
            call_number=next(self._counter),
        )


def build_workout_prompt(profile: WorkoutProfile) -> str:
    """Build the weekly workout instructions for a generative model."""
    equipment = ", ".join(profile.equipment) or "bodyweight only"
    injuries = ", ".join(profile.injuries) or "none"
    lines = [
        "You are an expert personal trainer. "
        "Generate a personalized weekly workout plan for:",
        "",
        "USER PROFILE:",
        f"- Age: {profile.age_years}, Gender: {profile.sex}",
        f"- Weight: {profile.weight_kg}kg, Height: {profile.height_cm}cm",
        f"- Fitness Goal: {profile.fitness_goal}",
        f"- Experience Level: {profile.experience_level}",
        f"- Available Equipment: {equipment}",
        f"- Workout Frequency: {profile.workout_frequency} days/week",
    ]
    if profile.injuries:
        lines.append(f"- Injuries/Limitations: {injuries}")
    if profile.streak_current > 0:
        lines.append(
            f"- Current Streak: {profile.streak_current} days "
            f"(longest: {profile.streak_longest})"
        )
    if profile.recent_workouts:
        lines += ["", "RECENT WORKOUTS (last 5):"]
        lines += [
            f"{index}. {workout.workout_type} - {workout.exercise_count} exercises"
            for index, workout in enumerate(profile.recent_workouts[:5], start=1)
        ]
    if profile.personal_records:
        lines += ["", "PERSONAL RECORDS:"]
        lines += [
            f"- {exercise}: {record.weight_kg}kg x {record.reps} reps"
            for exercise, record in profile.personal_records.items()
        ]
    example = {
        "weeklyGoal": "Brief description of the week's focus",
        "dailyWorkouts": [_EXAMPLE_WORKOUT_DAY],
        "motivation": (
            f"Personalized motivation message based on "
            f"{profile.streak_current} day streak"
        ),
    }
    lines += [
        "",
        "REQUIREMENTS:",
        f"1. Generate {profile.workout_frequency} workout days "
        "(e.g., Monday, Wednesday, Friday if 3/week)",
        "2. Each workout should have 6-10 exercises with sets and reps",
        "3. Include specific warm-up and cool-down for each day",
        "4. Progress intensity based on experience level "
        f"({profile.experience_level})",
        f"5. Adapt exercises for available equipment: {equipment}",
        f"6. Consider any injuries/limitations: {injuries}",
        "7. Add a personalized motivation tip based on streak: "
        f"{profile.streak_current} days",
        f"8. For {profile.fitness_goal}, structure workouts accordingly "
        "(e.g., compound lifts for muscle gain, circuits for fat loss)",
        "",
        "RESPOND ONLY WITH VALID JSON in this exact format:",
        json.dumps(example, indent=2),
    ]
    return "\n".join(lines)
