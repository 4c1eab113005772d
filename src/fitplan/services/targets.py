"""Daily calorie and macro target calculation.

Calories come from the Mifflin-St Jeor BMR scaled by activity and shifted by
300 kcal for weight loss or muscle gain. Macro grams are derived from the
CURRENT body weight only, even when a target weight is set: protein 2 g/kg,
fat 0.8 g/kg for weight loss and 1 g/kg otherwise, carbs take the remaining
calories.
"""

import math

from fitplan.domain.errors import IncompleteProfileError, InvalidTargetError
from fitplan.domain.profile import ActivityLevel, FitnessGoal, PhysiologyProfile, Sex
from fitplan.domain.targets import MacroTargets

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.55
GOAL_CALORIE_ADJUSTMENT = 300

PROTEIN_G_PER_KG = 2.0
FAT_G_PER_KG_CUT = 0.8
FAT_G_PER_KG = 1.0

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def calculate_daily_calories(profile: PhysiologyProfile) -> int:
    """Return the rounded daily calorie target for a complete profile."""
    _require_complete(profile)
    weight = float(profile.current_weight_kg)  # type: ignore[arg-type]
    height = float(profile.height_cm)  # type: ignore[arg-type]
    age = float(profile.age_years)  # type: ignore[arg-type]

    bmr = 10 * weight + 6.25 * height - 5 * age
    bmr += 5 if profile.sex == Sex.MALE else -161
    multiplier = ACTIVITY_MULTIPLIERS.get(
        str(profile.activity_level), DEFAULT_ACTIVITY_MULTIPLIER
    )
    tdee = bmr * multiplier

    if profile.fitness_goal == FitnessGoal.LOSE_WEIGHT:
        target = tdee - GOAL_CALORIE_ADJUSTMENT
    elif profile.fitness_goal == FitnessGoal.GAIN_MUSCLE:
        target = tdee + GOAL_CALORIE_ADJUSTMENT
    else:
        target = tdee
    return round_half_up(target)


def calculate_macros(
    calories: int, fitness_goal: str, current_weight_kg: float
) -> MacroTargets:
    """Split a calorie budget into macro grams and calorie percentages."""
    if calories <= 0:
        raise InvalidTargetError(f"Calorie target must be positive, got {calories}")

    protein_g = round_half_up(current_weight_kg * PROTEIN_G_PER_KG)
    fat_per_kg = (
        FAT_G_PER_KG_CUT if fitness_goal == FitnessGoal.LOSE_WEIGHT else FAT_G_PER_KG
    )
    fat_g = round_half_up(current_weight_kg * fat_per_kg)

    protein_kcal = protein_g * KCAL_PER_G_PROTEIN
    fat_kcal = fat_g * KCAL_PER_G_FAT
    carbs_kcal = calories - protein_kcal - fat_kcal
    if carbs_kcal < 0:
        raise InvalidTargetError(
            f"Protein and fat need {protein_kcal + fat_kcal} kcal, "
            f"more than the {calories} kcal budget"
        )
    carbs_g = round_half_up(carbs_kcal / KCAL_PER_G_CARBS)

    return MacroTargets(
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        protein_pct=round_half_up(protein_kcal / calories * 100),
        carbs_pct=round_half_up(carbs_kcal / calories * 100),
        fat_pct=round_half_up(fat_kcal / calories * 100),
    )


def calculate_targets(profile: PhysiologyProfile) -> MacroTargets:
    """Compute calorie and macro targets for a profile."""
    calories = calculate_daily_calories(profile)
    return calculate_macros(
        calories,
        profile.fitness_goal,
        float(profile.current_weight_kg),  # type: ignore[arg-type]
    )


def _require_complete(profile: PhysiologyProfile) -> None:
    """Raise when any field needed for the BMR is missing."""
    required: dict[str, object] = {
        "age_years": profile.age_years,
        "sex": profile.sex,
        "height_cm": profile.height_cm,
        "current_weight_kg": profile.current_weight_kg,
        "activity_level": profile.activity_level,
    }
    missing = [name for name, value in required.items() if not _is_present(value)]
    if missing:
        raise IncompleteProfileError(missing)


def _is_present(value: object) -> bool:
    if value is None or value == "":
        return False
    if isinstance(value, int | float):
        return value > 0
    return True
