"""Comparison of generated plan totals with their targets."""

from fitplan.domain.meal_plans import MealPlan, plan_totals
from fitplan.domain.targets import MacroTargets, ToleranceReport
from fitplan.services.prompts import (
    CALORIE_TOLERANCE,
    CARBS_TOLERANCE_G,
    FAT_TOLERANCE_G,
    PROTEIN_TOLERANCE_G,
)


def check_tolerance(plan: MealPlan, targets: MacroTargets) -> ToleranceReport:
    """Report how far a plan's totals are from the targets."""
    totals = plan_totals(plan)
    calories_delta = totals.calories - targets.calories
    protein_delta = totals.protein_g - targets.protein_g
    carbs_delta = totals.carbs_g - targets.carbs_g
    fat_delta = totals.fat_g - targets.fat_g
    within = (
        abs(calories_delta) <= CALORIE_TOLERANCE
        and abs(protein_delta) <= PROTEIN_TOLERANCE_G
        and abs(carbs_delta) <= CARBS_TOLERANCE_G
        and abs(fat_delta) <= FAT_TOLERANCE_G
    )
    return ToleranceReport(
        calories_delta=calories_delta,
        protein_delta=protein_delta,
        carbs_delta=carbs_delta,
        fat_delta=fat_delta,
        within_tolerance=within,
    )
