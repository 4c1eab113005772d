"""Deterministic meal plan synthesis used when the model is unavailable.

Every split hands its last slot the residual (target minus the rounded
shares before it), first across meals and then across the foods of each
meal, so plan totals equal the targets exactly.
"""

import random
from dataclasses import dataclass, field

from fitplan.domain.errors import InvalidTargetError
from fitplan.domain.meal_plans import FoodItem, Meal, MealPlan
from fitplan.domain.targets import MacroTargets
from fitplan.services.targets import round_half_up

NUTRIENTS = ("calories", "protein_g", "carbs_g", "fat_g")

# Breakfast, lunch, dinner shares; dinner takes the residual.
MEAL_SHARES: dict[str, tuple[float, float]] = {
    "calories": (0.30, 0.40),
    "protein_g": (0.25, 0.40),
    "carbs_g": (0.35, 0.35),
    "fat_g": (0.25, 0.35),
}

BREAKFAST_BASES = ("Oatmeal", "Whole wheat toast", "Quinoa bowl", "Smoothie bowl")
MEAT_PROTEINS = (
    "Grilled chicken breast",
    "Turkey breast",
    "Salmon",
    "Tuna",
    "Lean beef",
    "Shrimp",
)
PLANT_PROTEINS = ("Chickpeas", "Lentils", "Black beans", "Tofu", "Tempeh", "Edamame")
GRAINS = ("Brown rice", "Quinoa", "Whole wheat pasta", "Couscous", "Farro", "Wild rice")
VEGETABLES = (
    "Mixed vegetables",
    "Roasted Brussels sprouts",
    "Steamed broccoli",
    "Sautéed spinach",
    "Grilled asparagus",
    "Roasted bell peppers",
)


@dataclass(frozen=True)
class FoodSlot:
    """Food position in a meal with its share of each nutrient."""

    name: str
    serving_size: str
    weights: tuple[float, ...] = ()


@dataclass(frozen=True)
class MealShare:
    """Nutrients allotted to one meal."""

    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int


def split_with_residual(total: int, weights: tuple[float, ...]) -> list[int]:
    """Split ``total`` by ``weights`` plus one trailing residual share."""
    shares = [round_half_up(total * weight) for weight in weights]
    shares.append(total - sum(shares))
    return shares


def meal_shares(targets: MacroTargets) -> list[MealShare]:
    """Split daily targets into breakfast, lunch and dinner shares."""
    columns = {
        nutrient: split_with_residual(getattr(targets, nutrient), weights)
        for nutrient, weights in MEAL_SHARES.items()
    }
    return [
        MealShare(**{nutrient: columns[nutrient][index] for nutrient in NUTRIENTS})
        for index in range(3)
    ]


def build_meal(
    meal_type: str, name: str, share: MealShare, slots: list[FoodSlot]
) -> Meal:
    """Distribute a meal share across its food slots.

    Slots carry (calories, protein, carbs, fat) weights except the last, which
    receives the residual of every nutrient.
    """
    weighted = slots[:-1]
    columns = {
        nutrient: split_with_residual(
            getattr(share, nutrient),
            tuple(slot.weights[index] for slot in weighted),
        )
        for index, nutrient in enumerate(NUTRIENTS)
    }
    foods = [
        FoodItem(
            name=slot.name,
            serving_size=slot.serving_size,
            quantity=1,
            **{nutrient: columns[nutrient][position] for nutrient in NUTRIENTS},
        )
        for position, slot in enumerate(slots)
    ]
    return Meal(meal_type=meal_type, name=name, foods=foods)


@dataclass
class FallbackMealPlanSynthesizer:
    """Builds a breakfast/lunch/dinner plan that matches targets exactly."""

    rng: random.Random = field(default_factory=random.Random)

    def synthesize(
        self, targets: MacroTargets, goal: str, dietary: list[str]
    ) -> MealPlan:
        """Return a three-meal plan whose totals equal ``targets``."""
        _validate(targets)
        tags = {tag.lower() for tag in dietary}
        is_vegan = "vegan" in tags
        is_vegetarian = is_vegan or "vegetarian" in tags
        proteins = PLANT_PROTEINS if is_vegetarian else MEAT_PROTEINS

        base = self.rng.choice(BREAKFAST_BASES)
        lunch_protein = self.rng.choice(proteins)
        grain = self.rng.choice(GRAINS)
        vegetable = self.rng.choice(VEGETABLES)
        dinner_protein = self.rng.choice(proteins)

        breakfast, lunch, dinner = meal_shares(targets)
        meals = [
            build_meal(
                "breakfast",
                f"{base} Power Breakfast ({', '.join(dietary) or 'balanced'})",
                breakfast,
                [
                    FoodSlot(base, "1 cup", (0.45, 0.3, 0.5, 0.2)),
                    FoodSlot(
                        "Almond butter" if is_vegan else "Greek yogurt",
                        "2 tbsp" if is_vegan else "150g",
                        (0.35, 0.5, 0.2, 0.5),
                    ),
                    FoodSlot("Berries", "1 cup"),
                ],
            ),
            build_meal(
                "lunch",
                f"{lunch_protein} & {grain} Bowl",
                lunch,
                [
                    FoodSlot(lunch_protein, "200g", (0.45, 0.6, 0.2, 0.3)),
                    FoodSlot(grain, "1 cup", (0.35, 0.2, 0.6, 0.2)),
                    FoodSlot(vegetable, "2 cups"),
                ],
            ),
            build_meal(
                "dinner",
                f"{dinner_protein} Dinner Plate",
                dinner,
                [
                    FoodSlot(dinner_protein, "180g", (0.5, 0.65, 0.1, 0.6)),
                    FoodSlot("Sweet potato", "1 medium", (0.3, 0.15, 0.7, 0.1)),
                    FoodSlot("Steamed broccoli", "2 cups"),
                ],
            ),
        ]
        return MealPlan(
            goal=goal, dietary=list(dietary), calories=targets.calories, meals=meals
        )


def _validate(targets: MacroTargets) -> None:
    if targets.calories <= 0:
        raise InvalidTargetError(
            f"Calorie target must be positive, got {targets.calories}"
        )
    for nutrient in ("protein_g", "carbs_g", "fat_g"):
        if getattr(targets, nutrient) < 0:
            raise InvalidTargetError(f"{nutrient} target must not be negative")
