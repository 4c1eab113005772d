"""Meal plan models shared with the completion service.

Field aliases are the JSON keys the model is asked to produce, so
``model_dump(by_alias=True)`` yields the wire shape.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


class FoodItem(BaseModel):
    """Single food entry inside a meal."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    calories: float = Field(ge=0)
    protein_g: float = Field(alias="protein", ge=0)
    carbs_g: float = Field(alias="carbs", ge=0)
    fat_g: float = Field(alias="fat", ge=0)
    serving_size: str = Field(default="1 serving", alias="servingSize")
    quantity: float = Field(default=1, gt=0)

    @field_serializer("calories", "protein_g", "carbs_g", "fat_g", "quantity")
    def _whole_numbers_as_int(self, value: float) -> int | float:
        return int(value) if float(value).is_integer() else value


class Meal(BaseModel):
    """Named meal made of food items."""

    model_config = ConfigDict(populate_by_name=True)

    meal_type: MealType = Field(alias="mealType")
    name: str
    foods: list[FoodItem] = Field(min_length=1)


class NutrientTotals(BaseModel):
    """Summed nutrients of a meal or plan."""

    calories: float = 0
    protein_g: float = 0
    carbs_g: float = 0
    fat_g: float = 0


class MealPlan(BaseModel):
    """A day of meals generated for a goal and dietary filters."""

    model_config = ConfigDict(populate_by_name=True)

    goal: str
    dietary: list[str] = Field(default_factory=list)
    calories: int
    meals: list[Meal] = Field(min_length=1)


def meal_totals(meal: Meal) -> NutrientTotals:
    """Sum nutrients of a meal, weighting each food by its quantity."""
    return NutrientTotals(
        calories=sum(food.calories * food.quantity for food in meal.foods),
        protein_g=sum(food.protein_g * food.quantity for food in meal.foods),
        carbs_g=sum(food.carbs_g * food.quantity for food in meal.foods),
        fat_g=sum(food.fat_g * food.quantity for food in meal.foods),
    )


def plan_totals(plan: MealPlan) -> NutrientTotals:
    """Sum nutrients across every meal in a plan."""
    per_meal = [meal_totals(meal) for meal in plan.meals]
    return NutrientTotals(
        calories=sum(totals.calories for totals in per_meal),
        protein_g=sum(totals.protein_g for totals in per_meal),
        carbs_g=sum(totals.carbs_g for totals in per_meal),
        fat_g=sum(totals.fat_g for totals in per_meal),
    )
