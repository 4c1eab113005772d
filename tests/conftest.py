"""Shared test fixtures."""

import asyncio
import random
from dataclasses import dataclass, field

import pytest

from fitplan.config import Settings
from fitplan.containers import AppContainer
from fitplan.domain.errors import ExternalServiceError
from fitplan.domain.profile import PhysiologyProfile
from fitplan.domain.targets import MacroTargets
from fitplan.domain.workouts import WorkoutProfile
from fitplan.services.completion import CompletionClient, GenerationConfig
from fitplan.services.fallback import FallbackMealPlanSynthesizer
from fitplan.services.meal_plans import MealPlanService
from fitplan.services.prompts import MealPlanPromptBuilder
from fitplan.services.workouts import WorkoutPlanService


@dataclass
class FakeCompletionClient(CompletionClient):
    """Fake completion client returning a fixed response."""

    response: str | dict[str, object] = ""
    prompts: list[str] = field(default_factory=list)

    async def complete(
        self, prompt: str, max_output_tokens: int
    ) -> str | dict[str, object]:
        self.prompts.append(prompt)
        return self.response


@dataclass
class FailingCompletionClient(CompletionClient):
    """Fake completion client that always raises."""

    error: Exception = field(
        default_factory=lambda: ExternalServiceError("OpenAI API error: 503")
    )
    calls: int = 0

    async def complete(
        self, prompt: str, max_output_tokens: int
    ) -> str | dict[str, object]:
        self.calls += 1
        raise self.error


@dataclass
class SlowCompletionClient(CompletionClient):
    """Fake completion client that never answers in time."""

    delay_seconds: float = 5.0

    async def complete(
        self, prompt: str, max_output_tokens: int
    ) -> str | dict[str, object]:
        await asyncio.sleep(self.delay_seconds)
        return "{}"


def model_plan_payload(targets: MacroTargets) -> dict[str, object]:
    """Return a model-style plan whose totals equal ``targets``."""
    breakfast_kcal = targets.calories // 4
    return {
        "goal": "lose_weight",
        "dietary": [],
        "calories": targets.calories,
        "meals": [
            {
                "mealType": "breakfast",
                "name": "Shakshuka",
                "foods": [
                    {
                        "name": "Eggs",
                        "calories": breakfast_kcal,
                        "protein": 40,
                        "carbs": 20,
                        "fat": 20,
                        "servingSize": "3 eggs",
                        "quantity": 1,
                    }
                ],
            },
            {
                "mealType": "lunch",
                "name": "Poke bowl",
                "foods": [
                    {
                        "name": "Salmon poke",
                        "calories": (targets.calories - breakfast_kcal) / 2,
                        "protein": (targets.protein_g - 40) / 2,
                        "carbs": (targets.carbs_g - 20) / 2,
                        "fat": (targets.fat_g - 20) / 2,
                        "servingSize": "1 bowl",
                        "quantity": 2,
                    }
                ],
            },
        ],
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, llm_provider="none")


@pytest.fixture
def profile() -> PhysiologyProfile:
    return PhysiologyProfile(
        age_years=30,
        sex="male",
        height_cm=180,
        current_weight_kg=80,
        activity_level="moderate",
        fitness_goal="lose_weight",
    )


@pytest.fixture
def targets() -> MacroTargets:
    return MacroTargets(
        calories=2459,
        protein_g=160,
        carbs_g=311,
        fat_g=64,
        protein_pct=26,
        carbs_pct=51,
        fat_pct=23,
    )


@pytest.fixture
def workout_profile() -> WorkoutProfile:
    return WorkoutProfile(
        age_years=30,
        sex="male",
        weight_kg=80,
        height_cm=180,
        fitness_goal="gain_muscle",
        workout_frequency=3,
        equipment=("dumbbells",),
    )


@pytest.fixture
def enabled_config() -> GenerationConfig:
    return GenerationConfig(provider="openai", credentials="openai-key")


@pytest.fixture
def seeded_synthesizer() -> FallbackMealPlanSynthesizer:
    return FallbackMealPlanSynthesizer(rng=random.Random(7))


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    meal_plan_service = MealPlanService(
        client=None,
        prompt_builder=MealPlanPromptBuilder(rng=random.Random(1)),
        synthesizer=FallbackMealPlanSynthesizer(rng=random.Random(2)),
    )
    workout_plan_service = WorkoutPlanService(client=None)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        meal_plan_service=meal_plan_service,
        workout_plan_service=workout_plan_service,
        close_resources=close_resources,
    )
