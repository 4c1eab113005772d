"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from fitplan.adapters.gemini_completion_client import GeminiCompletionClient
from fitplan.adapters.openai_completion_client import OpenAICompletionClient
from fitplan.config import Settings, generation_config
from fitplan.services.meal_plans import MealPlanService
from fitplan.services.workouts import WorkoutPlanService

CompletionAdapter = OpenAICompletionClient | GeminiCompletionClient


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_plan_service: MealPlanService
    workout_plan_service: WorkoutPlanService
    close_resources: Callable[[], Awaitable[None]]


def build_completion_client(settings: Settings) -> CompletionAdapter | None:
    """Create the completion client for the configured provider, if any."""
    if settings.llm_provider == "openai" and settings.openai_api_key:
        return OpenAICompletionClient.create(
            api_key=settings.openai_api_key, model=settings.openai_model
        )
    if settings.llm_provider == "gemini" and settings.gemini_api_key:
        return GeminiCompletionClient.create(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
        )
    return None


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    completion_client = build_completion_client(resolved_settings)
    meal_plan_service = MealPlanService(
        client=completion_client,
        config=generation_config(
            resolved_settings, resolved_settings.meal_plan_max_output_tokens
        ),
    )
    workout_plan_service = WorkoutPlanService(
        client=completion_client,
        config=generation_config(
            resolved_settings, resolved_settings.workout_plan_max_output_tokens
        ),
    )

    async def close_resources() -> None:
        if completion_client is not None:
            await completion_client.close()

    return AppContainer(
        settings=resolved_settings,
        meal_plan_service=meal_plan_service,
        workout_plan_service=workout_plan_service,
        close_resources=close_resources,
    )
