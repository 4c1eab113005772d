"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from fitplan.api.schemas import MealPlanRequest, WorkoutPlanRequest
from fitplan.app_logging import configure_logging
from fitplan.containers import AppContainer
from fitplan.domain.errors import IncompleteProfileError, InvalidTargetError
from fitplan.domain.targets import MacroTargets
from fitplan.services.meal_plans import MealPlanOutcome


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/ai/food")
    async def generate_meal_plan(
        body: MealPlanRequest, request: Request
    ) -> dict[str, object]:
        """Generate a meal plan for the submitted profile."""
        state_container: AppContainer = request.app.state.container
        try:
            outcome = await state_container.meal_plan_service.plan_for_profile(
                body.profile.to_domain(), body.dietary
            )
        except IncompleteProfileError as exc:
            logger.info("Meal plan rejected, incomplete profile: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    "Please complete your profile (age, gender, height, weight, "
                    "activity level) to get recommendations"
                ),
            ) from exc
        except InvalidTargetError as exc:
            logger.warning("Meal plan rejected, invalid targets: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return {"success": True, "data": _meal_plan_payload(outcome)}

    @app.post("/ai/workout")
    async def generate_workout_plan(
        body: WorkoutPlanRequest, request: Request
    ) -> dict[str, object]:
        """Generate a weekly workout plan for the submitted profile."""
        state_container: AppContainer = request.app.state.container
        try:
            plan = await state_container.workout_plan_service.generate(
                body.profile.to_domain()
            )
        except IncompleteProfileError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    "Please complete your profile (age, gender, weight, height, "
                    "fitness goal) to generate a workout plan"
                ),
            ) from exc
        return {"success": True, "data": plan.model_dump(by_alias=True)}

    return app


def _meal_plan_payload(outcome: MealPlanOutcome) -> dict[str, object]:
    """Serialize a plan with its targets for API clients."""
    payload = outcome.plan.model_dump(by_alias=True)
    payload["calculatedCalories"] = outcome.targets.calories
    payload["macros"] = _format_macros(outcome.targets)
    payload["source"] = str(outcome.source)
    return payload


def _format_macros(targets: MacroTargets) -> dict[str, str]:
    """Format macro targets as display strings."""
    return {
        "protein": f"{targets.protein_g}g ({targets.protein_pct}%)",
        "carbs": f"{targets.carbs_g}g ({targets.carbs_pct}%)",
        "fat": f"{targets.fat_g}g ({targets.fat_pct}%)",
    }
