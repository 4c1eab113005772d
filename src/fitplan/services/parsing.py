"""Best-effort parsing of completion output into plan models.

Parsing checks shape only. Whether a parsed meal plan actually hits its
targets is reported separately by ``fitplan.services.tolerance``.
"""

from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from fitplan.domain.errors import UnparsableResponseError
from fitplan.domain.meal_plans import MealPlan
from fitplan.domain.workouts import WorkoutPlan

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_model_output(raw: object, model_type: type[ModelT]) -> ModelT:
    """Parse raw completion output into ``model_type``.

    Accepts an already-built model, a mapping, a clean JSON string, or JSON
    embedded in surrounding prose (first ``{`` to last ``}``).
    """
    if isinstance(raw, model_type):
        return raw
    if isinstance(raw, Mapping):
        try:
            return model_type.model_validate(raw)
        except ValidationError as exc:
            raise UnparsableResponseError(str(exc)) from exc
    if not isinstance(raw, str):
        raise UnparsableResponseError(
            f"Unsupported response type: {type(raw).__name__}"
        )

    try:
        return model_type.model_validate_json(raw)
    except ValidationError:
        pass

    candidate = _embedded_object(raw)
    if candidate is None:
        raise UnparsableResponseError("No JSON object found in response")
    try:
        return model_type.model_validate_json(candidate)
    except ValidationError as exc:
        raise UnparsableResponseError(str(exc)) from exc


def parse_meal_plan(raw: object) -> MealPlan:
    """Parse completion output into a meal plan."""
    return parse_model_output(raw, MealPlan)


def parse_workout_plan(raw: object) -> WorkoutPlan:
    """Parse completion output into a workout plan."""
    return parse_model_output(raw, WorkoutPlan)


def _embedded_object(text: str) -> str | None:
    """Return the text between the first '{' and the last '}'."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]
