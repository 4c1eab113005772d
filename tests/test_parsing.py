"""Tests for completion output parsing."""

import json

import pytest

from fitplan.domain.errors import UnparsableResponseError
from fitplan.domain.meal_plans import MealPlan, plan_totals
from fitplan.services.parsing import parse_meal_plan, parse_workout_plan
from tests.conftest import model_plan_payload


def test_parse_clean_json(targets) -> None:
    raw = json.dumps(model_plan_payload(targets))

    plan = parse_meal_plan(raw)

    assert plan.calories == targets.calories
    assert plan.meals[0].meal_type == "breakfast"
    assert plan.meals[1].foods[0].serving_size == "1 bowl"
    assert plan_totals(plan).protein_g == targets.protein_g


def test_parse_json_wrapped_in_prose(targets) -> None:
    body = json.dumps(model_plan_payload(targets), indent=2)
    raw = f"Sure! Here is your plan:\n```json\n{body}\n```\nEnjoy your meals."

    plan = parse_meal_plan(raw)

    assert plan.meals[0].name == "Shakshuka"


def test_parse_does_not_check_totals(targets) -> None:
    payload = model_plan_payload(targets)
    payload["calories"] = 999
    payload["meals"][0]["foods"][0]["calories"] = 5000

    plan = parse_meal_plan(json.dumps(payload))

    assert plan.calories == 999


def test_parse_accepts_mapping_and_model(targets) -> None:
    payload = model_plan_payload(targets)

    from_mapping = parse_meal_plan(payload)

    assert parse_meal_plan(from_mapping) is from_mapping
    assert isinstance(from_mapping, MealPlan)


@pytest.mark.parametrize(
    "raw",
    [
        "I cannot help with that.",
        "{not json at all}",
        '{"goal": "maintain", "calories": 2000}',
        '{"goal": "maintain", "calories": 2000, "meals": []}',
        "} backwards {",
        42,
        None,
    ],
)
def test_parse_rejects_unusable_output(raw) -> None:
    with pytest.raises(UnparsableResponseError):
        parse_meal_plan(raw)


def test_parse_rejects_invalid_mapping() -> None:
    with pytest.raises(UnparsableResponseError):
        parse_meal_plan({"goal": "maintain"})


def test_parse_workout_plan_coerces_numeric_reps() -> None:
    raw = json.dumps(
        {
            "weeklyGoal": "Build strength",
            "dailyWorkouts": [
                {
                    "day": "Monday",
                    "goal": "Legs",
                    "exercises": [{"name": "Squat", "sets": 5, "reps": 5}],
                }
            ],
        }
    )

    plan = parse_workout_plan(f"Plan below\n{raw}")

    exercise = plan.daily_workouts[0].exercises[0]
    assert exercise.reps == "5"
    assert exercise.rest_seconds == 60


def test_serialized_plan_parses_back_equal(seeded_synthesizer, targets) -> None:
    plan = seeded_synthesizer.synthesize(targets, "maintain", ["vegetarian"])

    assert parse_meal_plan(plan.model_dump_json(by_alias=True)) == plan


def test_whole_nutrient_values_serialize_as_integers(targets) -> None:
    plan = parse_meal_plan(model_plan_payload(targets))

    wire = json.loads(plan.model_dump_json(by_alias=True))

    breakfast = wire["meals"][0]["foods"][0]
    assert breakfast["calories"] == 614
    assert isinstance(breakfast["calories"], int)
    assert isinstance(breakfast["quantity"], int)
    assert wire["meals"][1]["foods"][0]["calories"] == 922.5
