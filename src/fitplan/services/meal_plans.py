"""Meal plan orchestration: prompt, completion, parse, or fall back.

States visited per request::

    BUILDING_PROMPT -> AWAITING_MODEL -> PARSING -> DONE
    AWAITING_MODEL or PARSING -> FALLBACK -> DONE

There is a single model attempt and no retry. Target calculation errors are
the only failures that reach the caller.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from fitplan.domain.errors import ExternalServiceError, UnparsableResponseError
from fitplan.domain.meal_plans import MealPlan
from fitplan.domain.profile import FitnessGoal, PhysiologyProfile
from fitplan.domain.targets import MacroTargets, ToleranceReport
from fitplan.services.completion import (
    CompletionClient,
    GenerationConfig,
    request_completion,
)
from fitplan.services.fallback import FallbackMealPlanSynthesizer
from fitplan.services.parsing import parse_meal_plan
from fitplan.services.prompts import MealPlanPromptBuilder
from fitplan.services.targets import calculate_targets
from fitplan.services.tolerance import check_tolerance

_logger = logging.getLogger(__name__)


class PlanState(StrEnum):
    """Orchestrator states."""

    BUILDING_PROMPT = "building_prompt"
    AWAITING_MODEL = "awaiting_model"
    PARSING = "parsing"
    FALLBACK = "fallback"
    DONE = "done"


class PlanSource(StrEnum):
    """Which path produced a plan."""

    MODEL = "model"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class MealPlanOutcome:
    """Generated plan with the path that produced it."""

    plan: MealPlan
    targets: MacroTargets
    source: PlanSource
    states: tuple[PlanState, ...]
    tolerance: ToleranceReport | None = None


@dataclass
class MealPlanService:
    """Generates meal plans from targets with a deterministic fallback."""

    client: CompletionClient | None
    config: GenerationConfig = field(default_factory=GenerationConfig)
    prompt_builder: MealPlanPromptBuilder = field(
        default_factory=MealPlanPromptBuilder
    )
    synthesizer: FallbackMealPlanSynthesizer = field(
        default_factory=FallbackMealPlanSynthesizer
    )

    async def synthesize_meal_plan(
        self,
        profile: PhysiologyProfile,
        dietary_override: list[str] | None = None,
    ) -> MealPlan:
        """Compute targets for a profile and return a meal plan."""
        outcome = await self.plan_for_profile(profile, dietary_override)
        return outcome.plan

    async def plan_for_profile(
        self,
        profile: PhysiologyProfile,
        dietary_override: list[str] | None = None,
    ) -> MealPlanOutcome:
        """Compute targets for a profile and generate a plan with its trace."""
        targets = calculate_targets(profile)
        dietary = list(dietary_override or profile.dietary_preferences)
        goal = str(profile.fitness_goal or FitnessGoal.MAINTAIN)
        return await self.generate(targets, goal, dietary)

    async def generate(
        self, targets: MacroTargets, goal: str, dietary: list[str]
    ) -> MealPlanOutcome:
        """Run the prompt/complete/parse path, falling back on any failure."""
        states = [PlanState.BUILDING_PROMPT]
        prompt = self.prompt_builder.build(goal, targets, dietary)

        states.append(PlanState.AWAITING_MODEL)
        try:
            raw = await request_completion(self.client, self.config, prompt)
        except ExternalServiceError as exc:
            if self.config.enabled:
                _logger.warning("Meal plan completion failed: %s", exc)
            else:
                _logger.info("Meal plan completion skipped: %s", exc)
            return self._fallback(targets, goal, dietary, states)
        except Exception:
            _logger.exception("Unexpected meal plan completion error")
            return self._fallback(targets, goal, dietary, states)

        states.append(PlanState.PARSING)
        try:
            plan = parse_meal_plan(raw)
        except UnparsableResponseError as exc:
            _logger.warning("Meal plan response unparsable: %s", exc)
            return self._fallback(targets, goal, dietary, states)

        report = check_tolerance(plan, targets)
        if not report.within_tolerance:
            _logger.warning(
                "Meal plan outside tolerance: kcal=%+.0f protein=%+.0f "
                "carbs=%+.0f fat=%+.0f",
                report.calories_delta,
                report.protein_delta,
                report.carbs_delta,
                report.fat_delta,
            )
            if self.config.strict_tolerance:
                return self._fallback(targets, goal, dietary, states)

        states.append(PlanState.DONE)
        return MealPlanOutcome(
            plan=plan,
            targets=targets,
            source=PlanSource.MODEL,
            states=tuple(states),
            tolerance=report,
        )

    def _fallback(
        self,
        targets: MacroTargets,
        goal: str,
        dietary: list[str],
        states: list[PlanState],
    ) -> MealPlanOutcome:
        plan = self.synthesizer.synthesize(targets, goal, dietary)
        return MealPlanOutcome(
            plan=plan,
            targets=targets,
            source=PlanSource.FALLBACK,
            states=(*states, PlanState.FALLBACK, PlanState.DONE),
        )
