"""
Recommendation service.

Builds the LLM prompt from compiled user inputs, calls the model, strips
markdown fencing and validates the JSON into a SuggestionSet.
"""

import json
import logging
import re

from pydantic import ValidationError

from intake.collaborators import RecommendationError, Recommender
from intake.compiler import ProteinDirective, compile_allergies, protein_directive
from intake.fallback import select_fallback
from intake.models import RecommendationRequest, SuggestionSet, UserInputs
from mealvibe.config import settings
from mealvibe.llm.client import call_llm_text
from mealvibe.prompts.recommendations import (
    MORE_IDEAS_INSTRUCTION,
    PROTEIN_INSTRUCTIONS,
    RECOMMENDATION_PROMPT,
)

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\n?")


def _join(values: list[str], empty: str) -> str:
    return ", ".join(values) if values else empty


def resolve_directive(request: RecommendationRequest) -> ProteinDirective:
    """Use the directive sent by the client, or derive it from protocols."""
    if request.protein_directive:
        try:
            return ProteinDirective(request.protein_directive)
        except ValueError:
            logger.info(f"Unknown protein directive (re-derived): {request.protein_directive}")
    return protein_directive(request.user_inputs.protocols)


def build_recommendation_prompt(
    inputs: UserInputs,
    directive: ProteinDirective,
    request_type: str = "initial",
) -> str:
    """Fill the recommendation prompt template."""
    allergies = compile_allergies(inputs.allergies, inputs.other_allergy)
    return RECOMMENDATION_PROMPT.format(
        mood=_join(inputs.mood, "not specified"),
        flavor=_join(inputs.flavor, "not specified"),
        temperature=_join(inputs.temperature, "not specified"),
        texture=_join(inputs.texture, "not specified"),
        protocols=_join(inputs.protocols, "none specified"),
        allergies=_join(allergies, "none specified"),
        ingredients=inputs.ingredients.strip() or "none specified",
        protein_instruction=PROTEIN_INSTRUCTIONS[directive],
        extra_instruction=f"\n{MORE_IDEAS_INSTRUCTION}\n" if request_type == "more" else "",
    )


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` fences the model sometimes wraps JSON in."""
    return _FENCE_RE.sub("", text or "").strip()


def parse_suggestion_set(text: str) -> SuggestionSet:
    """Parse raw model output. Raises RecommendationError on anything off."""
    cleaned = strip_code_fences(text)
    try:
        return SuggestionSet.model_validate(json.loads(cleaned))
    except json.JSONDecodeError as e:
        raise RecommendationError(f"Model returned invalid JSON: {e}") from e
    except ValidationError as e:
        raise RecommendationError(f"Model returned unexpected shape: {e}") from e


class LLMRecommender(Recommender):
    """In-process recommender that calls OpenAI directly."""

    async def recommend(self, request: RecommendationRequest) -> SuggestionSet:
        prompt = build_recommendation_prompt(
            request.user_inputs,
            resolve_directive(request),
            request.request_type,
        )
        try:
            raw = await call_llm_text(
                name="recommendations",
                messages=[{"role": "user", "content": prompt}],
                model=settings.recommendation_model,
                max_tokens=settings.recommendation_max_tokens,
                temperature=settings.recommendation_temperature,
            )
        except Exception as e:
            raise RecommendationError(f"OpenAI API error: {e}") from e

        return parse_suggestion_set(raw)


async def generate_recommendations(
    request: RecommendationRequest,
    recommender: Recommender | None = None,
) -> SuggestionSet:
    """
    Handle a recommendation request end to end.

    Falls back to the canned set on any recommender failure, so callers
    always get three suggestions.
    """
    recommender = recommender or LLMRecommender()
    try:
        return await recommender.recommend(request)
    except RecommendationError as e:
        logger.error(f"Recommendation generation failed, serving fallback: {e}")
        inputs = request.user_inputs
        return select_fallback(inputs.protocols, inputs.mood)
