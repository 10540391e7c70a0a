"""
Recommendation Request Compiler.

Turns an AnswerRecord into the payload for the recommendation service.
Pure: no I/O, no mutation of the record.
"""

from enum import Enum
from typing import Iterable

from .answers import OTHER_ALLERGY, AnswerRecord
from .ingredients import merge_ingredients
from .models import RecommendationRequest, RequestType, UserInputs

VEGAN = "Vegan"
VEGETARIAN = "Vegetarian"


class ProteinDirective(str, Enum):
    """Which kind of protein every suggestion must include."""
    PLANT = "plant"              # Vegan
    VEGETARIAN = "vegetarian"    # Eggs/dairy allowed
    ANIMAL = "animal"            # Default


def protein_directive(protocols: Iterable[str]) -> ProteinDirective:
    """Vegan wins over Vegetarian; anything else requires animal protein."""
    protocols = set(protocols or ())
    if VEGAN in protocols:
        return ProteinDirective.PLANT
    if VEGETARIAN in protocols:
        return ProteinDirective.VEGETARIAN
    return ProteinDirective.ANIMAL


def compile_allergies(allergies: Iterable[str], other_allergy: str = "") -> list[str]:
    """
    Union of selected allergies and the free-text "Other" allergy.

    The free text counts only when "Other" is selected and it is not blank.
    """
    compiled: list[str] = []
    for allergy in allergies or ():
        if allergy not in compiled:
            compiled.append(allergy)

    extra = (other_allergy or "").strip()
    if extra and OTHER_ALLERGY in compiled and extra not in compiled:
        compiled.append(extra)
    return compiled


def compile_user_inputs(answers: AnswerRecord) -> UserInputs:
    """Flatten answers into the wire shape."""
    return UserInputs(
        mood=list(answers.mood),
        flavor=list(answers.flavor),
        temperature=list(answers.temperature),
        texture=list(answers.texture),
        protocols=list(answers.protocols),
        allergies=compile_allergies(answers.allergies, answers.other_allergy),
        # Already folded into allergies
        other_allergy="",
        ingredients=merge_ingredients(answers.detected_ingredients, answers.ingredients),
    )


def compile_request(answers: AnswerRecord, request_type: RequestType = "initial") -> RecommendationRequest:
    """Build the outbound recommendation request."""
    return RecommendationRequest(
        user_inputs=compile_user_inputs(answers),
        request_type=request_type,
        protein_directive=protein_directive(answers.protocols).value,
    )
