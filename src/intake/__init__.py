"""
MealVibe Intake.

The conversational intake wizard: walks the user through an ordered set of
questions, accumulates answers, merges fridge-scan results with typed
ingredients and compiles everything into a recommendation request.

Pieces:
1. AnswerRecord - the evolving user input (answers.py)
2. StepSequencer - named-step state machine (steps.py)
3. IngredientMergeResolver - background fridge scan + merge (ingredients.py)
4. compile_request - outbound payload + protein directive (compiler.py)
5. select_fallback - canned suggestions when the recommender fails (fallback.py)
6. seed_answers - saved profile preferences → initial answers (profile.py)

WizardSession (session.py) owns one of each for a single user session.
"""

from .answers import AnswerRecord
from .steps import Step, StepOutcome, StepSequencer, StepTransitionError
from .compiler import ProteinDirective, compile_request
from .fallback import select_fallback
from .models import RecommendationRequest, ScanResult, Suggestion, SuggestionSet, UserInputs
from .profile import UserProfile, seed_answers
from .session import WizardSession

__all__ = [
    "AnswerRecord",
    "Step",
    "StepOutcome",
    "StepSequencer",
    "StepTransitionError",
    "ProteinDirective",
    "compile_request",
    "select_fallback",
    "RecommendationRequest",
    "ScanResult",
    "Suggestion",
    "SuggestionSet",
    "UserInputs",
    "UserProfile",
    "seed_answers",
    "WizardSession",
]
