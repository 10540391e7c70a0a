"""
Fallback Selector.

Canned suggestions used whenever the recommender can't be reached or
returns garbage. Branching mirrors the protein directive: vegan, then
vegetarian, then everything else.
"""

from typing import Iterable

from .compiler import ProteinDirective, protein_directive
from .models import Suggestion, SuggestionSet

SINGLE_FEELING_MESSAGE = "Let's find something that feels just right for you today."
MIXED_FEELINGS_MESSAGE = (
    "I can sense you're feeling a mix of things right now—"
    "let's find something that honors all those feelings."
)

VEGAN_SUGGESTIONS = [
    {
        "title": "Protein-Packed Lentil Bowl",
        "prep": "Heat canned lentils in a pan with garlic and cumin. Serve over greens with tahini dressing and hemp seeds.",
        "vibe": "Hearty • Nourishing • Plant-Based",
    },
    {
        "title": "Tofu Scramble Wrap",
        "prep": "Crumble firm tofu and sauté with turmeric and nutritional yeast. Wrap in collard greens with avocado.",
        "vibe": "Protein-Rich • Fresh • Satisfying",
    },
    {
        "title": "Quinoa Power Bowl",
        "prep": "Cook quinoa and top with chickpeas, roasted vegetables, and almond butter drizzle.",
        "vibe": "Complete • Energizing • Wholesome",
    },
]

VEGETARIAN_SUGGESTIONS = [
    {
        "title": "Veggie Scrambled Eggs",
        "prep": "Scramble eggs with spinach and mushrooms. Serve with avocado slices and everything bagel seasoning.",
        "vibe": "Protein-Rich • Simple • Comforting",
    },
    {
        "title": "Bean & Cheese Quesadilla",
        "prep": "Mash black beans and spread on tortilla with cheese. Cook until crispy and serve with salsa.",
        "vibe": "Cheesy • Warm • Satisfying",
    },
    {
        "title": "Greek Yogurt Power Bowl",
        "prep": "Top Greek yogurt with nuts, seeds, and berries. Drizzle with honey and add a sprinkle of granola.",
        "vibe": "Creamy • Protein-Packed • Fresh",
    },
]

OMNIVORE_SUGGESTIONS = [
    {
        "title": "Simple Chicken Bowl",
        "prep": "Pan-sear chicken breast with herbs. Serve over greens with avocado and olive oil dressing.",
        "vibe": "Protein-Rich • Clean • Satisfying",
    },
    {
        "title": "Salmon & Sweet Potato",
        "prep": "Bake salmon fillet and roasted sweet potato cubes. Season with lemon and herbs.",
        "vibe": "Omega-Rich • Nourishing • Simple",
    },
    {
        "title": "Turkey & Veggie Wrap",
        "prep": "Wrap sliced turkey, cucumber, and sprouts in lettuce leaves with mustard or hummus.",
        "vibe": "Fresh • Lean • Light",
    },
]

FALLBACK_SUGGESTIONS = {
    ProteinDirective.PLANT: VEGAN_SUGGESTIONS,
    ProteinDirective.VEGETARIAN: VEGETARIAN_SUGGESTIONS,
    ProteinDirective.ANIMAL: OMNIVORE_SUGGESTIONS,
}


def fallback_message(mood: Iterable[str] = ()) -> str:
    """More than one mood tag gets the mixed-feelings message."""
    return MIXED_FEELINGS_MESSAGE if len(list(mood or ())) > 1 else SINGLE_FEELING_MESSAGE


def select_fallback(protocols: Iterable[str], mood: Iterable[str] = ()) -> SuggestionSet:
    """Pick the canned SuggestionSet for these protocols and moods."""
    suggestions = FALLBACK_SUGGESTIONS[protein_directive(protocols)]
    return SuggestionSet(
        message=fallback_message(mood),
        suggestions=[Suggestion(**s) for s in suggestions],
    )
