"""
Question catalogue for the intake wizard.

Mood, flavor, temperature and texture are closed sets of tag ids.
Protocols and allergies are free-form: the catalogue only suggests values,
and anything else the user supplies is accepted.
"""

import logging

logger = logging.getLogger(__name__)


# =============================================================================
# Options
# =============================================================================

MOOD_OPTIONS = [
    {"id": "tired", "emoji": "😴", "label": "Tired"},
    {"id": "meh", "emoji": "😕", "label": "Meh / Uninspired"},
    {"id": "calm", "emoji": "🧘", "label": "Calm"},
    {"id": "overwhelmed", "emoji": "😩", "label": "Overwhelmed"},
    {"id": "good", "emoji": "😊", "label": "Pretty good"},
    {"id": "cozy", "emoji": "🌧️", "label": "Cozy / Rainy Day Mood"},
]

FLAVOR_OPTIONS = [
    {"id": "savory", "emoji": "🍳", "label": "Savory / Salty"},
    {"id": "creamy", "emoji": "🥥", "label": "Creamy / Rich"},
    {"id": "fresh", "emoji": "🥗", "label": "Fresh / Crisp"},
    {"id": "warm", "emoji": "🍠", "label": "Warm & Comforting"},
    {"id": "spicy", "emoji": "🌶️", "label": "Bold / Spicy"},
    {"id": "surprise", "emoji": "🧂", "label": "I'm not sure / Surprise me"},
]

TEMPERATURE_OPTIONS = [
    {"id": "hot", "emoji": "🔥", "label": "Warm or hot"},
    {"id": "cold", "emoji": "❄️", "label": "Cold or cool"},
    {"id": "any", "emoji": "🤷", "label": "I don't care"},
]

TEXTURE_OPTIONS = [
    {"id": "soft", "emoji": "🍜", "label": "Soft / Soupy"},
    {"id": "creamy", "emoji": "🍚", "label": "Creamy"},
    {"id": "crunchy", "emoji": "🥒", "label": "Crunchy"},
    {"id": "hearty", "emoji": "🍗", "label": "Hearty / Meaty"},
    {"id": "smooth", "emoji": "🥄", "label": "Smooth & Satisfying"},
    {"id": "unsure", "emoji": "🤷", "label": "Not sure"},
]

PROTOCOL_OPTIONS = [
    "Paleo", "Keto", "Whole30", "Mediterranean", "Low FODMAP", "AIP",
    "Vegetarian", "Vegan", "Low Calorie", "High Protein", "None",
]

ALLERGY_OPTIONS = ["Tree nuts", "Peanuts", "Dairy", "Gluten", "Eggs", "Other"]

# Closed tag sets, keyed by AnswerRecord field
ENUM_FIELDS = {
    "mood": {o["id"] for o in MOOD_OPTIONS},
    "flavor": {o["id"] for o in FLAVOR_OPTIONS},
    "temperature": {o["id"] for o in TEMPERATURE_OPTIONS},
    "texture": {o["id"] for o in TEXTURE_OPTIONS},
}

FREE_FORM_SUGGESTIONS = {
    "protocols": PROTOCOL_OPTIONS,
    "allergies": ALLERGY_OPTIONS,
}

# Question copy per step id
QUESTIONS = {
    "welcome": {
        "title": "Let's find something that feels just right for you today",
        "subtitle": "No more staring into the fridge feeling uninspired.",
    },
    "camera": {
        "title": "Snap a photo of your fridge",
        "subtitle": "We'll spot ingredients while you answer a few questions",
    },
    "mood": {"title": "How are you feeling right now?", "subtitle": "Choose all that apply"},
    "flavor": {"title": "What sounds good?", "subtitle": "Choose all that apply"},
    "temperature": {"title": "What temperature do you want it to be?", "subtitle": "Choose all that apply"},
    "texture": {"title": "What texture are you craving?", "subtitle": "Choose all that apply"},
    "protocols": {
        "title": "Which nutritional protocols should be accounted for?",
        "subtitle": "Check all that apply",
    },
    "allergies": {"title": "Any allergies or intolerances?", "subtitle": "Check all that apply"},
    "ingredients": {
        "title": "What ingredients do you have on hand?",
        "subtitle": "Optional - e.g., avocados, leftover chicken, sweet potatoes...",
    },
}


# =============================================================================
# Validation
# =============================================================================

def normalize_selection(field_name: str, value: str) -> str:
    """
    Validate a value about to be toggled on a multi-select field.

    Returns the cleaned value. Raises ValueError for blank values or
    unknown tags on closed fields.
    """
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError(f"Empty value for {field_name}")

    if field_name in ENUM_FIELDS:
        if cleaned not in ENUM_FIELDS[field_name]:
            raise ValueError(f"Unknown {field_name} option: {cleaned}")
        return cleaned

    if field_name in FREE_FORM_SUGGESTIONS:
        if cleaned not in FREE_FORM_SUGGESTIONS[field_name]:
            logger.info(f"Custom {field_name} value (accepted): {cleaned}")
        return cleaned

    raise ValueError(f"Not a multi-select field: {field_name}")


def get_form_options() -> dict:
    """
    Get every option list and question text for rendering the wizard.
    """
    return {
        "mood": MOOD_OPTIONS,
        "flavor": FLAVOR_OPTIONS,
        "temperature": TEMPERATURE_OPTIONS,
        "texture": TEXTURE_OPTIONS,
        "protocols": PROTOCOL_OPTIONS,
        "allergies": ALLERGY_OPTIONS,
        "questions": QUESTIONS,
    }
