"""Prompt text for the LLM calls."""

from .recommendations import PROTEIN_INSTRUCTIONS, RECOMMENDATION_PROMPT
from .fridge_scan import FRIDGE_SCAN_PROMPT, UNIDENTIFIED_SENTINEL

__all__ = [
    "PROTEIN_INSTRUCTIONS",
    "RECOMMENDATION_PROMPT",
    "FRIDGE_SCAN_PROMPT",
    "UNIDENTIFIED_SENTINEL",
]
