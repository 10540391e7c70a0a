"""
Fridge-scan service.

Sends a fridge photo to the vision model and returns the ingredient list
it sees. Never raises: failures come back as success=False.
"""

import logging

from intake.collaborators import FridgeScanner
from intake.models import ScanResult
from mealvibe.config import settings
from mealvibe.llm.client import call_llm_text
from mealvibe.prompts.fridge_scan import FRIDGE_SCAN_PROMPT, UNIDENTIFIED_SENTINEL

logger = logging.getLogger(__name__)

SCAN_FAILED_MESSAGE = "Unable to scan ingredients from photo. Please add them manually."


def build_scan_messages(image: str) -> list[dict]:
    """Vision message with the prompt and a base64 JPEG data URL."""
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": FRIDGE_SCAN_PROMPT},
                {
                    "type": "image_url",
                    "image_url": {
                        "url": f"data:image/jpeg;base64,{image}",
                        "detail": "low",
                    },
                },
            ],
        }
    ]


class LLMFridgeScanner(FridgeScanner):
    """In-process scanner that calls the OpenAI vision model."""

    async def scan(self, image: str) -> ScanResult:
        try:
            text = await call_llm_text(
                name="fridge_scan",
                messages=build_scan_messages(image),
                model=settings.vision_model,
                max_tokens=settings.vision_max_tokens,
                temperature=settings.vision_temperature,
            )
        except Exception as e:
            logger.error(f"Fridge scanning error: {e}")
            return ScanResult(ingredients=SCAN_FAILED_MESSAGE, success=False)

        text = text.strip().strip('"').strip()
        if not text or text.startswith(UNIDENTIFIED_SENTINEL.rstrip(".")):
            logger.info("Vision model could not identify ingredients")
            return ScanResult(ingredients=SCAN_FAILED_MESSAGE, success=False)

        return ScanResult(ingredients=text, success=True)


async def scan_fridge(image: str, scanner: FridgeScanner | None = None) -> ScanResult:
    """Handle a fridge-scan request."""
    scanner = scanner or LLMFridgeScanner()
    return await scanner.scan(image)
