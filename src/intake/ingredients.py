"""
Ingredient Merge Resolver.

A fridge photo is scanned in the background while the user keeps answering
questions. Whatever the scan finds lands in AnswerRecord.detected_ingredients
and is merged with the typed ingredients at compile time.

Compilation waits on the in-flight scan for a bounded time (wait()), so a
scan that finishes a moment after the last question still makes it into the
request.
"""

import asyncio
import logging

from .answers import AnswerRecord
from .collaborators import FridgeScanner

logger = logging.getLogger(__name__)

INGREDIENT_SEPARATOR = ", "


def merge_ingredients(detected: str, typed: str) -> str:
    """
    Combine detected and typed ingredients: detected first, then typed.

    Either side alone is returned as-is when the other is blank.
    """
    detected = (detected or "").strip()
    typed = (typed or "").strip()
    if not detected:
        return typed
    if not typed:
        return detected
    return f"{detected}{INGREDIENT_SEPARATOR}{typed}"


class IngredientMergeResolver:
    """Runs fridge scans and owns AnswerRecord.detected_ingredients."""

    def __init__(self, answers: AnswerRecord, scanner: FridgeScanner | None = None):
        self.answers = answers
        self.scanner = scanner
        self.bypassed = False
        self._task: asyncio.Task | None = None

    @property
    def scanning(self) -> bool:
        return self._task is not None and not self._task.done()

    def capture(self, image: str) -> asyncio.Task | None:
        """
        Start scanning a photo and return without waiting.

        A scan still in flight from an earlier photo is cancelled; the
        newest photo wins. Must be called from a running event loop.
        """
        if self.scanner is None:
            logger.warning("Photo captured but no fridge scanner configured")
            return None

        if self.scanning:
            logger.info("New photo captured, cancelling previous scan")
            self._task.cancel()

        self.bypassed = False
        self._task = asyncio.create_task(self._scan(image))
        return self._task

    async def _scan(self, image: str) -> None:
        try:
            result = await self.scanner.scan(image)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Fridge scan failed: {e}")
            return

        if not result.success:
            logger.warning("Fridge scan returned no ingredients")
            return

        text = (result.ingredients or "").strip()
        if not text:
            return

        self.answers.record_detected_ingredients(text)
        logger.info(f"Detected ingredients: {text}")

    def bypass(self) -> None:
        """
        Record that the photo path was skipped.

        Drops anything an earlier photo produced, including a scan still
        in flight.
        """
        if self.scanning:
            logger.info("Photo step skipped, cancelling scan in flight")
            self._task.cancel()
        self._task = None
        self.bypassed = True
        self.answers.record_detected_ingredients("")

    async def wait(self, timeout: float) -> bool:
        """
        Wait up to `timeout` seconds for the in-flight scan.

        Returns True if no scan is pending afterwards. Never raises; a scan
        that misses the deadline keeps running in the background.
        """
        if self.bypassed or self._task is None or self._task.done():
            return True
        done, _ = await asyncio.wait({self._task}, timeout=timeout)
        if not done:
            logger.warning(f"Fridge scan still running after {timeout}s, compiling without it")
            return False
        return True

    def effective_ingredients(self) -> str:
        """The merged ingredient string handed to the compiler."""
        return merge_ingredients(self.answers.detected_ingredients, self.answers.ingredients)

    def reset(self) -> None:
        """Cancel any scan and forget the photo path state."""
        if self.scanning:
            self._task.cancel()
        self._task = None
        self.bypassed = False
        self.answers.record_detected_ingredients("")
