"""
Wizard Session.

One WizardSession per user session. It owns the answers, the step pointer,
the scan resolver and the current suggestions, and is passed around
explicitly instead of living in module globals.
"""

import logging
import secrets
from datetime import datetime, timezone

from .answers import AnswerRecord
from .collaborators import FridgeScanner, RecommendationError, Recommender
from .compiler import compile_request
from .fallback import select_fallback
from .forms import normalize_selection
from .ingredients import IngredientMergeResolver
from .models import RequestType, SuggestionSet
from .profile import UserProfile, seed_answers
from .steps import Step, StepOutcome, StepSequencer, StepTransitionError

logger = logging.getLogger(__name__)

GENERATION_ERROR = "Unable to generate recommendations. Please try again."

DEFAULT_SCAN_WAIT_SECONDS = 10.0


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WizardSession:
    """
    State and transitions for one pass through the wizard.

    Async methods are the ones that may talk to collaborators: advance()
    on the last question, skip_camera() (same), capture_photo() and
    show_more().
    """

    def __init__(
        self,
        recommender: Recommender,
        scanner: FridgeScanner | None = None,
        profile: UserProfile | None = None,
        include_camera: bool = True,
        scan_wait_timeout: float = DEFAULT_SCAN_WAIT_SECONDS,
        session_id: str | None = None,
    ):
        self.session_id = session_id or secrets.token_urlsafe(16)
        self.recommender = recommender
        self.scan_wait_timeout = scan_wait_timeout
        self.profile = profile

        self.answers = AnswerRecord()
        self.sequencer = StepSequencer(include_camera=include_camera and scanner is not None)
        self.resolver = IngredientMergeResolver(self.answers, scanner)

        self.suggestions: SuggestionSet | None = None
        self.error: str | None = None
        self.loading = False

        # Bumped by restart(); a generation started under an older value is stale
        self._generation = 0
        self.last_active_at = _utc_now()

        seed_answers(self.answers, self.profile)

    @property
    def current_step(self) -> Step:
        return self.sequencer.current

    def touch(self) -> None:
        """Mark the session as used now."""
        self.last_active_at = _utc_now()

    def idle_hours(self) -> float:
        return (_utc_now() - self.last_active_at).total_seconds() / 3600

    # -------------------------------------------------------------------------
    # Answers
    # -------------------------------------------------------------------------

    def toggle(self, field_name: str, value: str) -> bool:
        """Toggle a multi-select answer. Returns True if now selected."""
        return self.answers.toggle(field_name, normalize_selection(field_name, value))

    def set_text(self, field_name: str, value: str) -> None:
        self.answers.set_text(field_name, value)

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    async def advance(self) -> Step:
        """
        Go to the next step, or generate recommendations after the last one.

        A blocked advance (empty required selection, request in flight)
        leaves everything unchanged.
        """
        outcome = self.sequencer.advance(self.answers)
        if outcome is StepOutcome.BLOCKED:
            logger.debug(f"Advance blocked on {self.current_step.value}")
        elif outcome is StepOutcome.GENERATE:
            await self._generate("initial")
        return self.current_step

    def retreat(self) -> Step:
        self.sequencer.retreat()
        return self.current_step

    async def skip_camera(self) -> Step:
        """Skip the photo; the merge never waits for a scan afterwards."""
        outcome = self.sequencer.skip(self.answers)
        self.resolver.bypass()
        if outcome is StepOutcome.GENERATE:
            await self._generate("initial")
        return self.current_step

    async def capture_photo(self, image: str) -> Step:
        """
        Start a fridge scan in the background.

        On the camera step this also advances right away; elsewhere it
        only rescans.
        """
        if self.sequencer.is_complete:
            raise StepTransitionError("Cannot capture a photo after recommendations")
        self.resolver.capture(image)
        if self.current_step == Step.CAMERA:
            await self.advance()
        return self.current_step

    async def show_more(self) -> SuggestionSet | None:
        """Ask for three new suggestions, keeping the current message."""
        if not self.sequencer.is_complete:
            raise StepTransitionError("More suggestions are only available on recommendations")
        if self.loading:
            return self.suggestions
        await self._generate("more")
        return self.suggestions

    def sign_in(self, profile: UserProfile | None) -> None:
        """Retain a profile and start over seeded from it."""
        self.profile = profile
        self.restart()

    def restart(self) -> None:
        """
        Back to welcome with fresh answers, re-seeded from the profile.

        A generation still awaiting the recommender is orphaned: its result
        is dropped when it returns.
        """
        self._generation += 1
        self.resolver.reset()
        self.sequencer.reset()
        self.answers.clear()
        seed_answers(self.answers, self.profile)
        self.suggestions = None
        self.error = None
        self.loading = False

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    async def _generate(self, request_type: RequestType) -> None:
        generation = self._generation
        self.loading = True
        self.error = None
        try:
            await self.resolver.wait(self.scan_wait_timeout)
            if generation != self._generation:
                return
            request = compile_request(self.answers, request_type)

            result: SuggestionSet | None = None
            try:
                result = await self.recommender.recommend(request)
            except RecommendationError as e:
                logger.warning(f"Recommendation call failed ({request_type}), using fallback: {e}")
            except Exception as e:
                logger.error(f"Recommender raised unexpectedly ({request_type}), using fallback: {e}")

            if generation != self._generation:
                logger.info(f"Session restarted during {request_type} request, dropping result")
                return

            if result is None:
                self.error = GENERATION_ERROR
                self.suggestions = select_fallback(self.answers.protocols, self.answers.mood)
            elif request_type == "more" and self.suggestions is not None:
                self.suggestions = SuggestionSet(
                    message=self.suggestions.message,
                    suggestions=result.suggestions,
                )
            else:
                self.suggestions = result

            if request_type == "initial":
                self.sequencer.complete()
        finally:
            if generation == self._generation:
                self.loading = False
                if self.sequencer.generating:
                    self.sequencer.abort_generation()

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def snapshot(self) -> dict:
        """Everything a renderer needs to draw the current step."""
        index, total = self.sequencer.position()
        return {
            "session_id": self.session_id,
            "step": self.current_step.value,
            "steps": [s.value for s in self.sequencer.steps],
            "position": index,
            "total_steps": total,
            "can_advance": self.sequencer.can_advance(self.answers),
            "camera_skipped": self.sequencer.camera_skipped,
            "scanning": self.resolver.scanning,
            "loading": self.loading,
            "answers": self.answers.to_dict(),
            "suggestions": self.suggestions.model_dump() if self.suggestions else None,
            "error": self.error,
            "profile": self.profile.to_wire() if self.profile else None,
        }
