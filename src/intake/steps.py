"""
Step Sequencer.

A named-state machine over the wizard steps. Forward and backward edges are
explicit tables built once per session, so every legal move can be looked
up and everything else is rejected.

The sequencer never calls anything asynchronous. Advancing off the last
question returns GENERATE; the owner runs generation and then calls
complete() (or abort_generation() if it gave up).
"""

from enum import Enum

from .answers import AnswerRecord


class Step(Enum):
    """Wizard steps, in presentation order."""
    WELCOME = "welcome"
    CAMERA = "camera"                    # Optional: fridge photo
    MOOD = "mood"
    FLAVOR = "flavor"
    TEMPERATURE = "temperature"
    TEXTURE = "texture"
    PROTOCOLS = "protocols"
    ALLERGIES = "allergies"
    INGREDIENTS = "ingredients"
    RECOMMENDATIONS = "recommendations"  # Terminal


class StepOutcome(Enum):
    """Result of an advance/skip attempt."""
    MOVED = "moved"          # Pointer moved to the next step
    BLOCKED = "blocked"      # Precondition failed, nothing changed
    GENERATE = "generate"    # Last question answered, run generation


class StepTransitionError(Exception):
    """Raised for a transition the current step does not allow."""


# Steps that need at least one selection before advancing
GATED_STEPS = {
    Step.MOOD: "mood",
    Step.FLAVOR: "flavor",
    Step.TEMPERATURE: "temperature",
    Step.TEXTURE: "texture",
    Step.PROTOCOLS: "protocols",
}

QUESTION_STEPS = (
    Step.MOOD,
    Step.FLAVOR,
    Step.TEMPERATURE,
    Step.TEXTURE,
    Step.PROTOCOLS,
    Step.ALLERGIES,
    Step.INGREDIENTS,
)


def build_step_order(include_camera: bool = True) -> tuple[Step, ...]:
    """Non-terminal steps for a session."""
    head = (Step.WELCOME, Step.CAMERA) if include_camera else (Step.WELCOME,)
    return head + QUESTION_STEPS


class StepSequencer:
    """
    Pointer into the wizard steps.

    The terminal RECOMMENDATIONS step has no forward edge into it; it is
    reached only through GENERATE followed by complete().
    """

    def __init__(self, include_camera: bool = True):
        self.include_camera = include_camera
        self.steps = build_step_order(include_camera)
        self.forward: dict[Step, Step] = {
            a: b for a, b in zip(self.steps, self.steps[1:])
        }
        self.backward: dict[Step, Step] = {b: a for a, b in self.forward.items()}
        self.current = self.steps[0]
        self.camera_skipped = False
        self.generating = False

    @property
    def last_question(self) -> Step:
        return self.steps[-1]

    @property
    def is_complete(self) -> bool:
        return self.current == Step.RECOMMENDATIONS

    def can_advance(self, answers: AnswerRecord) -> bool:
        """Check the selection gate and the in-flight guard."""
        if self.is_complete or self.generating:
            return False
        field_name = GATED_STEPS.get(self.current)
        if field_name is None:
            return True
        return bool(answers.selected(field_name))

    def advance(self, answers: AnswerRecord) -> StepOutcome:
        """
        Move forward one step.

        On the last question this starts generation instead of moving.
        """
        if not self.can_advance(answers):
            return StepOutcome.BLOCKED

        if self.current == self.last_question:
            self.generating = True
            return StepOutcome.GENERATE

        self.current = self.forward[self.current]
        return StepOutcome.MOVED

    def skip(self, answers: AnswerRecord) -> StepOutcome:
        """Bypass the camera step."""
        if self.current != Step.CAMERA:
            raise StepTransitionError(f"Cannot skip step {self.current.value}")
        self.camera_skipped = True
        return self.advance(answers)

    def retreat(self) -> bool:
        """
        Move back one step.

        Returns False (and does nothing) on the first step, on the terminal
        step, or while generation is running.
        """
        if self.generating or self.is_complete:
            return False
        previous = self.backward.get(self.current)
        if previous is None:
            return False
        self.current = previous
        return True

    def complete(self) -> None:
        """Finish generation and enter the terminal step."""
        if not self.generating:
            raise StepTransitionError("No generation in progress")
        self.generating = False
        self.current = Step.RECOMMENDATIONS

    def abort_generation(self) -> None:
        """Drop the in-flight flag without moving."""
        self.generating = False

    def reset(self) -> None:
        self.current = self.steps[0]
        self.camera_skipped = False
        self.generating = False

    def position(self) -> tuple[int, int]:
        """(1-based index, total) of the current question for progress display."""
        if self.is_complete:
            return len(self.steps), len(self.steps)
        return self.steps.index(self.current) + 1, len(self.steps)
