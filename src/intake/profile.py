"""
Session/Profile Adapter.

Maps a signed-in user's saved diet and allergies onto a fresh AnswerRecord.
Runs once at session start (and again on restart); later edits to the
answers never flow back into the profile.
"""

from pydantic import BaseModel, ConfigDict, Field

from .answers import NO_DIET, AnswerRecord


class UserProfile(BaseModel):
    """Profile returned by the auth service. Never carries a password."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str | None = None
    email: str | None = None
    # null on the wire means no saved diet / allergies
    saved_diet: str | None = Field(default=NO_DIET, alias="savedDiet")
    saved_allergies: list[str] | None = Field(default_factory=list, alias="savedAllergies")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


def seed_answers(answers: AnswerRecord, profile: UserProfile | None) -> AnswerRecord:
    """
    Seed protocols and allergies from a saved profile.

    A guest (no profile) seeds nothing. The "None" diet sentinel seeds no
    protocol.
    """
    if profile is None:
        return answers

    diet = (profile.saved_diet or "").strip()
    if diet and diet != NO_DIET:
        answers.protocols[:] = [diet]

    allergies: list[str] = []
    for allergy in profile.saved_allergies or []:
        if allergy not in allergies:
            allergies.append(allergy)
    answers.allergies[:] = allergies
    return answers
