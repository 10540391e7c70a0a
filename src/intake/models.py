"""
Wire models shared by the wizard and the services behind it.

Field names on the wire are camelCase (userInputs, otherAllergy, requestType)
to stay compatible with existing frontends; Python code uses snake_case.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RequestType = Literal["initial", "more"]


class Suggestion(BaseModel):
    """One meal idea."""
    title: str
    prep: str
    vibe: str


class SuggestionSet(BaseModel):
    """A short message plus exactly three suggestions."""
    message: str
    suggestions: list[Suggestion] = Field(min_length=3, max_length=3)


class UserInputs(BaseModel):
    """Answers as sent to the recommendation service."""

    model_config = ConfigDict(populate_by_name=True)

    mood: list[str] = Field(default_factory=list)
    flavor: list[str] = Field(default_factory=list)
    temperature: list[str] = Field(default_factory=list)
    texture: list[str] = Field(default_factory=list)
    protocols: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    other_allergy: str = Field(default="", alias="otherAllergy")
    ingredients: str = ""


class RecommendationRequest(BaseModel):
    """Payload for POST /recommendations."""

    model_config = ConfigDict(populate_by_name=True)

    user_inputs: UserInputs = Field(alias="userInputs")
    request_type: RequestType = Field(default="initial", alias="requestType")
    # Optional: servers derive it from protocols when absent
    protein_directive: str | None = Field(default=None, alias="proteinDirective")

    def to_wire(self) -> dict:
        """Serialize with camelCase keys."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ScanResult(BaseModel):
    """Fridge-scan response."""
    ingredients: str = ""
    success: bool = False
