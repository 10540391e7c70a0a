"""
Pytest configuration and fixtures for MealVibe tests.
"""

import asyncio
import os

import pytest

# Set test environment before importing mealvibe modules
os.environ.setdefault("OPENAI_API_KEY", "test-key-not-real")
os.environ["MEALVIBE_ENV"] = "development"
os.environ["AUTH_BACKEND"] = "mock"

from intake.collaborators import FridgeScanner, RecommendationError, Recommender
from intake.models import ScanResult, Suggestion, SuggestionSet
from intake.profile import UserProfile


def make_suggestion_set(message: str = "Here are a few ideas for you.", prefix: str = "Idea") -> SuggestionSet:
    """Three distinct suggestions with predictable titles."""
    return SuggestionSet(
        message=message,
        suggestions=[
            Suggestion(title=f"{prefix} {i}", prep=f"Prep for {prefix.lower()} {i}.", vibe="Warm • Easy • Fresh")
            for i in range(1, 4)
        ],
    )


class StubRecommender(Recommender):
    """Returns queued results (or raises) and records every request."""

    def __init__(self, *results):
        self.results = list(results) or [make_suggestion_set()]
        self.requests = []

    async def recommend(self, request):
        self.requests.append(request)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


class StubScanner(FridgeScanner):
    """
    Fridge scanner whose result is released on demand.

    With gated=True, scan() blocks until `release` is set.
    """

    def __init__(self, result: ScanResult | None = None, error: Exception | None = None, gated: bool = False):
        self.result = result or ScanResult(ingredients="eggs, milk", success=True)
        self.error = error
        self.gated = gated
        self.release = asyncio.Event()
        self.images = []

    async def scan(self, image):
        self.images.append(image)
        if self.gated:
            await self.release.wait()
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def suggestions():
    return make_suggestion_set()


@pytest.fixture
def recommender():
    return StubRecommender()


@pytest.fixture
def failing_recommender():
    return StubRecommender(RecommendationError("API request failed: 503"))


@pytest.fixture
def scanner():
    return StubScanner()


@pytest.fixture
def vegetarian_profile():
    return UserProfile(
        id="user-1",
        name="Sam",
        email="sam@example.com",
        savedDiet="Vegetarian",
        savedAllergies=["Dairy"],
    )
