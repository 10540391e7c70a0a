"""
Collaborator interfaces.

The wizard talks to two outside services: a recommender and a fridge
scanner. Implementations live elsewhere (HTTP clients in client.py,
in-process LLM services in mealvibe.services).
"""

from abc import ABC, abstractmethod

from .models import RecommendationRequest, ScanResult, SuggestionSet


class RecommendationError(Exception):
    """Any failure to obtain a valid SuggestionSet (transport, status, body)."""


class Recommender(ABC):
    """Produces three suggestions for a compiled request."""

    @abstractmethod
    async def recommend(self, request: RecommendationRequest) -> SuggestionSet:
        """Return suggestions or raise RecommendationError."""


class FridgeScanner(ABC):
    """Detects ingredients in a fridge photo."""

    @abstractmethod
    async def scan(self, image: str) -> ScanResult:
        """
        Scan a base64-encoded JPEG.

        Implementations should report failure through ScanResult.success;
        the merge resolver also tolerates exceptions.
        """
