"""
HTTP clients for the recommendation and fridge-scan services.

Every way a recommendation call can go wrong (network error, non-2xx,
body that isn't JSON or doesn't match SuggestionSet) surfaces as
RecommendationError so the session can fall back uniformly.
"""

import logging

import httpx
from pydantic import ValidationError

from .collaborators import FridgeScanner, RecommendationError, Recommender
from .models import RecommendationRequest, ScanResult, SuggestionSet

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class HttpRecommendationClient(Recommender):
    """POSTs compiled requests to {base_url}/recommendations."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def recommend(self, request: RecommendationRequest) -> SuggestionSet:
        url = f"{self.base_url}/recommendations"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, json=request.to_wire())
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise RecommendationError(f"API request failed: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise RecommendationError(f"API request failed: {e}") from e
        except ValueError as e:
            raise RecommendationError(f"Malformed response body: {e}") from e

        try:
            return SuggestionSet.model_validate(data)
        except ValidationError as e:
            raise RecommendationError(f"Unexpected response shape: {e}") from e


class HttpFridgeScanner(FridgeScanner):
    """POSTs photos to {base_url}/scan-fridge. Failures read as 'nothing found'."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def scan(self, image: str) -> ScanResult:
        url = f"{self.base_url}/scan-fridge"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, json={"image": image})
                response.raise_for_status()
                return ScanResult.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to scan fridge photo: {e}")
            return ScanResult(success=False)
