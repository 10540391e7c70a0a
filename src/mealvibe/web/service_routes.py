"""
Service endpoints: recommendations, fridge scan, auth.

Request/response shapes match what existing frontends already send
(camelCase keys).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from intake.collaborators import FridgeScanner, Recommender
from intake.models import RecommendationRequest, RequestType, ScanResult, SuggestionSet, UserInputs
from mealvibe.services.auth import AuthBackend, AuthError, AuthRequest, authenticate
from mealvibe.services.fridge_scan import scan_fridge
from mealvibe.services.recommendations import generate_recommendations
from mealvibe.web.dependencies import get_auth, get_recommender, get_scanner

logger = logging.getLogger(__name__)

router = APIRouter(tags=["services"])


class RecommendationBody(BaseModel):
    """POST /recommendations body; userInputs checked by hand for a 400."""

    model_config = ConfigDict(populate_by_name=True)

    user_inputs: UserInputs | None = Field(default=None, alias="userInputs")
    request_type: RequestType = Field(default="initial", alias="requestType")
    protein_directive: str | None = Field(default=None, alias="proteinDirective")


class ScanBody(BaseModel):
    image: str | None = None


@router.post("/recommendations", response_model=SuggestionSet)
async def recommendations(
    body: RecommendationBody,
    recommender: Recommender = Depends(get_recommender),
) -> SuggestionSet:
    """Three meal suggestions; canned fallback if the model call fails."""
    if body.user_inputs is None:
        raise HTTPException(status_code=400, detail="User inputs are required")

    request = RecommendationRequest(
        user_inputs=body.user_inputs,
        request_type=body.request_type,
        protein_directive=body.protein_directive,
    )
    try:
        return await generate_recommendations(request, recommender)
    except Exception as e:
        logger.error(f"Recommendation handler error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/scan-fridge", response_model=ScanResult)
async def scan_fridge_photo(
    body: ScanBody,
    scanner: FridgeScanner = Depends(get_scanner),
) -> ScanResult:
    """Detect ingredients in a base64 JPEG."""
    if not body.image:
        raise HTTPException(status_code=400, detail="Image data is required")
    return await scan_fridge(body.image, scanner)


@router.post("/auth")
async def auth(request: AuthRequest, backend: AuthBackend = Depends(get_auth)) -> dict:
    """Sign up, sign in, or save diet/allergy preferences."""
    try:
        profile = await authenticate(request, backend)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Auth error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
    return profile.to_wire()
