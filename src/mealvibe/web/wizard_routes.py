"""
Wizard session endpoints.

Drives an intake WizardSession over HTTP for thin clients that don't want
to run the step logic themselves. Sessions live in memory, keyed by a
random session id.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from intake.collaborators import FridgeScanner, Recommender
from intake.forms import get_form_options
from intake.profile import UserProfile
from intake.session import WizardSession
from intake.steps import StepTransitionError
from mealvibe.config import settings
from mealvibe.web.dependencies import get_recommender, get_scanner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wizard", tags=["wizard"])

# In-memory session store (keyed by session_id)
wizard_sessions: dict[str, WizardSession] = {}


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    profile: UserProfile | None = None
    include_camera: bool | None = None


class ToggleRequest(BaseModel):
    field: str
    value: str


class TextRequest(BaseModel):
    field: str
    value: str = ""


class PhotoRequest(BaseModel):
    image: str = Field(min_length=1)


class SignInRequest(BaseModel):
    profile: UserProfile | None = None


# =============================================================================
# Helpers
# =============================================================================

def is_session_expired(session: WizardSession) -> bool:
    """Check if a session has been idle longer than session_expire_hours."""
    return session.idle_hours() > settings.session_expire_hours


def _drop_session(session_id: str) -> None:
    session = wizard_sessions.pop(session_id, None)
    if session is not None:
        session.resolver.reset()


def evict_expired_sessions() -> int:
    """Drop idle sessions. Returns how many were removed."""
    expired = [sid for sid, s in wizard_sessions.items() if is_session_expired(s)]
    for sid in expired:
        _drop_session(sid)
    if expired:
        logger.info(f"Evicted {len(expired)} expired wizard session(s)")
    return len(expired)


def get_wizard_session(session_id: str) -> WizardSession:
    session = wizard_sessions.get(session_id)
    if session is not None and is_session_expired(session):
        logger.info(f"Wizard session {session_id} expired")
        _drop_session(session_id)
        session = None
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    session.touch()
    return session


def _bad_request(e: Exception) -> HTTPException:
    return HTTPException(status_code=400, detail=str(e))


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/options")
async def wizard_options() -> dict[str, Any]:
    """Option lists and question copy for every step."""
    return get_form_options()


@router.post("/sessions")
async def create_session(
    request: CreateSessionRequest,
    recommender: Recommender = Depends(get_recommender),
    scanner: FridgeScanner = Depends(get_scanner),
) -> dict[str, Any]:
    """Start a session, seeded from the profile if one is given."""
    evict_expired_sessions()
    include_camera = settings.include_camera_step if request.include_camera is None else request.include_camera
    session = WizardSession(
        recommender=recommender,
        scanner=scanner,
        profile=request.profile,
        include_camera=include_camera,
        scan_wait_timeout=settings.scan_wait_timeout_seconds,
    )
    wizard_sessions[session.session_id] = session
    logger.info(f"Wizard session {session.session_id} started (profile={'yes' if request.profile else 'guest'})")
    return session.snapshot()


@router.get("/sessions/{session_id}")
async def get_session(session_id: str) -> dict[str, Any]:
    return get_wizard_session(session_id).snapshot()


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str) -> dict[str, Any]:
    get_wizard_session(session_id)
    _drop_session(session_id)
    return {"success": True}


@router.post("/sessions/{session_id}/toggle")
async def toggle_answer(session_id: str, request: ToggleRequest) -> dict[str, Any]:
    session = get_wizard_session(session_id)
    try:
        session.toggle(request.field, request.value)
    except ValueError as e:
        raise _bad_request(e)
    return session.snapshot()


@router.post("/sessions/{session_id}/text")
async def set_text(session_id: str, request: TextRequest) -> dict[str, Any]:
    session = get_wizard_session(session_id)
    try:
        session.set_text(request.field, request.value)
    except ValueError as e:
        raise _bad_request(e)
    return session.snapshot()


@router.post("/sessions/{session_id}/advance")
async def advance(session_id: str) -> dict[str, Any]:
    """Next step; runs generation after the last question."""
    session = get_wizard_session(session_id)
    await session.advance()
    return session.snapshot()


@router.post("/sessions/{session_id}/retreat")
async def retreat(session_id: str) -> dict[str, Any]:
    session = get_wizard_session(session_id)
    session.retreat()
    return session.snapshot()


@router.post("/sessions/{session_id}/skip")
async def skip_camera(session_id: str) -> dict[str, Any]:
    session = get_wizard_session(session_id)
    try:
        await session.skip_camera()
    except StepTransitionError as e:
        raise _bad_request(e)
    return session.snapshot()


@router.post("/sessions/{session_id}/photo")
async def capture_photo(session_id: str, request: PhotoRequest) -> dict[str, Any]:
    """Start a background fridge scan; the answer comes back before it finishes."""
    session = get_wizard_session(session_id)
    try:
        await session.capture_photo(request.image)
    except StepTransitionError as e:
        raise _bad_request(e)
    return session.snapshot()


@router.post("/sessions/{session_id}/more")
async def show_more(session_id: str) -> dict[str, Any]:
    session = get_wizard_session(session_id)
    try:
        await session.show_more()
    except StepTransitionError as e:
        raise _bad_request(e)
    return session.snapshot()


@router.post("/sessions/{session_id}/restart")
async def restart(session_id: str) -> dict[str, Any]:
    session = get_wizard_session(session_id)
    session.restart()
    return session.snapshot()


@router.post("/sessions/{session_id}/sign-in")
async def sign_in(session_id: str, request: SignInRequest) -> dict[str, Any]:
    """Attach (or drop) a profile and start over seeded from it."""
    session = get_wizard_session(session_id)
    session.sign_in(request.profile)
    return session.snapshot()
