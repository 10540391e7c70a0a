"""
Auth/profile service.

Two backends behind one interface:
- mock: no storage, canned profiles (demo deployments)
- supabase: `profiles` table with bcrypt password hashes

Either way the caller gets a UserProfile; passwords and hashes never leave
this module.
"""

import logging
import secrets
from abc import ABC, abstractmethod

import bcrypt
from pydantic import BaseModel

from intake.answers import NO_DIET
from intake.profile import UserProfile
from mealvibe.config import settings

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"

AUTH_ACTIONS = ("signup", "signin", "complete-setup")


class AuthError(Exception):
    """Authentication failure with the HTTP status it maps to."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthRequest(BaseModel):
    """Body of POST /api/auth."""
    action: str  # One of AUTH_ACTIONS
    name: str | None = None
    email: str | None = None
    password: str | None = None
    diet: str | None = None
    allergies: list[str] | None = None


def _require(request: AuthRequest, *fields: str) -> None:
    missing = [f for f in fields if not (getattr(request, f) or "").strip()]
    if missing:
        raise AuthError(f"Missing required fields: {', '.join(missing)}", status_code=400)


def _new_user_id() -> str:
    return secrets.token_hex(8)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


# =============================================================================
# Backends
# =============================================================================

class AuthBackend(ABC):
    """Sign users up/in and store their saved diet and allergies."""

    @abstractmethod
    async def signup(self, request: AuthRequest) -> UserProfile: ...

    @abstractmethod
    async def signin(self, request: AuthRequest) -> UserProfile: ...

    @abstractmethod
    async def complete_setup(self, request: AuthRequest) -> UserProfile: ...


class MockAuthBackend(AuthBackend):
    """
    Stateless demo backend.

    Sign-in always succeeds and returns a demo user with saved preferences.
    """

    DEMO_DIET = "Vegetarian"
    DEMO_ALLERGIES = ["Tree nuts", "Dairy"]

    async def signup(self, request: AuthRequest) -> UserProfile:
        _require(request, "name", "email", "password")
        return UserProfile(
            id=_new_user_id(),
            name=request.name,
            email=request.email,
            saved_diet=NO_DIET,
            saved_allergies=[],
        )

    async def signin(self, request: AuthRequest) -> UserProfile:
        _require(request, "email", "password")
        return UserProfile(
            id=_new_user_id(),
            name=request.name or request.email.split("@")[0],
            email=request.email,
            saved_diet=self.DEMO_DIET,
            saved_allergies=list(self.DEMO_ALLERGIES),
        )

    async def complete_setup(self, request: AuthRequest) -> UserProfile:
        _require(request, "email")
        return UserProfile(
            id=_new_user_id(),
            name=request.name or request.email.split("@")[0],
            email=request.email,
            saved_diet=request.diet or NO_DIET,
            saved_allergies=request.allergies or [],
        )


class SupabaseAuthBackend(AuthBackend):
    """Profiles persisted in the Supabase `profiles` table."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            from mealvibe.db.client import get_service_client
            self._client = get_service_client()
        return self._client

    @staticmethod
    def _to_profile(row: dict) -> UserProfile:
        return UserProfile(
            id=str(row["id"]),
            name=row.get("name"),
            email=row.get("email"),
            saved_diet=row.get("saved_diet") or NO_DIET,
            saved_allergies=row.get("saved_allergies") or [],
        )

    def _find_by_email(self, email: str) -> dict | None:
        result = (
            self.client.table(PROFILES_TABLE)
            .select("*")
            .eq("email", email)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    def _verify(self, request: AuthRequest) -> dict:
        """Fetch the row for these credentials or raise 401."""
        row = self._find_by_email(_normalize_email(request.email))
        if not row or not row.get("password_hash"):
            raise AuthError("Invalid email or password", status_code=401)
        if not bcrypt.checkpw(request.password.encode(), row["password_hash"].encode()):
            raise AuthError("Invalid email or password", status_code=401)
        return row

    async def signup(self, request: AuthRequest) -> UserProfile:
        _require(request, "name", "email", "password")
        email = _normalize_email(request.email)

        if self._find_by_email(email):
            raise AuthError("An account with this email already exists", status_code=409)

        password_hash = bcrypt.hashpw(request.password.encode(), bcrypt.gensalt()).decode()
        result = self.client.table(PROFILES_TABLE).insert({
            "id": _new_user_id(),
            "name": request.name.strip(),
            "email": email,
            "password_hash": password_hash,
            "saved_diet": request.diet or NO_DIET,
            "saved_allergies": request.allergies or [],
        }).execute()

        logger.info(f"Created profile for {email}")
        return self._to_profile(result.data[0])

    async def signin(self, request: AuthRequest) -> UserProfile:
        _require(request, "email", "password")
        return self._to_profile(self._verify(request))

    async def complete_setup(self, request: AuthRequest) -> UserProfile:
        _require(request, "email", "password")
        row = self._verify(request)

        updates = {}
        if request.diet is not None:
            updates["saved_diet"] = request.diet or NO_DIET
        if request.allergies is not None:
            updates["saved_allergies"] = request.allergies
        if not updates:
            return self._to_profile(row)

        result = (
            self.client.table(PROFILES_TABLE)
            .update(updates)
            .eq("id", row["id"])
            .execute()
        )
        return self._to_profile(result.data[0] if result.data else {**row, **updates})


def get_auth_backend() -> AuthBackend:
    """Backend selected by settings.auth_backend."""
    if settings.auth_backend == "supabase":
        return SupabaseAuthBackend()
    return MockAuthBackend()


async def authenticate(request: AuthRequest, backend: AuthBackend | None = None) -> UserProfile:
    """Dispatch an auth request to the configured backend."""
    backend = backend or get_auth_backend()

    if request.action == "signup":
        return await backend.signup(request)
    if request.action == "signin":
        return await backend.signin(request)
    if request.action == "complete-setup":
        return await backend.complete_setup(request)
    raise AuthError(f"Unknown action: {request.action}", status_code=400)
