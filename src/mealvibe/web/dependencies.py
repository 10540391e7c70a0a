"""
Collaborator providers for route handlers.

Tests swap these through app.dependency_overrides.
"""

from intake.collaborators import FridgeScanner, Recommender
from mealvibe.services.auth import AuthBackend, get_auth_backend
from mealvibe.services.fridge_scan import LLMFridgeScanner
from mealvibe.services.recommendations import LLMRecommender


def get_recommender() -> Recommender:
    return LLMRecommender()


def get_scanner() -> FridgeScanner:
    return LLMFridgeScanner()


def get_auth() -> AuthBackend:
    return get_auth_backend()
