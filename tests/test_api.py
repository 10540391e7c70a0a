"""
API tests using FastAPI's TestClient.

Collaborators are swapped through app.dependency_overrides so no OpenAI or
Supabase calls are made.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from intake.collaborators import RecommendationError
from mealvibe.config import settings
from mealvibe.services.auth import MockAuthBackend
from mealvibe.web.app import app
from mealvibe.web.dependencies import get_auth, get_recommender, get_scanner
from mealvibe.web.wizard_routes import wizard_sessions

from conftest import StubRecommender, StubScanner, make_suggestion_set

USER_INPUTS = {
    "mood": ["tired"],
    "flavor": ["warm"],
    "temperature": ["hot"],
    "texture": ["soft"],
    "protocols": ["Vegetarian"],
    "allergies": [],
    "otherAllergy": "",
    "ingredients": "eggs",
}


@pytest.fixture
def stub_recommender():
    return StubRecommender()


@pytest.fixture
def client(stub_recommender):
    app.dependency_overrides[get_recommender] = lambda: stub_recommender
    app.dependency_overrides[get_scanner] = lambda: StubScanner()
    app.dependency_overrides[get_auth] = MockAuthBackend
    yield TestClient(app)
    app.dependency_overrides.clear()
    wizard_sessions.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestServiceEndpoints:

    def test_recommendations(self, client, stub_recommender):
        response = client.post("/api/recommendations", json={"userInputs": USER_INPUTS, "requestType": "initial"})
        assert response.status_code == 200
        assert response.json() == make_suggestion_set().model_dump()
        assert stub_recommender.requests[0].user_inputs.ingredients == "eggs"

    def test_recommendations_requires_inputs(self, client):
        response = client.post("/api/recommendations", json={"requestType": "initial"})
        assert response.status_code == 400
        assert response.json()["detail"] == "User inputs are required"

    def test_recommendations_fallback(self, client, stub_recommender):
        stub_recommender.results = [RecommendationError("503")]
        response = client.post("/api/recommendations", json={"userInputs": USER_INPUTS})
        assert response.status_code == 200
        assert response.json()["suggestions"][0]["title"] == "Veggie Scrambled Eggs"

    def test_scan_fridge(self, client):
        response = client.post("/api/scan-fridge", json={"image": "abc"})
        assert response.json() == {"ingredients": "eggs, milk", "success": True}

    def test_scan_fridge_requires_image(self, client):
        response = client.post("/api/scan-fridge", json={})
        assert response.status_code == 400

    def test_auth_signin(self, client):
        response = client.post("/api/auth", json={"action": "signin", "email": "sam@example.com", "password": "pw"})
        assert response.status_code == 200
        body = response.json()
        assert body["savedDiet"] == "Vegetarian"
        assert "password" not in body

    def test_auth_unknown_action(self, client):
        response = client.post("/api/auth", json={"action": "reset"})
        assert response.status_code == 400


class TestWizardEndpoints:

    def _create(self, client, **body) -> dict:
        response = client.post("/api/wizard/sessions", json={"include_camera": False, **body})
        assert response.status_code == 200
        return response.json()

    def test_full_flow(self, client, stub_recommender):
        session = self._create(client)
        sid = session["session_id"]
        assert session["step"] == "welcome"
        assert "camera" not in session["steps"]

        client.post(f"/api/wizard/sessions/{sid}/advance")
        for field, value in [("mood", "tired"), ("flavor", "warm"), ("temperature", "hot"), ("texture", "soft"), ("protocols", "Vegan")]:
            snapshot = client.post(f"/api/wizard/sessions/{sid}/toggle", json={"field": field, "value": value}).json()
            assert snapshot["step"] == field
            client.post(f"/api/wizard/sessions/{sid}/advance")

        client.post(f"/api/wizard/sessions/{sid}/advance")  # allergies
        client.post(f"/api/wizard/sessions/{sid}/text", json={"field": "ingredients", "value": "tofu"})
        snapshot = client.post(f"/api/wizard/sessions/{sid}/advance").json()

        assert snapshot["step"] == "recommendations"
        assert snapshot["suggestions"]["suggestions"][0]["title"] == "Idea 1"
        assert stub_recommender.requests[0].protein_directive == "plant"

        snapshot = client.post(f"/api/wizard/sessions/{sid}/more").json()
        assert stub_recommender.requests[-1].request_type == "more"

        snapshot = client.post(f"/api/wizard/sessions/{sid}/restart").json()
        assert snapshot["step"] == "welcome"
        assert snapshot["answers"]["mood"] == []

    def test_gated_advance(self, client):
        sid = self._create(client)["session_id"]
        client.post(f"/api/wizard/sessions/{sid}/advance")
        snapshot = client.post(f"/api/wizard/sessions/{sid}/advance").json()
        assert snapshot["step"] == "mood"
        assert snapshot["can_advance"] is False

    def test_profile_seeding(self, client):
        session = self._create(client, profile={"id": "u1", "savedDiet": "Vegan", "savedAllergies": ["Soy"]})
        assert session["answers"]["protocols"] == ["Vegan"]
        assert session["answers"]["allergies"] == ["Soy"]

    def test_bad_toggle(self, client):
        sid = self._create(client)["session_id"]
        response = client.post(f"/api/wizard/sessions/{sid}/toggle", json={"field": "mood", "value": "furious"})
        assert response.status_code == 400

    def test_more_before_recommendations(self, client):
        sid = self._create(client)["session_id"]
        assert client.post(f"/api/wizard/sessions/{sid}/more").status_code == 400

    def test_skip_without_camera(self, client):
        sid = self._create(client)["session_id"]
        assert client.post(f"/api/wizard/sessions/{sid}/skip").status_code == 400

    def test_unknown_session(self, client):
        assert client.get("/api/wizard/sessions/nope").status_code == 404

    def test_delete_session(self, client):
        sid = self._create(client)["session_id"]
        assert client.delete(f"/api/wizard/sessions/{sid}").json() == {"success": True}
        assert client.get(f"/api/wizard/sessions/{sid}").status_code == 404

    def test_options(self, client):
        options = client.get("/api/wizard/options").json()
        assert "mood" in options
        assert "Vegan" in options["protocols"]

    def test_idle_session_expires(self, client):
        sid = self._create(client)["session_id"]
        wizard_sessions[sid].last_active_at -= timedelta(hours=settings.session_expire_hours + 1)

        assert client.get(f"/api/wizard/sessions/{sid}").status_code == 404
        assert sid not in wizard_sessions

    def test_create_evicts_idle_sessions(self, client):
        idle = self._create(client)["session_id"]
        active = self._create(client)["session_id"]
        wizard_sessions[idle].last_active_at -= timedelta(hours=settings.session_expire_hours + 1)

        self._create(client)
        assert idle not in wizard_sessions
        assert active in wizard_sessions

    def test_use_refreshes_activity(self, client):
        sid = self._create(client)["session_id"]
        wizard_sessions[sid].last_active_at -= timedelta(hours=settings.session_expire_hours - 1)

        assert client.get(f"/api/wizard/sessions/{sid}").status_code == 200
        assert wizard_sessions[sid].idle_hours() < 1

    def test_null_profile_fields(self, client):
        session = self._create(client, profile={"id": "u1", "savedDiet": None, "savedAllergies": None})
        assert session["answers"]["protocols"] == []
        assert session["answers"]["allergies"] == []
