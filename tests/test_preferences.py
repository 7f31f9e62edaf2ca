"""Tests for reading preferences and onboarding."""

import pytest

from chameleon_docs.services.preference_service import LEVEL_BY_BACKGROUND, level_for_background

ANSWERS = {
    "tech_background": "intermediate",
    "primary_role": "Product manager",
    "learning_style": "examples",
    "experience_with_docs": "often",
    "preferred_explanation_depth": "detailed",
}


class TestLevelMapping:

    @pytest.mark.parametrize("background,level", [
        ("none", "noob"),
        ("beginner", "beginner"),
        ("intermediate", "simplified"),
        ("advanced", "standard"),
        ("expert", "technical"),
    ])
    def test_background_maps_to_level(self, background, level):
        assert level_for_background(background) == level

    def test_unknown_background_defaults_to_standard(self):
        assert level_for_background("wizard") == "standard"

    def test_every_background_covered(self):
        assert set(LEVEL_BY_BACKGROUND) == {"none", "beginner", "intermediate", "advanced", "expert"}


class TestOnboarding:

    def test_status_false_without_session(self, client):
        resp = client.get("/api/preferences/onboarding")
        assert resp.status_code == 200
        assert resp.json() == {"completed": False}

    def test_new_user_has_not_completed(self, auth_client):
        assert auth_client.get("/api/preferences/onboarding").json() == {"completed": False}

    def test_save_onboarding_derives_level(self, auth_client):
        resp = auth_client.post("/api/preferences/onboarding", json=ANSWERS)
        assert resp.status_code == 200
        assert resp.json()["success"] is True

        prefs = auth_client.get("/api/preferences").json()
        assert prefs["default_simplification_level"] == "simplified"
        assert prefs["has_completed_onboarding"] is True
        assert prefs["primary_role"] == "Product manager"
        assert auth_client.get("/api/preferences/onboarding").json() == {"completed": True}

    def test_save_onboarding_requires_session(self, client):
        resp = client.post("/api/preferences/onboarding", json=ANSWERS)
        assert resp.status_code == 401
        assert resp.json()["error"] == "Unauthorized"

    def test_invalid_answer_rejected(self, auth_client):
        resp = auth_client.post("/api/preferences/onboarding", json={**ANSWERS, "tech_background": "guru"})
        assert resp.status_code == 422


class TestPreferences:

    def test_null_without_session(self, client):
        resp = client.get("/api/preferences")
        assert resp.status_code == 200
        assert resp.json() is None

    def test_defaults_for_new_user(self, auth_client):
        prefs = auth_client.get("/api/preferences").json()
        assert prefs["tech_background"] == "beginner"
        assert prefs["default_simplification_level"] == "standard"
        assert prefs["has_completed_onboarding"] is False

    def test_partial_update_merges(self, auth_client):
        auth_client.post("/api/preferences/onboarding", json=ANSWERS)
        resp = auth_client.put("/api/preferences", json={"learning_style": "concise"})
        assert resp.status_code == 200

        prefs = auth_client.get("/api/preferences").json()
        assert prefs["learning_style"] == "concise"
        assert prefs["primary_role"] == "Product manager"
        assert prefs["has_completed_onboarding"] is True

    def test_update_default_level(self, auth_client):
        resp = auth_client.put("/api/preferences/default-level", json={"level": "noob"})
        assert resp.status_code == 200
        assert resp.json()["level"] == "noob"
        assert auth_client.get("/api/preferences").json()["default_simplification_level"] == "noob"

    def test_unknown_level_rejected(self, auth_client):
        resp = auth_client.put("/api/preferences/default-level", json={"level": "expert"})
        assert resp.status_code == 422

    def test_me_includes_preferences(self, auth_client):
        auth_client.put("/api/preferences/default-level", json={"level": "beginner"})
        me = auth_client.get("/api/auth/me").json()
        assert me["preferences"]["default_simplification_level"] == "beginner"
