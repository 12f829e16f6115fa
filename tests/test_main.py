"""
Tests for the Silent Help HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

import main
from prompts import offline_companion_reply


VALID_ANSWERS = {
    "energy": "high",
    "concern": "panic",
    "context": "chest",
    "approach": "calm_body",
    "support_style": "gentle",
    "time": "5",
}


@pytest.fixture
def client(no_api_key):
    return TestClient(main.app)


class TestRoot:

    def test_root_message(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "Silent Help Wellness API"}


class TestOnboarding:
    """Test POST /api/onboarding."""

    def test_returns_profile_with_insight(self, client, monkeypatch):
        async def fake_insight(answers, archetype):
            return f"Insight for {archetype}"

        monkeypatch.setattr(main, "generate_ai_insight", fake_insight)

        response = client.post("/api/onboarding", json=VALID_ANSWERS)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["profile"]["archetype"] == "The Storm Surge"
        assert body["profile"]["urgencyLevel"] == "high"
        assert body["profile"]["aiInsight"] == "Insight for The Storm Surge"
        assert body["profile"]["primaryTool"]["duration"] <= 5

    def test_fallback_insight_without_api_key(self, client):
        response = client.post("/api/onboarding", json=VALID_ANSWERS)

        assert response.status_code == 200
        assert response.json()["profile"]["aiInsight"].startswith("You're experiencing panic with high energy.")

    def test_invalid_energy(self, client):
        response = client.post("/api/onboarding", json={**VALID_ANSWERS, "energy": "extreme"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid energy value"

    @pytest.mark.parametrize("field", ["concern", "context", "approach", "support_style", "time"])
    def test_missing_field(self, client, field):
        answers = {key: value for key, value in VALID_ANSWERS.items() if key != field}

        response = client.post("/api/onboarding", json=answers)

        assert response.status_code == 400
        assert response.json()["detail"] == f"Missing {field}"

    def test_non_string_field(self, client):
        response = client.post("/api/onboarding", json={**VALID_ANSWERS, "time": 5})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing time"

    def test_unexpected_error_is_500(self, client, monkeypatch):
        def broken_profile(answers):
            raise RuntimeError("rule table unavailable")

        monkeypatch.setattr(main, "generate_wellness_profile", broken_profile)

        response = client.post("/api/onboarding", json=VALID_ANSWERS)

        assert response.status_code == 500
        assert response.json()["detail"] == "rule table unavailable"


class TestProfilePreview:

    def test_engine_only_profile(self, client, monkeypatch):
        async def fail_insight(answers, archetype):
            raise AssertionError("preview must not call the model")

        monkeypatch.setattr(main, "generate_ai_insight", fail_insight)

        response = client.post("/api/profile/preview", json={**VALID_ANSWERS, "energy": "low", "concern": "exhausted", "context": "", "approach": "", "time": "10"})

        assert response.status_code == 200
        body = response.json()
        assert body["archetype"] == "The Collapsed Stack"
        assert body["primaryTool"]["id"] == "rest_permission"
        assert "aiInsight" not in body

    def test_validation_applies(self, client):
        response = client.post("/api/profile/preview", json={**VALID_ANSWERS, "concern": ""})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing concern"


class TestTools:

    def test_lists_catalog(self, client):
        response = client.get("/api/tools")

        assert response.status_code == 200
        tools = response.json()["tools"]
        assert len(tools) == 17
        assert all(tool["priority"] == 0 for tool in tools)

    def test_category_filter(self, client):
        response = client.get("/api/tools", params={"category": "social"})

        assert {tool["id"] for tool in response.json()["tools"]} == {"self_compassion", "talk_to_ai"}

    def test_unknown_category(self, client):
        response = client.get("/api/tools", params={"category": "juggling"})

        assert response.status_code == 400


class TestCompanion:
    """Test POST /api/companion without a model behind it."""

    def test_offline_reply(self, client):
        response = client.post("/api/companion", json={"answers": VALID_ANSWERS, "message": "Hi"})

        assert response.status_code == 200
        assert response.json() == {"reply": offline_companion_reply, "crisis": None}

    def test_crisis_message_returns_resources(self, client):
        response = client.post("/api/companion", json={
            "answers": VALID_ANSWERS,
            "message": "I don't want to be here anymore",
            "history": [{"role": "assistant", "content": "How are you arriving today?"}],
        })

        assert response.status_code == 200
        crisis = response.json()["crisis"]
        assert crisis["isCrisis"] is True
        assert crisis["resources"]["emergency"]["number"] == "999"

    def test_empty_message(self, client):
        response = client.post("/api/companion", json={"answers": VALID_ANSWERS, "message": "   "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Message is required"

    def test_invalid_answers(self, client):
        response = client.post("/api/companion", json={"answers": {**VALID_ANSWERS, "energy": ""}, "message": "Hi"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid energy value"

    def test_agent_failure_is_500(self, client, monkeypatch):
        async def broken_reply(**kwargs):
            raise RuntimeError("Companion agent failed: timeout")

        monkeypatch.setattr(main, "request_companion_reply", broken_reply)

        response = client.post("/api/companion", json={"answers": VALID_ANSWERS, "message": "Hi"})

        assert response.status_code == 500
        assert "timeout" in response.json()["detail"]
