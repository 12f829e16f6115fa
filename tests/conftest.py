import pytest

from recommendations import OnboardingAnswers


@pytest.fixture
def make_answers():
    """Build onboarding answers with sensible defaults; override any field by keyword."""
    def _make(**overrides):
        fields = {
            "energy": "moderate",
            "concern": "stress",
            "context": "tasks",
            "approach": "calm",
            "support_style": "gentle",
            "time": "5",
        }
        fields.update(overrides)
        return OnboardingAnswers(**fields)
    return _make


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def fake_api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
