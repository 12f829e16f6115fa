"""
Tests for the AI collaborator layer.

No test here reaches a real model: the OpenAI client and the agent run are
replaced with fakes, or the API key is removed to exercise the fallbacks.
"""

import asyncio
from types import SimpleNamespace

import companion_agent
from companion_agent import (
    MAX_HISTORY_MESSAGES,
    build_companion_instructions,
    build_input_items,
    generate_ai_insight,
    request_companion_reply,
)
from crisis import SAFETY_MESSAGE
from prompts import crisis_detected_note, offline_companion_reply
from recommendations import generate_wellness_profile


def fake_openai(content=None, error=None, calls=None):
    """Stand-in for AsyncOpenAI returning fixed content or raising."""
    class FakeCompletions:
        async def create(self, **kwargs):
            if calls is not None:
                calls.append(kwargs)
            if error is not None:
                raise error
            message = SimpleNamespace(content=content)
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    class FakeClient:
        def __init__(self, **kwargs):
            self.chat = SimpleNamespace(completions=FakeCompletions())

    return FakeClient


class TestGenerateAIInsight:
    """Test the one-shot insight call and its fallback."""

    def test_fallback_without_api_key(self, make_answers, no_api_key):
        answers = make_answers(energy="high", concern="panic", approach="calm_body")

        insight = asyncio.run(generate_ai_insight(answers, "The Storm Surge"))

        assert insight == "You're experiencing panic with high energy. Let's start with what matters most to you — calm_body."

    def test_returns_model_text(self, make_answers, fake_api_key, monkeypatch):
        calls = []
        monkeypatch.setattr(companion_agent, "AsyncOpenAI", fake_openai(content="  You are carrying a lot.  ", calls=calls))
        monkeypatch.setenv("SILENT_HELP_INSIGHT_MODEL", "test-model")

        insight = asyncio.run(generate_ai_insight(make_answers(), "The Slow Burn"))

        assert insight == "You are carrying a lot."
        assert calls[0]["model"] == "test-model"
        assert calls[0]["max_tokens"] == 200
        assert calls[0]["temperature"] == 0.8
        assert 'Their archetype: "The Slow Burn"' in calls[0]["messages"][0]["content"]

    def test_model_failure_falls_back(self, make_answers, fake_api_key, monkeypatch):
        monkeypatch.setattr(companion_agent, "AsyncOpenAI", fake_openai(error=RuntimeError("rate limited")))

        insight = asyncio.run(generate_ai_insight(make_answers(concern="stress"), "The Slow Burn"))

        assert insight.startswith("You're experiencing stress with moderate energy.")

    def test_empty_model_text_falls_back(self, make_answers, fake_api_key, monkeypatch):
        monkeypatch.setattr(companion_agent, "AsyncOpenAI", fake_openai(content=None))

        insight = asyncio.run(generate_ai_insight(make_answers(), "The Slow Burn"))

        assert insight.startswith("You're experiencing")


class TestCompanionInstructions:

    def test_profile_prompt_then_crisis_rules(self, make_answers):
        profile = generate_wellness_profile(make_answers(energy="low", concern="sad"))

        instructions = build_companion_instructions(profile)

        assert instructions.startswith(profile.ai_personality.system_prompt_base)
        assert "\n\nCRITICAL SAFETY RULES:" in instructions


class TestBuildInputItems:

    def test_history_is_trimmed(self):
        history = [{"role": "user", "content": f"message {i}"} for i in range(30)]

        items = build_input_items("latest", history)

        assert len(items) == MAX_HISTORY_MESSAGES + 1
        assert items[0]["content"] == "message 10"
        assert items[-1] == {"role": "user", "content": "latest"}

    def test_crisis_note_appended(self):
        items = build_input_items("help", [], crisis_detected=True)
        assert items[-1] == {"role": "system", "content": crisis_detected_note}

    def test_no_history(self):
        assert build_input_items("hello") == [{"role": "user", "content": "hello"}]


class TestRequestCompanionReply:
    """Test the companion flow around the agent run."""

    def test_offline_reply_without_api_key(self, make_answers, no_api_key):
        result = asyncio.run(request_companion_reply(make_answers(), "I had a rough day"))

        assert result == {"reply": offline_companion_reply, "crisis": None}

    def test_offline_crisis_reply_carries_resources(self, make_answers, no_api_key):
        result = asyncio.run(request_companion_reply(make_answers(), "I want to die"))

        assert result["reply"] == SAFETY_MESSAGE
        assert result["crisis"]["isCrisis"] is True
        assert result["crisis"]["severity"] == "low"
        assert "samaritans" in result["crisis"]["resources"]

    def test_agent_receives_profile_instructions(self, make_answers, fake_api_key, monkeypatch):
        captured = {}

        async def fake_run_agent(instructions, input_items):
            captured["instructions"] = instructions
            captured["input_items"] = input_items
            return "That sounds heavy. I'm here."

        monkeypatch.setattr(companion_agent, "_run_agent", fake_run_agent)
        history = [{"role": "assistant", "content": "How are you arriving today?"}]

        result = asyncio.run(request_companion_reply(make_answers(energy="low", concern="exhausted"), "So tired", history))

        assert result == {"reply": "That sounds heavy. I'm here.", "crisis": None}
        assert "Archetype: The Collapsed Stack" in captured["instructions"]
        assert "CRITICAL SAFETY RULES:" in captured["instructions"]
        assert captured["input_items"] == [
            {"role": "assistant", "content": "How are you arriving today?"},
            {"role": "user", "content": "So tired"},
        ]

    def test_agent_told_about_crisis(self, make_answers, fake_api_key, monkeypatch):
        captured = {}

        async def fake_run_agent(instructions, input_items):
            captured["input_items"] = input_items
            return "I'm really glad you told me."

        monkeypatch.setattr(companion_agent, "_run_agent", fake_run_agent)

        result = asyncio.run(request_companion_reply(make_answers(), "I want to end it all, I can't go on"))

        assert result["crisis"]["severity"] == "medium"
        assert captured["input_items"][-1]["role"] == "system"
        assert captured["input_items"][-1]["content"] == crisis_detected_note
