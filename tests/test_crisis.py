"""
Tests for the crisis keyword gate.
"""

import pytest

from crisis import CRISIS_KEYWORDS, SAFETY_MESSAGE, UK_CRISIS_RESOURCES, check_for_crisis, get_crisis_system_prompt


class TestCheckForCrisis:
    """Test keyword matching and severity."""

    def test_everyday_message_is_clear(self):
        result = check_for_crisis("Work has been a lot this week and I can't sleep")

        assert result.is_crisis is False
        assert result.severity == "none"
        assert result.matched_keywords == []
        assert result.resources is None
        assert result.safety_message is None

    def test_empty_text_is_clear(self):
        assert check_for_crisis("").is_crisis is False

    def test_match_is_case_insensitive(self):
        result = check_for_crisis("Sometimes I feel SUICIDAL")

        assert result.is_crisis is True
        assert result.matched_keywords == ["suicidal"]

    @pytest.mark.parametrize("text, severity", [
        ("I want to die", "low"),
        ("I want to die, I can't go on", "medium"),
        ("I want to die, I can't go on, there's no reason to live", "high"),
    ])
    def test_severity_scales_with_matches(self, text, severity):
        assert check_for_crisis(text).severity == severity

    def test_crisis_carries_resources(self):
        result = check_for_crisis("I keep thinking about self-harm")

        assert result.safety_message == SAFETY_MESSAGE
        assert result.resources["samaritans"].number == "116 123"
        assert set(result.resources) == set(UK_CRISIS_RESOURCES)

    def test_every_keyword_fires(self):
        for keyword in CRISIS_KEYWORDS:
            assert check_for_crisis(f"lately {keyword} is all I think about").is_crisis

    def test_serializes_camel_case(self):
        data = check_for_crisis("better off dead").model_dump(mode="json", by_alias=True)

        assert data["isCrisis"] is True
        assert data["matchedKeywords"] == ["better off dead"]
        assert data["safetyMessage"] == SAFETY_MESSAGE


class TestCrisisSystemPrompt:

    def test_lists_uk_lines(self):
        prompt = get_crisis_system_prompt()

        assert prompt.startswith("CRITICAL SAFETY RULES:")
        assert "Samaritans: 116 123" in prompt
        assert "999" in prompt
