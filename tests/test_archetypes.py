"""
Tests for the archetype rule table.

Tests verify:
1. Every tool id a rule references exists in the catalog
2. Energy-only catch-alls sit at the bottom of the table
3. Specific rules never appear below a rule that generalizes them
"""

from archetypes import ARCHETYPE_RULES
from tool_catalog import TOOLS


class TestRuleTable:
    """Test the shape of the rule table."""

    def test_rule_count(self):
        assert len(ARCHETYPE_RULES) == 18

    def test_archetype_names_are_unique(self):
        names = [rule.archetype for rule in ARCHETYPE_RULES]
        assert len(names) == len(set(names))

    def test_referenced_tools_exist(self):
        for rule in ARCHETYPE_RULES:
            referenced = rule.tool_ids + [rule.primary_tool_id, rule.quick_relief_id, rule.deeper_work_id]
            missing = [tool_id for tool_id in referenced if tool_id not in TOOLS]
            assert missing == [], f"{rule.archetype} references {missing}"

    def test_primary_tool_heads_tool_list(self):
        for rule in ARCHETYPE_RULES:
            assert rule.tool_ids[0] == rule.primary_tool_id

    def test_catch_alls_are_last(self):
        tail = ARCHETYPE_RULES[-3:]

        assert [rule.conditions for rule in tail] == [
            {"energy": "high"},
            {"energy": "moderate"},
            {"energy": "low"},
        ]
        assert tail[-1].archetype == "The Gentle Ember"

    def test_specific_rules_precede_generalizations(self):
        for index, rule in enumerate(ARCHETYPE_RULES):
            for later in ARCHETYPE_RULES[index + 1:]:
                narrows = set(rule.conditions.items()) > set(later.conditions.items())
                assert not set(later.conditions.items()) > set(rule.conditions.items()), (
                    f"{later.archetype} is more specific than {rule.archetype} but listed below it"
                )
                if narrows:
                    assert rule.specificity > later.specificity


class TestSpecificity:
    """Test the specificity score."""

    def test_concern_rules_score_two(self):
        assert ARCHETYPE_RULES[0].specificity == 2

    def test_catch_alls_score_one(self):
        assert all(rule.specificity == 1 for rule in ARCHETYPE_RULES[-3:])
