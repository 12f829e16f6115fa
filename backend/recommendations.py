"""
Silent Help wellness recommendation engine.

Takes the six onboarding answers and builds a personalized wellness profile:

1. Match the answers to an archetype rule (most specific full match wins)
2. Expand the rule's tool list into ranked tool copies
3. Re-rank by context (tool ids, -5) and then by approach (categories, -3)
4. Drop tools that don't fit the time budget, never leaving the list empty
5. Classify urgency and compose the companion's system prompt

Everything here is deterministic and side-effect free. The same answers always
produce the same profile, and the shared catalog is never modified.
"""
import logging
import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from archetypes import ARCHETYPE_RULES, ArchetypeRule
from prompts import (
    insight_prompt_template,
    support_style_notes,
    system_prompt_base_template,
)
from tool_catalog import FALLBACK_TOOL_ID, TOOLS, WellnessTool, get_tool

logger = logging.getLogger(__name__)


UrgencyLevel = Literal["low", "moderate", "high", "crisis"]

URGENCY_LEVELS: tuple = ("low", "moderate", "high", "crisis")

# "crisis" is part of UrgencyLevel but determine_urgency() never returns it.
# Kept visible here rather than silently remapping any branch.
REACHABLE_URGENCY_LEVELS: tuple = ("low", "moderate", "high")

CONTEXT_BOOST = 5
APPROACH_BOOST = 3

# The largest time option means "no limit"
UNLIMITED_TIME_OPTION = "10"
UNLIMITED_MINUTES = 999
DEFAULT_TIME_BUDGET = 5

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

class OnboardingAnswers(BaseModel):
    """The six onboarding answers. Values are not validated here."""
    model_config = ConfigDict(frozen=True)

    energy: str = ""  # high|moderate|low
    concern: str = ""
    context: str = ""
    approach: str = ""
    support_style: str = ""
    time: str = ""  # minutes: 1, 3, 5 or 10 (no limit)


class DashboardTheme(BaseModel):
    gradient: str
    accent: str
    mood: str
    greeting: str
    ambiance: str


class AIPersonality(BaseModel):
    tone: str
    style: str
    system_prompt_base: str = Field(..., serialization_alias="systemPromptBase")
    opening_message: str = Field(..., serialization_alias="openingMessage")
    avoid_topics: List[str] = Field(default_factory=list, serialization_alias="avoidTopics")


class WellnessProfile(BaseModel):
    """Everything the dashboard and companion need for one check-in."""
    archetype: str
    state: str
    urgency_level: UrgencyLevel = Field(..., serialization_alias="urgencyLevel")

    tools: List[WellnessTool]
    primary_tool: WellnessTool = Field(..., serialization_alias="primaryTool")
    quick_relief: WellnessTool = Field(..., serialization_alias="quickRelief")
    deeper_work: WellnessTool = Field(..., serialization_alias="deeperWork")

    theme: DashboardTheme
    ai_personality: AIPersonality = Field(..., serialization_alias="aiPersonality")

    journal_prompt: str = Field(..., serialization_alias="journalPrompt")
    affirmation: str
    body_focus: str = Field(..., serialization_alias="bodyFocus")

    answers: OnboardingAnswers


# ---------------------------------------------------------------------------
# Boost Tables
# ---------------------------------------------------------------------------

# Context answer -> tool ids that get pulled forward
CONTEXT_BOOSTS: Dict[str, List[str]] = {
    # Body-focused contexts
    "chest": ["elongated_exhale", "physiological_sigh", "box_breathing", "body_scan"],
    "stomach": ["elongated_exhale", "body_scan", "grounding_54321"],
    "head": ["grounding_54321", "cold_water_reset", "body_scan", "thought_naming"],
    "full_body": ["shake_it_out", "body_scan", "cold_water_reset", "physiological_sigh"],
    "struggling": ["physiological_sigh", "elongated_exhale", "cold_water_reset"],
    "shallow": ["elongated_exhale", "box_breathing", "physiological_sigh"],
    "managing": ["box_breathing", "grounding_54321", "thought_naming"],
    # Movement contexts
    "movement": ["shake_it_out", "walking_reset", "gentle_stretching"],
    "grounding": ["grounding_54321", "body_scan", "cold_water_reset"],
    "release": ["shake_it_out", "brain_dump", "walking_reset"],
    "cool_down": ["cold_water_reset", "elongated_exhale", "body_scan"],
    # Emotional contexts
    "grief": ["self_compassion", "talk_to_ai", "rest_permission"],
    "loneliness": ["talk_to_ai", "self_compassion", "gratitude_micro"],
    "disappointment": ["self_compassion", "brain_dump", "talk_to_ai"],
    "injustice": ["shake_it_out", "brain_dump", "talk_to_ai"],
    "powerless": ["self_compassion", "grounding_54321", "talk_to_ai"],
    "boundaries": ["brain_dump", "talk_to_ai", "walking_reset"],
    "self_directed": ["self_compassion", "brain_dump", "talk_to_ai"],
    # Mental contexts
    "future": ["grounding_54321", "thought_naming", "box_breathing"],
    "past": ["self_compassion", "thought_naming", "grounding_54321"],
    "tasks": ["brain_dump", "single_task_focus", "physiological_sigh"],
    "circular": ["thought_naming", "shake_it_out", "brain_dump"],
    "decision": ["brain_dump", "talk_to_ai", "walking_reset"],
    "regret": ["self_compassion", "thought_naming", "talk_to_ai"],
    "uncertainty": ["grounding_54321", "box_breathing", "talk_to_ai"],
    # Duration contexts
    "weeks": ["talk_to_ai", "self_compassion", "rest_permission"],
    "days": ["self_compassion", "talk_to_ai", "body_scan"],
    # Low energy contexts
    "sleep": ["rest_permission", "elongated_exhale", "body_scan"],
    "burden": ["rest_permission", "self_compassion", "brain_dump"],
    "burnout": ["rest_permission", "self_compassion", "gentle_stretching"],
    "unfocused": ["grounding_54321", "cold_water_reset", "thought_naming"],
    "disconnected": ["grounding_54321", "body_scan", "self_compassion"],
    "blank": ["grounding_54321", "cold_water_reset", "self_compassion"],
}

# Approach answer -> tool categories that get pulled forward
APPROACH_BOOSTS: Dict[str, List[str]] = {
    # Calm/breathing
    "calm_body": ["breathing", "rest"],
    "calming": ["breathing", "rest"],
    "calm_first": ["breathing", "grounding"],
    "calm": ["breathing", "rest"],
    "gentle_body": ["breathing", "movement"],
    "gentle": ["rest", "breathing"],
    "simple_breathing": ["breathing"],
    "breathing": ["breathing"],
    "guided_breathing": ["breathing"],
    # Cognitive/dump
    "break_spiral": ["cognitive", "grounding"],
    "brain_dump": ["journaling", "cognitive"],
    "dump": ["journaling", "cognitive"],
    "organize": ["cognitive", "journaling"],
    "redirect": ["cognitive", "grounding"],
    "single_focus": ["cognitive"],
    "slow_down": ["breathing", "grounding"],
    # Talk/social
    "talk": ["social"],
    "talk_through": ["social"],
    "be_heard": ["social"],
    "listen": ["social"],
    "presence": ["social", "rest"],
    "just_be": ["rest", "social"],
    "low_effort": ["rest", "social"],
    "understood": ["social"],
    "reassurance": ["social", "rest"],
    "ai_sort": ["social", "cognitive"],
    # Physical/movement
    "release": ["movement"],
    "physical": ["movement", "grounding"],
    "active": ["movement"],
    "cool_down": ["grounding"],
    "stillness": ["grounding", "breathing"],
    "sensory": ["grounding"],
    # Writing/expression
    "write": ["journaling"],
    "express": ["journaling", "social"],
    "get_it_out": ["journaling"],
    "one_thought": ["journaling"],
    "journal": ["journaling"],
    # Grounding
    "grounding": ["grounding"],
    "ground": ["grounding"],
    # Rest
    "permission": ["rest"],
    "peace": ["rest", "breathing"],
    "rest": ["rest"],
    "comfort": ["social", "rest"],
    "warmth": ["social", "rest"],
    "tiny_step": ["grounding", "breathing"],
    # Quick actions
    "quick_reset": ["breathing", "movement"],
    "focus_one": ["cognitive", "grounding"],
    "make_sense": ["cognitive", "social"],
    "body_calm": ["breathing", "grounding"],
    "strength": ["movement", "cognitive"],
    "mindful": ["grounding", "breathing"],
    "movement": ["movement"],
}


# ---------------------------------------------------------------------------
# Archetype Matching
# ---------------------------------------------------------------------------

def rule_match_score(rule: ArchetypeRule, answers: OnboardingAnswers) -> Optional[int]:
    """Number of matched conditions, or None if any condition fails."""
    score = 0
    for key, value in rule.conditions.items():
        if getattr(answers, key, None) != value:
            return None
        score += 1
    return score


def match_archetype(answers: OnboardingAnswers, rules=ARCHETYPE_RULES) -> ArchetypeRule:
    """
    Pick the best fully-matching rule.

    Scans in table order and only replaces the current best on a strictly
    higher score, so the first rule to reach a score wins ties. Falls back to
    the last rule when nothing matches.
    """
    best_match: Optional[ArchetypeRule] = None
    best_score = -1

    for rule in rules:
        score = rule_match_score(rule, answers)
        if score is not None and score > best_score:
            best_score = score
            best_match = rule

    if best_match is None:
        logger.warning(f"No archetype rule matched energy={answers.energy!r}, falling back to last rule")
        return rules[-1]
    return best_match


# ---------------------------------------------------------------------------
# Tool Ranking
# ---------------------------------------------------------------------------

def assemble_tools(rule: ArchetypeRule) -> List[WellnessTool]:
    """Rule's tool ids -> catalog copies with priority 1..n in rule order."""
    tools: List[WellnessTool] = []
    for index, tool_id in enumerate(rule.tool_ids):
        tool = get_tool(tool_id, priority=index + 1)
        if tool is None:
            logger.warning(f"Archetype '{rule.archetype}' references unknown tool '{tool_id}', skipping")
            continue
        tools.append(tool)
    return tools


def _boost(tools: List[WellnessTool], should_boost, amount: int) -> List[WellnessTool]:
    boosted = [
        tool.model_copy(update={"priority": tool.priority - amount}) if should_boost(tool) else tool
        for tool in tools
    ]
    # sorted() is stable: equal priorities keep their incoming order
    return sorted(boosted, key=lambda t: t.priority)


def adjust_for_context(tools: List[WellnessTool], context: str) -> List[WellnessTool]:
    """Pull forward tools listed for this context answer."""
    boost_ids = set(CONTEXT_BOOSTS.get(context, []))
    return _boost(tools, lambda tool: tool.id in boost_ids, CONTEXT_BOOST)


def adjust_for_approach(tools: List[WellnessTool], approach: str) -> List[WellnessTool]:
    """Pull forward tools whose category suits this approach answer."""
    boost_categories = set(APPROACH_BOOSTS.get(approach, []))
    return _boost(tools, lambda tool: tool.category in boost_categories, APPROACH_BOOST)


def parse_time_budget(time_available: str) -> int:
    """
    Minutes the user has. "10" means no limit; otherwise the leading integer
    (trailing text ignored). Missing, unparsable or zero falls back to 5.
    """
    if time_available == UNLIMITED_TIME_OPTION:
        return UNLIMITED_MINUTES
    match = _LEADING_INT.match(time_available or "")
    minutes = int(match.group(1)) if match else 0
    return minutes or DEFAULT_TIME_BUDGET


def filter_by_time(tools: List[WellnessTool], time_available: str) -> List[WellnessTool]:
    max_minutes = parse_time_budget(time_available)
    return [tool for tool in tools if tool.duration <= max_minutes]


def ensure_tools(tools: List[WellnessTool]) -> List[WellnessTool]:
    """Never hand back an empty list; fall back to the self-compassion pause."""
    if tools:
        return tools
    return [get_tool(FALLBACK_TOOL_ID, priority=1)]


def rank_tools(rule: ArchetypeRule, answers: OnboardingAnswers) -> List[WellnessTool]:
    tools = assemble_tools(rule)
    tools = adjust_for_context(tools, answers.context)
    tools = adjust_for_approach(tools, answers.approach)
    tools = filter_by_time(tools, answers.time)
    return ensure_tools(tools)


# ---------------------------------------------------------------------------
# Urgency
# ---------------------------------------------------------------------------

def determine_urgency(answers: OnboardingAnswers) -> UrgencyLevel:
    """
    Heuristic urgency cascade; the first matching branch wins.

    The branches marked crisis-level return "high": "crisis" is declared in
    UrgencyLevel but no branch produces it (see REACHABLE_URGENCY_LEVELS).
    """
    concern = answers.concern
    context = answers.context

    # Crisis-level indicators
    if concern == "panic":
        return "high"
    if concern == "hopeless" and context in ("no_way_out", "everything"):
        return "high"
    if concern == "empty" and context in ("weeks", "unknown"):
        return "high"

    # High urgency
    if concern == "hopeless":
        return "high"
    if concern == "anxiety" and context == "full_body":
        return "high"

    # Energy-based defaults
    if answers.energy == "high":
        return "high" if concern in ("anger", "anxiety") else "moderate"
    if answers.energy == "low":
        return "moderate"

    return "low"


# ---------------------------------------------------------------------------
# Prompt Composition
# ---------------------------------------------------------------------------

def build_system_prompt_base(rule: ArchetypeRule, answers: OnboardingAnswers) -> str:
    """Companion system prompt tailored to the matched archetype and answers."""
    support_style_note = support_style_notes.get(answers.support_style, "")
    tool_names = [TOOLS[tool_id].name for tool_id in rule.tool_ids if tool_id in TOOLS]

    return system_prompt_base_template.format(
        archetype=rule.archetype,
        state=rule.state,
        energy=answers.energy,
        concern=answers.concern,
        context=answers.context,
        approach=answers.approach,
        support_style=answers.support_style,
        time=answers.time,
        ai_tone=rule.ai_tone,
        ai_style=rule.ai_style,
        support_style_line=f"- User preference: {support_style_note}" if support_style_note else "",
        avoid_topics=", ".join(rule.avoid_topics) or "none",
        tool_names=", ".join(tool_names),
    )


def describe_energy(energy: str) -> str:
    if energy == "high":
        return "restless/wired"
    if energy == "moderate":
        return "steady"
    return "depleted"


def build_ai_analysis_prompt(answers: OnboardingAnswers, archetype: str) -> str:
    """Prompt asking an LLM for a short empathetic insight on this check-in."""
    return insight_prompt_template.format(
        energy=answers.energy,
        energy_gloss=describe_energy(answers.energy),
        concern=answers.concern,
        context=answers.context,
        approach=answers.approach,
        support_style=answers.support_style,
        time=answers.time,
        archetype=archetype,
    )


# ---------------------------------------------------------------------------
# Main Entry Point
# ---------------------------------------------------------------------------

def _distinguished_tool(tool_id: str) -> WellnessTool:
    """Quick-relief/deeper-work lookup; unknown ids are replaced by the fallback tool."""
    tool = get_tool(tool_id)
    if tool is None:
        logger.warning(f"Substituting '{FALLBACK_TOOL_ID}' for unknown tool '{tool_id}'")
        return get_tool(FALLBACK_TOOL_ID)
    return tool


def generate_wellness_profile(answers: OnboardingAnswers) -> WellnessProfile:
    """
    Build the full wellness profile for one set of answers.

    quick_relief and deeper_work come straight from the rule and are NOT
    time-filtered: they are fixed fallback options regardless of the budget.
    """
    rule = match_archetype(answers)
    urgency_level = determine_urgency(answers)
    tools = rank_tools(rule, answers)

    logger.debug(
        f"Profile: archetype={rule.archetype}, urgency={urgency_level}, "
        f"tools={[tool.id for tool in tools]}"
    )

    return WellnessProfile(
        archetype=rule.archetype,
        state=rule.state,
        urgency_level=urgency_level,
        tools=tools,
        primary_tool=tools[0],
        quick_relief=_distinguished_tool(rule.quick_relief_id),
        deeper_work=_distinguished_tool(rule.deeper_work_id),
        theme=DashboardTheme(
            gradient=rule.gradient,
            accent=rule.accent,
            mood=rule.mood,
            greeting=rule.greeting,
            ambiance=rule.ambiance,
        ),
        ai_personality=AIPersonality(
            tone=rule.ai_tone,
            style=rule.ai_style,
            system_prompt_base=build_system_prompt_base(rule, answers),
            opening_message=rule.opening_message,
            avoid_topics=list(rule.avoid_topics),
        ),
        journal_prompt=rule.journal_prompt,
        affirmation=rule.affirmation,
        body_focus=rule.body_focus,
        answers=answers,
    )


def profile_to_dict(profile: WellnessProfile) -> Dict[str, Any]:
    """JSON-ready dict using the dashboard's camelCase keys."""
    return profile.model_dump(mode="json", by_alias=True)
