"""
Wellness tool catalog - every coping tool the engine can recommend.
The catalog is read-only; callers always receive copies via get_tool().
"""
import logging
from types import MappingProxyType
from typing import Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


ToolCategory = Literal["breathing", "grounding", "movement", "journaling", "cognitive", "rest", "social"]

TOOL_CATEGORIES: tuple = ("breathing", "grounding", "movement", "journaling", "cognitive", "rest", "social")

# Always-short tool used when the time filter leaves nothing behind
FALLBACK_TOOL_ID = "self_compassion"


class WellnessTool(BaseModel):
    """A single coping tool. priority: 1 = highest, 0 = unranked catalog entry."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    duration: int = Field(..., description="Duration in minutes")
    priority: int = 0
    category: ToolCategory
    technique: str
    instructions: str


def _tool(**fields) -> WellnessTool:
    return WellnessTool(priority=0, **fields)


_TOOLS: Dict[str, WellnessTool] = {
    "box_breathing": _tool(
        id="box_breathing",
        name="Box Breathing",
        description="Slow 4-4-4-4 rhythm to activate your parasympathetic nervous system",
        icon="🌊",
        duration=4,
        category="breathing",
        technique="Box Breathing (4-4-4-4)",
        instructions="Breathe in for 4 seconds, hold for 4, exhale for 4, hold for 4. Repeat.",
    ),
    "elongated_exhale": _tool(
        id="elongated_exhale",
        name="Elongated Exhale",
        description="Extended exhale triggers your vagus nerve — instant calm",
        icon="💨",
        duration=2,
        category="breathing",
        technique="4-7-8 Breathing",
        instructions="Breathe in for 4 counts, hold for 7, exhale slowly for 8. Repeat 3-4 times.",
    ),
    "physiological_sigh": _tool(
        id="physiological_sigh",
        name="Physiological Sigh",
        description="Double inhale + long exhale — the fastest way to reduce stress (research-backed)",
        icon="😮‍💨",
        duration=1,
        category="breathing",
        technique="Double Inhale Sigh",
        instructions="Quick inhale through nose, then another short inhale, then long slow exhale through mouth.",
    ),
    "grounding_54321": _tool(
        id="grounding_54321",
        name="5-4-3-2-1 Grounding",
        description="Reconnect to the present through your five senses",
        icon="🖐️",
        duration=3,
        category="grounding",
        technique="5 Senses Grounding",
        instructions="Name 5 things you see, 4 you touch, 3 you hear, 2 you smell, 1 you taste.",
    ),
    "body_scan": _tool(
        id="body_scan",
        name="Body Scan",
        description="Scan from head to toe, releasing tension in each area",
        icon="✨",
        duration=5,
        category="grounding",
        technique="Progressive Body Scan",
        instructions="Close your eyes. Start at your head and slowly move attention down to your toes, releasing tension.",
    ),
    "cold_water_reset": _tool(
        id="cold_water_reset",
        name="Cold Water Reset",
        description="Splash cold water on face — triggers the dive reflex to lower heart rate",
        icon="🧊",
        duration=1,
        category="grounding",
        technique="Mammalian Dive Reflex",
        instructions="Run cold water over your wrists or splash on your face for 30 seconds.",
    ),
    "gentle_stretching": _tool(
        id="gentle_stretching",
        name="Gentle Stretching",
        description="Release physical tension with slow, deliberate stretches",
        icon="🧘",
        duration=5,
        category="movement",
        technique="Tension Release Stretches",
        instructions="Neck rolls, shoulder shrugs, chest opener, standing forward fold. Hold each 15-20 seconds.",
    ),
    "shake_it_out": _tool(
        id="shake_it_out",
        name="Shake It Out",
        description="Shake your body vigorously — releases trapped fight/flight energy",
        icon="🏃",
        duration=2,
        category="movement",
        technique="Somatic Shaking",
        instructions="Stand up and shake your hands, arms, legs, whole body for 60 seconds. Let the energy out.",
    ),
    "walking_reset": _tool(
        id="walking_reset",
        name="Walk & Breathe",
        description="A short mindful walk paired with rhythmic breathing",
        icon="🚶",
        duration=5,
        category="movement",
        technique="Walking Meditation",
        instructions="Walk slowly. Match your breathing to your steps. 4 steps in, 4 steps out.",
    ),
    "thought_naming": _tool(
        id="thought_naming",
        name="Thought Naming",
        description='Name your thoughts as they come — "worry", "plan", "memory" — to create distance',
        icon="🏷️",
        duration=3,
        category="cognitive",
        technique="Cognitive Defusion",
        instructions='Close your eyes. As thoughts come, silently label them: "planning", "worrying", "remembering". Don\'t judge.',
    ),
    "brain_dump": _tool(
        id="brain_dump",
        name="Brain Dump",
        description="Write everything on your mind — no filter, no structure",
        icon="📝",
        duration=5,
        category="journaling",
        technique="Stream of Consciousness Writing",
        instructions="Open your journal. Write everything in your mind for 5 minutes. Don't edit, don't stop.",
    ),
    "gratitude_micro": _tool(
        id="gratitude_micro",
        name="Micro Gratitude",
        description="Name 3 tiny things you're grateful for right now",
        icon="🙏",
        duration=1,
        category="journaling",
        technique="Gratitude Practice",
        instructions="Name 3 small things you appreciate right now. A warm drink? Sunlight? A comfortable chair?",
    ),
    "self_compassion": _tool(
        id="self_compassion",
        name="Self-Compassion Pause",
        description="Place a hand on your heart. Speak to yourself as you would a friend.",
        icon="💚",
        duration=2,
        category="social",
        technique="Self-Compassion Break",
        instructions='Hand on heart. Say: "This is a moment of suffering. Everyone struggles. May I be kind to myself."',
    ),
    "talk_to_ai": _tool(
        id="talk_to_ai",
        name="Talk It Out",
        description="Sometimes you just need to be heard. I'm here.",
        icon="💬",
        duration=5,
        category="social",
        technique="Supportive Conversation",
        instructions="Open a chat. Say what you need to say. No pressure, no judgment.",
    ),
    "rest_permission": _tool(
        id="rest_permission",
        name="Permission to Rest",
        description="Close your eyes. You have permission to do absolutely nothing.",
        icon="😴",
        duration=5,
        category="rest",
        technique="Active Rest",
        instructions="Find a comfortable position. Close your eyes. Breathe naturally. There's nothing to do.",
    ),
    "energy_boost": _tool(
        id="energy_boost",
        name="Quick Energy Boost",
        description="Energising breath pattern + power pose to shift your state",
        icon="⚡",
        duration=2,
        category="breathing",
        technique="Bellows Breath + Power Pose",
        instructions="Stand tall, hands on hips. 20 quick breaths through nose (like bellows). Hold. Exhale. Repeat.",
    ),
    "single_task_focus": _tool(
        id="single_task_focus",
        name="Single Task Focus",
        description="Pick ONE thing. Set a timer. Everything else can wait.",
        icon="🎯",
        duration=5,
        category="cognitive",
        technique="Micro-Pomodoro",
        instructions="Choose your most important task. Set a 5-minute timer. Work on ONLY that task. Nothing else.",
    ),
}

TOOLS: Mapping[str, WellnessTool] = MappingProxyType(_TOOLS)


def get_tool(tool_id: str, priority: int = 0) -> Optional[WellnessTool]:
    """
    Return a copy of a catalog tool carrying the given priority.

    Returns None (and logs a warning) for identifiers the catalog doesn't know.
    """
    tool = TOOLS.get(tool_id)
    if tool is None:
        logger.warning(f"Unknown wellness tool id: {tool_id}")
        return None
    return tool.model_copy(update={"priority": priority})


def list_tools(category: Optional[str] = None) -> List[WellnessTool]:
    """All catalog tools in catalog order, optionally limited to one category."""
    return [
        tool.model_copy()
        for tool in TOOLS.values()
        if category is None or tool.category == category
    ]
