"""
Archetype rule table - maps onboarding answer combinations to a wellness persona.

Rules are matched in table order. Each rule matches energy + concern; the
energy-only catch-alls at the bottom apply when no concern-specific rule does.
More specific rules must stay above their generalizations, and rules with the
same specificity are listed in preference order (first one wins a tie).
"""
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


Ambiance = Literal["calm", "energizing", "grounding", "nurturing", "focused"]


class ArchetypeRule(BaseModel):
    """Conditions plus the full presentational payload for one archetype."""
    model_config = ConfigDict(frozen=True)

    conditions: Dict[str, str]
    archetype: str
    state: str
    ambiance: Ambiance
    gradient: str
    accent: str
    greeting: str
    mood: str
    primary_tool_id: str
    quick_relief_id: str
    deeper_work_id: str
    tool_ids: List[str] = Field(..., description="Ordered tool ids establishing initial priority")
    ai_tone: str
    ai_style: str
    journal_prompt: str
    affirmation: str
    body_focus: str
    opening_message: str
    avoid_topics: List[str] = Field(default_factory=list)

    @property
    def specificity(self) -> int:
        """Number of declared conditions - the score a full match earns."""
        return len(self.conditions)


ARCHETYPE_RULES: tuple = (
    # ─── HIGH ENERGY ───────────────────────────────
    ArchetypeRule(
        conditions={"energy": "high", "concern": "anxiety"},
        archetype="The Wired Worrier",
        state="Restless energy feeding anxious thoughts",
        ambiance="calm",
        gradient="linear-gradient(135deg, #0f172a 0%, #172554 100%)",
        accent="#38bdf8",
        greeting="Your mind is racing, but we can slow it down.",
        mood="anxious",
        primary_tool_id="elongated_exhale",
        quick_relief_id="physiological_sigh",
        deeper_work_id="grounding_54321",
        tool_ids=["elongated_exhale", "physiological_sigh", "grounding_54321", "shake_it_out", "thought_naming"],
        ai_tone="warm, steady, and reassuring",
        ai_style="Validate first, then gently redirect. Use grounding language. Short sentences when anxiety is high.",
        journal_prompt="The worry that's loudest right now is... When I step back, I notice...",
        affirmation="Your mind is trying to protect you. But right now, you're safe. Breathe.",
        body_focus="Notice your breathing pattern — it might be shallow or fast. Let's slow it down.",
        opening_message="I can tell your mind is busy right now. That's okay. Would you like to try a quick breathing exercise to take the edge off, or would you rather just talk about what's on your mind?",
        avoid_topics=["worst-case scenarios", "future planning"],
    ),
    ArchetypeRule(
        conditions={"energy": "high", "concern": "anger"},
        archetype="The Burning Fuse",
        state="Frustration and anger building up with no release",
        ambiance="grounding",
        gradient="linear-gradient(135deg, #0f172a 0%, #422006 100%)",
        accent="#f97316",
        greeting="That anger is valid. Let's give it somewhere safe to go.",
        mood="frustrated",
        primary_tool_id="shake_it_out",
        quick_relief_id="cold_water_reset",
        deeper_work_id="brain_dump",
        tool_ids=["shake_it_out", "cold_water_reset", "walking_reset", "brain_dump", "self_compassion"],
        ai_tone="direct, validating, no-nonsense",
        ai_style="Acknowledge the anger. Don't minimise. Offer physical outlets first.",
        journal_prompt="What triggered this anger was... What I actually need is...",
        affirmation="Your anger is telling you something important. It's safe to feel it.",
        body_focus="Your jaw and fists might be clenched. Consciously release them.",
        opening_message="I hear you — that anger is real and valid. Sometimes when energy is this high, the best first step is physical. Want to try shaking it out for 60 seconds? Or if you'd rather vent, I'm here to listen.",
        avoid_topics=["calming down", "relaxing", "seeing their side"],
    ),
    ArchetypeRule(
        conditions={"energy": "high", "concern": "racing_thoughts"},
        archetype="The Spinning Mind",
        state="Trapped in a loop of circular thoughts with wired energy",
        ambiance="focused",
        gradient="linear-gradient(135deg, #0f172a 0%, #1e3a5f 100%)",
        accent="#67e8f9",
        greeting="Your mind is working overtime. Let's give it a break.",
        mood="scattered",
        primary_tool_id="thought_naming",
        quick_relief_id="physiological_sigh",
        deeper_work_id="brain_dump",
        tool_ids=["thought_naming", "physiological_sigh", "grounding_54321", "brain_dump", "single_task_focus"],
        ai_tone="clear, structured, and gently directive",
        ai_style="Use structure to counter chaos. Short lists. Clear next steps. Avoid open-ended questions.",
        journal_prompt="The thought loop I'm stuck in is... The ONE thing that matters most right now is...",
        affirmation="You don't need to solve everything right now. One breath, one step.",
        body_focus="Feel your feet on the ground. You're here, right now, in this moment.",
        opening_message='When your mind is spinning this fast, it helps to do one concrete thing. Let\'s try thought naming — just labelling each thought as it comes. "Planning." "Worrying." "Remembering." It creates some space. Want to try that, or would you rather get everything out of your head with a brain dump?',
        avoid_topics=["complicated analysis", "adding more decisions"],
    ),
    ArchetypeRule(
        conditions={"energy": "high", "concern": "restless_body"},
        archetype="The Live Wire",
        state="Body buzzing with restless energy demanding release",
        ambiance="grounding",
        gradient="linear-gradient(135deg, #0f172a 0%, #1e3a5f 50%, #164e63 100%)",
        accent="#5eead4",
        greeting="Your body is charged up. Let's channel that energy.",
        mood="restless",
        primary_tool_id="shake_it_out",
        quick_relief_id="walking_reset",
        deeper_work_id="body_scan",
        tool_ids=["shake_it_out", "walking_reset", "body_scan", "grounding_54321", "gentle_stretching"],
        ai_tone="energetic, grounding, physical-first",
        ai_style="Lead with body-based approaches. Match their energy, then guide it downward. Movement before thinking.",
        journal_prompt="My body is buzzing because... What it needs right now is...",
        affirmation="Your body knows what it needs. Trust the impulse to move.",
        body_focus="Feel your feet on the ground. Let the energy flow downward through your legs.",
        opening_message="Your body is asking for something — it wants to move. Let's start there. Want to try shaking it out for 60 seconds? Just stand up and let your body move however it wants. Or we can do a walking reset if you prefer.",
        avoid_topics=["sitting still", "meditation", "forcing calm"],
    ),
    ArchetypeRule(
        conditions={"energy": "high", "concern": "panic"},
        archetype="The Storm Surge",
        state="Panic rising — body in alarm mode, need immediate grounding",
        ambiance="calm",
        gradient="linear-gradient(135deg, #0f172a 0%, #1e1b4b 100%)",
        accent="#818cf8",
        greeting="You're safe right now. Let's slow this down together.",
        mood="panicked",
        primary_tool_id="physiological_sigh",
        quick_relief_id="cold_water_reset",
        deeper_work_id="body_scan",
        tool_ids=["physiological_sigh", "cold_water_reset", "elongated_exhale", "grounding_54321", "body_scan"],
        ai_tone="calm, steady, very grounding, slow-paced",
        ai_style="Short sentences. Directive but gentle. No questions that require thinking. Breathing first, always.",
        journal_prompt="Right now I notice my body feeling... One thing I know to be true is...",
        affirmation="This will pass. Your body is protecting you. You are safe right now.",
        body_focus="Focus on your chest and shoulders — let them soften with each exhale.",
        opening_message="I'm right here with you. You're safe. Before anything else, let's do one thing together: a slow physiological sigh. Double inhale through the nose, then a long exhale out. Just that. Ready?",
        avoid_topics=["productivity", "goals", "future planning", "what's wrong"],
    ),

    # ─── MODERATE ENERGY ───────────────────────────
    ArchetypeRule(
        conditions={"energy": "moderate", "concern": "stress"},
        archetype="The Slow Burn",
        state="Stress building steadily, not yet at breaking point",
        ambiance="calm",
        gradient="linear-gradient(135deg, #0f172a 0%, #0c4a6e 100%)",
        accent="#7dd3fc",
        greeting="That building stress is real. Let's ease the pressure.",
        mood="stressed",
        primary_tool_id="box_breathing",
        quick_relief_id="physiological_sigh",
        deeper_work_id="brain_dump",
        tool_ids=["box_breathing", "physiological_sigh", "brain_dump", "walking_reset", "talk_to_ai"],
        ai_tone="steady, reassuring, and warm",
        ai_style="Validate the stress. Offer structured de-escalation. Help organize.",
        journal_prompt="The stress is coming from... One thing I can let go of today is...",
        affirmation="You're handling more than you think. It's okay to ask for help.",
        body_focus="Check in with your stomach and chest. Breathe into wherever you feel tightness.",
        opening_message="Stress has been building, and you came here — that's already a smart move. Let's start with a few minutes of box breathing to settle your nervous system. Or if you'd rather name what's stressing you, I'm listening.",
        avoid_topics=["adding more responsibilities"],
    ),
    ArchetypeRule(
        conditions={"energy": "moderate", "concern": "something_happened"},
        archetype="The Fresh Wound",
        state="Processing a specific event — the wound is still open",
        ambiance="nurturing",
        gradient="linear-gradient(135deg, #0f172a 0%, #1e293b 100%)",
        accent="#94a3b8",
        greeting="Something happened, and you're still processing. That takes courage.",
        mood="processing",
        primary_tool_id="talk_to_ai",
        quick_relief_id="self_compassion",
        deeper_work_id="brain_dump",
        tool_ids=["talk_to_ai", "self_compassion", "brain_dump", "gentle_stretching", "box_breathing"],
        ai_tone="warm, compassionate, patient, unhurried",
        ai_style="Hold space. Let them lead the conversation. Reflect back what you hear. Don't rush to reframe.",
        journal_prompt="What happened was... Right now I feel... What I need most is...",
        affirmation="You don't have to process this all at once. Your pace is the right pace.",
        body_focus="Place a hand on your heart. Feel its steady rhythm. You're still here.",
        opening_message="Something happened and you're carrying it. You don't need to explain everything or have the right words. I'm here to listen whenever you're ready, or we can start with something gentle if talking feels like too much right now.",
        avoid_topics=["silver linings", "everything happens for a reason", "moving on"],
    ),
    ArchetypeRule(
        conditions={"energy": "moderate", "concern": "overthinking"},
        archetype="The Thought Maze",
        state="Stuck in mental loops, moderate energy to break free",
        ambiance="focused",
        gradient="linear-gradient(135deg, #0f172a 0%, #164e63 100%)",
        accent="#06b6d4",
        greeting="Your mind is tangled. Let's create some clarity.",
        mood="uncertain",
        primary_tool_id="brain_dump",
        quick_relief_id="thought_naming",
        deeper_work_id="single_task_focus",
        tool_ids=["brain_dump", "thought_naming", "single_task_focus", "walking_reset", "box_breathing"],
        ai_tone="clear, structured, gently guiding",
        ai_style="Help organise thoughts. Use structured exercises. Break things into steps.",
        journal_prompt="The thoughts circling are... If I could only solve one thing, it would be...",
        affirmation="Not every thought needs a response. You can observe without engaging.",
        body_focus="Bring attention from your head to your feet. Ground yourself in your body.",
        opening_message="When thoughts won't stop circling, it helps to put them somewhere. Want to do a quick brain dump? Write everything out — no filter, no structure. Then we can look at what actually needs attention.",
        avoid_topics=["complex decisions right now"],
    ),
    ArchetypeRule(
        conditions={"energy": "moderate", "concern": "emotional"},
        archetype="The Quiet Storm",
        state="Emotions surfacing — present but not overwhelming",
        ambiance="nurturing",
        gradient="linear-gradient(135deg, #0f172a 0%, #312e81 100%)",
        accent="#a78bfa",
        greeting="Your feelings are trying to tell you something. Let's listen.",
        mood="emotional",
        primary_tool_id="self_compassion",
        quick_relief_id="elongated_exhale",
        deeper_work_id="talk_to_ai",
        tool_ids=["self_compassion", "elongated_exhale", "talk_to_ai", "gentle_stretching", "brain_dump"],
        ai_tone="warm, compassionate, validating",
        ai_style='Gentle pacing. No pressure to "fix" anything. Hold space. Reflect back feelings.',
        journal_prompt="The emotion I'm feeling is... What it's trying to tell me is...",
        affirmation="Emotions aren't problems to solve. They're signals to honour.",
        body_focus="Place a hand on your heart. Feel its steady rhythm. You're still here.",
        opening_message="I can sense there's something emotional surfacing right now. You don't need to explain it or have words for it. I'm just here with you. Would you like to talk, or would you prefer something gentle — like a self-compassion exercise?",
        avoid_topics=["cheering up", "bright side", "toughening up"],
    ),
    ArchetypeRule(
        conditions={"energy": "moderate", "concern": "reset"},
        archetype="The Seeking Path",
        state="Looking for a reset — proactively caring for yourself",
        ambiance="calm",
        gradient="linear-gradient(135deg, #0f172a 0%, #1e293b 100%)",
        accent="#2dd4bf",
        greeting="You showed up for yourself. That's already a powerful step.",
        mood="balanced",
        primary_tool_id="talk_to_ai",
        quick_relief_id="box_breathing",
        deeper_work_id="brain_dump",
        tool_ids=["talk_to_ai", "box_breathing", "brain_dump", "gentle_stretching", "gratitude_micro"],
        ai_tone="warm, collaborative, balanced",
        ai_style="Open conversation. Explore what they need. Balanced approach. Celebrate their self-awareness.",
        journal_prompt="What I'd like to reset is... After this session, I want to feel...",
        affirmation="Taking time for yourself isn't selfish. It's essential.",
        body_focus="Check in with your body. Where do you notice any sensation?",
        opening_message="You're here because you want to feel better — that self-awareness is powerful. What would be most helpful right now? I can offer a listening ear, help you think through something, or guide you through a wellness exercise.",
        avoid_topics=[],
    ),

    # ─── LOW ENERGY ────────────────────────────────
    ArchetypeRule(
        conditions={"energy": "low", "concern": "empty"},
        archetype="The Hollow Shell",
        state="Emptied out, numb — disconnected from feelings",
        ambiance="nurturing",
        gradient="linear-gradient(135deg, #020617 0%, #0f172a 50%, #1a1a2e 100%)",
        accent="#64748b",
        greeting="Feeling empty is its own kind of pain. You're not broken.",
        mood="numb",
        primary_tool_id="grounding_54321",
        quick_relief_id="self_compassion",
        deeper_work_id="talk_to_ai",
        tool_ids=["grounding_54321", "self_compassion", "talk_to_ai", "body_scan", "gratitude_micro"],
        ai_tone="very gentle, present, no demands whatsoever",
        ai_style="Don't try to generate feelings. Just be present. Grounding over processing. Tiny sensory reconnections.",
        journal_prompt="Right now I can notice... One small thing I can feel is...",
        affirmation="Numbness is your mind's way of protecting you. Feeling will return when you're ready.",
        body_focus="Can you feel where your body touches the surface beneath you? Start there.",
        opening_message="I'm here with you. When everything feels empty, sometimes the first step is just reconnecting with one small sensation. Can you feel the surface beneath you? The temperature of the air? That's enough for now.",
        avoid_topics=["forcing feelings", "what's wrong", "cheering up"],
    ),
    ArchetypeRule(
        conditions={"energy": "low", "concern": "sad"},
        archetype="The Heavy Heart",
        state="Deep sadness with depleted energy — a place of stillness and pain",
        ambiance="nurturing",
        gradient="linear-gradient(135deg, #020617 0%, #0f172a 100%)",
        accent="#818cf8",
        greeting="You're running on empty. Be gentle with yourself right now.",
        mood="depleted",
        primary_tool_id="rest_permission",
        quick_relief_id="self_compassion",
        deeper_work_id="talk_to_ai",
        tool_ids=["rest_permission", "self_compassion", "talk_to_ai", "gratitude_micro", "body_scan"],
        ai_tone="very gentle, warm, no demands",
        ai_style="Minimal questions. Short comforting responses. Hold space. Don't try to fix.",
        journal_prompt="Today I need... One kind thing I can do for myself is...",
        affirmation="Rest is not giving up. It's what your body needs right now. You're still here, and that matters.",
        body_focus="Find the most comfortable position possible. Let gravity hold you.",
        opening_message="I'm here with you. There's no pressure to talk or do anything. If you need to rest, that's okay. If you want company, I'm not going anywhere.",
        avoid_topics=["productivity", "goals", "pushing through", "positivity"],
    ),
    ArchetypeRule(
        conditions={"energy": "low", "concern": "hopeless"},
        archetype="The Darkened Room",
        state="Stuck in hopelessness — can't see a way forward",
        ambiance="nurturing",
        gradient="linear-gradient(135deg, #020617 0%, #1a1a2e 100%)",
        accent="#a78bfa",
        greeting="Even in the dark, you found your way here. That matters.",
        mood="hopeless",
        primary_tool_id="self_compassion",
        quick_relief_id="elongated_exhale",
        deeper_work_id="talk_to_ai",
        tool_ids=["self_compassion", "elongated_exhale", "talk_to_ai", "rest_permission", "grounding_54321"],
        ai_tone="very gentle, present, honest, no false hope",
        ai_style="Don't promise it gets better. Just be present. Acknowledge the pain is real. Find the smallest possible next step.",
        journal_prompt="What feels most stuck is... One tiny thing that's still true is...",
        affirmation="You don't need to see the whole path. Just the next breath. You're still here.",
        body_focus="Let your body be heavy. You don't need to hold yourself up right now.",
        opening_message="I hear you. Things feel stuck and heavy right now. I'm not going to tell you it'll be fine — I'm just going to be here with you. You don't have to do anything. Would you like to talk, or just have some quiet company?",
        avoid_topics=["bright side", "gratitude", "just try harder", "motivation"],
    ),
    ArchetypeRule(
        conditions={"energy": "low", "concern": "exhausted"},
        archetype="The Collapsed Stack",
        state="Completely drained — nothing left to give",
        ambiance="nurturing",
        gradient="linear-gradient(135deg, #020617 0%, #0f172a 50%, #1c1917 100%)",
        accent="#fb923c",
        greeting="You've been running on empty. It's time to stop.",
        mood="exhausted",
        primary_tool_id="rest_permission",
        quick_relief_id="physiological_sigh",
        deeper_work_id="self_compassion",
        tool_ids=["rest_permission", "physiological_sigh", "self_compassion", "gratitude_micro", "talk_to_ai"],
        ai_tone="very gentle, permission-giving, no demands",
        ai_style="Give permission to stop. Reduce everything. Absolute minimum. Rest is the intervention.",
        journal_prompt="I give myself permission to let go of... One thing that can wait is...",
        affirmation="You can't pour from an empty cup. Rest now. Everything else can wait.",
        body_focus="Let your body be heavy. Let the chair or bed hold your weight.",
        opening_message="It sounds like you've been pushing for too long with too little. Here's what I want you to know: you don't have to do any of it right now. Not a single thing. Would you like to just rest for a moment?",
        avoid_topics=["to-do lists", "productivity", "motivation", "pushing through"],
    ),
    ArchetypeRule(
        conditions={"energy": "low", "concern": "foggy"},
        archetype="The Lost Signal",
        state="Mental fog — can't think clearly, disconnected",
        ambiance="grounding",
        gradient="linear-gradient(135deg, #020617 0%, #1e1b4b 100%)",
        accent="#7dd3fc",
        greeting="When everything feels foggy, one clear moment is enough.",
        mood="foggy",
        primary_tool_id="grounding_54321",
        quick_relief_id="cold_water_reset",
        deeper_work_id="body_scan",
        tool_ids=["grounding_54321", "cold_water_reset", "body_scan", "elongated_exhale", "talk_to_ai"],
        ai_tone="slow, clear, grounding, simple",
        ai_style="Very simple language. One thing at a time. Sensory grounding. Don't overwhelm with choices.",
        journal_prompt="Right now I can see... I can hear... I can feel...",
        affirmation="The fog will lift. For now, you're here, and that's enough.",
        body_focus="Start with your hands. Can you feel them? Rub them together slowly.",
        opening_message="Things feel foggy right now. That's okay — we don't need clarity to start. Let's try something simple: can you name 5 things you can see right now? Just look around slowly. That's all.",
        avoid_topics=["complex decisions", "planning ahead", "figuring it out"],
    ),

    # ─── CATCH-ALL DEFAULTS ────────────────────────
    ArchetypeRule(
        conditions={"energy": "high"},
        archetype="The Charged Wire",
        state="High energy seeking direction",
        ambiance="grounding",
        gradient="linear-gradient(135deg, #0f172a 0%, #1e3a5f 100%)",
        accent="#38bdf8",
        greeting="You've got energy. Let's channel it somewhere good.",
        mood="wired",
        primary_tool_id="shake_it_out",
        quick_relief_id="physiological_sigh",
        deeper_work_id="walking_reset",
        tool_ids=["shake_it_out", "physiological_sigh", "walking_reset", "box_breathing", "brain_dump"],
        ai_tone="energetic but grounding",
        ai_style="Match their energy initially, then guide toward calm.",
        journal_prompt="This energy wants to... What I really need is...",
        affirmation="Your energy is a resource. Let's use it wisely.",
        body_focus="Your body might be tense. Let's shake it out.",
        opening_message="Lots of energy right now! Let's use it well. Do you want something physical to release it, or something to channel it like focus work?",
        avoid_topics=[],
    ),
    ArchetypeRule(
        conditions={"energy": "moderate"},
        archetype="The Steady Path",
        state="Balanced energy, seeking something specific",
        ambiance="calm",
        gradient="linear-gradient(135deg, #0f172a 0%, #1e293b 100%)",
        accent="#2dd4bf",
        greeting="You're in a good place to work on whatever you need.",
        mood="balanced",
        primary_tool_id="talk_to_ai",
        quick_relief_id="box_breathing",
        deeper_work_id="brain_dump",
        tool_ids=["talk_to_ai", "box_breathing", "brain_dump", "gentle_stretching", "gratitude_micro"],
        ai_tone="warm, collaborative, balanced",
        ai_style="Open conversation. Explore what they need. Balanced approach.",
        journal_prompt="What's on my mind today is... What would make today feel good?",
        affirmation="You're taking time for yourself. That takes courage.",
        body_focus="Check in with your body. Where do you notice any sensation?",
        opening_message="You seem like you're in a steady place. What would be most helpful right now? I can offer a listening ear, help you think through something, or guide you through a wellness exercise.",
        avoid_topics=[],
    ),
    ArchetypeRule(
        conditions={"energy": "low"},
        archetype="The Gentle Ember",
        state="Low energy, needs nurturing",
        ambiance="nurturing",
        gradient="linear-gradient(135deg, #020617 0%, #0f172a 100%)",
        accent="#94a3b8",
        greeting="Be gentle with yourself. You're doing more than you think.",
        mood="quiet",
        primary_tool_id="rest_permission",
        quick_relief_id="self_compassion",
        deeper_work_id="body_scan",
        tool_ids=["rest_permission", "self_compassion", "body_scan", "elongated_exhale", "gratitude_micro"],
        ai_tone="very gentle, nurturing, no pressure",
        ai_style="Meet them where they are. Very low demands. Permission to rest.",
        journal_prompt="My energy is low because... What I need right now is...",
        affirmation="It's okay to not be okay. Rest is productive too.",
        body_focus="Find the most comfortable position. Let everything be soft.",
        opening_message="Your energy is low right now, and that's okay. There's no pressure here. What feels right — a moment of rest, a gentle exercise, or someone to talk to?",
        avoid_topics=["motivation", "pushing through"],
    ),
)
