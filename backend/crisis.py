"""
Crisis keyword gate - fast, deterministic screen run on every companion message
before it reaches the model. If it fires, the reply must carry crisis resources.
"""
import logging
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from prompts import crisis_system_prompt

logger = logging.getLogger(__name__)


CRISIS_KEYWORDS: List[str] = [
    # Direct harm
    "kill myself", "end my life", "want to die", "suicide",
    "suicidal", "self harm", "self-harm", "cut myself",
    "hurt myself", "end it all", "no reason to live",
    "better off dead", "can't go on", "give up on life",
    # Ideation
    "don't want to be here", "wish i was dead", "not worth living",
    "no point in living", "life is pointless", "nothing matters anymore",
]


class CrisisResource(BaseModel):
    name: str
    number: str
    description: str


UK_CRISIS_RESOURCES: Dict[str, CrisisResource] = {
    "emergency": CrisisResource(name="Emergency Services", number="999", description="For immediate danger"),
    "samaritans": CrisisResource(name="Samaritans", number="116 123", description="24/7 emotional support, free to call"),
    "shout": CrisisResource(name="Shout", number="Text SHOUT to 85258", description="Free 24/7 text support"),
    "nhs": CrisisResource(name="NHS 111", number="111", description="Mental health advice"),
    "calm": CrisisResource(name="CALM", number="0800 58 58 58", description="Campaign Against Living Miserably"),
}

SAFETY_MESSAGE = (
    "I hear you, and I want you to know that support is available right now. "
    "You don't have to face this alone. Please reach out to one of these services — "
    "they're free, confidential, and available 24/7."
)


class CrisisCheckResult(BaseModel):
    is_crisis: bool = Field(..., serialization_alias="isCrisis")
    severity: Literal["none", "low", "medium", "high"]
    matched_keywords: List[str] = Field(default_factory=list, serialization_alias="matchedKeywords")
    resources: Optional[Dict[str, CrisisResource]] = None
    safety_message: Optional[str] = Field(None, serialization_alias="safetyMessage")


def check_for_crisis(text: str) -> CrisisCheckResult:
    """Match the message against the crisis keyword list (case-insensitive)."""
    lower = (text or "").lower()
    matched = [keyword for keyword in CRISIS_KEYWORDS if keyword in lower]

    if not matched:
        return CrisisCheckResult(is_crisis=False, severity="none")

    if len(matched) >= 3:
        severity = "high"
    elif len(matched) >= 2:
        severity = "medium"
    else:
        severity = "low"

    logger.warning(f"Crisis language detected: severity={severity}, matches={len(matched)}")

    return CrisisCheckResult(
        is_crisis=True,
        severity=severity,
        matched_keywords=matched,
        resources=dict(UK_CRISIS_RESOURCES),
        safety_message=SAFETY_MESSAGE,
    )


def get_crisis_system_prompt() -> str:
    """Safety rules appended to every companion system prompt."""
    return crisis_system_prompt.strip()
