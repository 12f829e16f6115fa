import logging
import os
import traceback
from pathlib import Path
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from dotenv import load_dotenv

from companion_agent import generate_ai_insight, request_companion_reply
from recommendations import OnboardingAnswers, generate_wellness_profile, profile_to_dict
from tool_catalog import TOOL_CATEGORIES, list_tools

# Load .env file from backend directory or project root
load_dotenv()
load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

VALID_ENERGY = ("high", "moderate", "low")
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def _cors_origins() -> list[str]:
    raw = os.getenv("SILENT_HELP_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(title="Silent Help Wellness API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class OnboardingRequest(BaseModel):
    """Raw onboarding answers. Checked by hand so bad input gets a 400 naming the field."""
    energy: Any = None
    concern: Any = None
    context: Any = None
    approach: Any = None
    support_style: Any = None
    time: Any = None


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class CompanionRequest(BaseModel):
    answers: OnboardingRequest
    message: str = ""
    history: list[ChatTurn] = []


def validate_answers(request: OnboardingRequest) -> OnboardingAnswers:
    if request.energy not in VALID_ENERGY:
        raise HTTPException(status_code=400, detail="Invalid energy value")
    for field in ("concern", "context", "approach", "support_style", "time"):
        value = getattr(request, field)
        if not value or not isinstance(value, str):
            raise HTTPException(status_code=400, detail=f"Missing {field}")

    return OnboardingAnswers(
        energy=request.energy,
        concern=request.concern,
        context=request.context,
        approach=request.approach,
        support_style=request.support_style,
        time=request.time,
    )


@app.get("/")
async def root():
    return {"message": "Silent Help Wellness API"}


@app.post("/api/onboarding")
async def onboarding(request: OnboardingRequest):
    try:
        answers = validate_answers(request)
        logger.info(f"Received onboarding request: energy={answers.energy}, concern={answers.concern}")

        profile = generate_wellness_profile(answers)
        ai_insight = await generate_ai_insight(answers, profile.archetype)

        logger.info(f"Profile generated: archetype={profile.archetype}, tools={len(profile.tools)}")
        return {"success": True, "profile": {**profile_to_dict(profile), "aiInsight": ai_insight}}
    except HTTPException:
        raise
    except Exception as exc:
        error_msg = str(exc)
        error_trace = traceback.format_exc()
        logger.error(f"Error in /api/onboarding: {error_msg}\n{error_trace}")
        raise HTTPException(
            status_code=500,
            detail=error_msg
        )


@app.post("/api/profile/preview")
async def profile_preview(request: OnboardingRequest):
    """Engine-only profile, no AI call."""
    try:
        answers = validate_answers(request)
        return profile_to_dict(generate_wellness_profile(answers))
    except HTTPException:
        raise
    except Exception as exc:
        error_msg = str(exc)
        error_trace = traceback.format_exc()
        logger.error(f"Error in /api/profile/preview: {error_msg}\n{error_trace}")
        raise HTTPException(status_code=500, detail=error_msg)


@app.get("/api/tools")
async def tools(category: str | None = None):
    if category is not None and category not in TOOL_CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}")
    return {"tools": [tool.model_dump(mode="json") for tool in list_tools(category)]}


@app.post("/api/companion")
async def companion(request: CompanionRequest):
    """Reply as the personalized companion, with crisis resources when the gate fires."""
    try:
        if not request.message.strip():
            raise HTTPException(status_code=400, detail="Message is required")
        answers = validate_answers(request.answers)

        logger.info(f"Received companion message: history={len(request.history)} turns")
        result = await request_companion_reply(
            answers=answers,
            message=request.message,
            history=[turn.model_dump() for turn in request.history],
        )
        if result.get("crisis"):
            logger.warning("Companion reply carries crisis resources")
        return result
    except HTTPException:
        raise
    except Exception as exc:
        error_msg = str(exc)
        error_trace = traceback.format_exc()
        logger.error(f"Error in /api/companion: {error_msg}\n{error_trace}")
        raise HTTPException(
            status_code=500,
            detail=error_msg
        )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
