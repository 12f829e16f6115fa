import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from agents import Agent, Runner
from agents.mcp import MCPServerStdio
from openai import AsyncOpenAI

from crisis import check_for_crisis, get_crisis_system_prompt
from prompts import crisis_detected_note, insight_fallback_template, offline_companion_reply
from recommendations import (
    OnboardingAnswers,
    WellnessProfile,
    build_ai_analysis_prompt,
    generate_wellness_profile,
)

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
MCP_DIR = PROJECT_ROOT / "silent-help-mcp-agent"
MCP_SCRIPT = MCP_DIR / "mcp-server" / "silent_help_mcp.py"

DEFAULT_MODEL = "gpt-4o-mini"
MAX_HISTORY_MESSAGES = 20


def _insight_model() -> str:
    return os.getenv("SILENT_HELP_INSIGHT_MODEL", DEFAULT_MODEL)


def _companion_model() -> str:
    return os.getenv("SILENT_HELP_COMPANION_MODEL", DEFAULT_MODEL)


def build_insight_fallback(answers: OnboardingAnswers) -> str:
    return insight_fallback_template.format(
        concern=answers.concern,
        energy=answers.energy,
        approach=answers.approach,
    )


async def generate_ai_insight(answers: OnboardingAnswers, archetype: str) -> str:
    """
    Ask the model for a short personalized insight on this check-in.

    The insight is optional: without an API key, or on any model failure, the
    fixed fallback sentence is returned instead of raising.
    """
    fallback = build_insight_fallback(answers)

    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        logger.info("OPENAI_API_KEY not set, using fallback insight")
        return fallback

    try:
        client = AsyncOpenAI(api_key=api_key, timeout=30.0)
        response = await client.chat.completions.create(
            model=_insight_model(),
            messages=[{"role": "user", "content": build_ai_analysis_prompt(answers, archetype)}],
            max_tokens=200,
            temperature=0.8,
        )
        insight = (response.choices[0].message.content or "").strip()
        if not insight:
            logger.warning("Model returned an empty insight, using fallback")
            return fallback
        return insight
    except Exception as e:
        logger.warning(f"AI insight unavailable, using fallback: {e}")
        return fallback


def build_companion_instructions(profile: WellnessProfile) -> str:
    """Profile's system prompt base plus the crisis safety rules."""
    return f"{profile.ai_personality.system_prompt_base}\n\n{get_crisis_system_prompt()}"


def build_input_items(
    message: str,
    history: Optional[List[Dict[str, Any]]] = None,
    crisis_detected: bool = False,
) -> List[Dict[str, str]]:
    """Recent history + the new message, with a crisis note when the gate fired."""
    recent = (history or [])[-MAX_HISTORY_MESSAGES:]
    input_items: List[Dict[str, str]] = [
        {"role": item.get("role", "user"), "content": item.get("content", "")}
        for item in recent
        if item.get("content")
    ]
    input_items.append({"role": "user", "content": message})
    if crisis_detected:
        input_items.append({"role": "system", "content": crisis_detected_note})
    return input_items


async def _run_agent(instructions: str, input_items: List[Dict[str, str]]) -> str:
    """Run the companion agent with the Silent Help MCP tools available."""
    if not MCP_SCRIPT.exists():
        raise RuntimeError(f"MCP server script not found at {MCP_SCRIPT}")

    env = os.environ.copy()
    script_path = str(MCP_SCRIPT.resolve())
    cwd_path = str(MCP_DIR.resolve())

    try:
        logger.info(f"Starting MCP server: {sys.executable} {script_path}")
        async with MCPServerStdio(
            name="Silent Help MCP Server",
            params={
                "command": sys.executable,
                "args": [script_path],
                "cwd": cwd_path,
                "env": env,
            },
            client_session_timeout_seconds=60.0,
        ) as server:
            agent = Agent(
                name="Silent Help Companion",
                instructions=instructions,
                model=_companion_model(),
                mcp_servers=[server],
            )
            logger.info(f"Running companion agent with {len(input_items)} input items")
            result = await Runner.run(agent, input=input_items)
            return str(result.final_output or "").strip()
    except Exception as e:
        logger.error(f"Error during companion agent execution: {e}", exc_info=True)
        raise RuntimeError(f"Companion agent failed: {str(e)}")


async def request_companion_reply(
    answers: OnboardingAnswers,
    message: str,
    history: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """
    Reply to one chat message as the personalized companion.

    Returns {"reply": str, "crisis": dict | None}. Without an API key the reply
    is the crisis safety message when the gate fired, else a fixed offline note.
    """
    crisis = check_for_crisis(message)
    crisis_payload = crisis.model_dump(mode="json", by_alias=True) if crisis.is_crisis else None

    if not os.getenv("OPENAI_API_KEY"):
        logger.info("OPENAI_API_KEY not set, returning offline companion reply")
        reply = crisis.safety_message if crisis.is_crisis else offline_companion_reply
        return {"reply": reply, "crisis": crisis_payload}

    profile = generate_wellness_profile(answers)
    instructions = build_companion_instructions(profile)
    input_items = build_input_items(message, history, crisis_detected=crisis.is_crisis)

    reply = await _run_agent(instructions, input_items)
    return {"reply": reply, "crisis": crisis_payload}
