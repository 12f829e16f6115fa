import json
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

# Ensure we can import the backend engine modules
try:
    PROJECT_ROOT = Path(__file__).resolve().parents[2]
    BACKEND_DIR = PROJECT_ROOT / "backend"
    if str(BACKEND_DIR) not in sys.path:
        sys.path.append(str(BACKEND_DIR))

    from crisis import check_for_crisis, get_crisis_system_prompt  # noqa: E402
    from prompts import system_prompt as shared_system_prompt_text  # noqa: E402
    from recommendations import (  # noqa: E402
        OnboardingAnswers,
        build_ai_analysis_prompt,
        generate_wellness_profile as build_wellness_profile,
        match_archetype,
        profile_to_dict,
    )
    from tool_catalog import TOOL_CATEGORIES, get_tool, list_tools  # noqa: E402
except ImportError as e:
    print(f"ERROR: Failed to import backend modules: {e}", file=sys.stderr)
    print(f"sys.path: {sys.path}", file=sys.stderr)
    raise

# Load .env from project root, backend, or current directory
load_dotenv(dotenv_path=PROJECT_ROOT / ".env")
load_dotenv(dotenv_path=BACKEND_DIR / ".env")
load_dotenv()

mcp = FastMCP("silent-help-mcp")


def _answers(energy: str, concern: str, context: str, approach: str, support_style: str, time: str) -> OnboardingAnswers:
    return OnboardingAnswers(
        energy=energy,
        concern=concern,
        context=context,
        approach=approach,
        support_style=support_style,
        time=time,
    )


@mcp.prompt()
def system_prompt() -> str:
    """Expose the default companion instructions, crisis rules included."""
    return f"{shared_system_prompt_text.strip()}\n\n{get_crisis_system_prompt()}"


@mcp.tool()
def generate_wellness_profile(
    energy: str,
    concern: str,
    context: str,
    approach: str,
    support_style: str,
    time: str,
) -> str:
    """
    Build the personalized wellness profile for one onboarding check-in.

    Args:
        energy: "high", "moderate" or "low"
        concern: primary concern, e.g. "anxiety", "exhausted"
        context: deeper context, e.g. "work", "relationships"
        approach: what the user wants, e.g. "calm_down", "rest"
        support_style: how they want to be supported, e.g. "gentle"
        time: minutes available as a string; "10" means no limit

    Returns:
        JSON string with the profile (archetype, theme, ranked tools, urgency, AI personality)
    """
    try:
        profile = build_wellness_profile(_answers(energy, concern, context, approach, support_style, time))
        return json.dumps(profile_to_dict(profile), indent=2)
    except Exception as e:
        error_msg = f"Error generating wellness profile: {str(e)}"
        print(f"ERROR: {error_msg}", file=sys.stderr)
        return json.dumps({"error": error_msg})


@mcp.tool()
def list_wellness_tools(category: Optional[str] = None) -> str:
    """
    List the wellness tool catalog.

    Args:
        category: optional filter, one of breathing, grounding, movement,
            journaling, cognitive, rest, social

    Returns:
        JSON string: {"tools": [...]}
    """
    if category and category not in TOOL_CATEGORIES:
        return json.dumps({"error": f"Unknown category: {category}", "tools": []})

    tools = [tool.model_dump(mode="json") for tool in list_tools(category)]
    return json.dumps({"tools": tools}, indent=2)


@mcp.tool()
def get_wellness_tool(tool_id: str) -> str:
    """Full details (instructions included) for one wellness tool by id."""
    tool = get_tool(tool_id)
    if tool is None:
        return json.dumps({"error": f"Unknown tool id: {tool_id}"})
    return json.dumps(tool.model_dump(mode="json"), indent=2)


@mcp.tool()
def build_insight_prompt(
    energy: str,
    concern: str,
    context: str,
    approach: str,
    support_style: str,
    time: str,
) -> str:
    """
    Build the deep-insight prompt for a check-in without calling any model.

    Returns:
        JSON string: {"archetype": str, "prompt": str}
    """
    answers = _answers(energy, concern, context, approach, support_style, time)
    archetype = match_archetype(answers).archetype
    return json.dumps({"archetype": archetype, "prompt": build_ai_analysis_prompt(answers, archetype)}, indent=2)


@mcp.tool()
def check_crisis_language(text: str) -> str:
    """
    Screen a message for crisis language.

    Returns:
        JSON string with isCrisis, severity, matchedKeywords and, when any
        keyword matched, UK crisis resources and a safety message
    """
    result = check_for_crisis(text)
    return json.dumps(result.model_dump(mode="json", by_alias=True), indent=2)


if __name__ == "__main__":
    try:
        mcp.run(transport="stdio")
    except Exception as e:
        import traceback
        print(f"ERROR in MCP server: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)
