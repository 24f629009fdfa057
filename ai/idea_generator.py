"""
ai/idea_generator.py
--------------------
Uses Google Gemini to generate startup ideas from a user's interests.

Responsibilities:
    - Build the prompt from interests, market trends and preferences.
    - Parse the model's answer (JSON, or "Key: value" text as a fallback).
    - Normalise every idea so the client always gets the same shape.
"""

import json
import re
from typing import Any, Optional

import google.generativeai as genai

from models.idea import DIFFICULTIES
from utils.logger import get_logger

logger = get_logger(__name__)

_SYSTEM_PROMPT = (
    "You are an expert startup idea generator. Generate innovative, feasible, "
    "and market-viable startup ideas based on user interests and preferences. "
    "Format each idea with a title, description, market size estimate, "
    "difficulty level, and estimated time to launch."
)

_IDEA_SHAPE = (
    '[{"title": "string", "description": "string", "category": "string", '
    '"marketSize": "string", "difficulty": "string", "timeToLaunch": "string", '
    '"revenueEstimate": "string", "tags": ["string"]}]'
)

_DEFAULT_IDEA: dict[str, Any] = {
    "title": "AI-Generated Startup",
    "description": "An innovative business opportunity tailored to your skills and interests.",
    "category": "Technology",
    "marketSize": "Growing market",
    "timeToLaunch": "3-6 months",
    "revenueEstimate": "$25K-$100K/year",
}
_DEFAULT_TAGS = ["AI-generated", "startup", "business"]

# "Title: ...", "- **Market size:** ...", "3. Time to launch: ..."
_FIELD_LINE = re.compile(
    r"^[\s\-*#\d.)]*"
    r"(title|description|category|market size|difficulty|time to launch|revenue(?: estimate)?|tags)"
    r"\s*\**\s*:\s*\**\s*(.*)$",
    re.IGNORECASE,
)
_TEXT_KEYS = {
    "title": "title",
    "description": "description",
    "category": "category",
    "market size": "marketSize",
    "difficulty": "difficulty",
    "time to launch": "timeToLaunch",
    "revenue": "revenueEstimate",
    "revenue estimate": "revenueEstimate",
    "tags": "tags",
}


def build_prompt(params: dict) -> str:
    """
    Render the user prompt.

    Args:
        params: {"interests": [...], "marketTrends": [...]?,
                 "userPreferences": {"preferredDifficulty", "preferredTimeToLaunch",
                                     "preferredMarketSize"}?}
    """
    interests = params.get("interests") or []
    prompt = f"Generate 3 innovative startup ideas based on the following interests: {', '.join(interests)}.\n\n"

    trends = params.get("marketTrends") or []
    if trends:
        prompt += f"Consider these market trends: {', '.join(trends)}.\n\n"

    preferences = params.get("userPreferences") or {}
    labels = [
        ("preferredDifficulty", "Preferred difficulty"),
        ("preferredTimeToLaunch", "Preferred time to launch"),
        ("preferredMarketSize", "Preferred market size"),
    ]
    lines = [f"- {label}: {preferences[key]}\n" for key, label in labels if preferences.get(key)]
    if lines:
        prompt += "Preferences:\n" + "".join(lines)

    prompt += (
        "\nFor each idea, provide:\n"
        "1. A catchy title\n"
        "2. A detailed description\n"
        "3. Category (e.g., Technology, Healthcare, Education)\n"
        "4. Estimated market size (in $B)\n"
        "5. Difficulty level (Easy/Medium/Hard)\n"
        "6. Estimated time to launch\n"
        "7. Estimated revenue range\n"
        "8. Relevant tags (array of keywords)\n\n"
        "Format the response as a JSON array of objects with the following structure:\n"
        f"{_IDEA_SHAPE}"
    )
    return prompt


def validate_difficulty(value: Any) -> str:
    """Return `value` if it is an allowed difficulty, else 'Medium'."""
    return value if value in DIFFICULTIES else "Medium"


def format_idea(raw: dict) -> dict:
    """Fill in defaults so every idea has all fields with sane types."""
    idea = {key: raw.get(key) or default for key, default in _DEFAULT_IDEA.items()}
    idea["difficulty"] = validate_difficulty(raw.get("difficulty"))
    tags = raw.get("tags")
    idea["tags"] = [str(t) for t in tags] if isinstance(tags, list) and tags else list(_DEFAULT_TAGS)
    return idea


def _strip_code_fences(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("```"):
        raw = raw.split("\n", 1)[1] if "\n" in raw else raw[3:]
    if raw.endswith("```"):
        raw = raw[:-3]
    return raw.strip()


def _parse_text(content: str) -> list[dict]:
    """Fallback for answers that ignored the JSON instruction."""
    ideas: list[dict] = []
    current: dict[str, Any] = {}

    for line in content.splitlines():
        match = _FIELD_LINE.match(line)
        if not match:
            continue
        key = _TEXT_KEYS[match.group(1).lower()]
        value = match.group(2).strip().strip("*").strip()
        if key == "title" and current.get("title"):
            ideas.append(format_idea(current))
            current = {}
        if key == "tags":
            current["tags"] = [t.strip() for t in value.split(",") if t.strip()]
        else:
            current[key] = value

    if current.get("title"):
        ideas.append(format_idea(current))
    return ideas


def parse_ideas(content: str) -> list[dict]:
    """
    Turn the model's answer into a list of normalised ideas.

    Tries a JSON array first, then falls back to line-by-line text extraction.
    """
    cleaned = _strip_code_fences(content)
    try:
        parsed = json.loads(cleaned)
    except ValueError:
        logger.warning("Gemini answer is not JSON, falling back to text extraction")
    else:
        if isinstance(parsed, list):
            return [format_idea(item) for item in parsed if isinstance(item, dict)]
        if isinstance(parsed, dict) and isinstance(parsed.get("ideas"), list):
            return [format_idea(item) for item in parsed["ideas"] if isinstance(item, dict)]
    return _parse_text(cleaned)


class IdeaGenerator:
    """Thin wrapper around a Gemini model for idea generation."""

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash", model: Optional[Any] = None):
        if model is None:
            genai.configure(api_key=api_key)
            model = genai.GenerativeModel(model_name, system_instruction=_SYSTEM_PROMPT)
        self._model = model

    def generate(self, params: dict) -> list[dict]:
        """
        Ask the model for ideas.

        Returns:
            A list of idea dicts (title, description, category, marketSize,
            difficulty, timeToLaunch, revenueEstimate, tags).

        Raises:
            Exception: Whatever the Gemini client raises on API failure.
        """
        response = self._model.generate_content(
            build_prompt(params),
            generation_config=genai.GenerationConfig(
                temperature=0.7,
                max_output_tokens=1000,
            ),
        )
        ideas = parse_ideas(response.text)
        logger.info(f"Gemini generated {len(ideas)} ideas")
        return ideas
