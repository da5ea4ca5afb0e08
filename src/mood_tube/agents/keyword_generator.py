# src/mood_tube/agents/keyword_generator.py
"""
Turns a free-text listening request into search keywords with an LLM.

The model is asked for a small JSON object; when it wraps that object in
prose, the first brace-delimited block is parsed instead.
"""
import json
import logging
import re
from typing import Optional

import openai
from openai import OpenAI

from .config import LLM_CONFIG, get_openai_client
from .errors import KeywordGenerationError, QuotaExceededError, ResponseParseError
from .models import SEARCH_TYPES, KeywordPlan, RecommendationRequest

logger = logging.getLogger(__name__)

DEFAULT_REASONING = "Recommending music based on your description"

SYSTEM_PROMPT = f"""You are a professional music recommendation expert. Based on the user's description, generate search keywords and tags.

Your tasks:
1. Analyze user intent and requirements
2. Generate the most appropriate search keywords and tags
3. Do not recommend specific songs, but generate descriptive keywords for searching

Return format (JSON only):
{{
  "reasoning": "Reasoning for recommendations",
  "keywords": ["keyword1", "keyword2", "keyword3"],
  "tags": ["tag1", "tag2"],
  "searchType": "{'|'.join(SEARCH_TYPES)}"
}}

Return pure JSON format only."""

USER_PROMPT_TEMPLATE = """\
User Request: {prompt}
User Preferences: {include_genres}
Exclude Genres: {exclude_genres}
Mood Preference: {mood}
Recommendation Count: {limit} songs"""

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


def build_user_prompt(request: RecommendationRequest) -> str:
    return USER_PROMPT_TEMPLATE.format(
        prompt=request.prompt,
        include_genres=", ".join(request.include_genres or []) or "no specific preference",
        exclude_genres=", ".join(request.exclude_genres or []) or "none",
        mood=request.mood or "no specific mood",
        limit=request.limit or 10,
    )


def _string_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def parse_keyword_response(content: Optional[str]) -> KeywordPlan:
    """
    Parses the raw model text into a KeywordPlan.

    Empty content is not an error: it yields a plan with no keywords and no
    reasoning. Content that is neither JSON nor contains a JSON object
    raises ResponseParseError.
    """
    if not content or not content.strip():
        return KeywordPlan(keywords=[], reasoning="", tags=[])

    try:
        result = json.loads(content)
    except json.JSONDecodeError:
        match = _JSON_BLOCK.search(content)
        if not match:
            raise ResponseParseError()
        try:
            result = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ResponseParseError(f"Failed to parse AI response JSON: {e}") from e

    # Valid JSON that is not an object carries no fields; every field defaults.
    if not isinstance(result, dict):
        result = {}

    search_type = result.get("searchType")
    if search_type not in SEARCH_TYPES:
        search_type = "song"

    return KeywordPlan(
        keywords=_string_list(result.get("keywords")),
        reasoning=result.get("reasoning") or DEFAULT_REASONING,
        tags=_string_list(result.get("tags")),
        search_type=search_type,
    )


def generate_keywords(
    request: RecommendationRequest, client: Optional[OpenAI] = None
) -> KeywordPlan:
    """
    Asks the chat completion model for a search plan matching the request.

    Args:
        request: The user's recommendation request.
        client: OpenAI-compatible client; the shared client is used if omitted.

    Returns:
        KeywordPlan with keywords, reasoning, tags and search type.

    Raises:
        QuotaExceededError: the provider rejected the call for lack of balance.
        KeywordGenerationError: any other remote or parsing failure.
    """
    user_prompt = build_user_prompt(request)
    logger.info(
        "Requesting keywords for prompt %r (preferences: %s)",
        request.prompt,
        ", ".join(request.include_genres or []) or "none",
    )

    try:
        client = client or get_openai_client()
        completion = client.chat.completions.create(
            model=LLM_CONFIG["model"],
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            temperature=LLM_CONFIG["temperature"],
            max_tokens=LLM_CONFIG["max_tokens"],
        )
        content = completion.choices[0].message.content if completion.choices else ""
        logger.debug("Raw model response: %s", content)
        return parse_keyword_response(content)

    except openai.APIStatusError as e:
        logger.error("LLM API error (status %s): %s", e.status_code, e)
        if e.status_code == 402:
            raise QuotaExceededError() from e
        raise KeywordGenerationError() from e
    except ResponseParseError as e:
        logger.error("Could not parse model response for %r: %s", request.prompt, e)
        raise KeywordGenerationError() from e
    except Exception as e:
        logger.exception("Keyword generation failed for %r: %s", request.prompt, e)
        raise KeywordGenerationError() from e
