# src/mood_tube/agents/config.py
import logging
import os

from dotenv import load_dotenv
from openai import OpenAI

load_dotenv(".env")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


LLM_CONFIG = {
    "model": os.getenv("LLM_MODEL", "deepseek-chat"),
    "api_key": os.getenv("OPENAI_API_KEY"),
    "base_url": os.getenv("OPENAI_BASE_URL", "https://api.deepseek.com"),
    "temperature": float(os.getenv("LLM_TEMPERATURE", "0.7")),
    "max_tokens": int(os.getenv("LLM_MAX_TOKENS", "1000")),
}


_openai_client = None

def get_openai_client() -> OpenAI:
    """
    Returns a shared OpenAI-compatible chat completion client.
    Initializes the client on the first call. The SDK retry loop is
    disabled: a failed completion is reported to the caller as is.
    """
    global _openai_client
    if _openai_client is None:
        if not LLM_CONFIG["api_key"]:
            raise ValueError("OPENAI_API_KEY not found in environment variables.")
        _openai_client = OpenAI(
            api_key=LLM_CONFIG["api_key"],
            base_url=LLM_CONFIG["base_url"],
            max_retries=0,
        )
    return _openai_client


def configure_logging_from_env() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


# --- Search Backend & Other Constants ---
YOUTUBE_API_KEY = os.getenv("YOUTUBE_API_KEY")
YOUTUBE_API_URL = os.getenv("YOUTUBE_API_URL", "https://www.googleapis.com/youtube/v3")
YOUTUBE_TIMEOUT = float(os.getenv("YOUTUBE_TIMEOUT", "30"))
MUSIC_CATEGORY_ID = "10"

DEFAULT_LIMIT = int(os.getenv("DEFAULT_LIMIT", "10"))
SEARCH_MAX_WORKERS = int(os.getenv("SEARCH_MAX_WORKERS", "4"))
ENRICH_TRACK_DETAILS = _env_bool("ENRICH_TRACK_DETAILS")
