"""
Configuration settings for the board game lookup service.
"""

import os
from pathlib import Path


class ConfigurationError(Exception):
    """Raised at startup when the service cannot be configured."""


def env_float(name: str, default: float) -> float:
    """Read a positive number from the environment, failing fast on a bad value."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if not value > 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


# Project paths
PROJECT_ROOT = Path(__file__).parent.parent  # Go up one level to workspace root
# Logs directory for per-run logs
LOGS_DIR = PROJECT_ROOT / "logs"

# BoardGameGeek XML API
BGG_API_BASE = os.environ.get("BGG_API_BASE", "https://boardgamegeek.com/xmlapi2").rstrip("/")
BGG_API_TOKEN = os.environ.get("BGG_API_TOKEN")
USER_AGENT = os.environ.get(
    "BGG_LOOKUP_USER_AGENT",
    "BoardGameCollectionLookup/0.1 (board game collection tracker)",
)
REQUEST_TIMEOUT = env_float("BGG_LOOKUP_TIMEOUT", 15.0)

# Result shaping
SEARCH_RESULT_LIMIT = 20
DETAIL_BATCH_LIMIT = 10  # ids handed to the detail call in search mode
DESCRIPTION_MAX_LENGTH = 2000

# Resolver backend: "xml" (default) or "ai"
RESOLVER_BACKEND = os.environ.get("BGG_LOOKUP_BACKEND", "xml").lower()

# AI tool-call backend
TOGETHER_API_KEY = os.environ.get("TOGETHER_API_KEY")
AI_MODEL_NAME = os.environ.get("BGG_LOOKUP_AI_MODEL", "meta-llama/Llama-3.3-70B-Instruct-Turbo")
AI_MAX_RESULTS = 10

AI_SEARCH_PROMPT = """
You are a board game database expert. When asked to search for board games, use the
search_board_games tool to return accurate results. Include real BoardGameGeek IDs (bggId)
when you know them. Return up to 10 results sorted by relevance. For each game, provide as
much accurate data as possible including player counts, playing time, year published, BGG
rating, weight/complexity, categories and mechanics. Use English names for game titles.
"""

# CORS headers attached to every HTTP response
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": (
        "authorization, x-client-info, apikey, content-type, "
        "x-supabase-client-platform, x-supabase-client-platform-version, "
        "x-supabase-client-runtime, x-supabase-client-runtime-version"
    ),
}

# User-facing error messages
MISSING_INPUT_MESSAGE = "Provide query or bggIds"
INVALID_JSON_MESSAGE = "Request body must be valid JSON"
INVALID_IDS_MESSAGE = "bggIds must be a list of integers"
EMPTY_QUERY_MESSAGE = "Provide a search query"
UPSTREAM_ERROR_MESSAGE = "Board game search is temporarily unavailable"
UPSTREAM_FORMAT_MESSAGE = "Unexpected search result format"
RATE_LIMIT_MESSAGE = "Too many search requests, please try again later"
QUOTA_MESSAGE = "AI search quota exhausted"
