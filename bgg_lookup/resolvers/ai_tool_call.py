"""
AI-backed lookup strategy using a Together.ai tool-calling chat model.

The model is forced to answer through a single ``search_board_games`` tool
whose arguments are already close to the GameRecord shape, so no XML is
parsed here. It is a lower-fidelity substitute for the XML API strategy:
ids, ratings and counts are whatever the model believes them to be.
"""

import json
import logging
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..catalog import DetailResolver
from ..catalog.normalize import cap_description, clean_text, label_list, parse_count, parse_score
from ..config import AI_MAX_RESULTS, AI_MODEL_NAME, AI_SEARCH_PROMPT, EMPTY_QUERY_MESSAGE, REQUEST_TIMEOUT
from ..error_handling import (
    ConfigurationError,
    InputValidationError,
    UpstreamFormatError,
    UpstreamQuotaError,
    UpstreamRateLimitError,
    UpstreamTransportError,
)
from ..models import GameRecord
from .base import GameResolver

logger = logging.getLogger(__name__)

TOOL_NAME = "search_board_games"
PAYLOAD_LOG_LENGTH = 2000

_NUMBER = {"type": "number"}
_LABELS = {"type": "array", "items": {"type": "string"}}

SEARCH_TOOL = {
    "type": "function",
    "function": {
        "name": TOOL_NAME,
        "description": "Return a list of board games matching the search query",
        "parameters": {
            "type": "object",
            "properties": {
                "games": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "bggId": dict(_NUMBER, description="BoardGameGeek ID"),
                            "name": {"type": "string", "description": "Game name in English"},
                            "yearPublished": dict(_NUMBER, description="Year published"),
                            "minPlayers": dict(_NUMBER, description="Minimum players"),
                            "maxPlayers": dict(_NUMBER, description="Maximum players"),
                            "playingTime": dict(_NUMBER, description="Average playing time in minutes"),
                            "minAge": dict(_NUMBER, description="Minimum recommended age"),
                            "description": {"type": "string", "description": "Brief game description (1-2 sentences)"},
                            "rating": dict(_NUMBER, description="BGG average rating (1-10)"),
                            "weight": dict(_NUMBER, description="Complexity weight (1-5)"),
                            "categories": dict(_LABELS, description="Game categories"),
                            "mechanics": dict(_LABELS, description="Game mechanics"),
                        },
                        "required": ["bggId", "name"],
                        "additionalProperties": False,
                    },
                },
            },
            "required": ["games"],
            "additionalProperties": False,
        },
    },
}


class ToolGame(BaseModel):
    """One game as returned in the tool-call arguments."""
    model_config = ConfigDict(extra="ignore")

    bgg_id: int = Field(alias="bggId")
    name: str
    year_published: Optional[int] = Field(default=None, alias="yearPublished")
    min_players: Optional[int] = Field(default=None, alias="minPlayers")
    max_players: Optional[int] = Field(default=None, alias="maxPlayers")
    playing_time: Optional[int] = Field(default=None, alias="playingTime")
    min_age: Optional[int] = Field(default=None, alias="minAge")
    description: Optional[str] = None
    rating: Optional[float] = None
    weight: Optional[float] = None
    categories: Optional[List[str]] = None
    mechanics: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name is empty")
        return value

    @field_validator("year_published", "min_players", "max_players", "playing_time", "min_age", mode="before")
    @classmethod
    def _count(cls, value: Any) -> Optional[int]:
        return parse_count(value)

    @field_validator("rating", "weight", mode="before")
    @classmethod
    def _score(cls, value: Any) -> Optional[float]:
        return parse_score(value)

    @field_validator("categories", "mechanics", mode="before")
    @classmethod
    def _labels(cls, value: Any) -> Optional[List[str]]:
        if not isinstance(value, list):
            return None
        labels = label_list(value)
        return list(labels) if labels else None

    def to_record(self) -> GameRecord:
        return GameRecord(
            external_id=self.bgg_id,
            name=self.name,
            year_published=self.year_published,
            min_players=self.min_players,
            max_players=self.max_players,
            playing_time=self.playing_time,
            min_age=self.min_age,
            description=cap_description(self.description),
            rating=self.rating,
            weight=self.weight,
            categories=tuple(self.categories) if self.categories else None,
            mechanics=tuple(self.mechanics) if self.mechanics else None,
        )


def _status_of(exc: Exception) -> Optional[int]:
    """HTTP status carried by a Together SDK error, if any."""
    for attr in ("status_code", "http_status"):
        status = getattr(exc, attr, None)
        if isinstance(status, int):
            return status
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


class AiToolCallResolver(GameResolver):
    """
    Resolves games through a chat model forced to call ``search_board_games``.
    """

    name = "ai"

    def __init__(self, api_key: Optional[str], model_name: str = AI_MODEL_NAME,
                 client: Any = None, detail_resolver: Optional[DetailResolver] = None,
                 max_results: int = AI_MAX_RESULTS):
        """
        Initialize the AI resolver.

        Args:
            api_key: Together.ai API key; required
            model_name: Name of the tool-calling model to use
            client: Pre-built Together client (mainly for tests)
            detail_resolver: Used for id lookups, which the catalog answers exactly
            max_results: Maximum number of games returned per query

        Raises:
            ConfigurationError: If no API key is given
        """
        if not api_key:
            raise ConfigurationError("TOGETHER_API_KEY is not set; the ai backend cannot start")
        self.model_name = model_name
        self.max_results = max_results
        self.detail_resolver = detail_resolver or DetailResolver()
        self.client = client if client is not None else self._initialize_client(api_key)

    def _initialize_client(self, api_key: str):
        """Initialize the Together.ai client."""
        from together import Together
        client = Together(api_key=api_key, timeout=REQUEST_TIMEOUT, max_retries=0)
        logger.info(f"Together.ai client initialized with model: {self.model_name}")
        return client

    def resolve_games(self, query: str) -> List[GameRecord]:
        query = (query or "").strip()
        if not query:
            raise InputValidationError(EMPTY_QUERY_MESSAGE)

        logger.info(f"Searching board games via AI for '{query}'")
        response = self._complete(query)
        arguments = self._tool_arguments(response)
        records = self._parse_games(arguments)
        logger.info(f"Found {len(records)} games for query: {query}")
        return records

    def resolve_ids(self, ids: Sequence[int]) -> List[GameRecord]:
        return self.detail_resolver.fetch_details(ids)

    def _complete(self, query: str):
        messages = [
            {"role": "system", "content": AI_SEARCH_PROMPT.strip()},
            {"role": "user", "content": f'Search for board games matching: "{query}"'},
        ]
        try:
            return self.client.chat.completions.create(
                model=self.model_name,
                messages=messages,
                tools=[SEARCH_TOOL],
                tool_choice={"type": "function", "function": {"name": TOOL_NAME}},
                temperature=0.1,
            )
        except Exception as e:
            status = _status_of(e)
            if status == 429:
                logger.warning(f"AI gateway rate limited the search: {e}")
                raise UpstreamRateLimitError(f"AI gateway rate limit: {e}") from e
            if status == 402:
                logger.warning(f"AI gateway quota exhausted: {e}")
                raise UpstreamQuotaError(f"AI gateway quota exhausted: {e}") from e
            logger.error(f"AI gateway error: {status} {str(e)[:PAYLOAD_LOG_LENGTH]}")
            raise UpstreamTransportError(f"AI gateway error: {e}", upstream_status=status,
                                         snippet=str(e)[:PAYLOAD_LOG_LENGTH]) from e

    def _tool_arguments(self, response) -> str:
        try:
            tool_call = response.choices[0].message.tool_calls[0]
            function = tool_call.function
        except (AttributeError, IndexError, TypeError) as e:
            logger.error(f"Unexpected AI response format: {str(response)[:PAYLOAD_LOG_LENGTH]}")
            raise UpstreamFormatError("AI response has no tool call") from e
        if function.name != TOOL_NAME:
            logger.error(f"Unexpected AI tool call '{function.name}': {str(response)[:PAYLOAD_LOG_LENGTH]}")
            raise UpstreamFormatError(f"AI called unexpected tool {function.name}")
        return function.arguments

    def _parse_games(self, arguments) -> List[GameRecord]:
        try:
            payload = json.loads(arguments) if isinstance(arguments, (str, bytes)) else arguments
        except ValueError as e:
            logger.error(f"AI tool arguments are not JSON: {str(arguments)[:PAYLOAD_LOG_LENGTH]}")
            raise UpstreamFormatError("AI tool arguments are not JSON") from e
        if not isinstance(payload, dict):
            logger.error(f"AI tool arguments are not an object: {str(arguments)[:PAYLOAD_LOG_LENGTH]}")
            raise UpstreamFormatError("AI tool arguments are not an object")

        games = payload.get("games") or []
        if not isinstance(games, list):
            raise UpstreamFormatError("AI tool arguments 'games' is not a list")

        records = []
        for raw in games[: self.max_results]:
            try:
                records.append(ToolGame.model_validate(raw).to_record())
            except ValidationError as e:
                logger.debug(f"Dropping AI game entry {raw!r}: {e}")
        return records
