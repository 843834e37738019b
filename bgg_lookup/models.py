"""
Shared data models for the board game lookup package.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class SearchCandidate:
    """One hit from the catalog search endpoint."""
    external_id: int
    primary_name: str
    year_published: Optional[int] = None


# Python attribute -> JSON key
_JSON_KEYS = {
    "external_id": "bggId",
    "name": "name",
    "year_published": "yearPublished",
    "min_players": "minPlayers",
    "max_players": "maxPlayers",
    "playing_time": "playingTime",
    "min_play_time": "minPlayTime",
    "max_play_time": "maxPlayTime",
    "min_age": "minAge",
    "description": "description",
    "thumbnail": "thumbnail",
    "image": "image",
    "rating": "rating",
    "weight": "weight",
    "categories": "categories",
    "mechanics": "mechanics",
    "designers": "designers",
    "publishers": "publishers",
}


@dataclass(frozen=True)
class GameRecord:
    """
    Normalized board game metadata returned to callers.

    Absent fields are None. Label sequences are tuples and never empty;
    rating and weight are never zero.
    """
    external_id: int
    name: str
    year_published: Optional[int] = None
    min_players: Optional[int] = None
    max_players: Optional[int] = None
    playing_time: Optional[int] = None
    min_play_time: Optional[int] = None
    max_play_time: Optional[int] = None
    min_age: Optional[int] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[float] = None
    weight: Optional[float] = None
    categories: Optional[Tuple[str, ...]] = None
    mechanics: Optional[Tuple[str, ...]] = None
    designers: Optional[Tuple[str, ...]] = None
    publishers: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase JSON shape, leaving out absent fields."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, tuple):
                value = list(value)
            data[_JSON_KEYS[f.name]] = value
        return data
