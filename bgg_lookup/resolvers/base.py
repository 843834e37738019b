"""
Common interface for the interchangeable game lookup transports.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models import GameRecord


class GameResolver(ABC):
    """Abstract base class for game lookup strategies."""

    name = "unknown"

    @abstractmethod
    def resolve_games(self, query: str) -> List[GameRecord]:
        """Find games matching a free-text query."""
        pass

    @abstractmethod
    def resolve_ids(self, ids: Sequence[int]) -> List[GameRecord]:
        """Fetch games by catalog id."""
        pass
