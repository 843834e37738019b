"""
BGG Lookup Package - board game metadata search for a collection tracker.

This package provides:
1. Searching BoardGameGeek by name and fetching games by id
2. Normalizing the catalog's XML into stable GameRecord values
3. An HTTP API and CLI around both lookups
"""

__version__ = "0.1.0"
__author__ = "BGG Lookup Team"

# Main package imports for convenience
from .models import GameRecord, SearchCandidate
from .resolvers import GameResolver, build_resolver
from .logging_config import setup_logging

__all__ = [
    "GameRecord",
    "SearchCandidate",
    "GameResolver",
    "build_resolver",
    "setup_logging",
]
