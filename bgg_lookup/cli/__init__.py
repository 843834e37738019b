"""
Command-line interface for the board game lookup package.

This module provides CLI commands for:
- Searching games by name
- Fetching games by BGG id
- Serving the HTTP lookup API
"""

from .main import main

__all__ = [
    "main",
]
