"""
Catalog module for reading board game metadata from BoardGameGeek.

This module handles:
- Outbound calls to the XML API search and thing endpoints
- Pattern-based field extraction and entity decoding
- Normalizing raw items into GameRecord values
"""

from .client import CatalogClient
from .decoder import decode_entities
from .details import DetailResolver
from .search import SearchResolver

__all__ = [
    "CatalogClient",
    "DetailResolver",
    "SearchResolver",
    "decode_entities",
]
