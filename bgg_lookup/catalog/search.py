"""
Search Resolver: free-text query -> ranked SearchCandidate list.
"""

import logging
from typing import List, Optional

from ..config import EMPTY_QUERY_MESSAGE, SEARCH_RESULT_LIMIT
from ..error_handling import InputValidationError, safe_execute
from ..models import SearchCandidate
from .client import CatalogClient
from .decoder import decode_entities
from .extractor import extract_attr, iter_records, parse_document
from .normalize import clean_text, parse_count

logger = logging.getLogger(__name__)


class SearchResolver:
    """Queries the catalog search endpoint for board games matching a name."""

    def __init__(self, client: Optional[CatalogClient] = None, limit: int = SEARCH_RESULT_LIMIT):
        self.client = client or CatalogClient()
        self.limit = limit

    def search(self, query: str) -> List[SearchCandidate]:
        """
        Search the catalog.

        Args:
            query: Free-text game name

        Returns:
            Candidates in the order the catalog ranked them, at most ``limit``

        Raises:
            InputValidationError: If the query is empty after trimming
            UpstreamTransportError: If the search call fails
            UpstreamFormatError: If the response is not well-formed XML
        """
        query = (query or "").strip()
        if not query:
            raise InputValidationError(EMPTY_QUERY_MESSAGE)

        logger.info(f"Searching BGG for '{query}'")
        document = self.client.get_xml("search", {"query": query, "type": "boardgame"})
        candidates = parse_search_response(document, self.limit)
        logger.info(f"Found {len(candidates)} candidates for '{query}'")
        return candidates


def parse_search_response(document: str, limit: int = SEARCH_RESULT_LIMIT) -> List[SearchCandidate]:
    """
    Turn a search response into candidates.

    Items without a numeric id or a primary name are skipped. An empty
    or item-less document is a valid empty result.

    Raises:
        UpstreamFormatError: If the document is not well-formed XML
    """
    candidates = []
    for item in iter_records(parse_document(document), "item", where={"type": "boardgame"}):
        if len(candidates) >= limit:
            break
        external_id = safe_execute(int, item.get("id"), error_msg="Search item without numeric id")
        if external_id is None:
            continue
        name = clean_text(decode_entities(extract_attr(item, "name", "value", where={"type": "primary"})))
        if not name:
            logger.debug(f"Skipping search item {external_id}: no primary name")
            continue
        candidates.append(SearchCandidate(
            external_id=external_id,
            primary_name=name,
            year_published=parse_count(extract_attr(item, "yearpublished", "value")),
        ))
    return candidates
