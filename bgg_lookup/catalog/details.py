"""
Detail Resolver: batch of catalog ids -> normalized GameRecord list.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Sequence

from ..error_handling import safe_execute
from ..models import GameRecord
from .client import CatalogClient
from .decoder import decode_entities
from .extractor import extract_all_attrs, extract_attr, extract_text, iter_records, parse_document
from .normalize import cap_description, clean_text, label_list, parse_count, parse_score

logger = logging.getLogger(__name__)


class DetailResolver:
    """Fetches full metadata for a batch of catalog ids in one request."""

    def __init__(self, client: Optional[CatalogClient] = None):
        self.client = client or CatalogClient()

    def fetch_details(self, ids: Sequence[int]) -> List[GameRecord]:
        """
        Fetch and normalize records for ``ids``.

        Args:
            ids: Catalog ids; duplicates are collapsed

        Returns:
            Records in the order of ``ids``, never more than were asked for.
            Ids the catalog did not return, or returned without a primary
            name, are missing; items that were not asked for are dropped.

        Raises:
            UpstreamTransportError: If the detail call fails
            UpstreamFormatError: If the response is not well-formed XML
        """
        unique_ids = list(dict.fromkeys(ids))
        if not unique_ids:
            return []

        logger.info(f"Fetching BGG details for {len(unique_ids)} game(s)")
        document = self.client.get_xml("thing", {
            "id": ",".join(str(game_id) for game_id in unique_ids),
            "stats": 1,
        })
        records = parse_thing_response(document)

        # The catalog answers in its own order; put records back in request order
        position: Dict[int, int] = {game_id: i for i, game_id in enumerate(unique_ids)}
        unrequested = [record.external_id for record in records if record.external_id not in position]
        if unrequested:
            logger.warning(f"Ignoring unrequested item(s) in BGG response: {unrequested}")
        records = [record for record in records if record.external_id in position]
        records.sort(key=lambda record: position[record.external_id])
        logger.info(f"Normalized {len(records)} of {len(unique_ids)} requested game(s)")
        return records


def parse_thing_response(document: str) -> List[GameRecord]:
    """Parse every item of a ``thing`` response, dropping unusable ones."""
    records = []
    for item in iter_records(parse_document(document), "item"):
        record = parse_item(item)
        if record is not None:
            records.append(record)
    return records


def _labels(item: ET.Element, link_type: str):
    return label_list(decode_entities(value) for value in
                      extract_all_attrs(item, "link", "value", where={"type": link_type}))


def parse_item(item: ET.Element) -> Optional[GameRecord]:
    """
    Build a record from one ``item`` element.

    Returns None when the item has no numeric id or no primary name.
    Every other field degrades to None on its own.
    """
    external_id = safe_execute(int, item.get("id"), error_msg="Item without numeric id")
    if external_id is None:
        return None

    name = clean_text(decode_entities(extract_attr(item, "name", "value", where={"type": "primary"})))
    if not name:
        logger.debug(f"Dropping item {external_id}: no primary name")
        return None

    return GameRecord(
        external_id=external_id,
        name=name,
        year_published=parse_count(extract_attr(item, "yearpublished", "value")),
        min_players=parse_count(extract_attr(item, "minplayers", "value")),
        max_players=parse_count(extract_attr(item, "maxplayers", "value")),
        playing_time=parse_count(extract_attr(item, "playingtime", "value")),
        min_play_time=parse_count(extract_attr(item, "minplaytime", "value")),
        max_play_time=parse_count(extract_attr(item, "maxplaytime", "value")),
        min_age=parse_count(extract_attr(item, "minage", "value")),
        description=cap_description(decode_entities(extract_text(item, "description"))),
        thumbnail=clean_text(extract_text(item, "thumbnail")),
        image=clean_text(extract_text(item, "image")),
        rating=parse_score(extract_attr(item, "statistics/ratings/average", "value")),
        weight=parse_score(extract_attr(item, "statistics/ratings/averageweight", "value")),
        categories=_labels(item, "boardgamecategory"),
        mechanics=_labels(item, "boardgamemechanic"),
        designers=_labels(item, "boardgamedesigner"),
        publishers=_labels(item, "boardgamepublisher"),
    )
