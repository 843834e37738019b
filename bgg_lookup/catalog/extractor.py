"""
Field extraction from BoardGameGeek XML.

Responses are parsed with ElementTree and queried by tag and attribute.
Callers take one record element at a time from ``iter_records`` and read
fields relative to it, so that fields never leak from one record into
another.

Known limitations: tag and attribute names are matched case-sensitively
and namespaces are ignored, which is the shape the XML API returns. Text
comes back with the XML escaping undone but the catalog's own HTML
entities intact; run it through ``decode_entities`` once.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Dict, Iterator, List, Optional, Union

from ..error_handling import UpstreamFormatError

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 500


def parse_document(document: Union[str, bytes, None]) -> Optional[ET.Element]:
    """
    Parse a response body.

    Returns:
        Root element, or None for an empty body

    Raises:
        UpstreamFormatError: If the body is not well-formed XML
    """
    if document is None or not document.strip():
        return None
    try:
        return ET.fromstring(document)
    except ET.ParseError as e:
        snippet = document[:SNIPPET_LENGTH]
        logger.error(f"Unparseable XML from BGG ({e}): {snippet!r}")
        raise UpstreamFormatError(f"Malformed XML response: {e}") from e


def _path(tag: str, where: Optional[Dict[str, str]] = None) -> str:
    path = f".//{tag}"
    for key, value in (where or {}).items():
        path += f'[@{key}="{value}"]'
    return path


def iter_records(root: Optional[ET.Element], tag: str,
                 where: Optional[Dict[str, str]] = None) -> Iterator[ET.Element]:
    """
    Yield the record elements of a document in document order.

    Args:
        root: Parsed document (None yields nothing)
        tag: Record tag name (e.g. "item")
        where: Attribute values the record must carry
    """
    if root is None:
        return
    if root.tag == tag and all(root.get(key) == value for key, value in (where or {}).items()):
        yield root
        return
    yield from root.iterfind(_path(tag, where))


def extract_text(record: ET.Element, tag: str) -> Optional[str]:
    """Return the text of the first ``tag`` inside ``record``, or None."""
    element = record.find(_path(tag))
    if element is None:
        return None
    return element.text


def extract_attr(record: ET.Element, tag: str, attr: str,
                 where: Optional[Dict[str, str]] = None) -> Optional[str]:
    """
    Return ``attr`` of the first ``tag`` inside ``record`` that carries it.

    Args:
        record: Record element
        tag: Tag name
        attr: Attribute to read
        where: Attribute values the tag must carry (e.g. {"type": "primary"})

    Returns:
        Attribute value or None
    """
    for element in record.iterfind(_path(tag, where)):
        value = element.get(attr)
        if value is not None:
            return value
    return None


def extract_all_attrs(record: ET.Element, tag: str, attr: str,
                      where: Optional[Dict[str, str]] = None) -> List[str]:
    """Return ``attr`` of every matching ``tag`` inside ``record``, in document order."""
    return [element.get(attr) for element in record.iterfind(_path(tag, where))
            if element.get(attr) is not None]
