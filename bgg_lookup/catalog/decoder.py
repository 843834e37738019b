"""
HTML entity decoding for free-text catalog fields.

The catalog escapes its free text twice: once as HTML, then again as XML.
The XML parser undoes the outer layer; this module undoes the HTML layer.
Only a fixed set of entities is replaced; anything else (``&eacute;`` and
friends) is passed through untouched. Decoding is a single pass, so
``&amp;lt;`` becomes ``&lt;`` and not ``<``. Decode exactly once, right
after extraction.
"""

import re
from typing import Optional

ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#34;": '"',
    "&#39;": "'",
    "&#039;": "'",
    "&apos;": "'",
    "&#10;": "\n",
    "&#xa;": "\n",
    "&#xA;": "\n",
    "&mdash;": "—",
    "&#8212;": "—",
    "&ndash;": "–",
    "&#8211;": "–",
    "&ldquo;": "“",
    "&rdquo;": "”",
    "&lsquo;": "‘",
    "&rsquo;": "’",
    "&#8220;": "“",
    "&#8221;": "”",
    "&#8216;": "‘",
    "&#8217;": "’",
}

_ENTITY_PATTERN = re.compile(r"&#?[0-9A-Za-z]+;")


def decode_entities(text: Optional[str]) -> Optional[str]:
    """
    Replace the known HTML entities in ``text`` with literal characters.

    Args:
        text: Raw extracted text (None passes through)

    Returns:
        Decoded text
    """
    if text is None:
        return None
    return _ENTITY_PATTERN.sub(lambda m: ENTITIES.get(m.group(0), m.group(0)), text)
