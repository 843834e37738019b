"""
Field normalization rules shared by every resolver.

A field is either a real value or None: empty strings, empty label lists,
negative counts and zero ratings/weights all become None.
"""

import math
from typing import Iterable, Optional, Tuple

from ..config import DESCRIPTION_MAX_LENGTH
from ..error_handling import safe_execute


def _to_int(value) -> int:
    if isinstance(value, bool):
        raise TypeError("boolean is not a count")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not a whole number: {value}")
        return int(value)
    return int(str(value).strip())


def _to_float(value) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a score")
    result = float(str(value).strip())
    if not math.isfinite(result):
        raise ValueError(f"not a finite number: {value}")
    return result


def parse_count(value) -> Optional[int]:
    """Parse a non-negative integer field; anything unparseable or negative is absent."""
    if value is None:
        return None
    number = safe_execute(_to_int, value, error_msg=f"Unparseable integer field {value!r}")
    if number is None or number < 0:
        return None
    return number


def parse_score(value) -> Optional[float]:
    """
    Parse a rating or weight.

    The catalog reports 0 for "nobody rated this", so a zero score is
    absent. A genuine zero cannot be told apart from the sentinel.
    """
    if value is None:
        return None
    number = safe_execute(_to_float, value, error_msg=f"Unparseable score field {value!r}")
    if number is None or number <= 0:
        return None
    return number


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip whitespace; empty text is absent."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def cap_description(value: Optional[str], limit: int = DESCRIPTION_MAX_LENGTH) -> Optional[str]:
    value = clean_text(value)
    if value is None:
        return None
    return value[:limit]


def label_list(values: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    """Collect non-empty labels in order; an empty collection is absent."""
    if values is None:
        return None
    labels = tuple(label.strip() for label in values if isinstance(label, str) and label.strip())
    return labels or None
