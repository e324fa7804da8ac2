"""
Structural walker and type normalizer.

walk() builds a fresh copy of an arbitrary value using only JSON-encodable
types. Cycles are detected by object identity along the current path only, so
an equal (or even the same) object reached through two unrelated branches is
copied twice rather than flagged.
"""
import logging
import sys
from typing import Any

from reportbound.constants import DEPTH_LIMIT, RAISED_MARKER, RECURSION_MARKER, TRUNCATED_MARKER
from reportbound.values import CONTAINER_KINDS, SCALAR_KINDS, ValueKind, classify, stringify

logger = logging.getLogger(__name__)


def _text_or_marker(value: Any) -> str:
    """str(value), or RAISED_MARKER when str() raises."""
    result = stringify(value)
    if result.ok:
        return result.text
    logger.debug("str() raised %s for %s", result.error, type(value).__name__)
    return RAISED_MARKER


def _int_too_long(value: Any) -> bool:
    """True for ints whose decimal form exceeds the interpreter's str conversion limit."""
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    limit = sys.get_int_max_str_digits() if hasattr(sys, "get_int_max_str_digits") else 0
    # A value below limit * 3 bits has at most limit digits.
    if limit <= 0 or value.bit_length() < limit * 3:
        return False
    return not stringify(value).ok


def normalize(value: Any) -> Any:
    """
    Normalize a leaf value.

    None, bools, numbers and strings are returned as-is (same type). Anything
    else becomes str(value), or RAISED_MARKER when str() raises. Ints too long
    for json.dumps to print are RAISED_MARKER too.
    """
    kind = classify(value)
    if kind is ValueKind.OPAQUE or _int_too_long(value):
        return _text_or_marker(value)
    return value


def _normalize_key(key: Any) -> Any:
    """Keep keys json.dumps accepts; stringify the rest."""
    if classify(key) in SCALAR_KINDS and not _int_too_long(key):
        return key
    return _text_or_marker(key)


def walk(value: Any, ancestors: set[int] | None = None, _depth: int = 0) -> Any:
    """
    Return a JSON-safe copy of value.

    ancestors holds the ids of the containers between the root and value; it
    is restored before returning. A container already in ancestors is replaced
    by RECURSION_MARKER.
    """
    kind = classify(value)
    if kind not in CONTAINER_KINDS:
        return normalize(value)

    if ancestors is None:
        ancestors = set()
    obj_id = id(value)
    if obj_id in ancestors:
        return RECURSION_MARKER
    if _depth >= DEPTH_LIMIT:
        return TRUNCATED_MARKER

    ancestors.add(obj_id)
    try:
        if kind is ValueKind.MAPPING:
            return {
                _normalize_key(k): walk(v, ancestors, _depth + 1)
                for k, v in value.items()
            }
        return [walk(item, ancestors, _depth + 1) for item in value]
    finally:
        ancestors.discard(obj_id)
