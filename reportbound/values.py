"""Closed classification of report values and fallible stringification."""

from collections.abc import Mapping, Set
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    """Shape of a value as seen by a JSON encoder."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OPAQUE = "opaque"


SCALAR_KINDS = frozenset({ValueKind.NULL, ValueKind.BOOLEAN, ValueKind.NUMBER, ValueKind.STRING})
CONTAINER_KINDS = frozenset({ValueKind.SEQUENCE, ValueKind.MAPPING})


def classify(value: Any) -> ValueKind:
    """Return the ValueKind of value. bool is checked before numbers (bool subclasses int)."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple, Set)):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    return ValueKind.OPAQUE


@dataclass(frozen=True)
class Stringified:
    """Outcome of str(): text on success, None when the conversion raised."""

    text: str | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None


def stringify(value: Any) -> Stringified:
    """Call str(value), capturing any exception as a failed Stringified."""
    try:
        return Stringified(text=str(value))
    except Exception as e:
        return Stringified(text=None, error=type(e).__name__)
