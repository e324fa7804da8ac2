"""Size estimation: UTF-8 byte length of the compact JSON encoding."""

import json
from typing import Any

_SEPARATORS = (",", ":")


def _encode(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=_SEPARATORS)


def _byte_length(text: str) -> int:
    # Lone surrogates cannot be encoded strictly; count them as replacement bytes.
    return len(text.encode("utf-8", errors="replace"))


def measure(value: Any) -> int:
    """Serialized byte length of a walked value."""
    return _byte_length(_encode(value))


def measure_entry(key: Any, value: Any) -> int:
    """Serialized byte length of one `"key":value` member of an object."""
    return measure({key: value}) - 2


def removal_saving(member_size: int, remaining: int) -> int:
    """
    Bytes saved by removing one member/element of the given size from its container.

    remaining is the number of members left after removal; a separator comma
    goes away with the member unless the container is now empty.
    """
    return member_size + (1 if remaining > 0 else 0)
