"""Tests for marker and default budget constants."""
from reportbound.constants import (
    MAX_ARRAY_LENGTH,
    MAX_PAYLOAD_LENGTH,
    MAX_STRING_LENGTH,
    RAISED_MARKER,
    RECURSION_MARKER,
    TRUNCATED_MARKER,
    default_budget,
)


def test_marker_constants_unchanged():
    """Guards against accidental refactors."""
    assert RECURSION_MARKER == "[RECURSION]"
    assert RAISED_MARKER == "[RAISED]"
    assert TRUNCATED_MARKER == "[TRUNCATED]"


def test_default_budget_matches_constants():
    assert default_budget() == {
        "max_string_length": MAX_STRING_LENGTH,
        "max_array_length": MAX_ARRAY_LENGTH,
        "max_payload_length": MAX_PAYLOAD_LENGTH,
    }
    assert MAX_STRING_LENGTH > len(TRUNCATED_MARKER)
