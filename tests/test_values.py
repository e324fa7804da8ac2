"""Tests for value classification and fallible stringification."""
from collections import OrderedDict
from decimal import Decimal

import pytest

from reportbound.values import ValueKind, classify, stringify


class StringRaiser:
    def __str__(self):
        raise RuntimeError("Oh no you do not!")


@pytest.mark.parametrize(
    "value, kind",
    [
        (None, ValueKind.NULL),
        (True, ValueKind.BOOLEAN),
        (False, ValueKind.BOOLEAN),
        (0, ValueKind.NUMBER),
        (3.445, ValueKind.NUMBER),
        ("NO", ValueKind.STRING),
        ([1], ValueKind.SEQUENCE),
        ((1, 2), ValueKind.SEQUENCE),
        ({1, 2}, ValueKind.SEQUENCE),
        (frozenset(), ValueKind.SEQUENCE),
        ({"a": 1}, ValueKind.MAPPING),
        (OrderedDict(a=1), ValueKind.MAPPING),
        (b"bytes", ValueKind.OPAQUE),
        (Decimal("1.5"), ValueKind.OPAQUE),
        (object(), ValueKind.OPAQUE),
    ],
)
def test_classify(value, kind):
    assert classify(value) is kind


def test_stringify_success():
    result = stringify(Decimal("1.5"))
    assert result.ok
    assert result.text == "1.5"
    assert result.error is None


def test_stringify_failure_is_captured():
    """An exception from __str__ becomes a failed result instead of propagating."""
    result = stringify(StringRaiser())
    assert not result.ok
    assert result.text is None
    assert result.error == "RuntimeError"


def test_stringify_non_string_return_is_failure():
    class BadStr:
        def __str__(self):
            return 42

    result = stringify(BadStr())
    assert not result.ok
    assert result.error == "TypeError"
