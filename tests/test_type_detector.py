# ==============================================
# Tests for TypeDetector
# ==============================================

from collections import OrderedDict
from datetime import date, datetime, timezone

import pytest

from registry_normalize.normalization import MISSING, TypeDetector, ValueType


class TestDetect:
    """Every value maps to exactly one tag."""

    @pytest.mark.parametrize("value, expected", [
        ({}, ValueType.OBJECT),
        (OrderedDict(a=1), ValueType.OBJECT),
        ([], ValueType.ARRAY),
        ((1, 2), ValueType.ARRAY),
        ("", ValueType.STRING),
        (0, ValueType.NUMBER),
        (1.5, ValueType.NUMBER),
        (True, ValueType.BOOLEAN),
        (datetime(2020, 1, 1, tzinfo=timezone.utc), ValueType.DATE),
        (date(2020, 1, 1), ValueType.DATE),
        (None, ValueType.NULL),
        (MISSING, ValueType.UNDEFINED),
        (object(), ValueType.OTHER),
    ])
    def test_tags(self, value, expected):
        assert TypeDetector.detect(value) is expected

    def test_bool_is_not_a_number(self):
        """bool subclasses int but must be reported as boolean."""
        assert TypeDetector.detect(False) is ValueType.BOOLEAN

    def test_tags_compare_as_strings(self):
        assert TypeDetector.detect([1]) == "array"


class TestIsSet:
    """Registry-client truthiness."""

    def test_empty_containers_are_set(self):
        assert TypeDetector.is_set({})
        assert TypeDetector.is_set([])

    @pytest.mark.parametrize("value", [None, MISSING, "", 0, False, float("nan")])
    def test_empty_scalars_are_unset(self, value):
        assert not TypeDetector.is_set(value)

    def test_non_empty_scalars_are_set(self):
        assert TypeDetector.is_set("x")
        assert TypeDetector.is_set(3)
        assert TypeDetector.is_set(True)


def test_missing_is_a_singleton():
    assert type(MISSING)() is MISSING
    assert not MISSING
