from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any


class _Missing:
    """Marker for a field that is not present at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class ValueType(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    NULL = "null"
    UNDEFINED = "undefined"
    OTHER = "other"


class TypeDetector:
    @classmethod
    def detect(cls, value: Any) -> ValueType:
        if value is MISSING:
            return ValueType.UNDEFINED

        if value is None:
            return ValueType.NULL

        # bool is a subclass of int, check it first
        if isinstance(value, bool):
            return ValueType.BOOLEAN

        if isinstance(value, (int, float)):
            return ValueType.NUMBER

        if isinstance(value, str):
            return ValueType.STRING

        # datetime is a subclass of date
        if isinstance(value, date):
            return ValueType.DATE

        if isinstance(value, Mapping):
            return ValueType.OBJECT

        if isinstance(value, (list, tuple)):
            return ValueType.ARRAY

        return ValueType.OTHER

    @classmethod
    def same_type(cls, value: Any, other: Any) -> bool:
        return cls.detect(value) is cls.detect(other)

    @classmethod
    def is_object(cls, value: Any) -> bool:
        return cls.detect(value) is ValueType.OBJECT

    @classmethod
    def is_array(cls, value: Any) -> bool:
        return cls.detect(value) is ValueType.ARRAY

    @classmethod
    def is_string(cls, value: Any) -> bool:
        return cls.detect(value) is ValueType.STRING

    @classmethod
    def is_set(cls, value: Any) -> bool:
        """Registry-client truthiness: empty scalars are unset, containers are set."""
        kind = cls.detect(value)
        if kind in (ValueType.OBJECT, ValueType.ARRAY, ValueType.DATE):
            return True
        if kind is ValueType.NUMBER:
            # NaN is unset as well
            return value == value and value != 0
        if kind in (ValueType.UNDEFINED, ValueType.NULL):
            return False
        return bool(value)
