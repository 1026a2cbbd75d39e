"""Scalar values stored in table rows.

A stored value is one of three variants:

- ``IntegerValue``: a signed 64-bit integer
- ``TextValue``: a string
- ``AbsentValue``: no value stored (the ``ABSENT`` singleton)

Equality between stored values is kind-aware: an ``IntegerValue`` never
equals a ``TextValue``, and ``ABSENT`` never matches anything, including
another ``ABSENT``. Use ``values_match`` for constraint and predicate checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class DataType(Enum):
    """Declared column types."""

    INT = "INT"
    STRING = "STRING"

    @classmethod
    def from_token(cls, token: str) -> DataType | None:
        """Resolve a type keyword case-insensitively, or None if unsupported."""
        try:
            return cls(token.upper())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class IntegerValue:
    """An integer in the signed 64-bit range."""

    value: int

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"integer {self.value} is outside the 64-bit range")

    @property
    def data_type(self) -> DataType:
        return DataType.INT

    def to_python(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class TextValue:
    """A string value."""

    value: str

    @property
    def data_type(self) -> DataType:
        return DataType.STRING

    def to_python(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class AbsentValue:
    """Marker for a slot with no stored value."""

    __slots__ = ()

    _instance: AbsentValue | None = None

    def __new__(cls) -> AbsentValue:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def data_type(self) -> None:
        return None

    def to_python(self) -> None:
        return None

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __str__(self) -> str:
        return "NULL"


ABSENT = AbsentValue()

Value = Union[IntegerValue, TextValue, AbsentValue]


def is_present(value: Value) -> bool:
    """Return True if a value is stored in the slot."""
    return value is not ABSENT


def values_match(left: Value, right: Value) -> bool:
    """Kind-aware equality where an absent value matches nothing."""
    if left is ABSENT or right is ABSENT:
        return False
    return left == right
