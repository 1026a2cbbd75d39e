"""Value objects for the relational engine.

Exports:
    - DataType: Declared column types (INT, STRING)
    - IntegerValue, TextValue, AbsentValue: Stored value variants
    - ABSENT: The absent-value singleton
    - Value: Union of the stored value variants
    - is_present, values_match: Kind-aware value helpers
"""

from reldb.domain.value_objects.values import (
    ABSENT,
    INT64_MAX,
    INT64_MIN,
    AbsentValue,
    DataType,
    IntegerValue,
    TextValue,
    Value,
    is_present,
    values_match,
)

__all__ = [
    "ABSENT",
    "INT64_MAX",
    "INT64_MIN",
    "AbsentValue",
    "DataType",
    "IntegerValue",
    "TextValue",
    "Value",
    "is_present",
    "values_match",
]
