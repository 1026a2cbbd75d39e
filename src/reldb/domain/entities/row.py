"""Fixed-width positional rows."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Sequence

from reldb.domain.value_objects import ABSENT, Value


class Row:
    """An ordered tuple of values, one slot per column.

    The width is fixed at construction. Slots start out absent and are
    addressed by column position only.
    """

    __slots__ = ("_values",)

    def __init__(self, width: int) -> None:
        if width < 0:
            raise ValueError(f"row width must be non-negative, got {width}")
        self._values: list[Value] = [ABSENT] * width

    @classmethod
    def from_values(cls, values: Iterable[Value]) -> Row:
        """Build a row holding the given values in order."""
        row = cls(0)
        row._values = list(values)
        return row

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> Value:
        self._check_index(index)
        return self._values[index]

    def __setitem__(self, index: int, value: Value) -> None:
        self._check_index(index)
        self._values[index] = value

    def __iter__(self) -> Iterator[Value]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    @property
    def values(self) -> tuple[Value, ...]:
        return tuple(self._values)

    def copy(self) -> Row:
        return Row.from_values(self._values)

    def project(self, indices: Sequence[int]) -> Row:
        """New row holding only the slots at ``indices``, in that order."""
        return Row.from_values(self[i] for i in indices)

    def concat(self, other: Row) -> Row:
        """New row with this row's slots followed by ``other``'s."""
        return Row.from_values([*self._values, *other._values])

    def to_python(self) -> list[Any]:
        """Plain Python values, with None for absent slots."""
        return [value.to_python() for value in self._values]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._values):
            raise IndexError(f"column index {index} out of range for row of width {len(self._values)}")

    def __repr__(self) -> str:
        return f"Row({', '.join(repr(v) for v in self._values)})"
