"""
Vector -- per-date amounts of one commodity.

A Vector has one slot per report date; a date without a contribution
holds an exact zero, never a missing value.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from decimal import Decimal

from ledger_kernel.domain.directives import to_decimal

ZERO = Decimal("0")


class Vector:
    """Fixed-length sequence of Decimal amounts aligned to report dates."""

    __slots__ = ("values",)

    def __init__(self, values: Iterable[Decimal]):
        self.values: list[Decimal] = [to_decimal(v, "vector amount") for v in values]

    @classmethod
    def zeros(cls, length: int) -> Vector:
        if length < 0:
            raise ValueError(f"Vector length must not be negative: {length}")
        return cls([ZERO] * length)

    def add(self, other: Vector) -> Vector:
        """Add ``other`` elementwise in place and return self."""
        if len(other.values) != len(self.values):
            raise ValueError(
                f"Vector length mismatch: {len(self.values)} != {len(other.values)}"
            )
        for i, v in enumerate(other.values):
            self.values[i] += v
        return self

    def neg(self) -> Vector:
        """Return a new vector with every amount negated."""
        return Vector(-v for v in self.values)

    def is_zero_at(self, index: int) -> bool:
        return self.values[index] == ZERO

    def is_zero(self) -> bool:
        return all(v == ZERO for v in self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Decimal]:
        return iter(self.values)

    def __getitem__(self, index: int) -> Decimal:
        return self.values[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.values == other.values

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Vector({[str(v) for v in self.values]})"
