"""
Ledger -- directives bucketed by calendar day.

Responsibility:
    ``Day`` holds every surviving directive dated on one calendar date, in
    six sequences kept in stream arrival order. ``Ledger`` is the ordered,
    immutable sequence of days produced by the ledger builder.

Invariants enforced:
    - Ledger dates are unique and strictly increasing.
    - No Day in a built Ledger is empty.

Failure modes:
    - ValueError if a Ledger is constructed from unsorted or duplicate days.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date

from ledger_kernel.domain.directives import (
    Assertion,
    Close,
    Open,
    Price,
    Transaction,
    Value,
)


@dataclass(frozen=True)
class Day:
    """All directives of one date, grouped by kind."""

    date: date
    prices: tuple[Price, ...] = ()
    openings: tuple[Open, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    values: tuple[Value, ...] = ()
    assertions: tuple[Assertion, ...] = ()
    closings: tuple[Close, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (
            self.prices
            or self.openings
            or self.transactions
            or self.values
            or self.assertions
            or self.closings
        )

    def directives(self) -> Iterator[Price | Open | Transaction | Value | Assertion | Close]:
        """Iterate the day's directives in canonical order."""
        yield from self.prices
        yield from self.openings
        yield from self.transactions
        yield from self.values
        yield from self.assertions
        yield from self.closings


@dataclass(frozen=True)
class Ledger:
    """Date-ordered sequence of days."""

    days: tuple[Day, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", tuple(self.days))
        for prev, cur in zip(self.days, self.days[1:]):
            if not prev.date < cur.date:
                raise ValueError(
                    f"Ledger days must be strictly ascending: {prev.date} >= {cur.date}"
                )

    def __iter__(self) -> Iterator[Day]:
        return iter(self.days)

    def __len__(self) -> int:
        return len(self.days)

    def __getitem__(self, index: int) -> Day:
        return self.days[index]

    @property
    def dates(self) -> tuple[date, ...]:
        return tuple(d.date for d in self.days)

    @property
    def min_date(self) -> date | None:
        return self.days[0].date if self.days else None

    @property
    def max_date(self) -> date | None:
        return self.days[-1].date if self.days else None
