"""
Accounts -- account categories and hierarchical account names.

Responsibility:
    Defines the ordered ``AccountType`` enumeration (the top level of every
    account path) together with its reporting group, and the ``Account``
    value object for colon-separated account paths such as
    ``Assets:Bank:Checking``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - The enumeration order of ``AccountType`` is the canonical category
      order used by reports.
    - Every ``Account`` starts with the name of an ``AccountType`` and has
      no empty path segment.

Failure modes:
    - ValueError on construction with an empty segment or an unknown
      top-level category.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SEPARATOR = ":"


class AccountType(str, Enum):
    """Top-level account categories, in canonical report order."""

    ASSETS = "Assets"
    LIABILITIES = "Liabilities"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSES = "Expenses"

    @property
    def group(self) -> int:
        """
        Report group of the category.

        Assets and liabilities form group 1; every other category
        belongs to group 2, whose amounts are displayed negated.
        """
        return 1 if self.is_balance_sheet else 2

    @property
    def is_balance_sheet(self) -> bool:
        return self in (AccountType.ASSETS, AccountType.LIABILITIES)

    @classmethod
    def parse(cls, value: str) -> AccountType:
        """Return the category named ``value`` (e.g. ``"Assets"``)."""
        try:
            return cls(value)
        except ValueError as e:
            raise ValueError(f"Invalid account type: {value!r}") from e


@dataclass(frozen=True, slots=True, order=True)
class Account:
    """
    Hierarchical account name.

    Contract:
        ``name`` is the canonical colon-separated path. The first segment
        is the account's ``AccountType``.

    Guarantees:
        - Immutable, hashable and ordered by name.
        - ``str(account)`` is the canonical form matched by filters.
    """

    name: str

    def __post_init__(self) -> None:
        segments = self.name.split(SEPARATOR) if self.name else [""]
        if any(not s or s != s.strip() for s in segments):
            raise ValueError(f"Invalid account name: {self.name!r}")
        AccountType.parse(segments[0])

    @classmethod
    def of(cls, *segments: str) -> Account:
        """Build an account from its path segments."""
        return cls(SEPARATOR.join(segments))

    @property
    def type(self) -> AccountType:
        return AccountType(self.segments[0])

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self.name.split(SEPARATOR))

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def leaf(self) -> str:
        """Last path segment."""
        return self.segments[-1]

    @property
    def parent(self) -> Account | None:
        """Account one level up, or None for a top-level category."""
        if self.depth == 1:
            return None
        return Account(SEPARATOR.join(self.segments[:-1]))

    def __str__(self) -> str:
        return self.name
