"""
Directives -- the parsed instructions of the ledger input language.

Responsibility:
    Defines one frozen dataclass per directive kind (open, close, price,
    transaction, balance assertion, value, accrual) and the closed
    ``Directive`` union consumed by the ledger builder and the printer.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Every directive carries a ``date``.
    - Every directive class has a distinct ``kind`` tag; ``DIRECTIVE_TYPES``
      lists exactly the members of the ``Directive`` union.
    - Amounts and prices are always ``Decimal`` (never float).

Failure modes:
    - ValueError when an amount cannot be converted to Decimal.
    - TypeError when a float amount is supplied.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar, TypeAlias

from ledger_kernel.domain.accounts import Account
from ledger_kernel.domain.commodities import Commodity
from ledger_kernel.domain.periods import Period


class DirectiveKind(str, Enum):
    """Tag identifying the kind of a directive."""

    OPEN = "open"
    CLOSE = "close"
    PRICE = "price"
    TRANSACTION = "transaction"
    ASSERTION = "assertion"
    VALUE = "value"
    ACCRUAL = "accrual"


def to_decimal(value: Any, name: str) -> Decimal:
    """Convert an amount to Decimal. Floats are rejected, not rounded."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        raise TypeError(f"{name} must not be a float: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid {name}: {value!r}") from e


@dataclass(frozen=True, slots=True)
class Open:
    """Opens an account."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.OPEN

    date: date
    account: Account


@dataclass(frozen=True, slots=True)
class Close:
    """Closes an account."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.CLOSE

    date: date
    account: Account


@dataclass(frozen=True, slots=True)
class Price:
    """Quote: one unit of ``commodity`` costs ``price`` units of ``target``."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.PRICE

    date: date
    commodity: Commodity
    target: Commodity
    price: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", to_decimal(self.price, "price"))


@dataclass(frozen=True, slots=True)
class Lot:
    """Cost-basis annotation of a posting."""

    price: Decimal
    commodity: Commodity
    date: date
    label: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", to_decimal(self.price, "lot price"))


@dataclass(frozen=True, slots=True)
class Posting:
    """
    One movement of ``amount`` units of ``commodity``.

    The amount leaves the ``credit`` account and arrives in the ``debit``
    account.
    """

    credit: Account
    debit: Account
    commodity: Commodity
    amount: Decimal
    lot: Lot | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount, "amount"))


@dataclass(frozen=True, slots=True)
class Transaction:
    """A dated, described group of postings."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.TRANSACTION

    date: date
    description: str
    postings: tuple[Posting, ...]
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "postings", tuple(self.postings))
        object.__setattr__(self, "tags", tuple(self.tags))


@dataclass(frozen=True, slots=True)
class Assertion:
    """Balance assertion: ``account`` holds ``amount`` of ``commodity``."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.ASSERTION

    date: date
    account: Account
    amount: Decimal
    commodity: Commodity

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount, "amount"))


@dataclass(frozen=True, slots=True)
class Value:
    """Declares the value of ``account`` in ``commodity`` on a date."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.VALUE

    date: date
    account: Account
    amount: Decimal
    commodity: Commodity

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount, "amount"))


@dataclass(frozen=True, slots=True)
class Accrual:
    """
    Template that spreads a transaction over the periods in ``[t0, t1]``.

    ``account`` is the accrual account holding the amount not yet
    recognized.
    """

    kind: ClassVar[DirectiveKind] = DirectiveKind.ACCRUAL

    period: Period
    t0: date
    t1: date
    account: Account
    transaction: Transaction

    @property
    def date(self) -> date:
        return self.transaction.date

    def expand(self) -> list[Transaction]:
        """Expand into dated transactions. See ``ledger_kernel.domain.accrual``."""
        from ledger_kernel.domain.accrual import expand_accrual

        return expand_accrual(self)


Directive: TypeAlias = Open | Close | Price | Transaction | Assertion | Value | Accrual

DIRECTIVE_TYPES: tuple[type, ...] = (
    Open,
    Close,
    Price,
    Transaction,
    Assertion,
    Value,
    Accrual,
)
