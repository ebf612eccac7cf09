"""
Pure domain layer.

Value objects, directives, the ledger data model and the pure
transformations over them. No I/O and no clock access.
"""

from ledger_kernel.domain.accounts import Account, AccountType
from ledger_kernel.domain.commodities import Commodity
from ledger_kernel.domain.directives import (
    DIRECTIVE_TYPES,
    Accrual,
    Assertion,
    Close,
    Directive,
    DirectiveKind,
    Lot,
    Open,
    Posting,
    Price,
    Transaction,
    Value,
)
from ledger_kernel.domain.filter import MATCH_ALL, Filter
from ledger_kernel.domain.ledger import Day, Ledger
from ledger_kernel.domain.periods import Period
from ledger_kernel.domain.vector import Vector

__all__ = [
    "Account",
    "AccountType",
    "Accrual",
    "Assertion",
    "Close",
    "Commodity",
    "DIRECTIVE_TYPES",
    "Day",
    "Directive",
    "DirectiveKind",
    "Filter",
    "Ledger",
    "Lot",
    "MATCH_ALL",
    "Open",
    "Period",
    "Posting",
    "Price",
    "Transaction",
    "Value",
    "Vector",
]
