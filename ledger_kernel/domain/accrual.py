"""
Module: ledger_kernel.domain.accrual
Responsibility:
    Expand an ``Accrual`` template into the dated transactions that spread
    its single posting over the periods between ``t0`` and ``t1``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - The slices of a split amount sum exactly to the original amount;
      the remainder at the amount's precision goes to the first slice.
    - Income/expense postings are recognized per period; the balance-sheet
      side is booked in full on the template's date through the accrual
      account.

Failure modes:
    - AccrualExpansionError if the template does not hold exactly one posting.
    - AccrualExpansionError if ``t1`` is before ``t0``.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from typing import TYPE_CHECKING

from ledger_kernel.domain.accounts import Account
from ledger_kernel.domain.directives import Posting, Transaction
from ledger_kernel.exceptions import AccrualExpansionError
from ledger_kernel.logging_config import get_logger

if TYPE_CHECKING:
    from ledger_kernel.domain.directives import Accrual

logger = get_logger("domain.accrual")


def split_amount(amount: Decimal, parts: int) -> list[Decimal]:
    """
    Split ``amount`` into ``parts`` slices at the amount's own precision.

    Each slice is ``amount / parts`` truncated toward zero; the remainder
    is added to the first slice.
    """
    if parts <= 0:
        raise ValueError(f"parts must be positive, got {parts}")
    exponent = min(amount.as_tuple().exponent, 0)
    quantum = Decimal(1).scaleb(exponent)
    slice_ = (amount / parts).quantize(quantum, rounding=ROUND_DOWN)
    slices = [slice_] * parts
    slices[0] = amount - slice_ * (parts - 1)
    return slices


def _is_income_statement(account: Account) -> bool:
    return not account.type.is_balance_sheet


def expand_accrual(accrual: Accrual) -> list[Transaction]:
    """
    Expand an accrual template into transactions.

    Preconditions:
        - ``accrual.transaction`` holds exactly one posting.
        - ``accrual.t0 <= accrual.t1``.

    Postconditions:
        - Returns at least one transaction per period-end date in
          ``[t0, t1]``, plus one transaction on the template's date when
          either side of the posting is an income or expense account.

    Raises:
        AccrualExpansionError: if a precondition does not hold.
    """
    template = accrual.transaction
    if len(template.postings) != 1:
        raise AccrualExpansionError(
            accrual,
            f"expected exactly one posting, got {len(template.postings)}",
        )
    if accrual.t1 < accrual.t0:
        raise AccrualExpansionError(
            accrual, f"end date {accrual.t1} is before start date {accrual.t0}",
        )

    posting = template.postings[0]
    dates = accrual.period.series(accrual.t0, accrual.t1)
    slices = split_amount(posting.amount, len(dates))

    result: list[Transaction] = []
    if _is_income_statement(posting.debit):
        # Full amount parked on the accrual account, recognized per period
        result.append(_transaction(template, template.date, template.description,
                                   posting.credit, accrual.account, posting, posting.amount))
        credit, debit = accrual.account, posting.debit
    elif _is_income_statement(posting.credit):
        result.append(_transaction(template, template.date, template.description,
                                   accrual.account, posting.debit, posting, posting.amount))
        credit, debit = posting.credit, accrual.account
    else:
        credit, debit = posting.credit, posting.debit

    for i, (d, amount) in enumerate(zip(dates, slices)):
        description = f"{template.description} (accrual {i + 1}/{len(dates)})"
        result.append(_transaction(template, d, description, credit, debit, posting, amount))

    logger.debug(
        "accrual_expanded",
        extra={
            "template_date": template.date,
            "period": accrual.period.value,
            "slice_count": len(dates),
            "transaction_count": len(result),
        },
    )
    return result


def _transaction(template, d, description, credit, debit, posting, amount) -> Transaction:
    return Transaction(
        date=d,
        description=description,
        postings=(Posting(credit, debit, posting.commodity, amount, posting.lot),),
        tags=template.tags,
    )
