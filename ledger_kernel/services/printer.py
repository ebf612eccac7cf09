"""
Module: ledger_kernel.services.printer
Responsibility:
    Serialize directives and ledgers back to their canonical text form.

Architecture position:
    Kernel > Services -- writes to a caller-supplied text stream only.

Failure modes:
    - UnknownDirectiveError for values that are not printable directives.
      Accruals are expanded before they reach a ledger and are not printed.
    - Errors raised by the stream propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import TextIO

from ledger_kernel.domain.accounts import Account
from ledger_kernel.domain.directives import (
    Assertion,
    Close,
    Lot,
    Open,
    Posting,
    Price,
    Transaction,
    Value,
)
from ledger_kernel.domain.ledger import Ledger
from ledger_kernel.exceptions import UnknownDirectiveError

DATE_FORMAT = "%Y-%m-%d"
AMOUNT_WIDTH = 10


def _fmt_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


class Printer:
    """
    Prints directives.

    ``padding`` is the width account columns of postings are right-padded
    to; ``Printer.for_ledger`` derives it from the longest account name.
    """

    def __init__(self, padding: int = 0):
        self.padding = padding

    @classmethod
    def for_ledger(cls, ledger: Ledger) -> Printer:
        return cls(padding=max(
            (len(str(a)) for a in _posting_accounts(ledger)),
            default=0,
        ))

    def print_directive(self, stream: TextIO, directive: object) -> int:
        """Write one directive (without trailing newline); return characters written."""
        match directive:
            case Transaction():
                return self._print_transaction(stream, directive)
            case Open():
                return stream.write(f"{_fmt_date(directive.date)} open {directive.account}")
            case Close():
                return stream.write(f"{_fmt_date(directive.date)} close {directive.account}")
            case Price():
                return stream.write(
                    f"{_fmt_date(directive.date)} price {directive.commodity} "
                    f"{directive.price} {directive.target}"
                )
            case Assertion():
                return stream.write(
                    f"{_fmt_date(directive.date)} balance {directive.account} "
                    f"{directive.amount} {directive.commodity}"
                )
            case Value():
                return stream.write(
                    f"{_fmt_date(directive.date)} value {directive.account} "
                    f"{directive.amount} {directive.commodity}"
                )
        raise UnknownDirectiveError(directive)

    def print_ledger(self, stream: TextIO, ledger: Ledger) -> int:
        """Write every directive of the ledger, one per line, day by day."""
        n = 0
        for day in ledger:
            for directive in day.directives():
                n += self.print_directive(stream, directive)
                n += stream.write("\n")
        return n

    def _print_transaction(self, stream: TextIO, t: Transaction) -> int:
        header = f'{_fmt_date(t.date)} "{t.description}"'
        for tag in t.tags:
            header += f" {tag}"
        n = stream.write(header + "\n")
        for posting in t.postings:
            n += stream.write(self._format_posting(posting) + "\n")
        return n

    def _format_posting(self, p: Posting) -> str:
        line = (
            f"{self._pad(p.credit)} {self._pad(p.debit)} "
            f"{str(p.amount).rjust(AMOUNT_WIDTH)} {p.commodity}"
        )
        if p.lot is not None:
            line += " " + _format_lot(p.lot)
        return line

    def _pad(self, account: Account) -> str:
        return str(account).ljust(self.padding)


def _format_lot(lot: Lot) -> str:
    text = f"{{ {lot.price} {lot.commodity}, {_fmt_date(lot.date)} "
    if lot.label:
        text += f"{lot.label} "
    return text + "}"


def _posting_accounts(ledger: Ledger) -> Iterable[Account]:
    for day in ledger:
        for t in day.transactions:
            for p in t.postings:
                yield p.credit
                yield p.debit
