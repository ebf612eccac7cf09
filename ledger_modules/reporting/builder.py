"""
Module: ledger_modules.reporting.builder
Responsibility:
    Aggregate a ``Ledger`` into a ``Report``: per-account, per-commodity
    balances at each report date, arranged into one segment tree per
    account category.

Architecture position:
    Modules > Reporting -- pure transformation, zero I/O.

Invariants enforced:
    - A posting moves its amount out of the credit account and into the
      debit account.
    - Every vector has one slot per report date; a commodity whose vector
      is zero on every date is omitted.
    - Report positions are the grand total over every account.

Non-goals:
    - No valuation, currency conversion or assertion checking; prices,
      values and assertions do not contribute.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from ledger_kernel.domain.accounts import Account
from ledger_kernel.domain.commodities import Commodity
from ledger_kernel.domain.ledger import Ledger
from ledger_kernel.domain.vector import Vector
from ledger_kernel.logging_config import get_logger
from ledger_modules.reporting.models import Positions, Report, Segment

logger = get_logger("modules.reporting.builder")


class ReportBuilder:
    """
    Builds balance reports from a ledger.

    With ``diff`` each column holds the change since the previous report
    date (the first column: since the beginning) instead of the
    cumulative balance.  Without ``dates`` the ledger's last date is used.
    """

    def __init__(self, dates: Sequence[date] = (), diff: bool = False):
        self.dates = tuple(sorted(set(dates)))
        self.diff = diff

    def build(self, ledger: Ledger) -> Report:
        dates = self.dates
        if not dates and ledger.max_date is not None:
            dates = (ledger.max_date,)

        balances = self._balances(ledger, dates)

        report = Report(dates=dates, commodities=())
        commodities: set[Commodity] = set()
        for account in sorted(balances, key=lambda a: a.segments):
            positions = {
                c: v for c, v in sorted(balances[account].items()) if not v.is_zero()
            }
            if not positions:
                continue
            commodities.update(positions)
            _insert(report, account, positions)

        totals: Positions = {}
        for segment in report.segments.values():
            segment.sum(totals)
        report.positions = totals
        report.commodities = tuple(sorted(commodities))

        logger.info(
            "report_built",
            extra={
                "date_count": len(dates),
                "account_count": len(balances),
                "commodity_count": len(commodities),
                "diff": self.diff,
            },
        )
        return report

    def _balances(
        self, ledger: Ledger, dates: tuple[date, ...],
    ) -> dict[Account, dict[Commodity, Vector]]:
        balances: dict[Account, dict[Commodity, Vector]] = {}

        def book(account: Account, commodity: Commodity, amount: Decimal, first: int) -> None:
            vector = balances.setdefault(account, {}).get(commodity)
            if vector is None:
                vector = Vector.zeros(len(dates))
                balances[account][commodity] = vector
            last = first + 1 if self.diff else len(dates)
            for i in range(first, last):
                vector.values[i] += amount

        for day in ledger:
            first = bisect_left(dates, day.date)
            if first == len(dates):
                break
            for transaction in day.transactions:
                for posting in transaction.postings:
                    book(posting.credit, posting.commodity, -posting.amount, first)
                    book(posting.debit, posting.commodity, posting.amount, first)
        return balances


def _insert(report: Report, account: Account, positions: Positions) -> None:
    segment = report.segments.get(account.type)
    if segment is None:
        segment = Segment(key=account.type.value)
        report.segments[account.type] = segment
    for key in account.segments[1:]:
        child = segment.find(key)
        if child is None:
            child = Segment(key=key)
            segment.subsegments.append(child)
        segment = child
    segment.positions = positions
