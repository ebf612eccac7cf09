"""
Module: ledger_kernel.services.ledger_builder
Responsibility:
    Consume an ordered stream of directives, apply a ``Filter``, bucket the
    survivors into per-date ``Day`` aggregates and freeze them into a
    date-sorted ``Ledger``.

Architecture position:
    Kernel > Services -- stateful only for the duration of one build,
    zero I/O.

Invariants enforced:
    - Openings and prices are never filtered.
    - Closings are kept when the account matches; assertions and values
      when both account and commodity match.
    - A posting survives when either of its accounts matches and its
      commodity matches; a transaction left without postings is dropped.
    - Days are unique per date and the built ledger is sorted by date.
    - ``build()`` returns either a complete ledger or raises; there are no
      partial results.

Failure modes:
    - An exception instance found in the stream is re-raised unchanged.
    - UnknownDirectiveError for a stream value of no known directive kind.
    - AccrualExpansionError when an accrual template cannot be expanded.

Usage:
    from ledger_kernel.domain import Filter
    from ledger_kernel.services.ledger_builder import build

    ledger = build(Filter.of(accounts="^Assets"), directives)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Never, NoReturn
from uuid import uuid4

from ledger_kernel.domain.directives import (
    Accrual,
    Assertion,
    Close,
    Directive,
    Open,
    Price,
    Transaction,
    Value,
)
from ledger_kernel.domain.filter import MATCH_ALL, Filter
from ledger_kernel.domain.ledger import Day, Ledger
from ledger_kernel.exceptions import UnknownDirectiveError
from ledger_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.ledger_builder")


def build(
    filter: Filter,
    directives: Iterable[Directive | Exception],
    source: str | None = None,
) -> Ledger:
    """
    Build a ledger from a directive stream.

    Consumes ``directives`` in order and stops at the first error without
    draining the rest of the stream.  ``source`` (a file path or any label
    naming where the directives came from) is attached to every log record
    of the build.

    Raises:
        Exception: the first exception instance found in the stream.
        UnknownDirectiveError: for a value that is not a directive.
        AccrualExpansionError: if an accrual cannot be expanded.
    """
    builder = Builder(filter)
    consumed = 0
    with LogContext.bind(build_id=uuid4().hex, source=source):
        logger.info("ledger_build_started")
        try:
            for item in directives:
                if isinstance(item, Exception):
                    raise item
                builder.add(item)
                consumed += 1
        except Exception as e:
            logger.warning(
                "ledger_build_aborted",
                extra={
                    "consumed_count": consumed,
                    "error_type": type(e).__name__,
                    "error_code": getattr(e, "code", None),
                },
            )
            raise
        ledger = builder.build()
        logger.info(
            "ledger_build_completed",
            extra={"consumed_count": consumed, "day_count": len(ledger)},
        )
    return ledger


def _unknown(value: Never) -> NoReturn:
    raise UnknownDirectiveError(value)


@dataclass
class _DayAccumulator:
    """Mutable per-date bucket used while a build is in progress."""

    date: date
    prices: list[Price] = field(default_factory=list)
    openings: list[Open] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    values: list[Value] = field(default_factory=list)
    assertions: list[Assertion] = field(default_factory=list)
    closings: list[Close] = field(default_factory=list)

    def freeze(self) -> Day:
        return Day(
            date=self.date,
            prices=tuple(self.prices),
            openings=tuple(self.openings),
            transactions=tuple(self.transactions),
            values=tuple(self.values),
            assertions=tuple(self.assertions),
            closings=tuple(self.closings),
        )


class Builder:
    """
    Maps dates to days.

    Contract:
        Constructed once per build with a fixed filter, fed through the
        ``add_*`` methods, and finalized exactly once with ``build()``.
        Not intended for reuse after ``build()``.
    """

    def __init__(self, filter: Filter = MATCH_ALL):
        self._filter = filter
        self._days: dict[date, _DayAccumulator] = {}

    @property
    def filter(self) -> Filter:
        return self._filter

    def add(self, directive: Directive) -> None:
        """Dispatch a directive to its ``add_*`` method."""
        match directive:
            case Open():
                self.add_opening(directive)
            case Close():
                self.add_closing(directive)
            case Price():
                self.add_price(directive)
            case Transaction():
                self.add_transaction(directive)
            case Assertion():
                self.add_assertion(directive)
            case Value():
                self.add_value(directive)
            case Accrual():
                for transaction in directive.expand():
                    self.add_transaction(transaction)
            case _:
                _unknown(directive)

    def build(self) -> Ledger:
        """Collect the days, sorted ascending by date."""
        days = sorted(self._days.values(), key=lambda d: d.date)
        return Ledger(tuple(d.freeze() for d in days))

    def _get_or_create(self, d: date) -> _DayAccumulator:
        day = self._days.get(d)
        if day is None:
            day = _DayAccumulator(date=d)
            self._days[d] = day
        return day

    def add_transaction(self, transaction: Transaction) -> None:
        """Add a transaction, keeping only the postings the filter admits."""
        match_account = self._filter.match_account
        filtered = tuple(
            p for p in transaction.postings
            if (match_account(p.credit) or match_account(p.debit))
            and self._filter.match_commodity(p.commodity)
        )
        if not filtered:
            return
        if len(filtered) != len(transaction.postings):
            transaction = replace(transaction, postings=filtered)
        self._get_or_create(transaction.date).transactions.append(transaction)

    def add_opening(self, opening: Open) -> None:
        self._get_or_create(opening.date).openings.append(opening)

    def add_closing(self, closing: Close) -> None:
        if not self._filter.match_account(closing.account):
            return
        self._get_or_create(closing.date).closings.append(closing)

    def add_price(self, price: Price) -> None:
        # Prices are not owned by an account and are never filtered
        self._get_or_create(price.date).prices.append(price)

    def add_assertion(self, assertion: Assertion) -> None:
        if not (
            self._filter.match_account(assertion.account)
            and self._filter.match_commodity(assertion.commodity)
        ):
            return
        self._get_or_create(assertion.date).assertions.append(assertion)

    def add_value(self, value: Value) -> None:
        if not (
            self._filter.match_account(value.account)
            and self._filter.match_commodity(value.commodity)
        ):
            return
        self._get_or_create(value.date).values.append(value)
