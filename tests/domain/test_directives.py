"""Tests for directive value objects and the closed directive union."""

import typing
from decimal import Decimal

import pytest

from ledger_kernel.domain.directives import (
    DIRECTIVE_TYPES,
    Accrual,
    Assertion,
    Directive,
    DirectiveKind,
    Lot,
    Posting,
    Price,
    Transaction,
)
from ledger_kernel.domain.periods import Period
from tests.factories import acct, cmdty, d, posting, txn


class TestDirectiveUnion:
    """The union, the type tuple and the kind tags agree."""

    def test_directive_types_match_union(self):
        assert set(typing.get_args(Directive)) == set(DIRECTIVE_TYPES)

    def test_every_kind_has_one_type(self):
        assert sorted(t.kind for t in DIRECTIVE_TYPES) == sorted(DirectiveKind)


class TestAmounts:
    """Amounts are always Decimal."""

    def test_string_amount_converted(self):
        p = posting("Assets:A", "Assets:B", "12.50")
        assert p.amount == Decimal("12.50")

    def test_int_amount_converted(self):
        a = Assertion(d("2024-01-01"), acct("Assets:Cash"), 5, cmdty())
        assert a.amount == Decimal("5")

    def test_float_rejected(self):
        with pytest.raises(TypeError, match="float"):
            Price(d("2024-01-01"), cmdty("CHF"), cmdty("USD"), 1.1)

    def test_garbage_rejected(self):
        with pytest.raises(ValueError, match="Invalid amount"):
            Posting(acct("Assets:A"), acct("Assets:B"), cmdty(), "ten")

    def test_garbage_lot_price_rejected(self):
        with pytest.raises(ValueError, match="Invalid lot price"):
            Lot("n/a", cmdty(), d("2024-01-01"))


class TestTransaction:
    """Tests for Transaction."""

    def test_postings_stored_as_tuple(self):
        t = Transaction(d("2024-01-01"), "x", [posting("Assets:A", "Assets:B")])
        assert isinstance(t.postings, tuple)

    def test_accrual_date_is_template_date(self):
        template = txn("2024-04-01", posting("Assets:Bank", "Expenses:Rent"))
        accrual = Accrual(Period.MONTHLY, d("2024-01-01"), d("2024-03-31"), acct("Assets:Prepaid"), template)
        assert accrual.date == d("2024-04-01")
