"""Tests for the Day and Ledger data model."""

import pytest

from ledger_kernel.domain.directives import Open
from ledger_kernel.domain.ledger import Day, Ledger
from tests.factories import acct, d


class TestDay:
    def test_empty_day(self):
        assert Day(d("2024-01-01")).is_empty

    def test_directives_in_canonical_order(self):
        opening = Open(d("2024-01-01"), acct("Assets:Cash"))
        day = Day(d("2024-01-01"), openings=(opening,))
        assert not day.is_empty
        assert list(day.directives()) == [opening]


class TestLedger:
    def test_strictly_ascending_required(self):
        with pytest.raises(ValueError, match="strictly ascending"):
            Ledger((Day(d("2024-01-02")), Day(d("2024-01-01"))))

    def test_duplicate_dates_rejected(self):
        with pytest.raises(ValueError):
            Ledger((Day(d("2024-01-01")), Day(d("2024-01-01"))))

    def test_dates_and_bounds(self):
        ledger = Ledger((Day(d("2024-01-01")), Day(d("2024-02-01"))))
        assert ledger.dates == (d("2024-01-01"), d("2024-02-01"))
        assert ledger.min_date == d("2024-01-01")
        assert ledger.max_date == d("2024-02-01")
        assert len(ledger) == 2

    def test_empty_ledger(self):
        ledger = Ledger()
        assert ledger.min_date is None
        assert list(ledger) == []
