"""
Periods -- calendar periods and period-end date series.

Used by accrual expansion to spread an amount over time and by report
construction to pick column dates.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from enum import Enum


class Period(str, Enum):
    """Calendar period granularity."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    def end_of(self, d: date) -> date:
        """Last day of the period containing ``d``. Weeks end on Sunday."""
        match self:
            case Period.DAILY:
                return d
            case Period.WEEKLY:
                return d + timedelta(days=6 - d.weekday())
            case Period.MONTHLY:
                return _month_end(d.year, d.month)
            case Period.QUARTERLY:
                return _month_end(d.year, ((d.month - 1) // 3 + 1) * 3)
            case Period.YEARLY:
                return date(d.year, 12, 31)
        raise ValueError(f"Unknown period: {self}")

    def series(self, t0: date, t1: date) -> list[date]:
        """
        Period-end dates of every period overlapping ``[t0, t1]``.

        Returns an empty list when ``t1`` is before ``t0``.
        """
        result: list[date] = []
        if t1 < t0:
            return result
        current = self.end_of(t0)
        last = self.end_of(t1)
        while current <= last:
            result.append(current)
            current = self.end_of(current + timedelta(days=1))
        return result


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])
