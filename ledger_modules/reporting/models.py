"""
Report Domain Models (``ledger_modules.reporting.models``).

Responsibility
--------------
``Segment`` is one node of the account-hierarchy aggregation tree: a
display key, a mapping from commodity to per-date ``Vector`` and ordered
child segments.  ``Report`` holds the report dates, the commodity
universe, one segment tree per top-level account category and the grand
total positions.

Invariants enforced
-------------------
* Every vector inside one report has ``len(report.dates)`` slots.
* A commodity either maps to a full-length vector or is absent.

Failure modes
-------------
* ``Segment.sum`` raises ``ValueError`` on vectors of mismatched length.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ledger_kernel.domain.accounts import AccountType
from ledger_kernel.domain.commodities import Commodity
from ledger_kernel.domain.vector import Vector

Positions = dict[Commodity, Vector]


@dataclass
class Segment:
    """A node of the account hierarchy with its positions."""

    key: str
    positions: Positions = field(default_factory=dict)
    subsegments: list[Segment] = field(default_factory=list)

    def sum(self, target: Positions) -> Positions:
        """
        Accumulate this segment's and all descendants' positions into ``target``.

        A commodity seen for the first time gets a fresh zero vector in
        ``target``; existing entries are added to, so several segments can
        be folded into one total.
        """
        for commodity, vector in self.positions.items():
            total = target.get(commodity)
            if total is None:
                total = Vector.zeros(len(vector))
                target[commodity] = total
            total.add(vector)
        for subsegment in self.subsegments:
            subsegment.sum(target)
        return target

    def total(self, length: int) -> Vector:
        """Sum of this segment's own positions across all commodities."""
        result = Vector.zeros(length)
        for vector in self.positions.values():
            result.add(vector)
        return result

    def find(self, key: str) -> Segment | None:
        for subsegment in self.subsegments:
            if subsegment.key == key:
                return subsegment
        return None


@dataclass
class Report:
    """Multi-date, multi-commodity report over the account hierarchy."""

    dates: tuple[date, ...]
    commodities: tuple[Commodity, ...]
    segments: dict[AccountType, Segment] = field(default_factory=dict)
    positions: Positions = field(default_factory=dict)
