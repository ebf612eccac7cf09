"""Shared builders for reporting tests."""

from __future__ import annotations

from decimal import Decimal

from ledger_kernel.domain import Vector


def vec(*values) -> Vector:
    return Vector(Decimal(str(v)) for v in values)
