"""Commodities -- identifiers of the units amounts are denominated in."""

from __future__ import annotations

import re
from dataclasses import dataclass

_COMMODITY_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


@dataclass(frozen=True, slots=True, order=True)
class Commodity:
    """
    Commodity value object (currency, security, or any countable unit).

    Guarantees:
        - Immutable, hashable and ordered by name.
        - ``name`` is a non-empty run of letters, digits and underscores.

    Non-goals:
        - Does NOT carry precision or exchange rates.
    """

    name: str

    def __post_init__(self) -> None:
        if not _COMMODITY_PATTERN.match(self.name or ""):
            raise ValueError(f"Invalid commodity: {self.name!r}")

    def __str__(self) -> str:
        return self.name
