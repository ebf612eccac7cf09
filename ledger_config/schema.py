"""
Configuration schema (``ledger_config.schema``).

Frozen dataclasses describing a ledger run: which accounts and
commodities to keep, and how to present the report.
"""

from __future__ import annotations

from dataclasses import dataclass

from ledger_kernel.domain.filter import Filter


@dataclass(frozen=True)
class FilterConfig:
    """Regular expressions over account and commodity names. None keeps everything."""

    accounts: str | None = None
    commodities: str | None = None


@dataclass(frozen=True)
class ReportConfig:
    """Report presentation options."""

    commodities: bool = False  # one row per commodity instead of summed rows
    diff: bool = False  # per-period changes instead of cumulative balances
    decimals: int = 2
    thousands_separator: str = ","


@dataclass(frozen=True)
class LedgerConfig:
    filter: FilterConfig = FilterConfig()
    report: ReportConfig = ReportConfig()

    def build_filter(self) -> Filter:
        return Filter.of(accounts=self.filter.accounts, commodities=self.filter.commodities)
