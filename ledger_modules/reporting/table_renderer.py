"""
Module: ledger_modules.reporting.table_renderer
Responsibility:
    Translate a ``Report`` into a ``Table``: one header column per report
    date, account categories grouped into balance-sheet and
    income-statement blocks with a "Total" row each, and a final "Delta"
    row holding the grand total.

Architecture position:
    Modules > Reporting -- pure in-memory transform, zero I/O.

Invariants enforced:
    - Categories are rendered in ``AccountType`` order; assets and
      liabilities form the first group, all other categories the second.
    - Amounts of the second group are displayed negated.
    - An amount that is exactly zero renders as an empty cell.
    - Rendering state travels in an immutable ``RenderContext``; a renderer
      instance holds no per-render state and can render any number of
      reports, including concurrently.

Failure modes:
    None of its own.  Vectors whose length differs from the report's date
    count are a caller contract violation and surface as ``ValueError``
    from vector arithmetic.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from decimal import Decimal

from ledger_kernel.domain.accounts import AccountType
from ledger_kernel.logging_config import get_logger
from ledger_modules.reporting.models import Positions, Report, Segment
from ledger_modules.reporting.table import Alignment, Row, Table

logger = get_logger("modules.reporting.table_renderer")

INDENT = 2
DATE_FORMAT = "%Y-%m-%d"

# Report groups whose amounts are displayed with flipped sign
NEGATED_GROUPS = frozenset({2})


@dataclass(frozen=True)
class RenderContext:
    """Per-call rendering state threaded through the segment recursion."""

    report: Report
    table: Table
    negate: bool = False
    indent: int = 0

    def nested(self) -> RenderContext:
        return replace(self, indent=self.indent + INDENT)

    def add_amounts(self, row: Row, amounts: Iterable[Decimal]) -> None:
        for amount in amounts:
            if amount.is_zero():
                row.add_empty()
            else:
                row.add_number(-amount if self.negate else amount)


def group_segments(report: Report) -> dict[int, list[Segment]]:
    """Partition the report's category segments by report group, in category order."""
    groups: dict[int, list[Segment]] = {}
    for account_type in AccountType:
        segment = report.segments.get(account_type)
        if segment is None:
            continue
        groups.setdefault(account_type.group, []).append(segment)
    return dict(sorted(groups.items()))


class TableRenderer:
    """
    Renders a report.

    ``commodities`` selects per-commodity mode (one row per commodity under
    a label-only segment row) instead of aggregate mode (one summed row
    per segment).
    """

    def __init__(self, commodities: bool = False):
        self.commodities = commodities

    def render(self, report: Report) -> Table:
        table = Table(1, len(report.dates))
        ctx = RenderContext(report=report, table=table)
        render: Callable[[RenderContext, Segment], None]
        if self.commodities:
            render = self._render_segment_with_commodities
        else:
            render = self._render_segment

        table.add_separator_row()
        header = table.add_header_row().add_text("Account", Alignment.CENTER)
        for d in report.dates:
            header.add_text(d.strftime(DATE_FORMAT), Alignment.CENTER)
        table.add_separator_row()

        for group, segments in group_segments(report).items():
            group_ctx = replace(ctx, negate=group in NEGATED_GROUPS)
            for segment in segments:
                render(group_ctx, segment)
                table.add_empty_row()
            totals: Positions = {}
            for segment in segments:
                segment.sum(totals)
            render(group_ctx, Segment(key="Total", positions=totals))
            table.add_separator_row()

        render(ctx, Segment(key="Delta", positions=report.positions))
        table.add_separator_row()

        logger.debug(
            "report_rendered",
            extra={
                "row_count": len(table),
                "date_count": len(report.dates),
                "commodities": self.commodities,
            },
        )
        return table

    def _render_segment(self, ctx: RenderContext, segment: Segment) -> None:
        total = segment.total(len(ctx.report.dates))
        row = ctx.table.add_row().add_indented(segment.key, ctx.indent)
        ctx.add_amounts(row, total)

        nested = ctx.nested()
        for subsegment in segment.subsegments:
            self._render_segment(nested, subsegment)

    def _render_segment_with_commodities(self, ctx: RenderContext, segment: Segment) -> None:
        row = ctx.table.add_row().add_indented(segment.key, ctx.indent)
        for _ in ctx.report.dates:
            row.add_empty()

        # Commodity rows and subsegments share the next indentation level
        nested = ctx.nested()
        for commodity in ctx.report.commodities:
            amounts = segment.positions.get(commodity)
            if amounts is None:
                continue
            row = ctx.table.add_row().add_indented(str(commodity), nested.indent)
            ctx.add_amounts(row, amounts)

        for subsegment in segment.subsegments:
            self._render_segment_with_commodities(nested, subsegment)
