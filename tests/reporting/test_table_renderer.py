"""
Tests for rendering a Report into a Table.

Invariants tested:
- Header layout and separator placement
- Group partition, group totals and the Delta row
- Negated display for the income-statement group only
- Exact-zero amounts render as empty cells
- Indentation in aggregate and per-commodity modes
- Rendering is repeatable and keeps no per-render state
"""

from decimal import Decimal

from ledger_kernel.domain import AccountType
from ledger_modules.reporting.models import Report, Segment
from ledger_modules.reporting.table import (
    Alignment,
    EmptyCell,
    NumberCell,
    RowKind,
    TextCell,
)
from ledger_modules.reporting.table_renderer import (
    INDENT,
    RenderContext,
    TableRenderer,
    group_segments,
)
from tests.factories import cmdty, d
from tests.reporting.helpers import vec

USD = cmdty("USD")
CHF = cmdty("CHF")
EUR = cmdty("EUR")

JAN, FEB = d("2024-01-01"), d("2024-02-01")


def _report(segments, positions=None, commodities=(USD,), dates=(JAN, FEB)) -> Report:
    if positions is None:
        positions = {}
        for segment in segments.values():
            segment.sum(positions)
    return Report(dates=dates, commodities=commodities, segments=segments, positions=positions)


def _data_rows(table):
    return [r for r in table.rows if r.kind == RowKind.DATA]


def _row(table, label):
    for row in _data_rows(table):
        if row.cells[0].text == label:
            return row
    raise AssertionError(f"no row labeled {label!r}")


def _amounts(row):
    return [c.value if isinstance(c, NumberCell) else None for c in row.cells[1:]]


class TestLayout:
    """Header and separators."""

    def test_header(self):
        table = TableRenderer().render(_report({}))
        header = table.rows[1]
        assert header.kind == RowKind.HEADER
        assert header.cells == [
            TextCell("Account", Alignment.CENTER),
            TextCell("2024-01-01", Alignment.CENTER),
            TextCell("2024-02-01", Alignment.CENTER),
        ]
        assert table.label_columns == 1
        assert table.value_columns == 2

    def test_empty_report_has_only_delta(self):
        table = TableRenderer().render(_report({}))
        assert [r.kind for r in table.rows] == [
            RowKind.SEPARATOR,
            RowKind.HEADER,
            RowKind.SEPARATOR,
            RowKind.DATA,
            RowKind.SEPARATOR,
        ]
        assert table.rows[3].cells[0].text == "Delta"
        assert _amounts(table.rows[3]) == [None, None]

    def test_row_kinds_single_group(self):
        cash = Segment("Cash", {USD: vec(100, 0)})
        table = TableRenderer().render(_report({AccountType.ASSETS: Segment("Assets", {}, [cash])}))
        assert [r.kind for r in table.rows] == [
            RowKind.SEPARATOR,
            RowKind.HEADER,
            RowKind.SEPARATOR,
            RowKind.DATA,  # Assets
            RowKind.DATA,  # Cash
            RowKind.EMPTY,
            RowKind.DATA,  # Total
            RowKind.SEPARATOR,
            RowKind.DATA,  # Delta
            RowKind.SEPARATOR,
        ]


class TestAggregateMode:
    """One summed row per segment."""

    def test_amount_and_blank_columns(self):
        """Scenario: Assets:Cash holding USD [100, 0]."""
        cash = Segment("Cash", {USD: vec(100, 0)})
        table = TableRenderer().render(_report({AccountType.ASSETS: Segment("Assets", {}, [cash])}))

        row = _row(table, "Cash")
        assert row.cells[1] == NumberCell(Decimal("100"))
        assert row.cells[2] == EmptyCell()

    def test_commodities_summed_per_segment(self):
        segment = Segment("Assets", {USD: vec(10, 1), CHF: vec(5, -1)})
        table = TableRenderer().render(_report({AccountType.ASSETS: segment}, commodities=(CHF, USD)))
        assert _amounts(_row(table, "Assets")) == [Decimal("15"), None]

    def test_indentation_by_depth(self):
        checking = Segment("Checking", {USD: vec(1, 1)})
        bank = Segment("Bank", {}, [checking])
        table = TableRenderer().render(_report({AccountType.ASSETS: Segment("Assets", {}, [bank])}))

        assert _row(table, "Assets").cells[0].indent == 0
        assert _row(table, "Bank").cells[0].indent == INDENT
        assert _row(table, "Checking").cells[0].indent == 2 * INDENT
        assert _row(table, "Total").cells[0].indent == 0

    def test_parent_row_shows_own_positions_only(self):
        child = Segment("Child", {USD: vec(5, 5)})
        parent = Segment("Assets", {USD: vec(1, 0)}, [child])
        table = TableRenderer().render(_report({AccountType.ASSETS: parent}))
        assert _amounts(_row(table, "Assets")) == [Decimal("1"), None]
        assert _amounts(_row(table, "Total")) == [Decimal("6"), Decimal("5")]

    def test_exact_zero_only_is_blank(self):
        segment = Segment("Assets", {USD: vec("0.00", "0.001")})
        table = TableRenderer().render(_report({AccountType.ASSETS: segment}))
        assert _amounts(_row(table, "Assets")) == [None, Decimal("0.001")]


class TestGroups:
    """Group partition, totals and sign convention."""

    def test_group_partition_in_category_order(self):
        segments = {
            AccountType.EXPENSES: Segment("Expenses"),
            AccountType.LIABILITIES: Segment("Liabilities"),
            AccountType.INCOME: Segment("Income"),
            AccountType.ASSETS: Segment("Assets"),
        }
        groups = group_segments(_report(segments))
        assert [[s.key for s in g] for g in groups.values()] == [
            ["Assets", "Liabilities"],
            ["Income", "Expenses"],
        ]

    def test_second_group_total_negated(self):
        """Scenario: Income and Expenses each USD [50, 50] total -100 per date."""
        segments = {
            AccountType.INCOME: Segment("Income", {USD: vec(50, 50)}),
            AccountType.EXPENSES: Segment("Expenses", {USD: vec(50, 50)}),
        }
        table = TableRenderer().render(_report(segments))

        assert _amounts(_row(table, "Total")) == [Decimal("-100"), Decimal("-100")]
        assert _amounts(_row(table, "Income")) == [Decimal("-50"), Decimal("-50")]

    def test_first_group_signs_unchanged(self):
        segments = {
            AccountType.ASSETS: Segment("Assets", {USD: vec(300, -20)}),
            AccountType.LIABILITIES: Segment("Liabilities", {USD: vec(-300, 0)}),
        }
        table = TableRenderer().render(_report(segments))
        assert _amounts(_row(table, "Assets")) == [Decimal("300"), Decimal("-20")]
        assert _amounts(_row(table, "Liabilities")) == [Decimal("-300"), None]
        assert _amounts(_row(table, "Total")) == [None, Decimal("-20")]

    def test_each_group_has_its_own_total(self):
        segments = {
            AccountType.ASSETS: Segment("Assets", {USD: vec(100, 100)}),
            AccountType.EQUITY: Segment("Equity", {USD: vec(-100, -100)}),
        }
        table = TableRenderer().render(_report(segments))
        totals = [r for r in _data_rows(table) if r.cells[0].text == "Total"]
        assert [_amounts(r) for r in totals] == [
            [Decimal("100"), Decimal("100")],
            [Decimal("100"), Decimal("100")],
        ]

    def test_delta_not_negated(self):
        segments = {AccountType.INCOME: Segment("Income", {USD: vec(-70, 0)})}
        table = TableRenderer().render(_report(segments))
        assert _amounts(_row(table, "Delta")) == [Decimal("-70"), None]
        assert _amounts(_row(table, "Income")) == [Decimal("70"), None]

    def test_delta_uses_report_positions(self):
        segments = {AccountType.ASSETS: Segment("Assets", {USD: vec(1, 1)})}
        table = TableRenderer().render(_report(segments, positions={USD: vec(9, 0)}))
        assert _amounts(_row(table, "Delta")) == [Decimal("9"), None]

    def test_missing_group_skipped(self):
        segments = {AccountType.EXPENSES: Segment("Expenses", {USD: vec(1, 1)})}
        table = TableRenderer().render(_report(segments))
        labels = [r.cells[0].text for r in _data_rows(table)]
        assert labels == ["Expenses", "Total", "Delta"]


class TestCommoditiesMode:
    """Label row per segment, one row per commodity."""

    def test_rows_per_commodity_in_universe_order(self):
        wallet = Segment("Wallet", {EUR: vec(0, 7)})
        assets = Segment("Assets", {USD: vec(10, 0), CHF: vec(5, 5)}, [wallet])
        report = _report({AccountType.ASSETS: assets}, commodities=(CHF, EUR, USD))
        table = TableRenderer(commodities=True).render(report)

        rows = _data_rows(table)
        labels = [(r.cells[0].text, r.cells[0].indent) for r in rows]
        assert labels[:5] == [
            ("Assets", 0),
            ("CHF", INDENT),
            ("USD", INDENT),
            ("Wallet", INDENT),
            ("EUR", 2 * INDENT),
        ]
        assert _amounts(rows[0]) == [None, None]
        assert _amounts(rows[1]) == [Decimal("5"), Decimal("5")]
        assert _amounts(rows[2]) == [Decimal("10"), None]
        assert _amounts(rows[4]) == [None, Decimal("7")]

    def test_total_and_delta_rendered_per_commodity(self):
        report = _report({AccountType.INCOME: Segment("Income", {USD: vec(-5, 0)})})
        rows = _data_rows(TableRenderer(commodities=True).render(report))
        labels = [r.cells[0].text for r in rows]
        assert labels == ["Income", "USD", "Total", "USD", "Delta", "USD"]
        assert _amounts(rows[1]) == [Decimal("5"), None]
        assert _amounts(rows[3]) == [Decimal("5"), None]
        assert _amounts(rows[5]) == [Decimal("-5"), None]


class TestRendererState:
    """Rendering is repeatable and instance-stateless."""

    def test_idempotent(self):
        report = _report({
            AccountType.ASSETS: Segment("Assets", {USD: vec(1, 2)}, [Segment("Cash", {CHF: vec(3, 0)})]),
            AccountType.INCOME: Segment("Income", {USD: vec(-1, -2)}),
        }, commodities=(CHF, USD))
        renderer = TableRenderer()
        first, second = renderer.render(report), renderer.render(report)
        assert first is not second
        assert first.rows == second.rows

    def test_render_does_not_mutate_report(self):
        positions = {USD: vec(50, 50)}
        report = _report({AccountType.INCOME: Segment("Income", positions)})
        TableRenderer().render(report)
        assert positions[USD] == vec(50, 50)
        assert report.positions == {USD: vec(50, 50)}

    def test_context_nesting_is_immutable(self):
        report = _report({})
        ctx = RenderContext(report=report, table=None)
        nested = ctx.nested()
        assert ctx.indent == 0
        assert nested.indent == INDENT
        assert nested.report is report
