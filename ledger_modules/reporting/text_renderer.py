"""
Text layout of a ``Table``.

Column widths are the widest cell of each column.  Separator rows become
``+----+`` lines; every other row is framed by ``|``.  Numbers are
right-aligned, rounded half-up to ``decimals`` digits and grouped by
``thousands_separator``.  A ``"."`` separator switches the decimal mark
to ``","`` (``1.234,50``).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TextIO

from ledger_modules.reporting.table import (
    Alignment,
    Cell,
    EmptyCell,
    NumberCell,
    RowKind,
    Table,
    TextCell,
)

_SWAP_MARKS = str.maketrans(",.", ".,")


class TextRenderer:
    """Renders a table to a text stream."""

    def __init__(self, decimals: int = 2, thousands_separator: str = ","):
        if decimals < 0:
            raise ValueError(f"decimals must not be negative: {decimals}")
        self.decimals = decimals
        self.thousands_separator = thousands_separator

    def format_number(self, value: Decimal) -> str:
        quantum = Decimal(1).scaleb(-self.decimals)
        rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
        if rounded.is_zero():
            rounded = abs(rounded)
        text = f"{rounded:,.{self.decimals}f}"
        if self.thousands_separator == ".":
            return text.translate(_SWAP_MARKS)
        return text.replace(",", self.thousands_separator)

    def render(self, table: Table, stream: TextIO) -> int:
        """Write the table; return the number of characters written."""
        widths = self._column_widths(table)
        n = 0
        for row in table.rows:
            if row.kind == RowKind.SEPARATOR:
                line = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
            else:
                cells = list(row.cells) + [EmptyCell()] * (len(widths) - len(row.cells))
                line = "| " + " | ".join(
                    self._layout(cell, w) for cell, w in zip(cells, widths)
                ) + " |"
            n += stream.write(line + "\n")
        return n

    def _column_widths(self, table: Table) -> list[int]:
        widths = [0] * table.width
        for row in table.rows:
            for i, cell in enumerate(row.cells):
                if i >= len(widths):
                    widths.append(0)
                widths[i] = max(widths[i], len(self._text(cell)))
        return widths

    def _text(self, cell: Cell) -> str:
        match cell:
            case TextCell():
                return " " * cell.indent + cell.text
            case NumberCell():
                return self.format_number(cell.value)
        return ""

    def _layout(self, cell: Cell, width: int) -> str:
        text = self._text(cell)
        match cell:
            case TextCell(alignment=Alignment.CENTER):
                return text.center(width)
            case TextCell(alignment=Alignment.RIGHT) | NumberCell():
                return text.rjust(width)
        return text.ljust(width)
