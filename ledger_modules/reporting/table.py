"""
Table -- generic row/cell grid filled by report renderers.

Rows are separators, headers, data rows or blank rows.  Cells carry
aligned text (optionally indented), a Decimal number, or nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class RowKind(str, Enum):
    SEPARATOR = "separator"
    HEADER = "header"
    DATA = "data"
    EMPTY = "empty"


@dataclass(frozen=True)
class TextCell:
    text: str
    alignment: Alignment = Alignment.LEFT
    indent: int = 0


@dataclass(frozen=True)
class NumberCell:
    value: Decimal


@dataclass(frozen=True)
class EmptyCell:
    pass


Cell = TextCell | NumberCell | EmptyCell


@dataclass
class Row:
    """One table row. The ``add_*`` methods append a cell and return the row."""

    kind: RowKind = RowKind.DATA
    cells: list[Cell] = field(default_factory=list)

    def add_text(self, text: str, alignment: Alignment = Alignment.LEFT) -> Row:
        self.cells.append(TextCell(text, alignment))
        return self

    def add_indented(self, text: str, indent: int) -> Row:
        self.cells.append(TextCell(text, Alignment.LEFT, indent))
        return self

    def add_number(self, value: Decimal) -> Row:
        self.cells.append(NumberCell(value))
        return self

    def add_empty(self) -> Row:
        self.cells.append(EmptyCell())
        return self


class Table:
    """
    Grid with ``label_columns`` leading text columns and ``value_columns``
    numeric columns.
    """

    def __init__(self, label_columns: int, value_columns: int):
        if label_columns < 0 or value_columns < 0:
            raise ValueError("column counts must not be negative")
        self.label_columns = label_columns
        self.value_columns = value_columns
        self.rows: list[Row] = []

    @property
    def width(self) -> int:
        return self.label_columns + self.value_columns

    def add_row(self) -> Row:
        row = Row(RowKind.DATA)
        self.rows.append(row)
        return row

    def add_header_row(self) -> Row:
        row = Row(RowKind.HEADER)
        self.rows.append(row)
        return row

    def add_separator_row(self) -> None:
        self.rows.append(Row(RowKind.SEPARATOR))

    def add_empty_row(self) -> None:
        self.rows.append(Row(RowKind.EMPTY))

    def __len__(self) -> int:
        return len(self.rows)
