"""
Reporting Module (``ledger_modules.reporting``).

Responsibility
--------------
Read-only module that turns a built ``Ledger`` into a multi-date,
multi-commodity balance ``Report`` over the account hierarchy and lays it
out as a table:

    Ledger --ReportBuilder--> Report --TableRenderer--> Table --TextRenderer--> text

Architecture position
---------------------
**Modules layer** -- pure in-memory transforms.  The only I/O is the
text stream handed to ``TextRenderer.render``.
"""

from ledger_modules.reporting.builder import ReportBuilder
from ledger_modules.reporting.models import Positions, Report, Segment
from ledger_modules.reporting.table import (
    Alignment,
    EmptyCell,
    NumberCell,
    Row,
    RowKind,
    Table,
    TextCell,
)
from ledger_modules.reporting.table_renderer import RenderContext, TableRenderer
from ledger_modules.reporting.text_renderer import TextRenderer

__all__ = [
    "Alignment",
    "EmptyCell",
    "NumberCell",
    "Positions",
    "RenderContext",
    "Report",
    "ReportBuilder",
    "Row",
    "RowKind",
    "Segment",
    "Table",
    "TableRenderer",
    "TextCell",
    "TextRenderer",
]
