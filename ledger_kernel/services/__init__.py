"""
Kernel services.

- ``ledger_builder``: directive stream -> filtered, date-sorted Ledger.
- ``printer``: directives and ledgers -> canonical text.
"""

from ledger_kernel.services.ledger_builder import Builder, build
from ledger_kernel.services.printer import Printer

__all__ = ["Builder", "Printer", "build"]
