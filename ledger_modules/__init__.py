"""
Ledger modules.

Feature modules built on top of ``ledger_kernel``.  Modules may import
from the kernel; the kernel never imports from modules.
"""
