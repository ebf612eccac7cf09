"""
Ledger Kernel

A plain-text accounting core with:
- Date-bucketed ledger aggregation of parsed directives
- Account and commodity filtering
- Accrual expansion into dated transactions
- Canonical directive serialization
"""

__version__ = "0.1.0"
