"""
Pytest fixtures for the ledger kernel test suite.

Everything here is pure and in-memory: no database, no files other than
pytest's ``tmp_path``.
"""

import pytest

from ledger_kernel.domain import Filter
from ledger_kernel.logging_config import LogContext, reset_logging
from tests.factories import posting, txn


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def match_all() -> Filter:
    return Filter()


@pytest.fixture
def salary_transaction():
    """Salary paid into the bank account, partly in CHF."""
    return txn(
        "2024-01-25",
        posting("Income:Salary", "Assets:Bank", "5000"),
        posting("Income:Salary", "Assets:Bank", "200", commodity="CHF"),
        description="Salary January",
    )
