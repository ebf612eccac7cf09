"""
Typed Exception Hierarchy for the Ledger Kernel.

Every error has a typed class, a machine-readable ``code`` class attribute
and structured attributes, so callers catch by type and never parse
messages.

    LedgerKernelError (base)
    |
    +-- BuildError
    |   +-- UnknownDirectiveError
    |   +-- AccrualExpansionError
    |
    +-- ConfigurationError

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Build           | UNKNOWN_DIRECTIVE           | Stream value is not a known directive
                | ACCRUAL_EXPANSION_FAILED    | Accrual template cannot be expanded
----------------|-----------------------------|-----------------------------------------
Configuration   | CONFIGURATION_ERROR         | Unknown key or invalid value in config

Errors carried inside a directive stream are not wrapped: ``build()``
re-raises the exact instance it received.
"""

from typing import Any


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"


# Build-related exceptions


class BuildError(LedgerKernelError):
    """Base exception for errors that abort a ledger build."""

    code: str = "BUILD_ERROR"


class UnknownDirectiveError(BuildError):
    """A stream value is none of the known directive kinds."""

    code: str = "UNKNOWN_DIRECTIVE"

    def __init__(self, value: Any):
        self.value = value
        self.value_type = type(value).__name__
        super().__init__(f"Unknown directive: {value!r}")


class AccrualExpansionError(BuildError):
    """An accrual template could not be expanded into transactions."""

    code: str = "ACCRUAL_EXPANSION_FAILED"

    def __init__(self, accrual: Any, reason: str):
        self.accrual = accrual
        self.reason = reason
        super().__init__(f"Cannot expand accrual: {reason}")


# Configuration exceptions


class ConfigurationError(LedgerKernelError):
    """Configuration contains an unknown key or an invalid value."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration '{key}': {reason}")
