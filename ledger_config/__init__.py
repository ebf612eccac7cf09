"""
ledger_config -- YAML configuration for ledger builds and reports.

``load_config()`` is the entry point: it reads a YAML file (or the
packaged ``defaults.yaml``) and returns a frozen ``LedgerConfig``.
``LedgerConfig.build_filter()`` turns its filter section into the
``Filter`` consumed by the ledger builder.
"""

from ledger_config.loader import load_config, parse_config
from ledger_config.schema import FilterConfig, LedgerConfig, ReportConfig

__all__ = [
    "FilterConfig",
    "LedgerConfig",
    "ReportConfig",
    "load_config",
    "parse_config",
]
