"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Loads a YAML file and parses it into the typed ``ledger_config.schema``
dataclasses.

Invariants enforced
-------------------
* Unknown keys are rejected, never ignored.
* Regular expressions are compiled at load time, so an invalid pattern
  fails here and not halfway through a build.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown key, wrong type or invalid pattern -> ``ConfigurationError``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import FilterConfig, LedgerConfig, ReportConfig
from ledger_kernel.exceptions import ConfigurationError
from ledger_kernel.logging_config import LogContext, get_logger

logger = get_logger("config.loader")

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"

_TOP_LEVEL_KEYS = frozenset({"filter", "report"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("<root>", f"expected a mapping, got {type(data).__name__}")
    return data


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(name, f"expected a mapping, got {type(section).__name__}")
    return section


def _check_keys(section: dict[str, Any], allowed: frozenset[str], prefix: str) -> None:
    for key in section:
        if key not in allowed:
            raise ConfigurationError(f"{prefix}{key}", "unknown key")


def _pattern(section: dict[str, Any], key: str) -> str | None:
    value = section.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"filter.{key}", "expected a string")
    try:
        re.compile(value)
    except re.error as e:
        raise ConfigurationError(f"filter.{key}", f"invalid regular expression: {e}") from e
    return value


def _bool(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"report.{key}", "expected a boolean")
    return value


def parse_filter(data: dict[str, Any]) -> FilterConfig:
    """Parse a FilterConfig from the ``filter`` section."""
    _check_keys(data, frozenset({"accounts", "commodities"}), "filter.")
    return FilterConfig(
        accounts=_pattern(data, "accounts"),
        commodities=_pattern(data, "commodities"),
    )


def parse_report(data: dict[str, Any]) -> ReportConfig:
    """Parse a ReportConfig from the ``report`` section."""
    _check_keys(
        data,
        frozenset({"commodities", "diff", "decimals", "thousands_separator"}),
        "report.",
    )
    decimals = data.get("decimals", 2)
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise ConfigurationError("report.decimals", "expected a non-negative integer")
    separator = data.get("thousands_separator", ",")
    if separator is None:
        separator = ""
    if not isinstance(separator, str):
        raise ConfigurationError("report.thousands_separator", "expected a string")
    return ReportConfig(
        commodities=_bool(data, "commodities", False),
        diff=_bool(data, "diff", False),
        decimals=decimals,
        thousands_separator=separator,
    )


def parse_config(data: dict[str, Any]) -> LedgerConfig:
    """
    Parse a LedgerConfig from a dict.

    Raises:
        ConfigurationError: on unknown keys or invalid values.
    """
    _check_keys(data, _TOP_LEVEL_KEYS, "")
    return LedgerConfig(
        filter=parse_filter(_section(data, "filter")),
        report=parse_report(_section(data, "report")),
    )


def load_config(path: Path | str | None = None) -> LedgerConfig:
    """Load a configuration file; the packaged defaults when ``path`` is None."""
    source = Path(path) if path is not None else DEFAULTS_PATH
    with LogContext.bind(source=str(source)):
        config = parse_config(load_yaml_file(source))
        logger.info(
            "config_loaded",
            extra={
                "accounts_filter": config.filter.accounts,
                "commodities_filter": config.filter.commodities,
                "show_commodities": config.report.commodities,
                "diff": config.report.diff,
            },
        )
    return config
