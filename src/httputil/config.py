"""
=============================================================================
CONFIGURATION
=============================================================================

Settings used by the command-line front end. The library functions
themselves take everything as arguments and never read configuration.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── httputil --log-level DEBUG query URL --collapse id        │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTPUTIL_COLLAPSED_PARAMS=id,page httputil query URL      │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _split_names(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated list of parameter names, dropping blanks."""
    if not raw:
        return ()
    return tuple(name.strip() for name in raw.split(",") if name.strip())


@dataclass
class UtilConfig:
    """
    Configuration for the httputil command line.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    QUERY PARSING
    - collapsed_params, expected_array_params

    OUTPUT
    - indent

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # QUERY PARSING
    # ─────────────────────────────────────────────────────────────────────

    collapsed_params: Tuple[str, ...] = ()
    """
    Names stored as single values by get_query_params when the command
    line does not list any with --collapse.
    """

    expected_array_params: Tuple[str, ...] = ()
    """
    Names allowed to repeat under get_query_params_collapsed when the
    command line does not list any with --array.
    """

    # ─────────────────────────────────────────────────────────────────────
    # OUTPUT
    # ─────────────────────────────────────────────────────────────────────

    indent: Optional[int] = 2
    """
    JSON indentation of printed results. None prints a single line.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "WARNING"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    DEBUG shows every parse; WARNING only rejected input.
    """

    @classmethod
    def from_env(cls) -> "UtilConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTPUTIL_LOG_LEVEL              Logging level (default: WARNING)
        HTTPUTIL_COLLAPSED_PARAMS       Comma-separated names (default: none)
        HTTPUTIL_EXPECTED_ARRAY_PARAMS  Comma-separated names (default: none)
        HTTPUTIL_INDENT                 JSON indent, "none" for one line
                                        (default: 2)

        =====================================================================
        """
        raw_indent = os.getenv("HTTPUTIL_INDENT", "2")
        indent = None if raw_indent.lower() == "none" else int(raw_indent)

        return cls(
            collapsed_params=_split_names(os.getenv("HTTPUTIL_COLLAPSED_PARAMS")),
            expected_array_params=_split_names(os.getenv("HTTPUTIL_EXPECTED_ARRAY_PARAMS")),
            indent=indent,
            log_level=os.getenv("HTTPUTIL_LOG_LEVEL", "WARNING"),
        )

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.WARNING)

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On an unknown log level or a negative indent.
        """
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {', '.join(LOG_LEVELS)}."
            )

        if self.indent is not None and self.indent < 0:
            raise ValueError("indent must be >= 0")
