"""
Logging configuration for Europass CV.

Provides centralized logging setup with support for:
- CLI verbosity flags (--quiet, --verbose, --debug)
- Console and optional file logging
"""

import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    format_str: Optional[str] = None,
) -> None:
    """
    Configure logging for the Europass CV application.

    Should be called once early in the CLI entrypoint. Subsequent calls
    reconfigure the root logger.

    Args:
        level: The logging level (e.g., logging.DEBUG, logging.INFO).
        log_file: Optional path to a log file. Directory will be created if missing.
        format_str: Optional custom format string. If None, uses level-appropriate default.
    """
    if format_str is None:
        format_str = DEBUG_FORMAT if level <= logging.DEBUG else DEFAULT_FORMAT

    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_str))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
            root_logger.addHandler(file_handler)
        except OSError as e:
            logging.getLogger(__name__).debug(
                f"Could not set up file logging to {log_file}: {e}"
            )

    logging.getLogger("europass_cv").setLevel(level)


def get_log_level_from_flags(
    quiet: bool = False,
    verbose: bool = False,
    debug: bool = False,
) -> int:
    """
    Determine the appropriate log level from CLI flags.

    Flag precedence (highest to lowest):
    1. --debug: DEBUG level
    2. --quiet: ERROR level only (overrides --verbose)
    3. --verbose: INFO level
    4. default: WARNING level
    """
    if debug:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.INFO
    return logging.WARNING


def get_log_level_from_name(name: str, default: int = logging.WARNING) -> int:
    """Map a level name from the settings file (e.g. "info") to a logging constant."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    default_level: int = logging.WARNING,
) -> None:
    """
    Configure logging based on CLI verbosity flags.

    When no flag is given, ``default_level`` (usually taken from the
    settings file) is used instead of WARNING.
    """
    if debug or quiet or verbose:
        level = get_log_level_from_flags(quiet=quiet, verbose=verbose, debug=debug)
    else:
        level = default_level
    configure_logging(level=level, log_file=log_file)
