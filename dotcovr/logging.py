# -*- coding:utf-8 -*-

#  ************************** Copyrights and license ***************************
#
# This file is part of dotcovr 1.0, a parsing tool for dotCover coverage reports.
#
# _____________________________________________________________________________
#
# Copyright (c) 2024-2025 the dotcovr authors
#
# This software is distributed under the 3-clause BSD License.
# For more information, see the README.rst file.
#
# ****************************************************************************


import logging
import os
import sys
from typing import Any, Optional
from colorlog import ColoredFormatter

from .options import Options

LOGGER = logging.getLogger("dotcovr")
DEFAULT_LOGGING_HANDLER = logging.StreamHandler(sys.stderr)

LOG_FORMAT = "(%(levelname)s) %(message)s"
LOG_FORMAT_THREADS = "(%(levelname)s) - %(threadName)s - %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "blue",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}

# Warnings and errors are repeated with these prefixes
# to get annotations in the CI systems.
CI_LOGGING_PREFIXES = {
    "TF_BUILD": {
        logging.WARNING: "##vso[task.logissue type=warning]",
        logging.ERROR: "##vso[task.logissue type=error]",
    },
    "GITHUB_ACTIONS": {
        logging.WARNING: "::warning::",
        logging.ERROR: "::error::",
    },
}


class CiFormatter(logging.Formatter):
    """Format warnings and errors as annotations for a CI system."""

    def __init__(self, prefixes: dict[int, str]) -> None:
        super().__init__(fmt=LOG_FORMAT)
        self.prefixes = prefixes

    def format(self, record: logging.LogRecord) -> str:
        prefix = self.prefixes.get(record.levelno)
        return "" if prefix is None else f"{prefix}{super().format(record)}"


class CiFilter(logging.Filter):
    """Only pass the records which get an annotation."""

    def __init__(self, prefixes: dict[int, str]) -> None:
        super().__init__()
        self.prefixes = prefixes

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno in self.prefixes


def _colored_formatter(options: Optional[Options] = None) -> ColoredFormatter:
    """Get the formatter for the console, the options select the format and the colors."""
    threads = False
    force_color = "FORCE_COLOR" in os.environ
    no_color = "NO_COLOR" in os.environ
    if options is not None:
        threads = (options.parallel or 1) > 1
        force_color = force_color or bool(options.force_color)
        no_color = no_color or bool(options.no_color)

    return ColoredFormatter(
        f"%(log_color)s{LOG_FORMAT_THREADS if threads else LOG_FORMAT}",
        reset=True,
        log_colors=LOG_COLORS,
        style="%",
        force_color=force_color,
        no_color=no_color and not force_color,
        stream=sys.stderr,
    )


def configure_logging() -> None:
    """Log to stderr, add the CI annotations and log uncaught exceptions."""
    DEFAULT_LOGGING_HANDLER.setFormatter(_colored_formatter())
    logging.basicConfig(level=logging.INFO, handlers=[DEFAULT_LOGGING_HANDLER])

    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h.formatter, CiFormatter)]:
        root.removeHandler(handler)
    for env_variable, prefixes in CI_LOGGING_PREFIXES.items():
        if env_variable in os.environ:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(CiFormatter(prefixes))
            handler.addFilter(CiFilter(prefixes))
            root.addHandler(handler)
            break

    def exception_hook(exc_type: Any, exc_value: Any, exc_traceback: Any) -> None:
        logging.exception(
            "Uncaught EXCEPTION", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = exception_hook


def update_logging(options: Options) -> None:
    """Apply --verbose and the color options."""
    LOGGER.setLevel(logging.DEBUG if options.verbose else logging.INFO)
    DEFAULT_LOGGING_HANDLER.setFormatter(_colored_formatter(options))
