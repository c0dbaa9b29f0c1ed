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


"""The command line interface of dotcovr."""

from argparse import ArgumentError, ArgumentParser, Namespace
import logging
import os
import sys
import traceback
from typing import Any, Optional

from .configuration import (
    argument_parser_setup,
    config_entries_from_dict,
    merge_options_and_set_defaults,
    parse_config_file,
    parse_config_into_dict,
)
from .exceptions import DotcovrError
from .logging import configure_logging, update_logging
from .version import __version__
from . import formats as dotcovr_formats

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

LOGGER = logging.getLogger("dotcovr")

EXIT_SUCCESS = 0
EXIT_CMDLINE_ERROR = 1
EXIT_READ_ERROR = 64
EXIT_WRITE_ERROR = 128

COPYRIGHT = "Copyright (c) 2024-2025 the dotcovr authors\n"

# Searched in the current directory if --config isn't given,
# the first existing file is used.
DEFAULT_CONFIG_FILES = ["dotcovr.cfg", "dotcovr.toml", "pyproject.toml"]


def create_argument_parser() -> ArgumentParser:
    """Create the argument parser."""
    parser = ArgumentParser(
        usage="dotcovr [options] REPORT",
        description=(
            "Read a dotCover XML coverage report into a model of assemblies, "
            "classes, files, covered lines and methods."
        ),
        add_help=False,
        exit_on_error=False,
    )

    options = parser.add_argument_group("Options")
    options.add_argument(
        "-h", "--help", help="Show this help message, then exit.", action="help"
    )
    options.add_argument(
        "--version",
        help="Print the version number, then exit.",
        action="store_true",
        dest="version",
        default=False,
    )
    argument_parser_setup(parser, options)

    return parser


def read_config_file(filename: str) -> Optional[dict[str, Any]]:
    """Read the options of a configuration file.

    None is returned for a pyproject.toml without a [tool.dotcovr] table.
    """
    if not filename.endswith(".toml"):
        with open(filename, encoding="UTF-8") as fh_in:
            return parse_config_into_dict(parse_config_file(fh_in, filename))

    with open(filename, "rb") as fh_in:
        data = tomllib.load(fh_in)
    if os.path.basename(filename) == "pyproject.toml":
        data = data.get("tool", {}).get("dotcovr")
        if data is None:
            return None
    return parse_config_into_dict(config_entries_from_dict(data, filename))


def load_config(cli_options: Namespace) -> dict[str, Any]:
    """Load the file given by --config or the first default configuration file."""
    filename = getattr(cli_options, "config", None)
    if filename is not None:
        return read_config_file(filename) or {}

    for filename in DEFAULT_CONFIG_FILES:
        if os.path.isfile(filename):
            config = read_config_file(filename)
            if config is not None:
                LOGGER.debug(f"Using configuration file {filename}.")
                return config

    return {}


def main(args: Optional[list[str]] = None) -> int:
    """Run dotcovr and get the exit code."""
    configure_logging()
    parser = create_argument_parser()
    try:
        cli_options = parser.parse_args(args=args)
    except SystemExit as e:
        # --help exits the parser
        if e.code != 0:
            raise AssertionError("Sanity check failed, exitcode must be 0.") from e
        return EXIT_SUCCESS
    except ArgumentError as e:
        sys.stderr.write(f"dotcovr: error: {e}\n")
        return EXIT_CMDLINE_ERROR

    if cli_options.version:
        sys.stdout.write(f"dotcovr {__version__}\n\n{COPYRIGHT}")
        return EXIT_SUCCESS

    try:
        config_options = load_config(cli_options)
    except (OSError, SyntaxError, ValueError, tomllib.TOMLDecodeError) as e:
        LOGGER.error(f"Error while loading the configuration: {e}")
        return EXIT_CMDLINE_ERROR
    options = merge_options_and_set_defaults([config_options, vars(cli_options)])
    update_logging(options)

    try:
        dotcovr_formats.validate_options(options)
    except RuntimeError as e:
        LOGGER.error(str(e))
        return EXIT_CMDLINE_ERROR

    LOGGER.info("Reading coverage data...")
    try:
        result = dotcovr_formats.read_reports(options)
    except DotcovrError as e:
        LOGGER.error(f"Error occurred while reading report: {e}")
        return EXIT_READ_ERROR
    except Exception:  # pylint: disable=broad-exception-caught
        LOGGER.error(f"Error occurred while reading report:\n{traceback.format_exc()}")
        return EXIT_READ_ERROR

    LOGGER.info("Writing coverage report...")
    try:
        dotcovr_formats.write_reports(result, options)
    except Exception:  # pylint: disable=broad-exception-caught
        LOGGER.error(f"Error occurred while writing reports:\n{traceback.format_exc()}")
        return EXIT_WRITE_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
