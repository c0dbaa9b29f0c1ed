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


"""The format handlers and the dispatch of reading and writing to them."""

import logging
from typing import Callable

from ..data_model.coverage import ParserResult
from ..options import DotcovrConfigOption, Options, OutputOrDefault

from .base import BaseHandler
from .dotcover import DotCoverHandler
from .json import JsonHandler

LOGGER = logging.getLogger("dotcovr")

HANDLERS: list[type[BaseHandler]] = [DotCoverHandler, JsonHandler]


def get_options() -> list[DotcovrConfigOption]:
    """Get the options declared by the handlers."""
    options = list[DotcovrConfigOption]()
    for handler in HANDLERS:
        options.extend(
            o for o in handler.get_options() if isinstance(o, DotcovrConfigOption)
        )
    return options


def validate_options(options: Options) -> None:
    for handler in HANDLERS:
        handler(options).validate_options()


def read_reports(options: Options) -> ParserResult:
    """Read the dotCover report given on the command line."""
    return DotCoverHandler(options).read_report()


def _requested_writers(
    options: Options,
) -> list[tuple[OutputOrDefault, Callable[[ParserResult, str], None]]]:
    default_output = options.output or OutputOrDefault(None)
    writers = []
    if options.json or options.json_pretty:
        output = OutputOrDefault.choose([options.json], default=default_output)
        if output is not None:
            writers.append((output, JsonHandler(options).write_report))
    return writers


def write_reports(result: ParserResult, options: Options) -> None:
    """Write all requested outputs, errors are collected and raised at the end."""
    writers = _requested_writers(options)
    if not writers:
        number_of_classes = sum(len(a.classes) for a in result.assemblies)
        LOGGER.info(
            f"Read {len(result.assemblies)} assemblies with {number_of_classes} classes. "
            "Use --json to write the coverage model."
        )
        return

    errors = []
    for output, write in writers:
        try:
            write(result, output.abspath)
        except (OSError, RuntimeError) as e:
            errors.append(str(e))

    if errors:
        raise RuntimeError(
            "Not all output files were written successfully:\n" + "\n".join(errors)
        )
