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
from lxml import etree  # nosec # We only parse the file given by the user

from ...data_model.coverage import ParserResult
from ...exceptions import MalformedReportError, UnreadableReportError
from ...filter import PathFilter, RegexFilter, build_filter
from ...options import Options
from .parser import DotCoverParser

LOGGER = logging.getLogger("dotcovr")


def _patterns(filter_options: list) -> list[str]:
    return [f.regex for f in filter_options]


def get_parser(options: Options) -> DotCoverParser:
    """Create the parser with the filters of the options."""
    parser = DotCoverParser(
        assembly_filter=build_filter(
            _patterns(options.assembly_filter),
            _patterns(options.assembly_exclude),
            RegexFilter,
        ),
        class_filter=build_filter(
            _patterns(options.class_filter),
            _patterns(options.class_exclude),
            RegexFilter,
        ),
        file_filter=build_filter(
            _patterns(options.file_filter),
            _patterns(options.file_exclude),
            PathFilter,
        ),
        parallel=options.parallel,
    )
    for name, filter_ in [
        ("assembly", parser.assembly_filter),
        ("class", parser.class_filter),
        ("file", parser.file_filter),
    ]:
        LOGGER.debug(f"Filter for {name} names: {filter_}")

    return parser


def read_report(options: Options) -> ParserResult:
    """Read a dotCover XML report and build the coverage model."""
    filename = options.report
    if not isinstance(filename, str):
        (filename,) = filename
    LOGGER.debug(f"Processing XML file: {filename}")

    try:
        root = etree.parse(filename).getroot()  # nosec
    except etree.XMLSyntaxError as e:
        raise MalformedReportError(
            f"Can't read dotCover report {filename}: {e}"
        ) from None
    except OSError as e:
        raise UnreadableReportError(
            f"Can't open dotCover report {filename}: {e}"
        ) from None

    return get_parser(options).parse(root)
