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

from ...data_model import version
from ...data_model.coverage import ParserResult
from ...options import Options
from ...utils import write_json_output


def write_report(result: ParserResult, output_file: str, options: Options) -> None:
    """Produce a JSON dump of the coverage model."""
    write_json_output(
        {
            "dotcovr/format_version": version.FORMAT_VERSION,
            **result.serialize(),
        },
        pretty=options.json_pretty,
        filename=output_file,
        default_filename="coverage.json",
    )
