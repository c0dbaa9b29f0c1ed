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

from typing import Union

from ...data_model.coverage import ParserResult
from ...formats.base import BaseHandler
from ...options import DotcovrConfigOption, OutputOrDefault


class JsonHandler(BaseHandler):
    """Class to handle the JSON dump of the coverage model."""

    @classmethod
    def get_options(cls) -> list[Union[DotcovrConfigOption, str]]:
        return [
            DotcovrConfigOption(
                "json",
                ["--json"],
                group="output_options",
                metavar="OUTPUT",
                help="Generate a JSON dump of the coverage model. OUTPUT is optional and defaults to --output.",
                nargs="?",
                type=OutputOrDefault,
                default=None,
                const=OutputOrDefault(None),
            ),
            DotcovrConfigOption(
                "json_pretty",
                ["--json-pretty"],
                group="output_options",
                help="Pretty-print the JSON dump. Implies --json.",
                action="store_true",
            ),
        ]

    def write_report(self, result: ParserResult, output_file: str) -> None:
        from .write import write_report  # pylint: disable=import-outside-toplevel # Lazy loading is intended here

        write_report(result, output_file, self.options)
