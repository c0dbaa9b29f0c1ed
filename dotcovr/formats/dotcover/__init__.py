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
from ...options import (
    DotcovrConfigOption,
    FilterOption,
    NonEmptyFilterOption,
    PathFilterOption,
    check_input_file,
    check_positive_int,
)


class DotCoverHandler(BaseHandler):
    """Class to handle the dotCover XML format."""

    @classmethod
    def get_options(cls) -> list[Union[DotcovrConfigOption, str]]:
        return [
            # Global options used for output
            "verbose",
            # Local options
            DotcovrConfigOption(
                "report",
                positional=True,
                nargs="*",
                config="report",
                help="The dotCover XML report to read.",
                type=check_input_file,
            ),
            DotcovrConfigOption(
                "parallel",
                ["-j", "--parallel"],
                help=(
                    "Set the number of threads used to process "
                    "the classes of an assembly. Defaults to {default!s}."
                ),
                type=check_positive_int,
                default=1,
            ),
            DotcovrConfigOption(
                "assembly_filter",
                ["--assembly-filter"],
                group="filter_options",
                help=(
                    "Keep only assemblies whose name matches this filter. "
                    "Can be specified multiple times."
                ),
                action="append",
                type=FilterOption,
                default=[],
            ),
            DotcovrConfigOption(
                "assembly_exclude",
                ["--assembly-exclude"],
                group="filter_options",
                help=(
                    "Exclude assemblies whose name matches this filter. "
                    "Can be specified multiple times."
                ),
                action="append",
                type=NonEmptyFilterOption,
                default=[],
            ),
            DotcovrConfigOption(
                "class_filter",
                ["--class-filter"],
                group="filter_options",
                help=(
                    "Keep only classes whose full qualified name matches this filter. "
                    "Can be specified multiple times."
                ),
                action="append",
                type=FilterOption,
                default=[],
            ),
            DotcovrConfigOption(
                "class_exclude",
                ["--class-exclude"],
                group="filter_options",
                help=(
                    "Exclude classes whose full qualified name matches this filter. "
                    "Can be specified multiple times."
                ),
                action="append",
                type=NonEmptyFilterOption,
                default=[],
            ),
            DotcovrConfigOption(
                "file_filter",
                ["--file-filter"],
                group="filter_options",
                help=(
                    "Keep only source files whose path matches this filter. "
                    "Can be specified multiple times. "
                    "A class is removed if none of its files is kept."
                ),
                action="append",
                type=PathFilterOption,
                default=[],
            ),
            DotcovrConfigOption(
                "file_exclude",
                ["--file-exclude"],
                group="filter_options",
                help=(
                    "Exclude source files whose path matches this filter. "
                    "Can be specified multiple times."
                ),
                action="append",
                type=PathFilterOption,
                default=[],
            ),
        ]

    def validate_options(self) -> None:
        # The command line gives a list, a config file a single value
        if isinstance(self.options.report, str):
            self.options.report = [self.options.report]
        if not self.options.report:
            raise RuntimeError("A dotCover report is needed, see --help.")
        if len(self.options.report) > 1:
            raise RuntimeError(
                f"Only one dotCover report can be read, got {len(self.options.report)}."
            )

    def read_report(self) -> ParserResult:
        from .read import read_report  # pylint: disable=import-outside-toplevel # Lazy loading is intended here

        return read_report(self.options)
