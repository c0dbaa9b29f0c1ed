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

from ..data_model.coverage import ParserResult
from ..options import DotcovrConfigOption, Options

# Options every handler can see in addition to its own ones.
COMMON_OPTIONS = ("output",)


class BaseHandler:
    """
    A report format.

    A handler declares its options and gets a copy of the parsed options
    which only contains these. Reading and writing is done by
    ``read_report`` and ``write_report``, a subclass implements the ones
    which are supported by the format.
    """

    @classmethod
    def get_options(cls) -> list[Union[DotcovrConfigOption, str]]:
        """The options of the handler, a str refers to an option of another handler."""
        raise AssertionError(f"{cls.__name__} does not declare its options.")

    def __init__(self, options: Options) -> None:
        names = list(COMMON_OPTIONS)
        names.extend(
            o if isinstance(o, str) else o.name for o in type(self).get_options()
        )
        self.options = Options(**{name: options.get(name) for name in names})

    def validate_options(self) -> None:
        """Check the options, raise a RuntimeError with a message for the user."""

    def read_report(self) -> ParserResult:
        raise AssertionError(f"{type(self).__name__} can't read reports.")

    def write_report(self, result: ParserResult, output_file: str) -> None:
        raise AssertionError(f"{type(self).__name__} can't write reports.")
