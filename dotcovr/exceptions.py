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

"""Exceptions used in dotcovr."""

from typing import Optional


class DotcovrError(Exception):
    """Base class for all errors raised while reading a report."""


class InvalidInputError(DotcovrError, ValueError):
    """Raised when no report is given to the parser."""


class MalformedReportError(DotcovrError):
    """Raised when the report misses data needed to build the coverage model.

    The message is extended with the location of the offending element.
    """

    def __init__(
        self,
        msg: str,
        *,
        assembly: Optional[str] = None,
        class_name: Optional[str] = None,
        sourceline: Optional[int] = None,
    ) -> None:
        location = []
        if assembly is not None:
            location.append(f"assembly {assembly!r}")
        if class_name is not None:
            location.append(f"class {class_name!r}")
        if sourceline is not None:
            location.append(f"line {sourceline} of the report")
        if location:
            msg = f"{msg} ({', '.join(location)})"
        super().__init__(msg)
        self.assembly = assembly
        self.class_name = class_name
        self.sourceline = sourceline


class UnreadableReportError(DotcovrError):
    """Raised when the report file can't be opened or read."""
