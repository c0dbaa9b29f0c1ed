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

from abc import ABC, abstractmethod
import logging
import re
from typing import Iterable, Type

from .utils import force_unix_separator

LOGGER = logging.getLogger("dotcovr")


class Filter(ABC):
    """Base class for a filter deciding if an element is part of the report."""

    @abstractmethod
    def is_element_included(self, name: str) -> bool:
        """Return True if the element with the given name is included in the report."""


class AlwaysMatchFilter(Filter):
    """Class for a filter which includes all elements."""

    def is_element_included(self, name: str) -> bool:
        """Return always True."""
        return True

    def __str__(self) -> str:
        return "AlwaysMatchFilter()"


class RegexFilter(Filter):
    """Class for a filter built from include and exclude regular expressions.

    An element is included if any of the include patterns matches
    (or there are none) and none of the exclude patterns matches.
    The patterns are matched from the start of the name.
    """

    def __init__(
        self,
        include_patterns: Iterable[str],
        exclude_patterns: Iterable[str] = (),
    ) -> None:
        self.include = [re.compile(p) for p in include_patterns]
        self.exclude = [re.compile(p) for p in exclude_patterns]

    def _normalize(self, name: str) -> str:
        return name

    def is_element_included(self, name: str) -> bool:
        """Apply the inclusion/exclusion patterns to the name."""
        name = self._normalize(name)
        LOGGER.debug(f"Check if {name} is included...")
        if self.include and not any(p.match(name) for p in self.include):
            LOGGER.debug("  No include filter matched.")
            return False

        for pattern in self.exclude:
            if pattern.match(name):
                LOGGER.debug(f"  Exclude filter {pattern.pattern} matched.")
                return False

        return True

    def __str__(self) -> str:
        include = ", ".join(p.pattern for p in self.include)
        exclude = ", ".join(p.pattern for p in self.exclude)
        return f"{type(self).__name__}(include=[{include}], exclude=[{exclude}])"


class PathFilter(RegexFilter):
    """Class for a filter on file paths, always matched with / as separator."""

    def _normalize(self, name: str) -> str:
        return force_unix_separator(name)


def build_filter(
    include_patterns: list[str],
    exclude_patterns: list[str],
    filter_class: Type[RegexFilter] = RegexFilter,
) -> Filter:
    """Return the filter for the given patterns, all elements are included if there are none."""
    if not include_patterns and not exclude_patterns:
        return AlwaysMatchFilter()
    return filter_class(include_patterns, exclude_patterns)
