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

from argparse import ArgumentTypeError
import logging

import pytest

from dotcovr.filter import (
    AlwaysMatchFilter,
    PathFilter,
    RegexFilter,
    build_filter,
)
from dotcovr.options import FilterOption, NonEmptyFilterOption, PathFilterOption


def test_always_match_filter() -> None:
    assert AlwaysMatchFilter().is_element_included("")
    assert AlwaysMatchFilter().is_element_included("Anything.At.All")


def test_regex_filter_include() -> None:
    regex_filter = RegexFilter([r"Calculator\.Core\.", r"Calculator\.Program$"])
    assert regex_filter.is_element_included("Calculator.Core.Adder")
    assert regex_filter.is_element_included("Calculator.Program")
    assert not regex_filter.is_element_included("Calculator.Programs")
    assert not regex_filter.is_element_included("Calculator.Tests.AdderTests")


def test_regex_filter_exclude() -> None:
    regex_filter = RegexFilter([r"Calculator\."], [r".*Tests"])
    assert regex_filter.is_element_included("Calculator.Core.Adder")
    assert not regex_filter.is_element_included("Calculator.Tests.AdderTests")
    assert not regex_filter.is_element_included("Other.Adder")


def test_regex_filter_only_exclude() -> None:
    regex_filter = RegexFilter([], [r"Generated\."])
    assert regex_filter.is_element_included("Calculator.Adder")
    assert not regex_filter.is_element_included("Generated.Resources")


def test_regex_filter_matches_from_start() -> None:
    regex_filter = RegexFilter([r"Core"])
    assert regex_filter.is_element_included("Core.Adder")
    assert not regex_filter.is_element_included("Calculator.Core.Adder")


def test_regex_filter_is_case_sensitive() -> None:
    assert not RegexFilter([r"calculator"]).is_element_included("Calculator")
    assert RegexFilter([r"Calculator"]).is_element_included("Calculator")


def test_path_filter_normalizes_separator() -> None:
    path_filter = PathFilter([r"C:/src/"], [r".*\.g\.cs$"])
    assert path_filter.is_element_included(r"C:\src\Adder.cs")
    assert path_filter.is_element_included("C:/src/Adder.cs")
    assert not path_filter.is_element_included(r"C:\src\Resources.g.cs")
    assert not path_filter.is_element_included(r"D:\src\Adder.cs")


def test_build_filter() -> None:
    assert isinstance(build_filter([], []), AlwaysMatchFilter)
    assert type(build_filter(["a"], [])) is RegexFilter
    assert type(build_filter([], ["a"], PathFilter)) is PathFilter


def test_filter_str() -> None:
    assert str(AlwaysMatchFilter()) == "AlwaysMatchFilter()"
    assert (
        str(RegexFilter(["a", "b"], ["c"]))
        == "RegexFilter(include=[a, b], exclude=[c])"
    )


def test_filter_option_invalid_regex() -> None:
    with pytest.raises(ArgumentTypeError, match="invalid regular expression"):
        FilterOption("Calculator(")


def test_filter_option_allows_empty() -> None:
    assert FilterOption("").regex == ""


def test_non_empty_filter_option() -> None:
    with pytest.raises(ArgumentTypeError, match="filter cannot be empty"):
        NonEmptyFilterOption("")
    assert NonEmptyFilterOption("Tests").regex == "Tests"


def test_path_filter_option_warns_on_backslash(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="dotcovr"):
        PathFilterOption(r"C:\\src\\")
    messages = [r.getMessage() for r in caplog.records]
    assert messages[0] == "file filters must use forward slashes as path separators"
    assert messages[2] == "did you mean: C:/src/"


def test_path_filter_option_regex_escape(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="dotcovr"):
        PathFilterOption(r".*\.cs$")
    assert caplog.records == []
