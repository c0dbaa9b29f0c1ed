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

import io
from pathlib import Path

import pytest

from dotcovr.configuration import (
    DOTCOVR_CONFIG_OPTIONS,
    config_entries_from_dict,
    merge_options_and_set_defaults,
    parse_config_file,
    parse_config_into_dict,
)
from dotcovr.options import FilterOption, OutputOrDefault


@pytest.mark.parametrize(
    "line,message",
    [
        ("key = value ; comment", "semicolon comment ; ... is reserved"),
        ('key = "value"', 'leading quote " is reserved'),
        ("key = 'value'", "leading quote ' is reserved"),
        ("key = value\\", "trailing backslash \\ is reserved"),
        ("key = $HOME", "variable substitution syntax"),
        ("just a value", 'expected "key = value" entry'),
    ],
)
def test_reserved_config_syntax(line: str, message: str) -> None:
    with pytest.raises(SyntaxError) as exc_info:
        list(parse_config_file(io.StringIO(line), "dotcovr.cfg"))
    assert message in str(exc_info.value)
    assert str(exc_info.value).startswith("dotcovr.cfg: 1: ")


def test_config_values_are_converted() -> None:
    cfg = (
        "verbose = yes\n"
        "parallel = 3\n"
        "class-exclude = Tests\\.\n"
        "class-exclude = Generated\\.\n"
    )
    entries = parse_config_file(io.StringIO(cfg), "/work/dotcovr.cfg")
    cfg_dict = parse_config_into_dict(entries)
    assert cfg_dict["verbose"] is True
    assert cfg_dict["parallel"] == 3
    assert [f.regex for f in cfg_dict["class_exclude"]] == ["Tests\\.", "Generated\\."]


def test_config_boolean_must_be_yes_or_no() -> None:
    entries = config_entries_from_dict({"verbose": "maybe"}, "dotcovr.toml")
    with pytest.raises(ValueError, match='boolean option must be "yes" or "no"'):
        parse_config_into_dict(entries)


def test_config_value_is_checked() -> None:
    entries = config_entries_from_dict({"parallel": 0}, "dotcovr.toml")
    with pytest.raises(ValueError, match="parallel: 0 is not a positive integer"):
        parse_config_into_dict(entries)


def test_config_key_is_not_allowed() -> None:
    entries = config_entries_from_dict({"config": "other.cfg"}, "dotcovr.toml")
    with pytest.raises(ValueError, match="unknown config option"):
        parse_config_into_dict(entries)


def test_merge_options_and_set_defaults() -> None:
    options = merge_options_and_set_defaults(
        [
            {"parallel": 2, "class_filter": [FilterOption("A")]},
            {"parallel": 4, "class_filter": [FilterOption("B")]},
        ]
    )
    assert options.parallel == 4
    assert [f.regex for f in options.class_filter] == ["A", "B"]
    # Defaults of the other options
    assert options.verbose is False
    assert options.file_exclude == []
    assert options.json is None
    assert options.report is None


def test_merge_needs_a_namespace() -> None:
    with pytest.raises(AssertionError):
        merge_options_and_set_defaults([])


def test_all_options_have_unique_names() -> None:
    names = [o.name for o in DOTCOVR_CONFIG_OPTIONS]
    assert len(names) == len(set(names))
    assert "report" in names


def test_output_or_default_relative_to_config(tmp_path: Path) -> None:
    entries = config_entries_from_dict(
        {"output": "coverage.json"}, str(tmp_path / "dotcovr.toml")
    )
    output = parse_config_into_dict(entries)["output"]
    assert isinstance(output, OutputOrDefault)
    assert output.abspath == str(tmp_path / "coverage.json")
