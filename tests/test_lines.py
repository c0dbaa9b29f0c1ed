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

import itertools
import logging

import pytest

from dotcovr.data_model.coverage import LineVisitStatus
from dotcovr.formats.dotcover.lines import (
    Statement,
    compute_line_coverage,
    is_valid_statement,
)

NOT_COVERABLE = LineVisitStatus.NOT_COVERABLE
NOT_VISITED = LineVisitStatus.NOT_VISITED
VISITED = LineVisitStatus.VISITED


def test_no_statements() -> None:
    assert compute_line_coverage([]) == ([], [])


def test_overlapping_statements() -> None:
    coverage, status = compute_line_coverage(
        [Statement(10, 12, True), Statement(11, 11, False)]
    )
    assert len(coverage) == 13
    assert coverage[9:] == [-1, 1, 1, 1]
    assert status[9:] == [NOT_COVERABLE, VISITED, VISITED, VISITED]


def test_not_visited_statement() -> None:
    coverage, status = compute_line_coverage([Statement(2, 3, False)])
    assert coverage == [-1, -1, 0, 0]
    assert status == [NOT_COVERABLE, NOT_COVERABLE, NOT_VISITED, NOT_VISITED]


def test_visited_count_is_capped() -> None:
    coverage, _ = compute_line_coverage(
        [Statement(1, 1, True), Statement(1, 1, True), Statement(1, 1, True)]
    )
    assert coverage == [-1, 1]


def test_merge_is_commutative() -> None:
    statements = [
        Statement(3, 5, False),
        Statement(4, 4, True),
        Statement(5, 8, False),
        Statement(7, 7, True),
        Statement(1, 1, False),
    ]
    expected = compute_line_coverage(statements)
    for permutation in itertools.permutations(statements):
        assert compute_line_coverage(permutation) == expected

    coverage, status = expected
    assert coverage == [-1, 0, -1, 0, 1, 0, 0, 1, 0]
    assert status[4] is VISITED
    assert status[6] is NOT_VISITED


@pytest.mark.parametrize(
    "statement,valid",
    [
        (Statement(1, 1, True), True),
        (Statement(3, 7, False), True),
        (Statement(0, 1, True), False),
        (Statement(-2, -1, True), False),
        (Statement(5, 4, True), False),
    ],
)
def test_is_valid_statement(statement: Statement, valid: bool) -> None:
    assert is_valid_statement(statement) is valid


def test_invalid_statements_are_ignored(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="dotcovr"):
        coverage, status = compute_line_coverage(
            [Statement(5, 4, True), Statement(2, 2, False)], "Foo.cs"
        )
    assert coverage == [-1, -1, 0]
    assert status == [NOT_COVERABLE, NOT_COVERABLE, NOT_VISITED]
    assert caplog.record_tuples == [
        (
            "dotcovr",
            logging.WARNING,
            "Ignoring statement with invalid line range 5-4 in Foo.cs.",
        )
    ]


def test_only_invalid_statements() -> None:
    assert compute_line_coverage([Statement(0, 0, True)]) == ([], [])
