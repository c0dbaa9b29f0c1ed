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

"""
Merge the statements of a source file into coverage information per line.

A statement covers the inclusive line range ``[line_start, line_end]``.
Statements may overlap, a line is visited if any statement covering
it was visited. The merge is a logical OR, so the result does not
depend on the order of the statements.
"""

import logging
from typing import Iterable, NamedTuple, Optional

from ...data_model.coverage import LineVisitStatus

LOGGER = logging.getLogger("dotcovr")


class Statement(NamedTuple):
    """A range of lines and the information if it was executed."""

    line_start: int
    line_end: int
    visited: bool


def is_valid_statement(statement: Statement) -> bool:
    """Check if the line range of the statement can be used."""
    return 1 <= statement.line_start <= statement.line_end


def compute_line_coverage(
    statements: Iterable[Statement], filename: Optional[str] = None
) -> tuple[list[int], list[LineVisitStatus]]:
    """Get the merged hit information and the visit status per line.

    Both lists have an entry for each line up to the highest line of
    all statements, index 0 is unused. Statements with an invalid range
    are ignored with a warning.

    >>> coverage, status = compute_line_coverage(
    ...     [Statement(2, 3, True), Statement(3, 3, False)])
    >>> coverage
    [-1, -1, 1, 1]
    >>> [s.name for s in status]
    ['NOT_COVERABLE', 'NOT_COVERABLE', 'VISITED', 'VISITED']
    """
    valid_statements = list[Statement]()
    for statement in statements:
        if is_valid_statement(statement):
            valid_statements.append(statement)
        else:
            LOGGER.warning(
                f"Ignoring statement with invalid line range {statement.line_start}-{statement.line_end}"
                + ("" if filename is None else f" in {filename}")
                + "."
            )

    if not valid_statements:
        return [], []

    valid_statements.sort(key=lambda s: s.line_end)
    size = valid_statements[-1].line_end + 1
    coverage = [-1] * size
    line_visit_status = [LineVisitStatus.NOT_COVERABLE] * size

    for statement in valid_statements:
        visits = 1 if statement.visited else 0
        for lineno in range(statement.line_start, statement.line_end + 1):
            coverage[lineno] = (
                visits if coverage[lineno] == -1 else min(coverage[lineno] + visits, 1)
            )
            line_visit_status[lineno] = (
                LineVisitStatus.VISITED
                if line_visit_status[lineno] is LineVisitStatus.VISITED
                or statement.visited
                else LineVisitStatus.NOT_VISITED
            )

    return coverage, line_visit_status
