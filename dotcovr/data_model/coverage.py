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
The dotcovr coverage data model.

This module represents the core data structures
and should not have dependencies on any other dotcovr module.

The hierarchy is ``Assembly -> Class -> CodeFile -> line / CodeElement``.
All objects are created while a single report is parsed and are not
changed afterwards. A ``Class`` has a read-only reference to the
``Assembly`` it belongs to, all other references point downwards.

The per line information of a ``CodeFile`` is stored twice:

* ``line_coverage`` is the merged hit information, ``-1`` for
  lines which are not coverable, ``0`` for coverable lines which
  were not visited and ``1`` for visited lines.
* ``line_visit_status`` holds the ``LineVisitStatus`` of each line.

Both lists are indexed by the line number, index 0 is unused.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Any, Iterable, Optional


class DataModelAssertionError(AssertionError):
    """Exception for inconsistent data in the coverage model."""


class LineVisitStatus(Enum):
    """The coverage state of a single line."""

    NOT_COVERABLE = "not_coverable"
    NOT_VISITED = "not_visited"
    VISITED = "visited"


class CodeElementType(Enum):
    """The kind of a code element."""

    METHOD = "method"
    PROPERTY = "property"


# Mapping of the merged hit information to the visit status.
_STATUS_OF_COVERAGE = {
    -1: LineVisitStatus.NOT_COVERABLE,
    0: LineVisitStatus.NOT_VISITED,
    1: LineVisitStatus.VISITED,
}


@dataclass(frozen=True)
class CodeElement:
    """A method or property with the span of lines it covers in a file.

    Args:
        name (str):
            The display name of the element.
        code_element_type (CodeElementType):
            Whether this is a method or a property.
        first_line (int):
            The first line of the element.
        last_line (int):
            The last line of the element (inclusive).
    """

    name: str
    code_element_type: CodeElementType
    first_line: int
    last_line: int

    def __post_init__(self) -> None:
        if self.first_line > self.last_line:
            raise DataModelAssertionError(
                f"First line {self.first_line} of {self.name!r} is after the last line {self.last_line}."
            )

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "name": self.name,
            "type": self.code_element_type.value,
            "first_line": self.first_line,
            "last_line": self.last_line,
        }


class CodeFile:
    r"""Represent coverage information about a source file of a class.

    Args:
        path (str):
            The path of the file as given in the report.
        line_coverage (list of int, optional):
            The merged hit information per line.
        line_visit_status (list of LineVisitStatus, optional):
            The visit status per line.
    """

    __slots__ = ("path", "line_coverage", "line_visit_status", "_code_elements")

    def __init__(
        self,
        path: str,
        line_coverage: Optional[list[int]] = None,
        line_visit_status: Optional[list[LineVisitStatus]] = None,
    ) -> None:
        line_coverage = [] if line_coverage is None else line_coverage
        line_visit_status = [] if line_visit_status is None else line_visit_status
        if len(line_coverage) != len(line_visit_status):
            raise DataModelAssertionError(
                f"Got {len(line_coverage)} coverage entries but {len(line_visit_status)} visit states for {path}."
            )
        for lineno, (count, status) in enumerate(zip(line_coverage, line_visit_status)):
            if _STATUS_OF_COVERAGE.get(count) is not status:
                raise DataModelAssertionError(
                    f"Line {lineno} of {path} has coverage {count} but status {status}."
                )

        self.path = path
        self.line_coverage = tuple(line_coverage)
        self.line_visit_status = tuple(line_visit_status)
        self._code_elements = list[CodeElement]()

    def __repr__(self) -> str:
        return f"CodeFile({self.path!r})"

    def add_code_element(self, code_element: CodeElement) -> None:
        """Add a method or property of the file."""
        self._code_elements.append(code_element)

    @property
    def code_elements(self) -> tuple[CodeElement, ...]:
        """The methods and properties in the order they were added."""
        return tuple(self._code_elements)

    @property
    def max_line(self) -> int:
        """The highest line number with information, 0 if there is none."""
        return max(len(self.line_coverage) - 1, 0)

    def visit_status(self, lineno: int) -> LineVisitStatus:
        """Get the visit status of a line, lines outside the data aren't coverable."""
        if 0 < lineno < len(self.line_visit_status):
            return self.line_visit_status[lineno]
        return LineVisitStatus.NOT_COVERABLE

    def coverable_lines(self) -> Iterable[int]:
        """Iterate over the line numbers which are coverable."""
        for lineno, status in enumerate(self.line_visit_status):
            if status is not LineVisitStatus.NOT_COVERABLE:
                yield lineno

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "path": self.path,
            "lines": [
                {
                    "line_number": lineno,
                    "status": self.line_visit_status[lineno].value,
                    "count": self.line_coverage[lineno],
                }
                for lineno in self.coverable_lines()
            ],
            "code_elements": [e.serialize() for e in self._code_elements],
        }


class Class:
    r"""Represent a class of an assembly.

    Args:
        name (str):
            The full qualified name of the class.
        assembly (Assembly):
            The assembly the class belongs to.
    """

    __slots__ = ("name", "assembly", "_files")

    def __init__(self, name: str, assembly: Assembly) -> None:
        self.name = name
        self.assembly = assembly
        self._files = list[CodeFile]()

    def __repr__(self) -> str:
        return f"Class({self.name!r})"

    def add_file(self, codefile: CodeFile) -> None:
        """Add a source file of the class."""
        self._files.append(codefile)

    @property
    def files(self) -> tuple[CodeFile, ...]:
        """The files in the order they were added."""
        return tuple(self._files)

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "name": self.name,
            "files": [f.serialize() for f in self._files],
        }


class Assembly:
    r"""Represent an assembly.

    Classes may be added from several threads,
    they are always returned sorted by the name.

    Args:
        name (str):
            The name of the assembly.
    """

    __slots__ = ("name", "_classes", "_lock")

    def __init__(self, name: str) -> None:
        self.name = name
        self._classes = list[Class]()
        self._lock = Lock()

    def __repr__(self) -> str:
        return f"Assembly({self.name!r})"

    def add_class(self, class_: Class) -> None:
        """Add a class to the assembly."""
        if class_.assembly is not self:
            raise DataModelAssertionError(
                f"Class {class_.name!r} does not belong to assembly {self.name!r}."
            )
        with self._lock:
            self._classes.append(class_)

    @property
    def classes(self) -> list[Class]:
        """The classes sorted by the name."""
        with self._lock:
            return sorted(self._classes, key=lambda c: c.name)

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "name": self.name,
            "classes": [c.serialize() for c in self.classes],
        }


class ParserResult:
    r"""The result of parsing a report.

    Args:
        assemblies (list of Assembly):
            The parsed assemblies, they are sorted by the name.
        supports_branch_coverage (bool):
            Whether the report format contains branch information.
        parser_name (str):
            The name of the parser which created the result.
    """

    __slots__ = ("assemblies", "supports_branch_coverage", "parser_name")

    def __init__(
        self,
        assemblies: Iterable[Assembly],
        supports_branch_coverage: bool,
        parser_name: str,
    ) -> None:
        self.assemblies = sorted(assemblies, key=lambda a: a.name)
        self.supports_branch_coverage = supports_branch_coverage
        self.parser_name = parser_name

    def __repr__(self) -> str:
        return f"ParserResult({self.parser_name!r}, {len(self.assemblies)} assemblies)"

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "parser": self.parser_name,
            "supports_branch_coverage": self.supports_branch_coverage,
            "assemblies": [a.serialize() for a in self.assemblies],
        }
