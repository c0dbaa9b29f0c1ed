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
Build the coverage model from a dotCover XML report.

The report contains a global table of the source files and one or more
``Assembly`` elements. The types of an assembly are either direct children
or grouped in ``Namespace`` elements. Each ``Method`` of a type has
``Statement`` elements with the line range, the index of the file and the
information if the statement was covered::

    <Root>
      <Assembly Name="Calculator">
        <Namespace Name="Calculator.Core">
          <Type Name="Adder">
            <Method Name="Add(System.Int32,System.Int32):System.Int32">
              <Statement FileIndex="1" Line="10" EndLine="12" Covered="True" />
            </Method>
          </Type>
        </Namespace>
      </Assembly>
      <FileIndices>
        <File Index="1" Name="C:\\src\\Adder.cs" />
      </FileIndices>
    </Root>
"""

import logging
import re
from typing import Any, Iterable, Iterator, Optional

from ...data_model.coverage import (
    Assembly,
    Class,
    CodeElement,
    CodeFile,
    ParserResult,
)
from ...exceptions import InvalidInputError, MalformedReportError
from ...filter import AlwaysMatchFilter, Filter
from .lines import Statement, compute_line_coverage, is_valid_statement
from .names import classify_method, is_compiler_generated_type
from .workers import Workers

LOGGER = logging.getLogger("dotcovr")

# The XML element type of lxml, the parser only uses the
# ``get``, ``getparent``, ``iter``, ``iterfind`` and ``sourceline`` API.
Element = Any

# Only ASCII digits, int() would also accept "1_0" or other scripts.
INTEGER = re.compile(r"\s*[+-]?[0-9]+\s*")

# Larger line numbers would allocate huge per line lists.
MAX_LINE_NUMBER = 10_000_000


def _required_attribute(
    element: Element,
    name: str,
    *,
    assembly: Optional[str] = None,
    class_name: Optional[str] = None,
) -> str:
    value = element.get(name)
    if value is None:
        raise MalformedReportError(
            f"Missing attribute {name!r} in element {element.tag!r}",
            assembly=assembly,
            class_name=class_name,
            sourceline=element.sourceline,
        )
    return str(value)


def _line_attribute(element: Element, name: str, class_: Class) -> int:
    value = _required_attribute(
        element, name, assembly=class_.assembly.name, class_name=class_.name
    )
    if INTEGER.fullmatch(value) is None:
        raise MalformedReportError(
            f"Attribute {name!r} must be an integer, got {value!r}",
            assembly=class_.assembly.name,
            class_name=class_.name,
            sourceline=element.sourceline,
        )
    number = int(value)
    if number > MAX_LINE_NUMBER:
        raise MalformedReportError(
            f"Attribute {name!r} exceeds the maximum line number {MAX_LINE_NUMBER}, got {value!r}",
            assembly=class_.assembly.name,
            class_name=class_.name,
            sourceline=element.sourceline,
        )
    return number


def _boolean_attribute(element: Element, name: str, class_: Class) -> bool:
    value = _required_attribute(
        element, name, assembly=class_.assembly.name, class_name=class_.name
    )
    if value.lower() == "true":
        return True
    if value.lower() == "false":
        return False
    raise MalformedReportError(
        f"Attribute {name!r} must be 'True' or 'False', got {value!r}",
        assembly=class_.assembly.name,
        class_name=class_.name,
        sourceline=element.sourceline,
    )


def _type_elements(assembly_elements: Iterable[Element]) -> Iterator[Element]:
    """Get the types of the assemblies, first the ones in a namespace."""
    assembly_elements = list(assembly_elements)
    for assembly_element in assembly_elements:
        yield from assembly_element.iterfind("Namespace/Type")
    for assembly_element in assembly_elements:
        yield from assembly_element.iterfind("Type")


def _qualified_name(type_element: Element, assembly_name: str) -> str:
    """Get the name of the type prefixed by the namespace or assembly."""
    parent_name = _required_attribute(
        type_element.getparent(), "Name", assembly=assembly_name
    )
    type_name = _required_attribute(type_element, "Name", assembly=assembly_name)
    return f"{parent_name}.{type_name}"


class DotCoverParser:
    """Parser for XML reports generated by dotCover.

    Args:
        assembly_filter (Filter, optional):
            The filter for the assembly names.
        class_filter (Filter, optional):
            The filter for the full qualified class names.
        file_filter (Filter, optional):
            The filter for the file paths.
        parallel (int):
            The number of threads used to process the classes of an assembly.
    """

    def __init__(
        self,
        assembly_filter: Optional[Filter] = None,
        class_filter: Optional[Filter] = None,
        file_filter: Optional[Filter] = None,
        parallel: int = 1,
    ) -> None:
        self.assembly_filter = (
            AlwaysMatchFilter() if assembly_filter is None else assembly_filter
        )
        self.class_filter = (
            AlwaysMatchFilter() if class_filter is None else class_filter
        )
        self.file_filter = AlwaysMatchFilter() if file_filter is None else file_filter
        self.parallel = parallel

    def __str__(self) -> str:
        return type(self).__name__

    def parse(self, report: Optional[Element]) -> ParserResult:
        """Parse the given XML report (an lxml element or element tree)."""
        if report is None:
            raise InvalidInputError("No report given to the parser.")

        modules = list(report.iter("Assembly"))
        file_table = dict[str, str]()
        for file_element in report.iter("File"):
            file_table.setdefault(
                _required_attribute(file_element, "Index"),
                _required_attribute(file_element, "Name"),
            )
        LOGGER.debug(
            f"Report contains {len(modules)} assembly elements and {len(file_table)} files."
        )

        assembly_names = sorted(
            name
            for name in {_required_attribute(m, "Name") for m in modules}
            if self.assembly_filter.is_element_included(name)
        )

        assemblies = [
            self.process_assembly(modules, file_table, assembly_name)
            for assembly_name in assembly_names
        ]

        return ParserResult(assemblies, False, str(self))

    def process_assembly(
        self, modules: list[Element], file_table: dict[str, str], assembly_name: str
    ) -> Assembly:
        """Process the classes of all assembly elements with the given name."""
        LOGGER.debug(f"  Current Assembly: {assembly_name}")

        assembly_elements = [m for m in modules if m.get("Name") == assembly_name]

        candidate_names = set[str]()
        for type_element in _type_elements(assembly_elements):
            type_name = _required_attribute(
                type_element, "Name", assembly=assembly_name
            )
            if is_compiler_generated_type(type_name):
                continue
            candidate_names.add(_qualified_name(type_element, assembly_name))

        class_names = sorted(
            name
            for name in candidate_names
            if self.class_filter.is_element_included(name)
        )

        assembly = Assembly(assembly_name)

        with Workers(self.parallel, lambda: {"classes": list[Class]()}) as pool:
            LOGGER.debug(f"Pool started with {pool.size()} threads")
            for class_name in class_names:
                pool.add(
                    self._collect_class,
                    assembly_elements,
                    file_table,
                    assembly,
                    class_name,
                )
            contexts = pool.wait()

        for context in contexts:
            for class_ in context["classes"]:
                assembly.add_class(class_)

        return assembly

    def _collect_class(
        self,
        assembly_elements: list[Element],
        file_table: dict[str, str],
        assembly: Assembly,
        class_name: str,
        *,
        classes: list[Class],
    ) -> None:
        class_ = self.process_class(assembly_elements, file_table, assembly, class_name)
        if class_ is not None:
            classes.append(class_)

    def process_class(
        self,
        assembly_elements: list[Element],
        file_table: dict[str, str],
        assembly: Assembly,
        class_name: str,
    ) -> Optional[Class]:
        """Process the given class, None is returned if all its files are filtered."""
        type_elements = [
            t
            for t in _type_elements(assembly_elements)
            if _qualified_name(t, assembly.name) == class_name
        ]

        file_ids = list(
            dict.fromkeys(
                _required_attribute(
                    statement,
                    "FileIndex",
                    assembly=assembly.name,
                    class_name=class_name,
                )
                for type_element in type_elements
                for statement in type_element.iter("Statement")
            )
        )

        filtered_files = list[tuple[str, str]]()
        for file_id in file_ids:
            if file_id not in file_table:
                raise MalformedReportError(
                    f"File with index {file_id!r} is not defined in the report",
                    assembly=assembly.name,
                    class_name=class_name,
                )
            file_path = file_table[file_id]
            if self.file_filter.is_element_included(file_path):
                filtered_files.append((file_id, file_path))

        # If all files are removed by filters, then the whole class is omitted
        if file_ids and not filtered_files:
            LOGGER.debug(f"All files of class {class_name} are filtered.")
            return None

        class_ = Class(class_name, assembly)
        methods = [
            method
            for type_element in type_elements
            for method in type_element.iter("Method")
        ]
        for file_id, file_path in filtered_files:
            class_.add_file(self.process_file(methods, file_id, class_, file_path))

        return class_

    def process_file(
        self, methods: list[Element], file_id: str, class_: Class, file_path: str
    ) -> CodeFile:
        """Build the line coverage and the code elements of a file of the class."""
        statements_of_methods = [
            (
                method,
                [
                    Statement(
                        _line_attribute(statement, "Line", class_),
                        _line_attribute(statement, "EndLine", class_),
                        _boolean_attribute(statement, "Covered", class_),
                    )
                    for statement in method.iterfind("Statement")
                    if statement.get("FileIndex") == file_id
                ],
            )
            for method in methods
        ]

        line_coverage, line_visit_status = compute_line_coverage(
            (s for _, statements in statements_of_methods for s in statements),
            file_path,
        )
        codefile = CodeFile(file_path, line_coverage, line_visit_status)

        for method, statements in statements_of_methods:
            self._add_code_element(codefile, method, statements, class_)

        return codefile

    @staticmethod
    def _add_code_element(
        codefile: CodeFile,
        method: Element,
        statements: list[Statement],
        class_: Class,
    ) -> None:
        classified = classify_method(
            _required_attribute(
                method.getparent(),
                "Name",
                assembly=class_.assembly.name,
                class_name=class_.name,
            ),
            _required_attribute(
                method, "Name", assembly=class_.assembly.name, class_name=class_.name
            ),
        )
        if classified is None:
            return

        statements = [s for s in statements if is_valid_statement(s)]
        if not statements:
            return

        code_element_type, name = classified
        codefile.add_code_element(
            CodeElement(
                name,
                code_element_type,
                min(s.line_start for s in statements),
                max(s.line_end for s in statements),
            )
        )
