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
Readable names for the methods found in a dotCover report.

The C# compiler generates types and methods for lambdas, local functions,
iterators and async methods. Their names contain the name of the user
written method in angle brackets, e.g. ``<DoWork>d__3`` for the state
machine of the async method ``DoWork``.
"""

import re
from typing import Optional

from ...data_model.coverage import CodeElementType

# A lambda or local function, e.g. "<Process>b__4_0(System.Object)".
LAMBDA_METHOD_NAME_REGEX = re.compile(r"<.+>.+__.+\(.*\)")

# The MoveNext method of an async or iterator state machine, matched
# against the name of the type followed by the name of the method.
COMPILER_GENERATED_METHOD_NAME_REGEX = re.compile(
    r"<(?P<CompilerGeneratedName>.+?)>.+__.+MoveNext\(\):.+$"
)

# A nested type generated by the compiler, e.g. "<DoWork>d__3".
COMPILER_GENERATED_TYPE_NAME_REGEX = re.compile(r"<.*>.+__")

PROPERTY_PREFIXES = ("get_", "set_")


def is_compiler_generated_type(type_name: str) -> bool:
    """Check if the type is generated by the compiler.

    >>> is_compiler_generated_type("<DoWork>d__3")
    True
    >>> is_compiler_generated_type("Calculator")
    False
    """
    return COMPILER_GENERATED_TYPE_NAME_REGEX.search(type_name) is not None


def extract_method_name(type_name: str, method_name: str) -> str:
    """Get the method name without the return type.

    For the state machine of an async or iterator method the
    name of the method written by the user is returned.

    >>> extract_method_name("Calculator", "Add(System.Int32):System.Int32")
    'Add(System.Int32)'
    >>> extract_method_name("<DoWork>d__3", "MoveNext():System.Void")
    'DoWork()'
    """
    # Cheap check before running the regular expression
    if "MoveNext()" in method_name:
        match = COMPILER_GENERATED_METHOD_NAME_REGEX.search(type_name + method_name)
        if match:
            return f"{match.group('CompilerGeneratedName')}()"

    separator = method_name.rfind(":")
    return method_name if separator < 0 else method_name[:separator]


def classify_method(
    type_name: str, method_name: str
) -> Optional[tuple[CodeElementType, str]]:
    """Get the kind and display name of a method, None for lambdas.

    >>> classify_method("Stack", "get_Count():System.Int32")
    (<CodeElementType.PROPERTY: 'property'>, 'Count')
    >>> classify_method("Worker", "<Process>b__4_0(System.Object):System.Void") is None
    True
    """
    name = extract_method_name(type_name, method_name)

    if LAMBDA_METHOD_NAME_REGEX.search(name):
        return None

    if name.lower().startswith(PROPERTY_PREFIXES):
        name = name[4:]
        parameters = name.find("(")
        if parameters >= 0:
            name = name[:parameters]
        return CodeElementType.PROPERTY, name

    return CodeElementType.METHOD, name
