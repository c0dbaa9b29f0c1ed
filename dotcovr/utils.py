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


"""Small helpers shared by the filters and the writers."""

from contextlib import contextmanager
import json
import os
import sys
from typing import Any, Iterator, Optional, TextIO

PRETTY_JSON_INDENT = 4


def force_unix_separator(path: str) -> str:
    """
    Get the path with forward slashes, independent from the OS.

    >>> force_unix_separator(r"C:\\src\\Adder.cs")
    'C:/src/Adder.cs'
    """
    return path.replace("\\", "/")


@contextmanager
def open_text_for_writing(
    filename: Optional[str], default_filename: Optional[str] = None, **kwargs: Any
) -> Iterator[TextIO]:
    """Open a file for writing text, ``None`` or ``-`` is stdout.

    A filename ending with a path separator is a directory,
    then ``default_filename`` is written into it.
    """
    if filename is None or filename == "-":
        yield sys.stdout
        return

    if filename.endswith(os.sep):
        if default_filename is None:
            raise AssertionError(
                f"Output {filename!r} is a directory but there is no default filename."
            )
        filename = os.path.join(filename, default_filename)

    with open(filename, "w", **kwargs) as fh_out:  # pylint: disable=unspecified-encoding
        yield fh_out


def write_json_output(
    json_dict: dict[str, Any],
    *,
    pretty: bool,
    filename: Optional[str],
    default_filename: str,
) -> None:
    """Write a dictionary as JSON, compact or indented with a final newline."""
    dump_kwargs: dict[str, Any] = (
        {"indent": PRETTY_JSON_INDENT, "separators": (",", ": ")} if pretty else {}
    )
    with open_text_for_writing(filename, default_filename, encoding="utf-8") as fh:
        json.dump(json_dict, fh, **dump_kwargs)
        if pretty:
            fh.write("\n")
