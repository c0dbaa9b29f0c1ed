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
Command line parsing and configuration files.

Every setting is a ``DotcovrConfigOption``. The same list is used to build
the argparse parser and to read the configuration files:

* ini-style ``dotcovr.cfg`` files with ``key = value`` lines,
* ``dotcovr.toml`` or the ``[tool.dotcovr]`` table of ``pyproject.toml``.

Values from the command line take precedence over the configuration file,
``append`` options collect the values of both.
"""

from __future__ import annotations
from argparse import ArgumentParser, ArgumentTypeError, SUPPRESS, _ArgumentGroup
from dataclasses import dataclass
from inspect import isclass
import os
import re
from typing import Any, Callable, Iterable, Iterator, Optional, TextIO

from . import formats
from .options import (
    DotcovrConfigOption,
    FilterOption,
    Options,
    OutputOrDefault,
    check_input_file,
    relative_path,
)


def argument_parser_setup(
    parser: ArgumentParser, default_group: _ArgumentGroup
) -> None:
    """Register the option groups and all options at the parser."""
    groups = {
        group_def["key"]: parser.add_argument_group(
            group_def["name"], description=group_def["description"]
        )
        for group_def in DOTCOVR_CONFIG_OPTION_GROUPS
    }

    for option in DOTCOVR_CONFIG_OPTIONS:
        target = default_group if option.group is None else groups[option.group]

        # Unset options must not show up in the namespace, otherwise
        # they would hide the values from the configuration file.
        kwargs: dict[str, Any] = dict(
            action=option.action,
            const=option.const,
            default=SUPPRESS,
            help=option.help,
            metavar=option.metavar,
        )
        # nargs and type are not allowed for store_const
        if option.nargs is not None:
            kwargs["nargs"] = option.nargs
        if option.type is not None:
            kwargs["type"] = option.type

        if option.positional:
            target.add_argument(option.name, **kwargs)
        elif option.flags:
            target.add_argument(*option.flags, dest=option.name, **kwargs)
        else:
            # only available in configuration files
            continue


def parse_config_into_dict(
    config_entries: Iterable[ConfigEntry],
    all_options: Optional[Iterable[DotcovrConfigOption]] = None,
) -> dict[str, Any]:
    """Convert the entries of a configuration file into option values."""
    if all_options is None:
        all_options = DOTCOVR_CONFIG_OPTIONS

    option_by_key = {
        key: option
        for option in all_options
        if option.config_keys is not None
        for key in option.config_keys
    }

    result: dict[str, Any] = {}
    for entry in config_entries:
        option = option_by_key.get(entry.key)
        if option is None:
            raise entry.error("unknown config option")
        _store_value(result, option, [_convert_config_value(entry, option)])

    return result


def _convert_config_value(entry: ConfigEntry, option: DotcovrConfigOption) -> Any:
    if option.action == "store_const":
        return option.const if entry.value_as_bool else option.default

    # An optional argument like --json can be a boolean or a value
    if option.nargs == "?" and not option.positional:
        try:
            return option.const if entry.value_as_bool else option.default
        except ValueError:
            pass

    if option.type is None:
        return entry.value

    if entry.filename is None:
        raise AssertionError("The entry needs a filename to resolve relative paths.")
    converter = _get_converter_function(
        option.type, basedir=os.path.dirname(entry.filename)
    )
    try:
        return converter(entry.value)
    except (ValueError, ArgumentTypeError) as err:
        raise entry.error(str(err)) from None


def _get_converter_function(
    option_type: Callable[[str], Any],
    *,
    basedir: str,
) -> Callable[[Any], Any]:
    """Get the function to convert a configuration value.

    Paths in a configuration file are relative to the file,
    so the converters for paths get the directory of the file.
    """
    if isclass(option_type) and issubclass(option_type, FilterOption):
        return lambda value: option_type(str(value))

    for path_type in (check_input_file, relative_path, OutputOrDefault):
        if option_type is path_type:
            return lambda value: path_type(str(value), basedir)  # type: ignore[call-arg]

    return option_type


def _store_value(
    target: dict[str, Any], option: DotcovrConfigOption, values: list[Any]
) -> None:
    """Store the values, the last one wins unless the option collects them."""
    if option.action == "append":
        target.setdefault(option.name, []).extend(values)
    elif option.action in ("store", "store_const"):
        target[option.name] = values[-1]
    else:
        raise AssertionError(f"Unexpected action for {option.name}: {option.action!r}")


def merge_options_and_set_defaults(
    partial_namespaces: list[dict[str, Any]],
    all_options: Optional[list[DotcovrConfigOption]] = None,
) -> Options:
    """Merge the option values, later namespaces take precedence."""
    if not partial_namespaces:
        raise AssertionError("At least one namespace required")

    if all_options is None:
        all_options = DOTCOVR_CONFIG_OPTIONS

    merged: dict[str, Any] = {}
    for namespace in partial_namespaces:
        for option in all_options:
            if option.name in namespace:
                value = namespace[option.name]
                # append options hold a list, all others a single value
                _store_value(
                    merged, option, value if option.action == "append" else [value]
                )

    for option in all_options:
        merged.setdefault(option.name, option.default)

    return Options(**merged)


DOTCOVR_CONFIG_OPTION_GROUPS = [
    {
        "key": "output_options",
        "name": "Output Options",
        "description": (
            "Dotcovr logs a short overview by default, "
            "the coverage model can be written as JSON."
        ),
    },
    {
        "key": "filter_options",
        "name": "Filter Options",
        "description": (
            "Filters decide which assemblies, classes and files are "
            "included in the coverage model. "
            "If there is an include filter any of them must match, "
            "and no exclude filter must match. "
            "A filter is a regular expression matched from the start of the name. "
            "File paths use forward slashes, even if the report contains Windows paths."
        ),
    },
]


DOTCOVR_CONFIG_OPTIONS = [
    DotcovrConfigOption(
        "verbose",
        ["-v", "--verbose"],
        help="Log the progress and the filter decisions.",
        action="store_true",
    ),
    DotcovrConfigOption(
        "no_color",
        ["--no-color"],
        help=(
            "Log without colors. The environment variable NO_COLOR "
            "has the same effect. --force-color wins over this option."
        ),
        action="store_true",
    ),
    DotcovrConfigOption(
        "force_color",
        ["--force-color"],
        help=(
            "Log with colors even if the output is not a terminal. "
            "The environment variable FORCE_COLOR has the same effect."
        ),
        action="store_true",
    ),
    DotcovrConfigOption(
        "config",
        ["--config"],
        config=False,
        help=(
            "Read the options from this file instead of dotcovr.cfg, "
            "dotcovr.toml or the [tool.dotcovr] table of pyproject.toml "
            "in the current directory. Files ending in .toml are read as TOML."
        ),
        type=relative_path,
    ),
    DotcovrConfigOption(
        "output",
        ["-o", "--output"],
        group="output_options",
        help=(
            "Write the output to this file, or into this directory "
            "if it ends with a path separator. Defaults to stdout."
        ),
        type=OutputOrDefault,
        default=None,
    ),
    *formats.get_options(),
]


# "key = value", the key is kebab-case
CONFIG_KEY_VALUE = re.compile(r"^(?P<key>\w[\w-]*)\s*=\s*(?P<value>.*)$")
CONFIG_COMMENT = re.compile(r"(?:^|\s+)#.*$")
CONFIG_RESERVED = [
    (re.compile(r"(?:^|\s);"), "semicolon comment ; ... is reserved"),
    (re.compile(r'^"'), 'leading quote " is reserved'),
    (re.compile(r"^'"), "leading quote ' is reserved"),
    (re.compile(r"\\$"), "trailing backslash \\ is reserved"),
    (
        re.compile(r"[$][\w{(]"),
        "variable substitution syntax (${var}, $(var), or $var) is reserved",
    ),
]


def parse_config_file(
    open_file: TextIO,
    filename: str,
    first_lineno: int = 1,
) -> Iterator[ConfigEntry]:
    r"""
    Read the entries of an ini-style configuration file.

    Empty lines and ``#`` comments are ignored, a key may occur more than once.

    >>> import io
    >>> cfg = io.StringIO(
    ...     "# filters\n"
    ...     "class-exclude = Tests\\.  # no tests\n"
    ...     "\n"
    ...     "class-exclude = Generated\\.\n"
    ...     "json =\n"
    ... )
    >>> for entry in parse_config_file(cfg, "dotcovr.cfg"):
    ...     print(entry)
    dotcovr.cfg: 2: class-exclude = Tests\.
    dotcovr.cfg: 4: class-exclude = Generated\.
    dotcovr.cfg: 5: json = # empty
    """
    for lineno, raw_line in enumerate(open_file, first_lineno):
        line = CONFIG_COMMENT.sub("", raw_line.rstrip())
        if not line.strip():
            continue

        def syntax_error(message: str) -> SyntaxError:
            # pylint: disable=cell-var-from-loop
            return SyntaxError(
                f"{filename}: {lineno}: {message}\non this line: {raw_line.rstrip()}"
            )

        match = CONFIG_KEY_VALUE.match(line)
        if match is None:
            if CONFIG_RESERVED[0][0].search(line):
                raise syntax_error(CONFIG_RESERVED[0][1])
            raise syntax_error('expected "key = value" entry')

        value = match.group("value")
        for pattern, message in CONFIG_RESERVED:
            if pattern.search(value):
                raise syntax_error(message)

        yield ConfigEntry(match.group("key"), value, filename=filename, lineno=lineno)


def config_entries_from_dict(
    config: dict[str, Any],
    filename: str,
) -> Iterator[ConfigEntry]:
    """
    Get the entries of a TOML table, a list gives one entry per element.

    >>> for entry in config_entries_from_dict(
    ...     {"class-exclude": ["Tests", "Generated"], "parallel": 4}, "dotcovr.toml"
    ... ):
    ...     print(entry)
    dotcovr.toml: ??: class-exclude = Tests
    dotcovr.toml: ??: class-exclude = Generated
    dotcovr.toml: ??: parallel = 4
    """
    for key, value in config.items():
        for single_value in value if isinstance(value, list) else [value]:
            yield ConfigEntry(key, single_value, filename=filename)


@dataclass
class ConfigEntry:
    """A single value read from a configuration file."""

    key: str
    value: Any
    filename: Optional[str] = None
    lineno: Optional[int] = None

    def __str__(self) -> str:
        """
        >>> print(ConfigEntry("parallel", "4", filename="dotcovr.cfg", lineno=3))
        dotcovr.cfg: 3: parallel = 4
        """
        value = "# empty" if self.value in (None, "") else self.value
        return f"{self.location}: {self.key} = {value}"

    @property
    def location(self) -> str:
        """Filename and line number for messages."""
        return f"{self.filename or '<config>'}: {self.lineno or '??'}"

    @property
    def value_as_bool(self) -> bool:
        """
        The value of a flag, TOML booleans or "yes" and "no".

        >>> ConfigEntry("verbose", True).value_as_bool
        True
        >>> ConfigEntry("verbose", "no").value_as_bool
        False
        >>> ConfigEntry("verbose", "on").value_as_bool
        Traceback (most recent call last):
        ValueError: <config>: ??: verbose: boolean option must be "yes" or "no"
        """
        if isinstance(self.value, bool):
            return self.value
        if self.value in ("yes", "no"):
            return self.value == "yes"
        raise self.error('boolean option must be "yes" or "no"')

    def error(self, message: str) -> ValueError:
        """Create (but do not raise) an error for this entry."""
        return ValueError(f"{self.location}: {self.key}: {message}")
