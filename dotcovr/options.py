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


"""Option declarations and the argparse types used by them."""

from __future__ import annotations
from argparse import ArgumentTypeError
import logging
import os
import re
from typing import Any, Callable, Optional, Type, Union

LOGGER = logging.getLogger("dotcovr")


def _absolute_path(value: str, basedir: Optional[str]) -> str:
    if not os.path.isabs(value):
        value = os.path.join(os.getcwd() if basedir is None else basedir, value)
    return os.path.normpath(value)


def check_input_file(value: str, basedir: Optional[str] = None) -> str:
    """Get the absolute path of an existing file."""
    path = _absolute_path(value, basedir)
    if not os.path.isfile(path):
        raise ArgumentTypeError(f"Should be a file that already exists: {path!r}")
    return os.path.abspath(path)


def check_positive_int(value: Union[str, int]) -> int:
    """
    Get an integer which must be at least one.

    >>> check_positive_int("4")
    4
    >>> check_positive_int("0")
    Traceback (most recent call last):
      ...
    argparse.ArgumentTypeError: 0 is not a positive integer
    """
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1:
        raise ArgumentTypeError(f"{value} is not a positive integer")
    return number


def relative_path(value: str, basedir: Optional[str] = None) -> str:
    """Get the path relative to the current directory."""
    if not value:
        raise ArgumentTypeError("Should not be set to an empty string.")
    return os.path.relpath(_absolute_path(value, basedir), os.getcwd())


class FilterOption:
    """Argparse type for a filter, the value must be a valid regular expression."""

    def __init__(self, regex: str) -> None:
        try:
            re.compile(regex)
        except re.error as e:
            raise ArgumentTypeError(
                f"invalid regular expression {regex!r}: {e}"
            ) from None
        self.regex = regex

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.regex!r})"


class NonEmptyFilterOption(FilterOption):
    """A filter which must not be empty, an empty exclude would exclude everything."""

    def __init__(self, regex: str) -> None:
        if not regex:
            raise ArgumentTypeError("filter cannot be empty")
        super().__init__(regex)


class PathFilterOption(NonEmptyFilterOption):
    """A filter for file paths, these are always matched with forward slashes."""

    def __init__(self, regex: str) -> None:
        super().__init__(regex)
        # A literal backslash, or a backslash which isn't a known regex escape,
        # is most likely meant as a Windows path separator.
        suggestion, count = re.subn(
            r"\\\\|\\(?=[^\WabfnrtuUvx0-9AbBdDsSwWZ])", "/", regex
        )
        if count:
            LOGGER.warning("file filters must use forward slashes as path separators")
            LOGGER.warning(f"your filter : {regex}")
            LOGGER.warning(f"did you mean: {suggestion}")


class OutputOrDefault:
    """An output path given on the command line.

    - ``None``: the output is not requested
    - ``OutputOrDefault(None)``: requested, but use the path of --output
    - ``OutputOrDefault(path)``: requested with this path, a path ending
      with a separator is a directory

    The file is created and removed again to report problems early.
    """

    def __init__(self, value: Optional[str], basedir: Optional[str] = None) -> None:
        self.value = value
        self.is_dir = False
        if value is None or value == "-":
            self.abspath = "-"
            return

        path = str(value).replace("\\", os.sep).replace("/", os.sep)
        self.is_dir = path.endswith(os.sep)
        self.abspath = _absolute_path(path, basedir)
        try:
            if self.is_dir:
                self.abspath += os.sep
                os.makedirs(self.abspath, exist_ok=True)
            else:
                with open(self.abspath, "w", encoding="utf-8"):
                    pass
                os.unlink(self.abspath)
        except OSError as e:
            kind = "directory" if self.is_dir else "file"
            raise ArgumentTypeError(
                f"Could not create output {kind} {value!r}: {e.strerror}"
            ) from None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    @classmethod
    def choose(
        cls,
        choices: list[Optional[OutputOrDefault]],
        default: Optional[OutputOrDefault] = None,
    ) -> Optional[OutputOrDefault]:
        """
        Get the first choice with a path, else the default.

        >>> OutputOrDefault.choose([None, OutputOrDefault(None)], default=OutputOrDefault("-"))
        OutputOrDefault('-')
        """
        for choice in choices:
            if choice is not None and not isinstance(choice, OutputOrDefault):
                raise TypeError(f"expected OutputOrDefault instance, got: {choice}")
            if choice is not None and choice.value is not None:
                return choice
        return default


class Options:
    """The values of all options, as attributes."""

    def __init__(self, **kwargs: Any) -> None:
        self.__dict__.update(kwargs)

    def get(self, name: str) -> Any:
        """Get an option value, None if the option is unknown."""
        return self.__dict__.get(name)


class DotcovrConfigOption:
    # pylint: disable=too-many-instance-attributes,too-few-public-methods,redefined-builtin
    r"""
    The declaration of a setting, used for argparse and the configuration files.

    Arguments:
        name (str):
            The attribute in ``Options``.
        flags (list of str, optional):
            The command line flags.

    Keyword Arguments:
        help (str):
            The help text, ``{default}`` and the other attributes
            can be used as placeholders.
        action (str, optional):
            ``store`` (default), ``store_const``, ``append``,
            or ``store_true`` / ``store_false`` as shortcut for ``store_const``.
        const (any, optional):
            The value stored by ``store_const`` or a ``nargs="?"`` flag
            without argument.
        config (str or bool, optional):
            The key in configuration files. True derives it from the first
            long flag, False means the option isn't read from configuration files.
        default (any, optional):
            The value if the option isn't given.
        group (str, optional):
            The key of the group in ``DOTCOVR_CONFIG_OPTION_GROUPS``.
        metavar (str, optional):
            The name of the value in the help.
        nargs (int or str, optional):
            The number of values, like for argparse.
        positional (bool, optional):
            Whether it is a positional argument, then it has no flags.
        type (callable, optional):
            Convert and check a value, raises ``ArgumentTypeError``.
    """

    def __init__(
        self,
        name: str,
        flags: Optional[list[str]] = None,
        *,
        help: str,
        action: str = "store",
        const: Any = None,
        config: Union[str, bool] = True,
        default: Any = None,
        group: Optional[str] = None,
        metavar: Optional[str] = None,
        nargs: Union[int, str, None] = None,
        positional: bool = False,
        type: Optional[Union[Callable[[str], Any], Type[FilterOption]]] = None,
    ) -> None:
        flags = [] if flags is None else flags
        if flags and positional:
            raise AssertionError(f"Option {name} cannot have flags and be positional")
        if not help:
            raise AssertionError(f"Option {name} needs a help text")

        if action in ("store_true", "store_false"):
            if const is not None or default is not None:
                raise AssertionError(f"Option {name}: {action} sets const and default")
            const = action == "store_true"
            default = not const
            action = "store_const"
        if action not in ("store", "store_const", "append"):
            raise AssertionError(f"Unknown action {action!r}")

        self.name = name
        self.flags = flags
        self.action = action
        self.config_keys = _derive_configuration_key(config, flags=flags)
        self.const = const
        self.default = default
        self.group = group
        self.metavar = metavar
        self.nargs = nargs
        self.positional = positional
        self.type = type

        if not (flags or positional or self.config_keys):
            raise AssertionError(f"Option {name} can't be set at all")

        help = help.format(**self.__dict__)
        if (flags or positional) and self.config_keys:
            help += f" Config key(s): {', '.join(self.config_keys)}."
        self.help = help

    def __repr__(self) -> str:
        kwargs = ", ".join(
            f"{k}={v!r}"
            for k, v in sorted(self.__dict__.items())
            if k not in ("name", "flags")
        )
        return f"DotcovrConfigOption({self.name!r}, {self.flags!r}, {kwargs})"


def _derive_configuration_key(
    config: Union[str, bool],
    *,
    flags: list[str],
) -> Optional[list[str]]:
    """
    Get the keys used in configuration files.

    >>> _derive_configuration_key(True, flags=["-j", "--parallel"])
    ['parallel']
    >>> _derive_configuration_key("report", flags=[])
    ['report']
    >>> _derive_configuration_key(False, flags=["--config"]) is None
    True
    """
    if config is False:
        return None
    if isinstance(config, str):
        return [config]
    keys = [flag[2:] for flag in flags if flag.startswith("--")]
    if not keys:
        raise AssertionError(f"Could not derive a config key from {flags!r}.")
    return keys
