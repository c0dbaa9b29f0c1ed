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

"""Packaging of dotcovr."""

from pathlib import Path
from runpy import run_path

from setuptools import find_packages, setup

HERE = Path(__file__).resolve().parent
version = run_path(str(HERE / "dotcovr" / "version.py"))["__version__"]
long_description = (HERE / "README.rst").read_text(encoding="utf-8")

setup(
    name="dotcovr",
    version=version,
    description="Read dotCover XML coverage reports into a line based coverage model.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    platforms=["any"],
    python_requires=">=3.9",
    packages=find_packages(include=["dotcovr*"]),
    install_requires=[
        "lxml",
        "colorlog",
        "tomli >= 1.1.0 ; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
        "dev": [
            "build",
            "coverage",
            "lxml-stubs",
            "mypy",
            "nox",
            "pytest",
            "pytest-cov",
            "ruff",
        ],
    },
    entry_points={
        "console_scripts": [
            "dotcovr=dotcovr.__main__:main",
        ],
    },
)
