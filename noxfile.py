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


import os
from pathlib import Path
import shutil

import nox

SOURCES = ["dotcovr", "tests"]
LINT_SOURCES = ["noxfile.py", "setup.py", *SOURCES]

# The dev extra of setup.py must list the same packages.
DEV_REQUIREMENTS = {
    "build": "build",
    "coverage": "coverage",
    "lxml-stubs": "lxml-stubs",
    "mypy": "mypy",
    "pytest": "pytest",
    "pytest-cov": "pytest-cov",
    "ruff": "ruff",
}

CI_RUN = "GITHUB_ACTION" in os.environ

nox.options.sessions = ["qa"]


def install_dev_requirements(session: nox.Session, *names: str) -> None:
    """Install the named development packages."""
    session.install(*[DEV_REQUIREMENTS[name] for name in names])


@nox.session(python=False)
def qa(session: nox.Session) -> None:
    """Run the linters and the tests."""
    for session_id in ("lint", "tests"):
        session.notify(session_id, [])


@nox.session(python=False)
def lint(session: nox.Session) -> None:
    """Run all linters."""
    for session_id in ("ruff_check", "ruff_format", "mypy"):
        session.notify(session_id)


@nox.session
def ruff_check(session: nox.Session) -> None:
    """Check the code with ruff."""
    install_dev_requirements(session, "ruff")
    session.run("ruff", "check", *(session.posargs or LINT_SOURCES))


@nox.session
def ruff_format(session: nox.Session) -> None:
    """Check the formatting with ruff, use ``-- <files>`` to reformat."""
    install_dev_requirements(session, "ruff")
    session.run("ruff", "format", *(session.posargs or ["--diff", *LINT_SOURCES]))


@nox.session
def mypy(session: nox.Session) -> None:
    """Check the types."""
    install_dev_requirements(session, "mypy", "lxml-stubs", "pytest")
    session.install("-e", ".")
    session.run("mypy", *(session.posargs or LINT_SOURCES))


@nox.session
def tests(session: nox.Session) -> None:
    """Run the unit tests and the doctests, set USE_COVERAGE=true for a coverage report."""
    use_coverage = os.environ.get("USE_COVERAGE") == "true"
    if use_coverage:
        install_dev_requirements(session, "pytest", "coverage", "pytest-cov")
    else:
        install_dev_requirements(session, "pytest")
    session.install("-e", ".")

    args = ["--doctest-modules"]
    if use_coverage:
        args += ["--cov=dotcovr", "--cov-branch"]
    args += session.posargs or SOURCES

    # The coverage report is also written if tests fail.
    try:
        session.run("python", "-m", "pytest", *args)
    finally:
        if use_coverage:
            session.run("coverage", "xml")
            if not CI_RUN:
                session.run("coverage", "html")


@nox.session
def build_distribution(session: nox.Session) -> None:
    """Build the sdist and the wheel into a clean dist directory."""
    install_dev_requirements(session, "build")
    shutil.rmtree(Path("dist"), ignore_errors=True)
    session.run("python", "-m", "build")
