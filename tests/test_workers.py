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

from threading import Event
from typing import Any

import pytest

from dotcovr.formats.dotcover.workers import Workers


def collect(value: int, *, results: list[int]) -> None:
    results.append(value * value)


@pytest.mark.parametrize("threads", [1, 3, 8])
def test_contexts_collect_results(threads: int) -> None:
    with Workers(threads, lambda: {"results": list[int]()}) as pool:
        assert pool.size() == threads
        for value in range(100):
            pool.add(collect, value)
        contexts = pool.wait()

    assert pool.size() == 0
    assert len(contexts) == threads
    assert sorted(r for c in contexts for r in c["results"]) == [
        v * v for v in range(100)
    ]


def test_at_least_one_thread() -> None:
    with pytest.raises(AssertionError):
        Workers(0, dict)


def test_wait_is_mandatory() -> None:
    with pytest.raises(AssertionError, match="you must call wait"):
        with Workers(1, dict) as pool:
            pool.add(lambda: None)
    # Stop the threads of the pool
    pool.wait()


def check_and_raise(number: int, **kwargs: Any) -> None:
    if number == 0:
        kwargs["first_started"].set()
        kwargs["queue_full"].wait()
        raise RuntimeError("Worker thread raised exception, workers canceled.")
    kwargs["mutable"].append(None)


@pytest.mark.parametrize("threads", [1, 2, 4])
def test_exception_is_raised_again(threads: int) -> None:
    mutable = list[None]()
    queue_full = Event()
    first_started = Event()
    with pytest.raises(RuntimeError) as exc_info:
        with Workers(
            threads,
            lambda: {
                "mutable": mutable,
                "first_started": first_started,
                "queue_full": queue_full,
            },
        ) as pool:
            pool.add(check_and_raise, 0)
            first_started.wait()
            for extra in range(1, 10000):
                pool.add(check_and_raise, extra)

            # Queue is filled
            queue_full.set()
            pool.wait()

    assert pool.size() == 0, "Workers are removed."
    assert len(pool.exceptions) == 1, "One exception available."
    if threads == 1:
        # The queue was drained before any other item was processed
        assert mutable == []
    assert exc_info.value.args[0] == "Worker thread raised exception, workers canceled."
