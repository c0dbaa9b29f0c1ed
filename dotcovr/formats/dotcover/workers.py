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


import logging
from queue import Empty, Queue
from threading import RLock, Thread
from typing import Any, Callable, Optional

LOGGER = logging.getLogger("dotcovr")

# A work item, None tells a thread to stop.
WorkItem = Optional[tuple[Callable[..., None], tuple[Any, ...], dict[str, Any]]]


class Workers:
    """
    A pool of threads running the work items given to ``add``.

    Each thread gets its own context dictionary created by the factory,
    the entries of the context are passed as keyword arguments to the
    work items. Results are stored in the context and the contexts are
    returned by ``wait``, so the threads share no mutable data.

    The first exception of a work item stops the pool, the remaining
    work items are dropped and ``wait`` raises the exception again.
    """

    def __init__(self, number: int, context: Callable[[], dict[str, Any]]) -> None:
        if number < 1:
            raise AssertionError("At least one executer is needed.")
        self.queue: "Queue[WorkItem]" = Queue()
        self.lock = RLock()
        self.exceptions = list[Exception]()
        self.contexts = [context() for _ in range(number)]
        self.threads = [
            Thread(target=self._run, args=(c,), name=f"Worker-{i}")
            for i, c in enumerate(self.contexts)
        ]
        for thread in self.threads:
            thread.start()

    def __enter__(self) -> "Workers":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.size() != 0:
            raise AssertionError(
                "Sanity check, you must call wait on the contextmanager to get the context of the workers."
            )

    def _run(self, context: dict[str, Any]) -> None:
        while (item := self.queue.get()) is not None:
            work, args, kwargs = item
            try:
                work(*args, **kwargs, **context)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                self.stop_with_exception(exc)
                return

    def add(self, work: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        """Queue a work item, ignored if the pool is already stopped."""
        with self.lock:
            if not self.exceptions:
                self.queue.put((work, args, kwargs))

    def _stop_threads(self) -> None:
        with self.lock:
            for _ in self.threads:
                self.queue.put(None)

    def stop_with_exception(self, exc: Exception) -> None:
        """Drop the remaining work items and remember the exception."""
        with self.lock:
            while True:
                try:
                    self.queue.get_nowait()
                except Empty:
                    break
            self._stop_threads()
            self.exceptions.append(exc)

    def size(self) -> int:
        """The number of running threads."""
        return len(self.threads)

    def wait(self) -> list[dict[str, Any]]:
        """Wait until all work items are done and get the contexts of the threads."""
        self._stop_threads()
        for thread in self.threads:
            # A timeout keeps the main thread responsive to Ctrl+C
            while thread.is_alive():
                thread.join(timeout=1)
        self.threads = []

        for exc in self.exceptions[1:]:
            LOGGER.debug(f"Worker thread raised additional exception: {exc}")
        if self.exceptions:
            raise self.exceptions[0]

        return self.contexts
