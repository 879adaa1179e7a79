"""Execution contexts.

Two kinds are wired by the composition root:

- the *interactive* context: a single worker; every change to observable
  state and every user-facing callback runs here;
- the *background* context: a small pool for blocking I/O (file copies,
  uploads, store calls, feed delivery).

Tests pass ``InlineContext`` for both so the whole pipeline runs
synchronously on the calling thread.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

logger = logging.getLogger(__name__)


class ExecutionContext(ABC):

    @abstractmethod
    def submit(self, fn: Callable[..., Any], *args: Any) -> None:
        """Schedule ``fn(*args)``.  Never raises what ``fn`` raises."""

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work."""


class InlineContext(ExecutionContext):
    """Runs work immediately on the caller's thread."""

    def submit(self, fn: Callable[..., Any], *args: Any) -> None:
        try:
            fn(*args)
        except Exception:
            logger.exception("Unhandled error in inline task %r", fn)


class ThreadContext(ExecutionContext):
    """A named thread pool.  ``max_workers=1`` gives strict FIFO ordering."""

    def __init__(self, name: str, max_workers: int = 1) -> None:
        self.name = name
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=name
        )

    def submit(self, fn: Callable[..., Any], *args: Any) -> None:
        future = self._executor.submit(fn, *args)
        future.add_done_callback(self._report)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _report(self, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error(
                "Unhandled error in %s task", self.name, exc_info=exc
            )
