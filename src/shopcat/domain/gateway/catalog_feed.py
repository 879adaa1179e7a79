"""Push-based catalog feed port.

A feed is subscribed to by collection name and hands back a
``Subscription``: a lazy, never-ending, non-restartable stream of
events.  Each event is either a ``Snapshot`` (the complete current
collection) or a ``FeedError``.  An error event does not end the stream;
only ``cancel()`` (consumer side) or ``close()`` (feed side) does.
"""

from __future__ import annotations

import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from shopcat.domain.exceptions import FeedError


@dataclass(frozen=True)
class Snapshot:
    """Every record of the collection at one instant, in delivery order."""

    records: tuple[Mapping[str, Any], ...]


FeedEvent = Union[Snapshot, FeedError]

_END = object()


class Subscription:
    """A single registration with a feed.

    The feed side calls ``publish`` and ``close``; the consumer iterates
    (or polls with ``get``) and calls ``cancel`` on teardown.  Events still
    queued when the consumer cancels are dropped.
    """

    def __init__(self, on_cancel: Callable[[], None] | None = None) -> None:
        self._queue: queue.Queue = queue.Queue()
        self._on_cancel = on_cancel
        self._cancelled = threading.Event()
        self._closed = threading.Event()
        self._exhausted = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def active(self) -> bool:
        return not (self._cancelled.is_set() or self._closed.is_set())

    # --- Feed side ------------------------------------------------------------

    def publish(self, event: FeedEvent) -> None:
        if self.active:
            self._queue.put(event)

    def close(self) -> None:
        """End the stream from the feed side (feed shut down)."""
        if not self._closed.is_set():
            self._closed.set()
            self._queue.put(_END)

    # --- Consumer side --------------------------------------------------------

    def cancel(self) -> None:
        """Unregister from the feed; iteration stops promptly."""
        if self._cancelled.is_set():
            return
        self._cancelled.set()
        self._queue.put(_END)
        if self._on_cancel is not None:
            self._on_cancel()

    def get(self, timeout: float | None = None) -> FeedEvent | None:
        """Next event, or None on timeout or once the stream has ended."""
        if self._exhausted or self._cancelled.is_set():
            self._exhausted = True
            return None
        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
        if item is _END or self._cancelled.is_set():
            self._exhausted = True
            return None
        return item

    def __iter__(self) -> Subscription:
        return self

    def __next__(self) -> FeedEvent:
        event = self.get()
        if event is None:
            raise StopIteration
        return event


class RemoteCatalogFeed(ABC):

    @abstractmethod
    def subscribe(self, collection_name: str) -> Subscription:
        """Register for snapshots of ``collection_name``.

        Implementations deliver the current snapshot first, then one
        snapshot per change, until the subscription is cancelled.
        """
