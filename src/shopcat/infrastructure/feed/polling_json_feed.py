"""RemoteCatalogFeed over a JSON collection file.

Each subscription gets its own daemon thread that re-reads the file every
``poll_interval`` seconds and publishes a Snapshot whenever the content
changes.  Content that can't be read or decoded is published as a
FeedError and polling carries on; the next good read produces a Snapshot
again.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from shopcat.domain.exceptions import FeedError
from shopcat.domain.gateway.catalog_feed import (
    FeedEvent,
    RemoteCatalogFeed,
    Snapshot,
    Subscription,
)
from shopcat.infrastructure.persistence.json_document_store import collection_path

logger = logging.getLogger(__name__)


def decode_collection(text: str) -> Snapshot:
    """Turn collection file content into a Snapshot.

    A ``{key: document}`` object yields one record per document with the
    key injected as ``id``; a list is taken as records already carrying ids.
    """
    raw = json.loads(text)
    if isinstance(raw, dict):
        records = tuple(
            {**doc, "id": key} if isinstance(doc, dict) else doc
            for key, doc in raw.items()
        )
    elif isinstance(raw, list):
        records = tuple(raw)
    else:
        raise ValueError(f"unexpected collection type {type(raw).__name__}")
    return Snapshot(records=records)


class PollingJsonFeed(RemoteCatalogFeed):

    def __init__(self, data_dir: Path, poll_interval: float = 1.0) -> None:
        self._data_dir = data_dir
        self._poll_interval = poll_interval
        self._lock = threading.Lock()
        self._subscriptions: set[Subscription] = set()

    def subscribe(self, collection_name: str) -> Subscription:
        path = collection_path(self._data_dir, collection_name)
        stopped = threading.Event()

        def unregister() -> None:
            stopped.set()
            with self._lock:
                self._subscriptions.discard(subscription)

        subscription = Subscription(on_cancel=unregister)
        with self._lock:
            self._subscriptions.add(subscription)

        thread = threading.Thread(
            target=self._watch,
            args=(subscription, path, stopped),
            name=f"feed-{collection_name}",
            daemon=True,
        )
        thread.start()
        return subscription

    def close(self) -> None:
        """End every open subscription."""
        with self._lock:
            subscriptions = list(self._subscriptions)
            self._subscriptions.clear()
        for subscription in subscriptions:
            subscription.close()

    # --- Polling --------------------------------------------------------------

    def _watch(self, subscription: Subscription, path: Path, stopped: threading.Event) -> None:
        last_seen: Any = None
        while subscription.active:
            token, event = self._read(path)
            if token != last_seen:
                last_seen = token
                subscription.publish(event)
            if stopped.wait(self._poll_interval):
                break
        logger.debug("Stopped watching %s", path)

    @staticmethod
    def _read(path: Path) -> tuple[str, FeedEvent]:
        try:
            text = path.read_text(encoding="utf-8") if path.exists() else "{}"
        except OSError as exc:
            message = f"Cannot read {path.name}: {exc.strerror or exc}"
            return f"error:{message}", FeedError(message)
        try:
            return text, decode_collection(text)
        except ValueError as exc:
            logger.warning("Undecodable catalog content in %s: %s", path, exc)
            return text, FeedError(f"Corrupt catalog data in {path.name}: {exc}")
