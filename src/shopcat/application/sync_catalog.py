"""Application service: keep the CatalogCache in step with the feed.

The pump loop blocks on the subscription, so it runs on the background
context; each event is handed to the cache on the interactive context.
Events that belong to a subscription which has since been cancelled are
discarded there, so nothing reaches the cache after ``stop()``.
"""

from __future__ import annotations

import logging
import threading

from shopcat.application.catalog_cache import CatalogCache
from shopcat.application.execution import ExecutionContext
from shopcat.domain.exceptions import FeedError
from shopcat.domain.gateway.catalog_feed import (
    FeedEvent,
    RemoteCatalogFeed,
    Snapshot,
    Subscription,
)

logger = logging.getLogger(__name__)


class CatalogSync:

    def __init__(
        self,
        feed: RemoteCatalogFeed,
        cache: CatalogCache,
        collection_name: str,
        interactive: ExecutionContext,
        background: ExecutionContext,
    ) -> None:
        self._feed = feed
        self._cache = cache
        self._collection_name = collection_name
        self._interactive = interactive
        self._background = background
        self._lock = threading.Lock()
        self._subscription: Subscription | None = None

    @property
    def running(self) -> bool:
        with self._lock:
            return self._subscription is not None

    def start(self) -> None:
        """Subscribe (if not already subscribed) and start delivering."""
        with self._lock:
            if self._subscription is not None:
                return
            subscription = self._feed.subscribe(self._collection_name)
            self._subscription = subscription
        try:
            self._background.submit(self._pump, subscription)
        except RuntimeError:
            # Background pool already shut down.
            with self._lock:
                if self._subscription is subscription:
                    self._subscription = None
            subscription.cancel()
            raise
        logger.info("Subscribed to catalog collection '%s'", self._collection_name)

    def stop(self) -> None:
        with self._lock:
            subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.cancel()
            logger.info("Unsubscribed from catalog collection '%s'", self._collection_name)

    def refresh(self) -> None:
        """Re-run the subscription routine so the cache gets a fresh snapshot."""
        self.stop()
        self.start()

    # --- Delivery -------------------------------------------------------------

    def _pump(self, subscription: Subscription) -> None:
        for event in subscription:
            self._interactive.submit(self._deliver, subscription, event)
        logger.debug("Catalog subscription ended")

    def _deliver(self, subscription: Subscription, event: FeedEvent) -> None:
        if subscription.cancelled:
            return
        if isinstance(event, FeedError):
            logger.warning("Catalog feed error: %s", event.message)
            self._cache.on_feed_error(event)
        elif isinstance(event, Snapshot):
            self._cache.on_snapshot(event.records)
