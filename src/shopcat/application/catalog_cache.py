"""CatalogCache: the observable in-memory projection of the catalog.

The cache is a single owned state container.  Writers can only ask it to
"replace everything with this snapshot"; readers get immutable tuples.
Replacement is serialized by a lock, so a reader on any thread sees one
whole snapshot, never a mix of two.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any

from shopcat.domain.exceptions import DomainException, FeedError
from shopcat.domain.model.product import Product

logger = logging.getLogger(__name__)

Listener = Callable[[tuple[Product, ...]], None]
Notifier = Callable[[str], None]


class SelectionPolicy(Enum):
    """What an empty snapshot does to the current selection."""

    RETAIN = "retain"
    CLEAR = "clear"


DEFAULT_SELECTION_POLICY = SelectionPolicy.RETAIN


def _log_notification(message: str) -> None:
    logger.warning(message)


class CatalogCache:

    def __init__(
        self,
        notifier: Notifier | None = None,
        selection_policy: SelectionPolicy = DEFAULT_SELECTION_POLICY,
    ) -> None:
        self._notifier = notifier or _log_notification
        self._selection_policy = selection_policy
        self._lock = threading.RLock()
        self._products: tuple[Product, ...] = ()
        self._selection: Product | None = None
        self._listeners: list[Listener] = []

    # --- Writes (feed delivery and refresh only) ------------------------------

    def on_snapshot(self, records: Iterable[Mapping[str, Any]]) -> None:
        """Replace the whole catalog with the decodable ``records``."""
        products = []
        for record in records:
            try:
                products.append(Product.from_record(record))
            except DomainException as exc:
                logger.debug("Dropping malformed record: %s", exc)

        with self._lock:
            self._products = tuple(products)
            if self._products:
                self._selection = self._products[0]
            elif self._selection_policy is SelectionPolicy.CLEAR:
                self._selection = None
            current = self._products
            listeners = list(self._listeners)

        logger.debug("Catalog replaced with %d products", len(current))
        for listener in listeners:
            listener(current)

    def on_feed_error(self, error: FeedError) -> None:
        """Tell the user; keep whatever the cache already holds."""
        self._notifier(f"Failed to fetch products: {error.message}")

    # --- Reads ----------------------------------------------------------------

    def list(self) -> tuple[Product, ...]:
        with self._lock:
            return self._products

    @property
    def selection(self) -> Product | None:
        with self._lock:
            return self._selection

    def get(self, product_id: str) -> Product | None:
        for product in self.list():
            if product.id == product_id:
                return product
        return None

    # --- Observers ------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot; returns an unsubscribe."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe
