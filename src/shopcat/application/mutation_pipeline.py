"""MutationPipeline: the asynchronous surface presentation code calls.

Each method returns immediately with an ``Operation`` handle.  The store
and image-host I/O runs on the background context; callbacks run on the
interactive context with either the result or the typed error.

How the cache catches up after each mutation differs:

- ``update`` refreshes the catalog subscription itself once the store
  write succeeds, before ``on_success`` fires;
- ``create`` leaves it to the feed's next push (unless
  ``refresh_after_create`` is set);
- ``delete`` is fire-and-forget and always waits for the next push.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from shopcat.application.create_product import CreateProductHandler
from shopcat.application.delete_product import DeleteProductHandler
from shopcat.application.execution import ExecutionContext
from shopcat.application.operation import (
    ErrorCallback,
    Operation,
    SuccessCallback,
    launch,
)
from shopcat.application.sync_catalog import CatalogSync
from shopcat.application.update_product import UpdateProductHandler
from shopcat.domain.gateway.image_source import ImageResource
from shopcat.domain.model.product import Product

logger = logging.getLogger(__name__)


class MutationPipeline:

    def __init__(
        self,
        create_handler: CreateProductHandler,
        update_handler: UpdateProductHandler,
        delete_handler: DeleteProductHandler,
        sync: CatalogSync,
        interactive: ExecutionContext,
        background: ExecutionContext,
        refresh_after_create: bool = False,
    ) -> None:
        self._create_handler = create_handler
        self._update_handler = update_handler
        self._delete_handler = delete_handler
        self._sync = sync
        self._interactive = interactive
        self._background = background
        self._refresh_after_create = refresh_after_create

    def create(
        self,
        draft: Product,
        image: ImageResource,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Operation:
        """Upload ``image`` then persist ``draft``; ``on_success(product_id)``."""
        then = self._refresh if self._refresh_after_create else None
        return launch(
            f"create '{draft.name}'",
            lambda: self._create_handler.handle(draft, image),
            self._background,
            self._interactive,
            on_success=on_success,
            on_error=on_error,
            then=then,
        )

    def update(
        self,
        product_id: str,
        fields: Mapping[str, Any],
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Operation:
        """Merge ``fields`` into the stored product, then refresh the cache."""
        fields = dict(fields)
        return launch(
            f"update {product_id}",
            lambda: self._update_handler.handle(product_id, fields),
            self._background,
            self._interactive,
            on_success=on_success,
            on_error=on_error,
            then=self._refresh,
        )

    def delete(self, product_id: str) -> Operation:
        """Fire-and-forget delete; the outcome is only logged."""
        return launch(
            f"delete {product_id}",
            lambda: self._delete_handler.handle(product_id),
            self._background,
            self._interactive,
            on_success=lambda: logger.info("Product %s deleted", product_id),
            on_error=lambda exc: logger.error(
                "Error deleting product %s: %s", product_id, exc
            ),
        )

    def _refresh(self, _result: Any) -> None:
        self._sync.refresh()
