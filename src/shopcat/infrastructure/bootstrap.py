"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every adapter is built once here and handed down explicitly; nothing
below this module reaches for a shared global client.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from shopcat.application.catalog_cache import CatalogCache
from shopcat.application.checkout import Checkout, CheckoutHandler
from shopcat.application.create_product import CreateProductHandler
from shopcat.application.delete_product import DeleteProductHandler
from shopcat.application.execution import ExecutionContext, ThreadContext
from shopcat.application.mutation_pipeline import MutationPipeline
from shopcat.application.sync_catalog import CatalogSync
from shopcat.application.update_product import UpdateProductHandler
from shopcat.domain.model.cart import CartLedger
from shopcat.infrastructure.config import Settings
from shopcat.infrastructure.feed.polling_json_feed import PollingJsonFeed
from shopcat.infrastructure.files import ScratchDirMaterializer
from shopcat.infrastructure.http.imgur_client import ImgurClient
from shopcat.infrastructure.payments import StubPaymentGateway
from shopcat.infrastructure.persistence.json_document_store import (
    JsonDocumentStore,
    collection_path,
)


def product_store(settings: Settings) -> JsonDocumentStore:
    return JsonDocumentStore(collection_path(settings.data_dir, settings.store_collection))


def catalog_feed(settings: Settings) -> PollingJsonFeed:
    return PollingJsonFeed(settings.data_dir, poll_interval=settings.feed_poll_interval_seconds)


def image_host(settings: Settings) -> ImgurClient:
    return ImgurClient(
        client_id=settings.imgur_client_id,
        base_url=settings.imgur_base_url,
        timeout_seconds=settings.upload_timeout_seconds,
    )


@dataclass
class CatalogApp:
    """Everything a presentation layer needs, already wired."""

    cache: CatalogCache
    sync: CatalogSync
    pipeline: MutationPipeline
    ledger: CartLedger
    checkout: Checkout
    interactive: ExecutionContext
    background: ExecutionContext
    feed: PollingJsonFeed
    images: ImgurClient

    def shutdown(self) -> None:
        self.sync.stop()
        self.feed.close()
        self.background.shutdown(wait=True)
        self.interactive.shutdown(wait=True)
        self.images.close()


def build_app(
    settings: Settings,
    notifier: Callable[[str], None] | None = None,
) -> CatalogApp:
    interactive = ThreadContext("interactive", max_workers=1)
    # The feed pump holds one worker for as long as it is subscribed.
    background = ThreadContext("background", max_workers=settings.background_workers + 1)

    store = product_store(settings)
    feed = catalog_feed(settings)
    images = image_host(settings)

    cache = CatalogCache(notifier=notifier, selection_policy=settings.selection_policy)
    sync = CatalogSync(
        feed,
        cache,
        settings.feed_collection,
        interactive=interactive,
        background=background,
    )
    pipeline = MutationPipeline(
        create_handler=CreateProductHandler(
            store, images, ScratchDirMaterializer(settings.cache_dir)
        ),
        update_handler=UpdateProductHandler(store),
        delete_handler=DeleteProductHandler(store),
        sync=sync,
        interactive=interactive,
        background=background,
        refresh_after_create=settings.refresh_after_create,
    )
    checkout = Checkout(
        CheckoutHandler(StubPaymentGateway()),
        interactive=interactive,
        background=background,
    )
    return CatalogApp(
        cache=cache,
        sync=sync,
        pipeline=pipeline,
        ledger=CartLedger(),
        checkout=checkout,
        interactive=interactive,
        background=background,
        feed=feed,
        images=images,
    )
