"""Shared plumbing for CLI commands: build the app, wait, tear down."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import click

from shopcat.application.operation import Operation, OperationStatus
from shopcat.domain.model.product import Product
from shopcat.infrastructure.bootstrap import CatalogApp, build_app
from shopcat.infrastructure.config import Settings


def _notify(message: str) -> None:
    click.secho(message, fg="yellow", err=True)


@contextmanager
def app_session(settings: Settings) -> Iterator[CatalogApp]:
    app = build_app(settings, notifier=_notify)
    try:
        yield app
    finally:
        app.shutdown()


def await_catalog(app: CatalogApp, timeout: float) -> tuple[Product, ...]:
    """Subscribe and block until the first snapshot lands in the cache."""
    arrived = threading.Event()
    unsubscribe = app.cache.subscribe(lambda _products: arrived.set())
    try:
        app.sync.start()
        if not arrived.wait(timeout):
            raise click.ClickException("Timed out waiting for the catalog feed")
    finally:
        unsubscribe()
    return app.cache.list()


def await_operation(operation: Operation, timeout: float) -> None:
    """Block until ``operation`` finishes; turn failure into a ClickException."""
    if not operation.wait(timeout):
        raise click.ClickException(f"Timed out waiting for {operation.name}")
    if operation.status is OperationStatus.FAILED:
        raise click.ClickException(str(operation.error))
