"""CLI commands for catalog products."""

from __future__ import annotations

import threading

import click

from shopcat.domain.exceptions import DomainException
from shopcat.domain.model.product import (
    FIELD_DESCRIPTION,
    FIELD_IMAGE_URL,
    FIELD_NAME,
    FIELD_PRICE,
    Product,
)
from shopcat.infrastructure.cli.session import app_session, await_catalog, await_operation

_timeout_option = click.option(
    "--timeout", default=60.0, show_default=True, type=float, help="Seconds to wait."
)


def _print_products(products: tuple[Product, ...]) -> None:
    if not products:
        click.echo("No products available.")
        return

    click.echo(f"{'ID':<34} {'Name':<20} {'Price':>10}  Image")
    click.echo("-" * 80)
    for p in products:
        click.echo(f"{p.id:<34} {p.name:<20} {str(p.price):>10}  {p.image_url}")


@click.command("list")
@_timeout_option
@click.pass_obj
def product_list(settings, timeout: float) -> None:
    """List all products in the catalog."""
    with app_session(settings) as app:
        _print_products(await_catalog(app, timeout))


@click.command("watch")
@click.pass_obj
def product_watch(settings) -> None:
    """Print the catalog every time it changes (Ctrl-C to stop)."""
    with app_session(settings) as app:
        def show(products: tuple[Product, ...]) -> None:
            _print_products(products)
            click.echo()

        app.cache.subscribe(show)
        app.sync.start()
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            click.echo("Stopped.")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", default="", help="Product description.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option(
    "--image",
    required=True,
    type=click.Path(dir_okay=False),
    help="Image file to upload.",
)
@_timeout_option
@click.pass_obj
def product_add(settings, name: str, description: str, price: str, image: str, timeout: float) -> None:
    """Upload an image and add a new product to the catalog."""
    try:
        draft = Product.create(name=name, description=description, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    with app_session(settings) as app:
        operation = app.pipeline.create(draft, image)
        await_operation(operation, timeout)

    click.echo(f"Product #{operation.result} '{draft.name}' added at {draft.price}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--image-url", default=None, help="New image link.")
@_timeout_option
@click.pass_obj
def product_update(
    settings,
    product_id: str,
    name: str | None,
    description: str | None,
    price: str | None,
    image_url: str | None,
    timeout: float,
) -> None:
    """Update some fields of a product; the others are left as stored."""
    candidates = {
        FIELD_NAME: name,
        FIELD_DESCRIPTION: description,
        FIELD_PRICE: price,
        FIELD_IMAGE_URL: image_url,
    }
    fields = {key: value for key, value in candidates.items() if value is not None}
    if not fields:
        raise click.UsageError("Give at least one of --name, --description, --price, --image-url")

    with app_session(settings) as app:
        refreshed = threading.Event()
        app.cache.subscribe(lambda _products: refreshed.set())
        operation = app.pipeline.update(product_id, fields)
        await_operation(operation, timeout)
        refreshed.wait(timeout)
        updated = app.cache.get(product_id)

    click.echo(f"Product #{product_id} updated.")
    if updated is not None:
        _print_products((updated,))


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@_timeout_option
@click.pass_obj
def product_delete(settings, product_id: str, timeout: float) -> None:
    """Request deletion of a product (outcome is logged, not reported)."""
    with app_session(settings) as app:
        operation = app.pipeline.delete(product_id)
        operation.wait(timeout)

    click.echo(f"Delete requested for product #{product_id}.")
