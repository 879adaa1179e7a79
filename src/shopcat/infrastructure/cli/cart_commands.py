"""CLI commands for the shopping cart."""

from __future__ import annotations

import click

from shopcat.domain.exceptions import DomainException
from shopcat.infrastructure.bootstrap import CatalogApp
from shopcat.infrastructure.cli.session import app_session, await_catalog, await_operation


def _fill_cart(app: CatalogApp, product_ids: tuple[str, ...], timeout: float) -> None:
    await_catalog(app, timeout)
    for product_id in product_ids:
        product = app.cache.get(product_id)
        if product is None:
            raise click.ClickException(f"Product with ID '{product_id}' not found")
        try:
            app.ledger.add(product)
        except DomainException as exc:
            raise click.ClickException(str(exc))


def _print_cart(app: CatalogApp) -> None:
    for product in app.ledger.items():
        click.echo(f"  {product.name:<20} {str(product.price):>10}")
    click.echo(f"  {'-' * 31}")
    click.echo(f"  {'Subtotal':<20} {str(app.ledger.subtotal()):>10}")


@click.command("subtotal")
@click.option("--id", "product_ids", multiple=True, required=True, help="Product ID (repeatable).")
@click.option("--timeout", default=60.0, show_default=True, type=float, help="Seconds to wait.")
@click.pass_obj
def cart_subtotal(settings, product_ids: tuple[str, ...], timeout: float) -> None:
    """Show the subtotal for a set of products."""
    with app_session(settings) as app:
        _fill_cart(app, product_ids, timeout)
        _print_cart(app)


@click.command("checkout")
@click.option("--phone", required=True, help="Payer phone number.")
@click.option("--id", "product_ids", multiple=True, required=True, help="Product ID (repeatable).")
@click.option("--timeout", default=60.0, show_default=True, type=float, help="Seconds to wait.")
@click.pass_obj
def cart_checkout(settings, phone: str, product_ids: tuple[str, ...], timeout: float) -> None:
    """Pay for a set of products."""
    with app_session(settings) as app:
        _fill_cart(app, product_ids, timeout)
        _print_cart(app)
        operation = app.checkout.initiate(phone, app.ledger)
        await_operation(operation, timeout)

    click.echo(operation.result.message)
