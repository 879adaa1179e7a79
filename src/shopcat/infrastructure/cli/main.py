import logging

import click
from pydantic import ValidationError

from shopcat.infrastructure.cli.cart_commands import cart_checkout, cart_subtotal
from shopcat.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
    product_watch,
)
from shopcat.infrastructure.config import load_settings


@click.group()
@click.option("-v", "--verbose", count=True, help="More logging (-v info, -vv debug).")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """shopcat — storefront catalog manager"""
    try:
        settings = load_settings()
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration:\n{exc}")

    if verbose:
        level = logging.DEBUG if verbose > 1 else logging.INFO
    else:
        level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
    )
    ctx.obj = settings


@cli.group()
def product() -> None:
    """Manage catalog products."""


@cli.group()
def cart() -> None:
    """Cart subtotal and checkout."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
product.add_command(product_watch)
cart.add_command(cart_checkout)
cart.add_command(cart_subtotal)
