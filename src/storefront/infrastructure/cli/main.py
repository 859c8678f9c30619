import logging

import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_remove,
    cart_set,
    cart_show,
)
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.cli.order_commands import (
    order_contact,
    order_copy_account,
    order_copy_id,
    order_show,
)
from storefront.infrastructure.cli.product_commands import product_list, product_show
from storefront.infrastructure.config import get_settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at INFO level.")
def cli(verbose: bool) -> None:
    """Storefront: browse, cart, checkout"""
    configure_logging("INFO" if verbose else get_settings().LOG_LEVEL)


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def order() -> None:
    """View placed orders."""


# Register subcommands
product.add_command(product_list)
product.add_command(product_show)
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_set)
cart.add_command(cart_show)
cli.add_command(checkout)
order.add_command(order_contact)
order.add_command(order_copy_account)
order.add_command(order_copy_id)
order.add_command(order_show)
