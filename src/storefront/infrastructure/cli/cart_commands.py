"""CLI commands for the shopping cart."""

from __future__ import annotations

import asyncio

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.cart_view import CartView
from storefront.application.dto import CartDTO
from storefront.domain.exceptions import DomainException
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Variant
from storefront.infrastructure.bootstrap import cart_store, product_catalog


def _parse_variant(raw: str | None) -> Variant | None:
    if raw is None:
        return None
    try:
        return Variant.parse(raw)
    except DomainException as exc:
        raise click.BadParameter(str(exc))


def display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying the cart."""
    noun = "item" if dto.item_count == 1 else "items"
    click.echo(f"Shopping Cart: {dto.item_count} {noun} in your cart")

    if dto.is_empty:
        click.echo("Your cart is empty. Start shopping with 'storefront product list'.")
        return

    click.echo()
    click.echo(f"  {'ID':<38} {'Product':<28} {'Qty':>5} {'Price':>16} {'Total':>16}")
    click.echo(f"  {'-'*107}")
    for item in dto.items:
        name = f"{item.product_name} ({item.variant})" if item.variant else item.product_name
        click.echo(
            f"  {item.product_id:<38} {name:<28} {item.quantity:>5} "
            f"{item.unit_price:>16} {item.line_total:>16}"
        )
    click.echo(f"  {'-'*107}")
    click.echo(f"  {'Total':<73} {dto.total:>33}")


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID to add.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Number of units.")
@click.option("--variant", default=None, help="Product option as 'Name=Value'.")
def cart_add(product_id: str, quantity: int, variant: str | None) -> None:
    """Add a product to the cart (replaces an existing line)."""
    selected = _parse_variant(variant)

    async def run() -> CartLine:
        async with cart_store() as store, product_catalog() as catalog:
            handler = AddToCartHandler(catalog=catalog, cart_store=store)
            return await handler.handle(product_id, quantity=quantity, variant=selected)

    try:
        line = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Successfully added to cart: {line.product_name} x{line.quantity} "
        f"({line.line_total})"
    )


@click.command("show")
def cart_show() -> None:
    """Show the cart contents and totals."""

    async def run() -> CartDTO:
        async with cart_store() as store:
            return await CartView(store).load()

    try:
        dto = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("set")
@click.option("--id", "product_id", required=True, help="Product ID in the cart.")
@click.option("--quantity", required=True, type=int, help="New quantity (at least 1).")
def cart_set(product_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""

    async def run() -> CartDTO:
        async with cart_store() as store:
            view = CartView(store)
            await view.load()
            return await view.change_quantity(product_id, quantity)

    try:
        dto = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID to remove.")
def cart_remove(product_id: str) -> None:
    """Remove a product from the cart."""

    async def run() -> CartDTO:
        async with cart_store() as store:
            view = CartView(store)
            await view.load()
            return await view.remove(product_id)

    try:
        dto = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)
