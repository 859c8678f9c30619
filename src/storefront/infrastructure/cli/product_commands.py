"""CLI commands for browsing the catalog."""

from __future__ import annotations

import asyncio

import click

from storefront.application.browse_catalog import ListProductsHandler, ShowProductHandler
from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    NetworkFailureError,
)
from storefront.infrastructure.bootstrap import product_catalog


@click.command("list")
@click.option("--search", default="", help="Only show products whose name or description contains this text.")
def product_list(search: str) -> None:
    """List the products in the store."""

    async def run() -> list[ProductDTO]:
        async with product_catalog() as catalog:
            return await ListProductsHandler(catalog=catalog).handle(search)

    try:
        products = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{len(products)} Products")
    if search:
        click.echo(f'Showing results for "{search}"')
    if not products:
        click.echo("No products found.")
        return

    click.echo()
    click.echo(f"{'ID':<38} {'Name':<28} {'Price':>16} {'Stock':>8}")
    click.echo("-" * 93)
    for p in products:
        stock = str(p.available_quantity) if p.in_stock else "out"
        click.echo(f"{p.id:<38} {p.name:<28} {p.price:>16} {stock:>8}")


def _display_product(dto: ProductDTO) -> None:
    click.echo(dto.name)
    if dto.low_stock:
        click.echo(f"Only {dto.available_quantity} left")
    click.echo(f"{dto.price} per unit")
    click.echo()
    click.echo(dto.description)
    click.echo()
    if dto.in_stock:
        click.echo(f"In Stock: {dto.available_quantity} units available")
    else:
        click.echo("Out of Stock: currently unavailable")
    if dto.variants:
        click.echo("Options:")
        for variant in dto.variants:
            click.echo(f"  - {variant}")
    if dto.images:
        click.echo("Images:")
        for image in dto.images:
            click.echo(f"  {image}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID to display.")
@click.pass_context
def product_show(ctx: click.Context, product_id: str) -> None:
    """Show details of a single product."""

    async def run() -> ProductDTO:
        async with product_catalog() as catalog:
            return await ShowProductHandler(catalog=catalog).handle(product_id)

    try:
        dto = asyncio.run(run())
    except (EntityNotFoundError, NetworkFailureError) as exc:
        click.echo(str(exc), err=True)
        ctx.invoke(product_list)
        return
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)
