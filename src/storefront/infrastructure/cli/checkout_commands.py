"""CLI command for checkout."""

from __future__ import annotations

import asyncio

import click

from storefront.application.checkout import ORDER_FAILED_MESSAGE, CheckoutWorkflow
from storefront.application.dto import CartDTO, CheckoutForm, Redirect, View
from storefront.domain.exceptions import DomainException, NetworkFailureError
from storefront.infrastructure.bootstrap import cart_store, order_repository
from storefront.infrastructure.cli.cart_commands import cart_show, display_cart
from storefront.infrastructure.cli.order_commands import order_show


@click.command("checkout")
@click.option("--full-name", default="", help="Full name (required).")
@click.option("--phone", default="", help="Phone number (required).")
@click.option("--email", default="", help="Email address (required).")
@click.option("--address", default="", help="Delivery address (required).")
@click.option("--company", "company_name", default="", help="Company name.")
@click.option("--notes", default="", help="Special requests or delivery instructions.")
@click.pass_context
def checkout(
    ctx: click.Context,
    full_name: str,
    phone: str,
    email: str,
    address: str,
    company_name: str,
    notes: str,
) -> None:
    """Place an order for everything in the cart."""
    form = CheckoutForm(
        full_name=full_name,
        phone=phone,
        email=email,
        address=address,
        company_name=company_name,
        notes=notes,
    )

    async def run() -> tuple[Redirect, CartDTO | None]:
        async with cart_store() as store:
            workflow = CheckoutWorkflow(store)
            redirect = await workflow.load()
            if redirect is not None:
                return redirect, None
            summary = workflow.summary
            async with order_repository() as orders:
                return await workflow.submit(form, orders), summary

    try:
        redirect, summary = asyncio.run(run())
    except NetworkFailureError:
        raise click.ClickException(ORDER_FAILED_MESSAGE)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if redirect.view is View.CART:
        click.echo("Your cart is empty, nothing to check out.", err=True)
        ctx.invoke(cart_show)
        return

    display_cart(summary)
    click.echo()
    ctx.invoke(order_show, order_id=redirect.order_id)
