"""CLI commands for the order confirmation page."""

from __future__ import annotations

import asyncio

import click

from storefront.application.dto import OrderDTO, Redirect
from storefront.application.order_confirmation import OrderConfirmationView
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    clipboard,
    contact_channel,
    order_repository,
    payment_instructions,
)
from storefront.infrastructure.cli.cart_commands import cart_show


def _view() -> OrderConfirmationView:
    return OrderConfirmationView(
        payment=payment_instructions(),
        contact=contact_channel(),
        clipboard=clipboard(),
    )


async def _load(order_id: str) -> tuple[OrderConfirmationView, OrderDTO | Redirect]:
    view = _view()
    async with order_repository() as orders:
        return view, await view.load(order_id, orders)


def _load_or_redirect(ctx: click.Context, order_id: str) -> OrderConfirmationView | None:
    try:
        view, result = asyncio.run(_load(order_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if isinstance(result, Redirect):
        click.echo(f"Order {order_id} not found.", err=True)
        ctx.invoke(cart_show)
        return None
    return view


def _display_order(view: OrderConfirmationView) -> None:
    dto = view.order
    click.echo("Order Placed Successfully!")
    click.echo(f"Order ID: {dto.id}  (status={dto.status})")
    if dto.created_at:
        click.echo(f"Created:  {dto.created_at}")
    click.echo()

    click.echo(f"  {'Product':<32} {'Qty':>5} {'Price':>16} {'Total':>16}")
    click.echo(f"  {'-'*72}")
    for item in dto.items:
        name = f"{item.product_name} ({item.variant})" if item.variant else item.product_name
        click.echo(
            f"  {name:<32} {item.quantity:>5} {item.unit_price:>16} {item.line_total:>16}"
        )
    click.echo(f"  {'-'*72}")
    click.echo(f"  {'Total Amount':<38} {dto.total:>33}")

    if dto.notes:
        click.echo()
        click.echo(f"Notes: {dto.notes}")

    click.echo()
    click.echo("Customer")
    click.echo(f"  {dto.full_name}")
    if dto.company_name:
        click.echo(f"  {dto.company_name}")
    click.echo(f"  {dto.phone}")
    click.echo(f"  {dto.email}")
    click.echo(f"  {dto.address}")

    payment = view.payment
    click.echo()
    click.echo("Bank Transfer Details")
    click.echo(f"  Account Name:       {payment.account_name}")
    click.echo(f"  Bank Name:          {payment.bank_name}")
    click.echo(f"  Account Number:     {payment.account_number}")
    click.echo(f"  Amount to Transfer: {dto.total}")
    click.echo()
    click.echo(f"Contact sales: {view.contact_link()}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_context
def order_show(ctx: click.Context, order_id: str) -> None:
    """Show an order with its payment instructions."""
    view = _load_or_redirect(ctx, order_id)
    if view is not None:
        _display_order(view)


@click.command("copy-id")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.pass_context
def order_copy_id(ctx: click.Context, order_id: str) -> None:
    """Copy the order ID to the clipboard."""
    view = _load_or_redirect(ctx, order_id)
    if view is None:
        return

    copied = view.copy_order_id()
    click.echo(f"Order ID {copied} copied to clipboard.")


@click.command("copy-account")
def order_copy_account() -> None:
    """Copy the bank account number for the transfer to the clipboard."""
    copied = _view().copy_account_number()
    click.echo(f"Account number {copied} copied to clipboard.")


@click.command("contact")
@click.option("--id", "order_id", required=True, help="Order ID to ask about.")
@click.pass_context
def order_contact(ctx: click.Context, order_id: str) -> None:
    """Open a pre-filled WhatsApp message to sales about an order."""
    view = _load_or_redirect(ctx, order_id)
    if view is None:
        return

    link = view.contact_link()
    click.echo(link)
    click.launch(link)
