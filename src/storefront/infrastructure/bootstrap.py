"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from storefront.application.dto import PaymentInstructions
from storefront.application.order_confirmation import Clipboard, ContactChannel
from storefront.infrastructure.clipboard import TerminalClipboard
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.persistence.json_cart_store import JsonCartStore
from storefront.infrastructure.remote.supabase_client import close, supabase_public
from storefront.infrastructure.remote.supabase_order_repository import (
    SupabaseOrderRepository,
)
from storefront.infrastructure.remote.supabase_product_catalog import (
    SupabaseProductCatalog,
)


def cart_store() -> JsonCartStore:
    """A new, unopened cart store; use it with ``async with``."""
    return JsonCartStore(get_settings().cart_path)


@asynccontextmanager
async def product_catalog() -> AsyncIterator[SupabaseProductCatalog]:
    """A catalog reader whose remote client is closed on exit."""
    settings = get_settings()
    client = await supabase_public(settings)
    try:
        yield SupabaseProductCatalog(client, settings.PRODUCTS_TABLE)
    finally:
        await close(client)


@asynccontextmanager
async def order_repository() -> AsyncIterator[SupabaseOrderRepository]:
    settings = get_settings()
    client = await supabase_public(settings)
    try:
        yield SupabaseOrderRepository(client, settings.ORDERS_TABLE)
    finally:
        await close(client)


def payment_instructions() -> PaymentInstructions:
    settings = get_settings()
    return PaymentInstructions(
        account_name=settings.BANK_ACCOUNT_NAME,
        bank_name=settings.BANK_NAME,
        account_number=settings.BANK_ACCOUNT_NUMBER,
    )


def contact_channel() -> ContactChannel:
    settings = get_settings()
    return ContactChannel(
        phone=settings.CONTACT_PHONE,
        message_template=settings.CONTACT_MESSAGE_TEMPLATE,
    )


def clipboard() -> Clipboard:
    return TerminalClipboard()
