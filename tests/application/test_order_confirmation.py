"""Integration tests for the Order Confirmation View."""

import asyncio
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from storefront.application.dto import OrderDTO, PaymentInstructions, Redirect, View
from storefront.application.order_confirmation import ContactChannel, OrderConfirmationView
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import CustomerDetails, Order
from storefront.domain.model.value_objects import Money, Quantity, Variant
from tests.fakes import FakeClipboard, FakeOrderRepository

PAYMENT = PaymentInstructions(
    account_name="Catena LTD",
    bank_name="Real Bank",
    account_number="0123456789",
)


def _setup() -> tuple[OrderConfirmationView, FakeOrderRepository, FakeClipboard, str]:
    orders = FakeOrderRepository()
    order = Order.place(
        [
            CartLine(
                product_id="p1",
                product_name="Tote Bag",
                unit_price=Money.of("8000"),
                quantity=Quantity(2),
                selected_variant=Variant("Colour", "Navy"),
            )
        ],
        CustomerDetails.create(
            full_name="Ada Obi",
            phone="0801",
            email="ada@example.com",
            address="Lagos",
            company_name="Obi Ventures",
        ),
        notes="Gift wrap",
    )
    order_id = asyncio.run(orders.create(order))
    clipboard = FakeClipboard()
    view = OrderConfirmationView(
        payment=PAYMENT,
        contact=ContactChannel(phone="+23481292785"),
        clipboard=clipboard,
    )
    return view, orders, clipboard, order_id


class TestLoadOrder:

    def test_returns_order_dto(self):
        view, orders, _, order_id = _setup()
        dto = asyncio.run(view.load(order_id, orders))
        assert isinstance(dto, OrderDTO)
        assert dto.id == order_id
        assert dto.total == "₦16,000.00"
        assert dto.item_count == 2
        assert dto.items[0].variant == "Colour: Navy"
        assert dto.company_name == "Obi Ventures"
        assert dto.created_at == "2025-01-15 09:30 UTC"
        assert orders.read_calls == 1

    def test_unknown_order_redirects_to_cart(self):
        view, orders, _, _ = _setup()
        assert asyncio.run(view.load("missing", orders)) == Redirect(View.CART)
        assert view.order is None

    def test_created_at_shown_in_utc(self):
        view, orders, _, order_id = _setup()
        lagos = timezone(timedelta(hours=1))
        stored = asyncio.run(orders.get_by_id(order_id))
        orders.save(replace(stored, created_at=datetime(2025, 1, 15, 10, 30, tzinfo=lagos)))

        dto = asyncio.run(view.load(order_id, orders))

        assert dto.created_at == "2025-01-15 09:30 UTC"

    def test_fetch_failure_redirects_to_cart(self):
        view, orders, _, order_id = _setup()
        orders.fail_reads = True
        assert asyncio.run(view.load(order_id, orders)) == Redirect(View.CART)


class TestCopyToClipboard:

    def test_copy_order_id(self):
        view, orders, clipboard, order_id = _setup()
        asyncio.run(view.load(order_id, orders))
        assert view.copy_order_id() == order_id
        assert clipboard.contents == order_id

    def test_copy_account_number(self):
        view, orders, clipboard, order_id = _setup()
        asyncio.run(view.load(order_id, orders))
        view.copy_account_number()
        assert clipboard.contents == "0123456789"

    def test_copy_account_number_needs_no_order(self):
        view, orders, clipboard, _ = _setup()
        assert view.copy_account_number() == "0123456789"
        assert clipboard.contents == "0123456789"
        assert orders.read_calls == 0

    def test_copy_is_idempotent_and_side_effect_free(self):
        view, orders, clipboard, order_id = _setup()
        asyncio.run(view.load(order_id, orders))
        before = view.order

        view.copy_order_id()
        view.copy_order_id()

        assert clipboard.contents == order_id
        assert clipboard.copies == 2
        assert view.order == before
        assert orders.read_calls == 1

    def test_copy_order_id_requires_loaded_order(self):
        view, orders, _, _ = _setup()
        with pytest.raises(ValidationError, match="No order loaded"):
            view.copy_order_id()


class TestContactLink:

    def test_link_embeds_encoded_order_id(self):
        view, orders, _, order_id = _setup()
        asyncio.run(view.load(order_id, orders))
        assert view.contact_link() == (
            "https://wa.me/+23481292785?text=Good%20day%2C%20I%20have%20enquiries%20"
            "about%20an%20order%2C%20here%20is%20my%20order%20ID%3A%20order-1"
        )

    def test_custom_template(self):
        channel = ContactChannel(phone="+2348000000000", message_template="Order {order_id}?")
        assert channel.link_for("abc") == "https://wa.me/+2348000000000?text=Order%20abc%3F"
