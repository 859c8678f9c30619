"""Order aggregate — the immutable record of a checkout.

An Order is a frozen snapshot of the cart at submission time. Later
changes to catalog prices or to the cart never reach a placed order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine, cart_total
from storefront.domain.model.value_objects import Money, Quantity, Variant

STATUS_PENDING = "pending"


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price and quantity of a cart line at checkout."""

    product_id: str
    product_name: str
    unit_price: Money  # locked at submission time
    quantity: Quantity
    selected_variant: Variant | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @staticmethod
    def from_cart_line(line: CartLine) -> OrderLineItem:
        return OrderLineItem(
            product_id=line.product_id,
            product_name=line.product_name,
            unit_price=line.unit_price,
            quantity=line.quantity,
            selected_variant=line.selected_variant,
        )


@dataclass(frozen=True)
class CustomerDetails:
    """Who placed the order and where it goes.

    Use ``CustomerDetails.create()`` for user input; it strips values and
    checks that every required field is present. Formats of phone and
    email are not checked.
    """

    full_name: str
    phone: str
    email: str
    address: str
    company_name: str = ""

    @staticmethod
    def create(
        full_name: str,
        phone: str,
        email: str,
        address: str,
        company_name: str = "",
    ) -> CustomerDetails:
        required = {
            "full name": full_name,
            "phone": phone,
            "email": email,
            "address": address,
        }
        missing = [label for label, value in required.items() if not value or not value.strip()]
        if missing:
            raise ValidationError(
                "Please fill in all required fields: " + ", ".join(missing)
            )
        return CustomerDetails(
            full_name=full_name.strip(),
            phone=phone.strip(),
            email=email.strip(),
            address=address.strip(),
            company_name=(company_name or "").strip(),
        )


@dataclass(frozen=True)
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.place()`` factory for new orders. The ``__init__`` stays
    simple so the repository can reconstitute stored orders without
    re-validating them.
    """

    id: str | None
    items: tuple[OrderLineItem, ...]
    total_amount: Money
    customer: CustomerDetails
    notes: str = ""
    status: str = STATUS_PENDING
    created_at: datetime | None = None  # assigned by the remote store

    @staticmethod
    def place(
        lines: Sequence[CartLine],
        customer: CustomerDetails,
        notes: str = "",
    ) -> Order:
        """Snapshot *lines* into a new pending order."""
        if not lines:
            raise ValidationError("Order must contain at least one item")

        return Order(
            id=None,
            items=tuple(OrderLineItem.from_cart_line(line) for line in lines),
            total_amount=cart_total(lines),
            customer=customer,
            notes=(notes or "").strip(),
        )

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)
