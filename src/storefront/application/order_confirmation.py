"""Application service: the Order Confirmation View.

Shows a placed order together with the static bank-transfer details and a
pre-filled link to the sales contact channel.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timezone
from urllib.parse import quote

from storefront.application.dto import (
    OrderDTO,
    OrderLineItemDTO,
    PaymentInstructions,
    Redirect,
    View,
)
from storefront.domain.exceptions import NetworkFailureError, ValidationError
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class Clipboard(ABC):

    @abstractmethod
    def copy(self, text: str) -> None:
        """Place *text* on the user's clipboard."""


@dataclass(frozen=True)
class ContactChannel:
    """WhatsApp deep link pre-filled with a message about an order."""

    phone: str
    message_template: str = (
        "Good day, I have enquiries about an order, here is my order ID: {order_id}"
    )

    def link_for(self, order_id: str) -> str:
        message = self.message_template.format(order_id=order_id)
        return f"https://wa.me/{self.phone}?text={quote(message, safe='')}"


class OrderConfirmationView:

    def __init__(
        self,
        payment: PaymentInstructions,
        contact: ContactChannel,
        clipboard: Clipboard,
    ) -> None:
        self._contact = contact
        self._clipboard = clipboard
        self.payment = payment
        self.order: OrderDTO | None = None

    async def load(self, order_id: str, order_repo: OrderRepository) -> OrderDTO | Redirect:
        """Fetch the order once. Unknown or unreadable orders go to the cart."""
        try:
            order = await order_repo.get_by_id(order_id)
        except NetworkFailureError:
            logger.exception("Failed to fetch order %s", order_id)
            return Redirect(View.CART)

        if order is None:
            logger.warning("Order %s not found", order_id)
            return Redirect(View.CART)

        self.order = self._to_dto(order)
        return self.order

    # --- Actions --------------------------------------------------------------

    def copy_order_id(self) -> str:
        order = self._require_order()
        self._clipboard.copy(order.id)
        return order.id

    def copy_account_number(self) -> str:
        """Needs no loaded order; the payment details are static."""
        self._clipboard.copy(self.payment.account_number)
        return self.payment.account_number

    def contact_link(self) -> str:
        return self._contact.link_for(self._require_order().id)

    # --- Internal helpers -----------------------------------------------------

    def _require_order(self) -> OrderDTO:
        if self.order is None:
            raise ValidationError("No order loaded")
        return self.order

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            status=order.status,
            items=[
                OrderLineItemDTO(
                    product_name=item.product_name,
                    variant=str(item.selected_variant) if item.selected_variant else None,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            total=str(order.total_amount),
            item_count=order.item_count,
            notes=order.notes,
            full_name=order.customer.full_name,
            company_name=order.customer.company_name,
            phone=order.customer.phone,
            email=order.customer.email,
            address=order.customer.address,
            created_at=(
                order.created_at.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
                if order.created_at
                else ""
            ),
        )
