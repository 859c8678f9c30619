"""Application service: the Checkout Workflow.

States::

    LOADING -> REDIRECTED            (cart empty or unreadable)
    LOADING -> READY -> SUBMITTING -> REDIRECTED   (order placed)
                          |
                          +-------> READY           (order creation failed)

The order is built from the cart lines read at ``load()``; prices are not
re-read from the catalog. The remote store is only needed at ``submit()``,
so an empty cart never touches it. The cart is cleared only after the
remote store has accepted the order.
"""

from __future__ import annotations

import logging
from enum import Enum

from storefront.application.cart_view import to_cart_dto
from storefront.application.dto import CartDTO, CheckoutForm, Redirect, View
from storefront.domain.exceptions import (
    NetworkFailureError,
    StorageUnavailableError,
    ValidationError,
)
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import CustomerDetails, Order
from storefront.domain.repository.cart_store import CartStore
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)

ORDER_FAILED_MESSAGE = "Failed to place order. Please try again."


class CheckoutState(Enum):
    LOADING = "LOADING"
    READY = "READY"
    SUBMITTING = "SUBMITTING"
    REDIRECTED = "REDIRECTED"


class CheckoutWorkflow:

    def __init__(self, cart_store: CartStore) -> None:
        self._cart_store = cart_store
        self._lines: list[CartLine] = []
        self.state = CheckoutState.LOADING
        self.error: str | None = None

    # --- Entry guard ----------------------------------------------------------

    async def load(self) -> Redirect | None:
        """Read the cart. Returns a redirect to the cart view if it is empty."""
        try:
            lines = await self._cart_store.list_all()
        except StorageUnavailableError:
            logger.exception("Failed to load cart for checkout")
            lines = []

        if not lines:
            self.state = CheckoutState.REDIRECTED
            return Redirect(View.CART)

        self._lines = lines
        self.state = CheckoutState.READY
        return None

    @property
    def summary(self) -> CartDTO:
        return to_cart_dto(self._lines)

    # --- Submission -----------------------------------------------------------

    async def submit(self, form: CheckoutForm, order_repo: OrderRepository) -> Redirect:
        """Place the order in ``order_repo`` and return the redirect to its confirmation.

        Raises ValidationError for blank required fields (nothing is
        created or cleared) and NetworkFailureError when the remote store
        rejects the order (the cart is kept so the customer can retry).
        """
        if self.state != CheckoutState.READY:
            raise ValidationError(
                f"Cannot submit checkout: current state is {self.state.value}, "
                f"expected READY"
            )

        try:
            customer = CustomerDetails.create(
                full_name=form.full_name,
                phone=form.phone,
                email=form.email,
                address=form.address,
                company_name=form.company_name,
            )
        except ValidationError as exc:
            self.error = str(exc)
            raise

        order = Order.place(self._lines, customer, notes=form.notes)

        self.state = CheckoutState.SUBMITTING
        self.error = None
        try:
            order_id = await order_repo.create(order)
        except NetworkFailureError:
            logger.exception("Failed to place order")
            self.state = CheckoutState.READY
            self.error = ORDER_FAILED_MESSAGE
            raise

        logger.info("Order %s placed (%s)", order_id, order.total_amount)

        # The order stands even if the cart cannot be cleared.
        try:
            await self._cart_store.clear()
        except StorageUnavailableError:
            logger.exception("Order %s placed but the cart could not be cleared", order_id)

        self.state = CheckoutState.REDIRECTED
        return Redirect(View.ORDER_CONFIRMATION, order_id=order_id)
